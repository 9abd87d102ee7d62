"""Client for the Infinity Link mock data server."""
