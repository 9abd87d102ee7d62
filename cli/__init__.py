"""Command-line interface for the Infinity Link client."""
