"""Mock data server client: authorized fetch, retry and body normalisation."""

from linkclient.mockapi.fetcher import (
    fetch,
    fetch_record,
    probe_authorization,
    probe_connection,
)
from linkclient.mockapi.models import (
    AuthProbeResult,
    Failure,
    FailureKind,
    FetchOutcome,
    Record,
    ResourceRequest,
    Success,
)
from linkclient.mockapi.normalize import MalformedBodyError, normalize_body
from linkclient.mockapi.resources import (
    RESOURCES,
    UnknownResourceError,
    fetch_many,
    known_endpoints,
    message_url,
    resource_request,
)

__all__ = [
    "fetch",
    "fetch_record",
    "fetch_many",
    "probe_connection",
    "probe_authorization",
    "normalize_body",
    "resource_request",
    "known_endpoints",
    "message_url",
    "RESOURCES",
    "AuthProbeResult",
    "Failure",
    "FailureKind",
    "FetchOutcome",
    "Record",
    "ResourceRequest",
    "Success",
    "MalformedBodyError",
    "UnknownResourceError",
]
