"""Data models for the mock-server fetch pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Union

Record = Dict[str, Any]


@dataclass(frozen=True)
class ResourceRequest:
    """One GET against the mock server.

    ``expected_key`` names the envelope field the records may be wrapped in;
    ``label`` only shows up in log lines.
    """

    url: str
    expected_key: str
    label: str


class FailureKind(str, Enum):
    MISSING_TOKEN = "missing_token"
    UNAUTHORIZED = "unauthorized"
    EXHAUSTED = "exhausted"
    MALFORMED_BODY = "malformed_body"


@dataclass
class Success:
    """Every record of the response, in server order."""

    records: List[Record] = field(default_factory=list)
    attempts: int = 1

    @property
    def ok(self) -> bool:
        return True


@dataclass
class Failure:
    """A fetch that produced no records."""

    kind: FailureKind
    detail: str
    status_code: int | None = None
    attempts: int = 0

    @property
    def ok(self) -> bool:
        return False


FetchOutcome = Union[Success, Failure]


@dataclass
class AuthProbeResult:
    """Outcome of an authorization check against the verification backend."""

    success: bool
    status_code: int | None
    message: str
    error: str | None = None
    data: Any = None
