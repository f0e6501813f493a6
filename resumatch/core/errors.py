"""Application-level exception types.

Most pipeline failures are recovered locally (advisory text, sentinel values,
empty lists). The types here cover what does propagate: invalid requests and
documents whose bytes cannot be read at all.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, NotRequired, TypedDict


class ErrorDetails(TypedDict, total=False):
    """Structured error context for observability and clients."""

    code: str
    message: str
    hint: str
    file_type: str
    file_name: str
    size_bytes: int
    request_id: str
    context: NotRequired[dict[str, Any]]


@dataclass
class AppError(Exception):
    """Base error for application/domain failures.

    Attributes:
        code: Stable, machine-readable error code.
        message: Human-readable error message.
        details: Optional structured details for debugging/observability.
    """

    code: str
    message: str
    details: ErrorDetails | None = None

    def __post_init__(self) -> None:
        # Populate Exception args so str(error) is useful in logs/tracebacks.
        super().__init__(self.message)


class DocumentReadError(AppError):
    """Raised when uploaded bytes cannot be read or decoded at all.

    Callers should offer a retry or manual entry.
    """
