"""
Classified errors for the task data layer.

Every failure that leaves a data source is expressed as a TaskDataError
carrying one ErrorKind. Callers branch on the kind only; the message,
status code and details exist for logging.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorKind(str, Enum):
    """Closed set of failure kinds."""

    TIMEOUT = "timeout"
    UNREACHABLE = "unreachable"  # no connectivity, DNS, connection refused
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"  # conflict / invalid input (4xx other than 401, 404)
    SERVER_FAULT = "server_fault"
    CANCELLED = "cancelled"
    CORRUPT = "corrupt"  # local snapshot cannot be decoded
    UNKNOWN = "unknown"


# Kinds that mean "the remote could not be reached right now".
TRANSIENT_KINDS = frozenset(
    {ErrorKind.TIMEOUT, ErrorKind.UNREACHABLE, ErrorKind.SERVER_FAULT}
)


class TaskDataError(Exception):
    """
    A failure classified into the ErrorKind taxonomy.

    Attributes:
        kind: Classified failure kind
        message: Original error message
        status_code: HTTP status code, when the failure came from a response
        details: Additional context for logging
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.kind = kind
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

    @property
    def is_transient(self) -> bool:
        """True for kinds a caller may reasonably retry later."""
        return self.kind in TRANSIENT_KINDS

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a dictionary for structured logging."""
        return {
            "kind": self.kind.value,
            "message": self.message,
            "status_code": self.status_code,
            "details": self.details,
        }

    def __str__(self) -> str:
        if self.status_code is not None:
            return f"{self.kind.value} ({self.status_code}): {self.message}"
        return f"{self.kind.value}: {self.message}"

    def __repr__(self) -> str:
        return (
            f"TaskDataError(kind={self.kind.value!r}, message={self.message!r}, "
            f"status_code={self.status_code!r})"
        )


def validation_error(field: str, value: Any, reason: str) -> TaskDataError:
    """Build the CONFLICT error used for rejected caller input."""
    return TaskDataError(
        ErrorKind.CONFLICT,
        f"Validation failed for {field}: {reason}",
        details={"field": field, "value": str(value), "reason": reason},
    )
