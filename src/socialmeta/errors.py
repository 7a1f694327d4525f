"""Error taxonomy.

Fetch and resolution failures are never raised: they travel upward as a
``None`` payload or as a Graph API ``error`` object and are classified with
:func:`classify_payload` where a caller needs to tell them apart.
``SocialMetaError`` is reserved for bad input at the callback and render
boundaries.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    NETWORK_FAILURE = "NETWORK_FAILURE"
    MALFORMED_RESPONSE = "MALFORMED_RESPONSE"
    PAGE_NOT_SELECTED = "PAGE_NOT_SELECTED"
    NO_DATA_AVAILABLE = "NO_DATA_AVAILABLE"
    UPSTREAM_ERROR = "UPSTREAM_ERROR"
    INVALID_INPUT = "INVALID_INPUT"


class SocialMetaError(Exception):
    """Raised for invalid input at an external boundary."""

    def __init__(self, code: ErrorCode, message: str, recoverable: bool = False) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.recoverable = recoverable

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": {
                "code": self.code.value,
                "message": self.message,
                "recoverable": self.recoverable,
            }
        }


def upstream_error_message(payload: Any) -> str | None:
    """Return the Graph API ``error.message`` carried by *payload*, if any."""
    if not isinstance(payload, dict):
        return None
    error = payload.get("error")
    if not isinstance(error, dict):
        return None
    message = error.get("message")
    return str(message) if message else None


def classify_payload(payload: Any) -> ErrorCode | None:
    """Map a resolved payload onto the error taxonomy.

    ``None`` cannot be split further: a failed request and a missing page both
    arrive as ``None``, so it is reported as ``NO_DATA_AVAILABLE``. Returns
    ``None`` when the payload looks usable.
    """
    if payload is None:
        return ErrorCode.NO_DATA_AVAILABLE
    if not isinstance(payload, dict):
        return ErrorCode.MALFORMED_RESPONSE
    if "error" in payload:
        return ErrorCode.UPSTREAM_ERROR
    return None
