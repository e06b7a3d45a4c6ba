"""
Custom exception classes for the funcbridge framework.

Provides structured error handling with domain-specific exceptions
for envelope decoding and trigger accessors.
"""

from typing import Any, Dict, Optional


class FuncbridgeException(Exception):
    """Base exception class for all funcbridge exceptions."""

    pass


class TriggerPayloadMalformedError(FuncbridgeException):
    """
    Raised when an invocation envelope cannot be decoded.

    This is fatal for the invocation and occurs when:
    - The stream is not valid JSON
    - The top-level document lacks a ``Data`` object
    - ``Data`` has no payload under the expected binding name
    - The payload or metadata do not match the trigger's shape

    The underlying decode error is chained as ``__cause__``.

    Example:
        >>> raise TriggerPayloadMalformedError(
        ...     kind="timer",
        ...     details={"binding": "timer"},
        ... )
    """

    def __init__(self, kind: str, details: Optional[Dict[str, Any]] = None):
        self.kind = kind
        self.details = details or {}
        message = f"trigger payload malformed: {kind}"
        if self.details:
            message += f" - {self.details}"
        super().__init__(message)


class HTTPInvalidContentTypeError(FuncbridgeException):
    """Raised when form data is requested from a non form-encoded request."""

    def __init__(self, content_type: str):
        self.content_type = content_type
        super().__init__(f"invalid Content-Type: {content_type}")


class HTTPInvalidBodyError(FuncbridgeException):
    """Raised when an HTTP body cannot be read as form data."""

    def __init__(self, body: bytes):
        self.body = body
        super().__init__(f"invalid body: {body.decode('utf-8', errors='replace')}")


class TriggerRegistryError(FuncbridgeException, RuntimeError):
    """Raised for unknown or duplicate trigger kinds."""

    pass
