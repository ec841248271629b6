"""Domain exceptions raised by the service layer.

Endpoints translate these into HTTP errors; services never raise
``HTTPException`` themselves.
"""


class ConferenceCentralError(Exception):
    """Base class for errors raised by the Conference Central core."""


class UnauthorizedError(ConferenceCentralError):
    """Raised when a gated operation is invoked without a caller identity."""

    def __init__(self, message: str = "Authorization required") -> None:
        super().__init__(message)


class InvalidEmailError(ConferenceCentralError, ValueError):
    """Raised when a display name must be derived from a malformed e‑mail."""
