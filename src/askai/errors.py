"""Error taxonomy for the assistant service.

Every error raised by the core carries the HTTP status the API layer
renders it with. Search provider failures never appear here: they are
absorbed by the retrieval layer.
"""


class AskAIError(Exception):
    """Base class for all service errors."""

    status_code: int = 500
    default_message: str = "Internal error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict[str, object]:
        """Render the error as the service's JSON error body."""
        return {"code": self.status_code, "message": self.message}


class ValidationError(AskAIError):
    """A required field is missing or malformed."""

    status_code = 400
    default_message = "Invalid request"


class AuthError(AskAIError):
    """Missing, malformed, expired or foreign-signed bearer token."""

    status_code = 401
    default_message = "Unauthorized"


class NotFoundError(AskAIError):
    """Unknown suggestion id (or any other unknown resource)."""

    status_code = 404
    default_message = "Not found"


class ConflictError(AskAIError):
    """The suggestion exists but belongs to another session."""

    status_code = 400
    default_message = "Session mismatch"


class MisconfigurationError(AskAIError):
    """A required provider credential is absent."""

    status_code = 500
    default_message = "Service misconfigured"


class UpstreamError(AskAIError):
    """The completion provider failed.

    Args:
        status_code: Status reported by the provider (504 for timeouts,
            502 when the provider gave none)
        message: Provider-supplied message
    """

    default_message = "Upstream provider failed"

    def __init__(self, status_code: int = 502, message: str | None = None):
        self.status_code = status_code
        super().__init__(message)

    def to_http(self) -> "AskAIError":
        """Map the provider status to the status the client sees."""
        if self.status_code == 429:
            return _HttpError(429, "Rate limited")
        if self.status_code == 413:
            return _HttpError(413, "Request too large")
        if self.status_code == 400:
            return _HttpError(400, self.message)
        if self.status_code == 404:
            return _HttpError(400, "Model not found")
        return _HttpError(500, self.message)


class _HttpError(AskAIError):
    """Error with an explicit status, produced by UpstreamError.to_http."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        super().__init__(message)


__all__ = [
    "AskAIError",
    "ValidationError",
    "AuthError",
    "NotFoundError",
    "ConflictError",
    "MisconfigurationError",
    "UpstreamError",
]
