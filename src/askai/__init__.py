"""
askai: conversational backend for a workflow editor.

Mediates between the editor's assistant panel and a completion provider,
enriching replies with documentation, forum and template results and
turning generated code into applicable suggestions.
"""

__version__ = "0.1.0"

from .auth import AccessTokenClaims, TokenIssuer
from .config import ServiceConfig
from .errors import (
    AskAIError,
    AuthError,
    ConflictError,
    MisconfigurationError,
    NotFoundError,
    UpstreamError,
    ValidationError,
)

__all__ = [
    "AccessTokenClaims",
    "TokenIssuer",
    "ServiceConfig",
    "AskAIError",
    "AuthError",
    "ConflictError",
    "MisconfigurationError",
    "NotFoundError",
    "UpstreamError",
    "ValidationError",
]
