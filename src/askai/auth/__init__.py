"""Bearer token issuance and verification."""

from .models import AccessTokenClaims
from .tokens import TokenIssuer

__all__ = ["AccessTokenClaims", "TokenIssuer"]
