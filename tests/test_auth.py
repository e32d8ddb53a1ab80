"""Unit tests for token issuance and verification."""
import time

import jwt
import pytest
from hypothesis import given
from hypothesis import strategies as st

from askai.auth import AccessTokenClaims, TokenIssuer
from askai.errors import AuthError, ValidationError


class TestTokenIssuer:
    """Tests for TokenIssuer."""

    @given(st.text(min_size=1))
    def test_issue_then_verify_round_trips_claims(self, license_cert: str):
        """Property test: a fresh token verifies and carries the license."""
        issuer = TokenIssuer("secret")
        claims = issuer.verify(issuer.issue(license_cert))

        assert isinstance(claims, AccessTokenClaims)
        assert claims.license_cert == license_cert
        assert claims.subject == "n8n"
        assert claims.audience == "ai-assistant"

    def test_token_lifetime_is_ten_minutes(self):
        """Test that expiry is ten minutes after issuance."""
        issuer = TokenIssuer("secret", clock=lambda: 1_000_000.0)
        payload = jwt.decode(
            issuer.issue("cert"),
            "secret",
            algorithms=["HS256"],
            audience="ai-assistant",
            options={"verify_exp": False},
        )
        assert payload["exp"] - payload["iat"] == 600

    def test_expired_token_is_rejected(self):
        """Test that a token issued eleven minutes ago fails verification."""
        past = TokenIssuer("secret", clock=lambda: time.time() - 11 * 60)
        token = past.issue("cert")

        with pytest.raises(AuthError):
            TokenIssuer("secret").verify(token)

    def test_foreign_secret_is_rejected(self):
        """Test that a token signed with another secret fails."""
        token = TokenIssuer("other-secret").issue("cert")

        with pytest.raises(AuthError):
            TokenIssuer("secret").verify(token)

    @pytest.mark.parametrize("token", [None, "", "not-a-token", "a.b.c"])
    def test_missing_or_malformed_token_is_rejected(self, token):
        """Test that missing and malformed tokens fail."""
        with pytest.raises(AuthError):
            TokenIssuer("secret").verify(token)

    def test_wrong_audience_is_rejected(self):
        """Test that a token for another audience fails."""
        token = jwt.encode(
            {"sub": "n8n", "aud": "someone-else", "licenseCert": "c", "exp": int(time.time()) + 60},
            "secret",
            algorithm="HS256",
        )
        with pytest.raises(AuthError):
            TokenIssuer("secret").verify(token)

    @pytest.mark.parametrize("license_cert", [None, ""])
    def test_issue_requires_license_cert(self, license_cert):
        """Test that issuing without a license fails validation."""
        with pytest.raises(ValidationError, match="licenseCert required"):
            TokenIssuer("secret").issue(license_cert)

    def test_empty_secret_is_refused(self):
        """Test that an issuer cannot be built without a secret."""
        with pytest.raises(ValueError):
            TokenIssuer("")

    @pytest.mark.parametrize(
        ("header", "expected"),
        [
            ("Bearer abc.def", "abc.def"),
            ("bearer abc", ""),
            ("Basic abc", ""),
            (None, ""),
        ],
    )
    def test_bearer_token_extraction(self, header, expected):
        """Test that only 'Bearer ' headers yield a token."""
        assert TokenIssuer.bearer_token(header) == expected
