"""
JWT token handling for authentication.

This module provides functionality for:
- Creating signed, expiring access tokens
- Validating access tokens and decoding their claims
"""
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import jwt
from jwt.exceptions import PyJWTError
from pydantic import BaseModel, ConfigDict

from authservice.auth.exceptions import TokenExpired, TokenInvalid
from authservice.auth.models import Role
from authservice.config import Settings

ALGORITHM = "HS256"
REQUIRED_CLAIMS = ["sub", "role", "iat", "exp"]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TokenClaims(BaseModel):
    """Decoded token payload."""
    model_config = ConfigDict(frozen=True)

    subject: str
    role: Role
    issued_at: datetime
    expires_at: datetime


class TokenService:
    """
    Issues and verifies access tokens.

    The secret, TTL and leeway are fixed by the Settings the service is
    built with; callers cannot choose a token lifetime.
    """

    def __init__(self, settings: Settings, clock: Optional[Callable[[], datetime]] = None):
        self._secret = settings.secret_key
        self.ttl = timedelta(minutes=settings.access_token_expire_minutes)
        self.leeway = timedelta(seconds=settings.token_leeway_seconds)
        self._clock = clock or utc_now

    def issue_claims(self, identifier: str, role: Role) -> TokenClaims:
        # whole seconds, since the encoded iat/exp are integers
        issued_at = self._clock().replace(microsecond=0)
        return TokenClaims(
            subject=identifier,
            role=role,
            issued_at=issued_at,
            expires_at=issued_at + self.ttl,
        )

    def encode(self, claims: TokenClaims) -> str:
        payload = {
            "sub": claims.subject,
            "role": claims.role.value,
            "iat": int(claims.issued_at.timestamp()),
            "exp": int(claims.expires_at.timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=ALGORITHM)

    def issue(self, identifier: str, role: Role) -> str:
        """
        Create a JWT access token.

        Args:
            identifier: Subject the token is issued to
            role: Role embedded in the token

        Returns:
            Encoded JWT token string
        """
        return self.encode(self.issue_claims(identifier, role))

    def verify(self, token: str) -> TokenClaims:
        """
        Verify a JWT token and return its claims.

        Args:
            token: JWT token string

        Returns:
            TokenClaims for a valid, unexpired token

        Raises:
            TokenExpired: If the signature is valid but the token has expired
            TokenInvalid: If the token is malformed, tampered with or incomplete
        """
        # Signature and claim presence are checked here; time checks use
        # self._clock below so issue and verify agree on "now".
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[ALGORITHM],
                options={
                    "require": REQUIRED_CLAIMS,
                    "verify_exp": False,
                    "verify_iat": False,
                },
            )
        except PyJWTError as e:
            raise TokenInvalid(str(e)) from e

        try:
            claims = TokenClaims(
                subject=payload["sub"],
                role=Role(payload["role"]),
                issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
                expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
            )
        except (ValueError, TypeError, OverflowError, OSError) as e:
            raise TokenInvalid(f"Bad claims: {e}") from e

        if claims.expires_at <= claims.issued_at:
            raise TokenInvalid("Token expires before it was issued")

        now = self._clock()
        if claims.issued_at > now + self.leeway:
            raise TokenInvalid("Token issued in the future")
        if now >= claims.expires_at + self.leeway:
            raise TokenExpired("Signature has expired")
        return claims
