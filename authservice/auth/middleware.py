"""
Authentication middleware.

This module provides FastAPI dependencies for:
- Extracting and validating bearer tokens
- Attaching the caller's identity to the request
- Role-based access control
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from authservice.auth.exceptions import TokenInvalid
from authservice.auth.jwt import TokenClaims, TokenService
from authservice.auth.models import Role
from authservice.base_service import base_service

# auto_error off so every rejection goes through the same logged 401
bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class AuthContext:
    """Identity of the caller, built from a verified token."""
    identifier: str
    role: Role
    expires_at: datetime

    @classmethod
    def from_claims(cls, claims: TokenClaims) -> "AuthContext":
        return cls(identifier=claims.subject, role=claims.role, expires_at=claims.expires_at)

    def has_role(self, *roles: Role) -> bool:
        return self.role in roles


def credentials_exception() -> HTTPException:
    # Same response for every rejection reason
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


async def authenticate(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
) -> AuthContext:
    """
    FastAPI dependency that authenticates the request from its bearer token.

    Args:
        request: Incoming request
        credentials: Parsed "Bearer <token>" header, or None if absent or another scheme
        tokens: Token service from application state

    Returns:
        AuthContext for the caller, also stored on request.state.auth

    Raises:
        HTTPException: 401 if the token is missing, malformed, invalid or expired
    """
    token = credentials.credentials if credentials else ""
    if not token or len(token.split()) != 1:
        reason = "missing" if not request.headers.get("Authorization") else "malformed"
        base_service.log_event("auth.rejected", {"reason": reason, "path": request.url.path})
        raise credentials_exception()

    try:
        claims = tokens.verify(token)
    except TokenInvalid as e:
        base_service.log_event("auth.rejected", {"reason": e.reason, "path": request.url.path})
        raise credentials_exception() from None

    ctx = AuthContext.from_claims(claims)
    request.state.auth = ctx
    return ctx


class RBACMiddleware:
    """
    Role-Based Access Control.

    Creates FastAPI dependencies for protecting routes based on:
    - User authentication
    - Role requirements
    """

    @staticmethod
    def is_authenticated():
        """
        Dependency that only requires a valid token.

        Returns:
            Dependency function
        """
        async def verify_authenticated(ctx: AuthContext = Depends(authenticate)) -> AuthContext:
            return ctx

        return verify_authenticated

    @staticmethod
    def has_roles(roles: Iterable[Role]):
        """
        Dependency to check if the user has any of the specified roles.

        The role comes from the token as issued; it is not re-read from the store.

        Args:
            roles: Allowed roles (any match is sufficient)

        Returns:
            Dependency function
        """
        allowed = tuple(roles)

        async def verify_roles(
            request: Request,
            ctx: AuthContext = Depends(authenticate),
        ) -> AuthContext:
            if not ctx.has_role(*allowed):
                base_service.log_event("auth.forbidden", {
                    "identifier": ctx.identifier,
                    "role": ctx.role.value,
                    "path": request.url.path,
                })
                raise HTTPException(
                    status_code=status.HTTP_403_FORBIDDEN,
                    detail="Insufficient role",
                )
            return ctx

        return verify_roles
