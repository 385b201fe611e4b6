from typing import Any, Dict

from fastapi import APIRouter, Depends

from authservice.auth.middleware import AuthContext, RBACMiddleware, authenticate
from authservice.auth.models import Role
from authservice.base_service import base_service

# Every route on this router authenticates before its handler runs
router = APIRouter(
    tags=["protected"],
    dependencies=[Depends(authenticate)],
    responses={401: {"description": "Missing, invalid or expired token"}},
)


@router.get(
    "/admin",
    response_model=Dict[str, Any],
    responses={403: {"description": "Token valid but role is not admin"}},
)
async def admin_route(ctx: AuthContext = Depends(RBACMiddleware.has_roles([Role.ADMIN]))):
    """
    Admin-only endpoint.
    """
    return base_service.envelope(
        message="Welcome, admin",
        data={"identifier": ctx.identifier, "role": ctx.role.value},
    )


@router.get("/me", response_model=Dict[str, Any])
async def whoami(ctx: AuthContext = Depends(RBACMiddleware.is_authenticated())):
    """
    Return the identity carried by the caller's token.
    """
    return base_service.envelope(
        message="Authenticated",
        data={
            "identifier": ctx.identifier,
            "role": ctx.role.value,
            "expires_at": int(ctx.expires_at.timestamp()),
        },
    )
