"""
Authentication router.

This module provides the FastAPI router for the public auth endpoints:
- User registration
- Login
- Health check
"""
from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, status

from authservice.auth.exceptions import InvalidCredentials, UserAlreadyExists
from authservice.auth.models import LoginRequest, LoginResponse, RegisterRequest, UserOut
from authservice.auth.users import UserService, get_user_service
from authservice.base_service import base_service

# Create router
router = APIRouter(tags=["auth"])


@router.post("/register", response_model=Dict[str, Any])
async def register_user(
    user_data: RegisterRequest,
    service: UserService = Depends(get_user_service),
):
    """
    Register a new user.

    Args:
        user_data: User registration data
        service: User service

    Returns:
        Dict with the public user information
    """
    try:
        user = await service.register_user(user_data)

        base_service.log_event("user.registered", {
            "identifier": user.identifier,
            "role": user.role.value,
        })

        return base_service.envelope(
            message="User registered successfully",
            data=UserOut.from_user(user).model_dump(mode="json"),
        )
    except UserAlreadyExists:
        base_service.log_event("user.register.conflict", {"identifier": user_data.identifier})
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Identifier already registered",
        )
    except HTTPException:
        raise
    except Exception as e:
        base_service.log_error(e, context="User registration")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Registration failed",
        )


@router.post("/login", response_model=LoginResponse)
async def login(
    login_data: LoginRequest,
    service: UserService = Depends(get_user_service),
):
    """
    Authenticate a user and return a token.

    Unknown identifiers and wrong passwords get the same response.

    Args:
        login_data: Identifier and password
        service: User service

    Returns:
        LoginResponse with the bearer token
    """
    try:
        response = await service.authenticate_user(login_data)

        base_service.log_event("user.login", {"identifier": login_data.identifier})
        return response
    except InvalidCredentials:
        base_service.log_event("user.login.failed", {"identifier": login_data.identifier})
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect identifier or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    except HTTPException:
        raise
    except Exception as e:
        base_service.log_error(e, context="User login")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Login failed",
        )


# --- Health Check ---

@router.get("/ping", response_model=Dict[str, Any])
async def ping():
    """
    Health check endpoint for the auth service.

    Returns:
        Dict with status information
    """
    return base_service.mcp_response(
        message="Auth service is alive",
        data={"timestamp": datetime.now(timezone.utc).isoformat()},
    )
