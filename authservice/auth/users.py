"""
User management service.

This module provides functionality for:
- User registration
- User authentication
"""
from fastapi import Request
from fastapi.concurrency import run_in_threadpool

from authservice.auth.exceptions import InvalidCredentials, UserAlreadyExists, UserNotFound
from authservice.auth.jwt import TokenService
from authservice.auth.models import LoginRequest, LoginResponse, RegisterRequest, User
from authservice.auth.passwords import PasswordHasher
from authservice.auth.store import UserStore


class UserService:
    """
    Service for user registration and login.
    """

    def __init__(self, store: UserStore, hasher: PasswordHasher, tokens: TokenService):
        self.store = store
        self.hasher = hasher
        self.tokens = tokens

    def _verify_against_dummy(self, password: str) -> bool:
        return self.hasher.verify(password, self.hasher.dummy_digest)

    def _is_registered(self, identifier: str) -> bool:
        try:
            self.store.find_by_identifier(identifier)
        except UserNotFound:
            return False
        return True

    async def register_user(self, user_data: RegisterRequest) -> User:
        """
        Register a new user.

        Args:
            user_data: User registration data

        Returns:
            The stored user

        Raises:
            UserAlreadyExists: If the identifier is already registered
        """
        # Fail fast before paying for a hash; create() below is still the
        # authoritative uniqueness check.
        if self._is_registered(user_data.identifier):
            raise UserAlreadyExists(user_data.identifier)

        digest = await run_in_threadpool(self.hasher.hash, user_data.password)
        return self.store.create(user_data.identifier, digest, user_data.role)

    async def authenticate_user(self, login_data: LoginRequest) -> LoginResponse:
        """
        Authenticate a user and return a token.

        Args:
            login_data: Login credentials

        Returns:
            LoginResponse carrying the signed token

        Raises:
            InvalidCredentials: If the identifier is unknown or the password is wrong
        """
        try:
            user = self.store.find_by_identifier(login_data.identifier)
        except UserNotFound:
            await run_in_threadpool(self._verify_against_dummy, login_data.password)
            raise InvalidCredentials() from None

        matches = await run_in_threadpool(self.hasher.verify, login_data.password, user.password_digest)
        if not matches:
            raise InvalidCredentials()

        claims = self.tokens.issue_claims(user.identifier, user.role)
        return LoginResponse(
            token=self.tokens.encode(claims),
            expires_at=int(claims.expires_at.timestamp()),
        )


def get_user_service(request: Request) -> UserService:
    """Dependency for getting the application's user service."""
    return request.app.state.user_service
