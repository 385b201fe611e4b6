"""
Domain errors raised by the auth components.

Routers and dependencies translate these into HTTP responses; nothing below
the HTTP layer knows about status codes.
"""


class AuthError(Exception):
    """Base class for auth domain errors."""


class UserAlreadyExists(AuthError):
    """An identifier is already registered."""

    def __init__(self, identifier: str):
        super().__init__(f"identifier already registered: {identifier}")
        self.identifier = identifier


class UserNotFound(AuthError):
    """No user is registered under the identifier."""

    def __init__(self, identifier: str):
        super().__init__(f"no such identifier: {identifier}")
        self.identifier = identifier


class InvalidCredentials(AuthError):
    """Login failed. Deliberately carries no detail about which check failed."""

    def __init__(self):
        super().__init__("invalid credentials")


class TokenInvalid(AuthError):
    """Token is malformed, tampered with, or signed with another key."""

    reason = "invalid"


class TokenExpired(TokenInvalid):
    """Token signature is good but its expiry has passed."""

    reason = "expired"


class PermissionDenied(AuthError):
    """Authenticated caller lacks the required role."""
