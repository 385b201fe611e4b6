"""
Password hashing with bcrypt.

Digests are self-describing bcrypt strings ($2b$<cost>$<salt><hash>), so
verification needs nothing but the digest itself.
"""
import secrets

import bcrypt

from authservice.auth.models import MAX_PASSWORD_BYTES

DEFAULT_ROUNDS = 12


class PasswordHasher:
    """Salted one-way hashing and constant-time verification of passwords."""

    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        self.rounds = rounds
        # computed up front so the first unknown-identifier login costs the same
        self._dummy_digest = self.hash(secrets.token_urlsafe(16))

    def hash(self, password: str) -> str:
        """
        Generate a password digest using bcrypt.

        Args:
            password: Plaintext password

        Returns:
            bcrypt digest string with embedded cost and salt

        Raises:
            ValueError: If the password exceeds bcrypt's input limit
        """
        encoded = password.encode("utf-8")
        if len(encoded) > MAX_PASSWORD_BYTES:
            raise ValueError(f"password exceeds {MAX_PASSWORD_BYTES} bytes")
        return bcrypt.hashpw(encoded, bcrypt.gensalt(rounds=self.rounds)).decode("utf-8")

    def verify(self, password: str, digest: str) -> bool:
        """Check if provided password matches the stored digest."""
        try:
            return bcrypt.checkpw(password.encode("utf-8"), digest.encode("utf-8"))
        except (ValueError, TypeError, AttributeError):
            # malformed digest, over-long input, or non-str arguments
            return False

    @property
    def dummy_digest(self) -> str:
        """Digest of a random value, for spending equal time on unknown identifiers."""
        return self._dummy_digest
