"""
Credential store.

The store is the only shared mutable state in the service. The in-memory
implementation serializes every read and write behind one lock.
"""
import threading
from abc import ABC, abstractmethod
from typing import Dict

from authservice.auth.exceptions import UserAlreadyExists, UserNotFound
from authservice.auth.models import Role, User


class UserStore(ABC):
    """Contract for user persistence."""

    @abstractmethod
    def create(self, identifier: str, digest: str, role: Role) -> User:
        """
        Store a new user.

        Raises:
            UserAlreadyExists: If the identifier is taken
        """

    @abstractmethod
    def find_by_identifier(self, identifier: str) -> User:
        """
        Look up a user.

        Raises:
            UserNotFound: If no user has that identifier
        """

    @abstractmethod
    def count(self) -> int:
        """Number of stored users."""

    def __len__(self) -> int:
        return self.count()


class InMemoryUserStore(UserStore):
    """Users kept in a dict for the lifetime of the process."""

    def __init__(self):
        self._users: Dict[str, User] = {}
        self._lock = threading.Lock()

    def create(self, identifier: str, digest: str, role: Role) -> User:
        with self._lock:
            if identifier in self._users:
                raise UserAlreadyExists(identifier)
            user = User(identifier=identifier, password_digest=digest, role=role)
            self._users[identifier] = user
            return user

    def find_by_identifier(self, identifier: str) -> User:
        with self._lock:
            user = self._users.get(identifier)
        if user is None:
            raise UserNotFound(identifier)
        return user

    def count(self) -> int:
        with self._lock:
            return len(self._users)
