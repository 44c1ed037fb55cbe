from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import User


class UserRepository(Protocol):
    """Store contract for User.

    Note (DIP): services depend on this interface, never on a concrete store.
    """

    def get_by_id(self, user_id: str) -> Optional[User]:
        raise NotImplementedError

    def list_all(self) -> Sequence[User]:
        raise NotImplementedError

    def create(self, user: User) -> bool:
        """Insert a new user; returns False when the id is already taken."""

        raise NotImplementedError

    def update(self, user_id: str, **changes) -> Optional[User]:
        """Apply field changes atomically; returns None when absent."""

        raise NotImplementedError

    def delete_by_id(self, user_id: str) -> bool:
        raise NotImplementedError

    def count_active(self) -> int:
        raise NotImplementedError
