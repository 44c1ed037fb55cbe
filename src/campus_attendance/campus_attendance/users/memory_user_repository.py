from __future__ import annotations

import threading
from dataclasses import replace
from typing import Dict, Optional, Sequence

from .model import User
from .repository import UserRepository


class InMemoryUserRepository(UserRepository):
    def __init__(self):
        self._lock = threading.RLock()
        self._users: Dict[str, User] = {}

    def get_by_id(self, user_id: str) -> Optional[User]:
        with self._lock:
            return self._users.get(user_id)

    def list_all(self) -> Sequence[User]:
        with self._lock:
            return list(self._users.values())

    def create(self, user: User) -> bool:
        with self._lock:
            if user.user_id in self._users:
                return False
            self._users[user.user_id] = user
            return True

    def update(self, user_id: str, **changes) -> Optional[User]:
        with self._lock:
            user = self._users.get(user_id)
            if user is None:
                return None
            updated = replace(user, **changes)
            self._users[user_id] = updated
            return updated

    def delete_by_id(self, user_id: str) -> bool:
        with self._lock:
            return self._users.pop(user_id, None) is not None

    def count_active(self) -> int:
        with self._lock:
            return sum(1 for u in self._users.values() if u.is_active)
