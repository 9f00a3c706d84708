from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role
from .model import User
from .repository import UserRepository


class StaticUserRepository(UserRepository):
    """Fixed account list (demo accounts from the seed data)."""

    def __init__(self, users: Sequence[User]):
        self._users = list(users)

    def get_by_id(self, user_id: str) -> Optional[User]:
        return next((u for u in self._users if u.id == user_id), None)

    def get_by_username_and_role(self, username: str, role: Role) -> Optional[User]:
        return next((u for u in self._users if u.username == username and u.role == role), None)

    def list_all(self) -> Sequence[User]:
        return list(self._users)
