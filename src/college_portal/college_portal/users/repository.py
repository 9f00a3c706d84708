from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import User


class UserRepository(Protocol):
    """Repository interface for User.

    Services depend on this interface, not on where the accounts live.
    """

    def get_by_id(self, user_id: str) -> Optional[User]:
        raise NotImplementedError

    def get_by_username_and_role(self, username: str, role: Role) -> Optional[User]:
        raise NotImplementedError

    def list_all(self) -> Sequence[User]:
        raise NotImplementedError
