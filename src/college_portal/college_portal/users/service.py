from __future__ import annotations

from ..common.validators import require_choice
from ..core.enums import Role
from ..core.exceptions import AuthenticationError
from .model import User
from .repository import UserRepository


class AuthService:
    """Use case: demo login.

    The username must exist with the selected role; any non-empty password
    is accepted. Roles only decide which views are offered.
    """

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, username: str, password: str, role: str | Role) -> User:
        role = require_choice(role, Role, "Role")
        user = self._users.get_by_username_and_role((username or "").strip(), role)
        if not user:
            raise AuthenticationError("Invalid username or role")
        if not password:
            raise AuthenticationError("Please enter password")
        return user

    def get_user(self, user_id: str) -> User:
        user = self._users.get_by_id(user_id)
        if not user:
            raise AuthenticationError("Session expired, please log in again")
        return user
