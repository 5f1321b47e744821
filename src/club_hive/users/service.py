from __future__ import annotations

import logging
from typing import Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_min_length, require_non_empty
from ..core.constants import DEFAULT_LEADERBOARD_LIMIT, MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, NotFoundError, ValidationError
from ..core.identity import Identity
from .model import LeaderboardEntry, User
from .repository import UserRepository

logger = logging.getLogger(__name__)


class AuthService:
    """Use case: sign up and log in with email + password."""

    def __init__(self, users: UserRepository):
        self._users = users

    def register(self, *, name: str, email: str, password: str) -> User:
        name = require_non_empty(name, "Name")
        email = require_non_empty(email, "Email").lower()
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)
        if "@" not in email:
            raise ValidationError("Email is not valid")

        if self._users.get_by_email(email):
            raise ValidationError("Email is already registered")

        user_id = self._users.create_user(
            name=name,
            email=email,
            password_hash=generate_password_hash(password),
            role=Role.MEMBER,
        )
        logger.info("Registered user %s (%s)", user_id, email)
        return self._users.get_by_id(user_id)

    def authenticate(self, email: str, password: str) -> User:
        user = self._users.get_by_email((email or "").strip().lower())
        if not user:
            raise AuthenticationError("Invalid email or password")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # placeholder or corrupted hashes
            ok = False

        if not ok:
            raise AuthenticationError("Invalid email or password")
        return user


class UserService:
    """Use case: site-level user administration and the leaderboard."""

    def __init__(self, users: UserRepository):
        self._users = users

    def get_user(self, user_id: int) -> User:
        user = self._users.get_by_id(int(user_id))
        if not user:
            raise NotFoundError("User not found")
        return user

    def list_users(self, identity: Identity) -> Sequence[User]:
        if not identity.is_admin:
            raise AuthorizationError("Admin access required")
        return self._users.list_all()

    def set_role(self, identity: Identity, *, user_id: int, role: Role) -> User:
        if not identity.is_admin:
            raise AuthorizationError("Admin access required")

        user = self.get_user(user_id)
        if user.user_id == identity.user_id and role != Role.ADMIN:
            raise ValidationError("You cannot remove your own admin role")

        if not self._users.update_role(user.user_id, role):
            raise ValidationError("Updating role failed")
        logger.info("User %s role set to %s by %s", user.user_id, role.value, identity.user_id)
        return self.get_user(user.user_id)

    def leaderboard(self, *, limit: int = DEFAULT_LEADERBOARD_LIMIT) -> list[LeaderboardEntry]:
        if limit <= 0:
            raise ValidationError("limit must be positive")
        users = self._users.top_by_points(limit=limit, exclude_role=Role.ADMIN)
        return [
            LeaderboardEntry(rank=i, user_id=u.user_id, name=u.name, points=u.points)
            for i, u in enumerate(users, start=1)
        ]
