from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_email, require_max_length, require_min_length, require_non_empty
from ..core.constants import DEFAULT_TOKEN_DAYS, MIN_PASSWORD_LENGTH, NAME_MAX_LENGTH
from ..core.enums import Group
from ..core.exceptions import AuthenticationError, ConflictError, NotFoundError, ValidationError
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)

TOKEN_ALGORITHM = "HS256"
INVALID_CREDENTIALS = "Invalid email or password"


@dataclass(frozen=True)
class AuthResult:
    """What register/login hand back to the controller."""

    token: str
    user: User


class AuthService:
    """Use cases: register, login and bearer-token verification."""

    def __init__(self, users: UserRepository, *, secret_key: str, token_days: int = DEFAULT_TOKEN_DAYS):
        if not secret_key:
            raise ValueError("secret_key must not be empty")
        self._users = users
        self._secret_key = secret_key
        self._token_days = int(token_days)

    def issue_token(self, user_id: int, *, now: Optional[datetime] = None) -> str:
        now = now or datetime.now(timezone.utc)
        payload = {"id": int(user_id), "iat": now, "exp": now + timedelta(days=self._token_days)}
        return jwt.encode(payload, self._secret_key, algorithm=TOKEN_ALGORITHM)

    def verify(self, token: str) -> int:
        """Return the user id carried by a valid token."""
        try:
            data = jwt.decode(token, self._secret_key, algorithms=[TOKEN_ALGORITHM])
        except jwt.ExpiredSignatureError:
            raise AuthenticationError("Token has expired")
        except jwt.InvalidTokenError:
            raise AuthenticationError("Token is invalid")

        user_id = data.get("id")
        if not isinstance(user_id, int):
            raise AuthenticationError("Token is invalid")
        return user_id

    def current_user(self, token: str) -> User:
        user = self._users.get_by_id(self.verify(token))
        if not user:
            raise AuthenticationError("User not authenticated")
        return user

    def register(self, name: str, email: str, password: str) -> AuthResult:
        if not name or not email or not password:
            raise ValidationError("All fields are required")
        if not isinstance(password, str):
            raise ValidationError("Password is invalid")
        name = require_max_length(require_non_empty(name, "Name"), "Name", NAME_MAX_LENGTH)
        email = require_non_empty(email, "Email").lower()

        if self._users.get_by_email(email):
            raise ConflictError("User already exists")

        email = require_email(email)
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

        user_id = self._users.create_user(
            name=name,
            email=email,
            password_hash=generate_password_hash(password),
        )
        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found after registration")

        logger.info("Registered user id=%s", user.user_id)
        return AuthResult(token=self.issue_token(user.user_id), user=user)

    def login(self, email: str, password: str) -> AuthResult:
        if not email or not password:
            raise ValidationError("Email and password are required")
        if not isinstance(email, str) or not isinstance(password, str):
            raise ValidationError("Email and password must be strings")

        user = self._users.get_by_email(email.strip().lower())
        if not user:
            logger.info("Login rejected: unknown email")
            raise AuthenticationError(INVALID_CREDENTIALS)

        try:
            ok = check_password_hash(user.password_hash, password)
        except ValueError:
            # e.g. placeholder hashes or corrupted values
            ok = False

        if not ok:
            logger.info("Login rejected: wrong password for user id=%s", user.user_id)
            raise AuthenticationError(INVALID_CREDENTIALS)

        return AuthResult(token=self.issue_token(user.user_id), user=user)


class UserService:
    """Use cases: read profile, choose rotation group."""

    def __init__(self, users: UserRepository):
        self._users = users

    def get_profile(self, user_id: int) -> User:
        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    def update_group(self, user_id: int, group: object) -> User:
        try:
            new_group = Group(group)
        except ValueError:
            raise ValidationError("Group must be A, B, or C")

        if not self._users.update_group(user_id, new_group):
            raise NotFoundError("User not found")

        logger.info("User id=%s moved to group %s", user_id, new_group.value)
        return self.get_profile(user_id)
