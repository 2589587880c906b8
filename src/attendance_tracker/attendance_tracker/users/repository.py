from __future__ import annotations

from typing import Optional, Protocol

from ..core.enums import Group
from .model import User


class UserRepository(Protocol):
    """Repository interface for User.

    Note (DIP): the service layer depends on this interface, not on a concrete database.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def create_user(self, *, name: str, email: str, password_hash: str) -> int:
        """Insert a user; raises ConflictError when the email is already taken."""

        raise NotImplementedError

    def update_group(self, user_id: int, group: Group) -> bool:
        raise NotImplementedError

    def count_all(self) -> int:
        raise NotImplementedError
