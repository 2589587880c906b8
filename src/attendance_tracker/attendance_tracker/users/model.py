from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Group


@dataclass(frozen=True)
class User:
    """Domain entity: a registered student.

    Plain data object; no database access here.
    """

    user_id: int
    name: str
    email: str
    password_hash: str
    group: Optional[Group] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_public_dict(self, *, include_group: bool = True) -> dict:
        out = {"id": self.user_id, "name": self.name, "email": self.email}
        if include_group:
            out["group"] = self.group.value if self.group else None
        return out
