from __future__ import annotations

from typing import Optional

import mysql.connector
from mysql.connector import errorcode

from ..core.enums import Group
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import User
from .repository import UserRepository

_USER_COLUMNS = "user_id, name, email, password_hash, grp, created_at, updated_at"


def _row_to_user(row: dict) -> User:
    return User(
        user_id=int(row["user_id"]),
        name=row["name"],
        email=row["email"],
        password_hash=row["password_hash"],
        group=Group(row["grp"]) if row.get("grp") else None,
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE user_id=%s", (int(user_id),))
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def get_by_email(self, email: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE email=%s", (email,))
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def create_user(self, *, name: str, email: str, password_hash: str) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO users(name, email, password_hash, grp)
                    VALUES(%s,%s,%s,NULL)
                    """,
                    (name, email, password_hash),
                )
                return int(cur.lastrowid)
        except mysql.connector.IntegrityError as e:
            # Lost a registration race against the unique email index.
            if e.errno == errorcode.ER_DUP_ENTRY:
                raise ConflictError("User already exists") from e
            raise

    def update_group(self, user_id: int, group: Group) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE users SET grp=%s WHERE user_id=%s", (group.value, int(user_id)))
            if cur.rowcount > 0:
                return True
            # MySQL reports 0 affected rows when the value is unchanged.
            cur.execute("SELECT 1 AS found FROM users WHERE user_id=%s", (int(user_id),))
            return fetchone(cur) is not None

    def count_all(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM users")
            row = fetchone(cur)
            return int(row["n"]) if row else 0
