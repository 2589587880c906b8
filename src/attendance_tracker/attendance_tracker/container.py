from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_TOKEN_DAYS
from .database.bootstrap import list_tables
from .database.connection import DBConfig, DatabaseConnection
from .stats.service import SubjectStatsService
from .timetable.model import DayRecord, RotationConfig
from .timetable.resolver import SubjectResolver
from .timetable.service import TimetableService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    users_repo: UserRepository
    attendance_repo: AttendanceRepository

    auth_service: AuthService
    user_service: UserService
    attendance_service: AttendanceService
    stats_service: SubjectStatsService
    timetable_service: TimetableService

    def database_status(self) -> Dict[str, Any]:
        tables = list_tables(self.conn) if self.conn is not None else []
        return {
            "connection": "connected",
            "tables": tables,
            "counts": {
                "users": self.users_repo.count_all(),
                "attendance": self.attendance_repo.count_all(),
            },
        }


def wire_services(
    *,
    users_repo: UserRepository,
    attendance_repo: AttendanceRepository,
    secret_key: str,
    days: Sequence[DayRecord],
    rotations: RotationConfig,
    token_days: int = DEFAULT_TOKEN_DAYS,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    attendance_service = AttendanceService(attendance_repo)
    return Container(
        conn=conn,
        users_repo=users_repo,
        attendance_repo=attendance_repo,
        auth_service=AuthService(users_repo, secret_key=secret_key, token_days=token_days),
        user_service=UserService(users_repo),
        attendance_service=attendance_service,
        stats_service=SubjectStatsService(attendance_repo),
        timetable_service=TimetableService(days, SubjectResolver(rotations)),
    )


def build_container(
    *,
    db_config: dict,
    secret_key: str,
    days: Sequence[DayRecord],
    rotations: RotationConfig,
    token_days: int = DEFAULT_TOKEN_DAYS,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_settings(db_config))
    return wire_services(
        users_repo=MySQLUserRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        secret_key=secret_key,
        days=days,
        rotations=rotations,
        token_days=token_days,
        conn=conn,
    )
