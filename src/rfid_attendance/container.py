from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .core.constants import (
    DEFAULT_DAILY_TAP_LIMIT,
    DEFAULT_PHONE_PATTERN,
    DEFAULT_RECENT_LOGS_LIMIT,
    DEFAULT_TIME_ZONE,
)
from .database.connection import DatabaseConnection, DBConfig
from .logs.mysql_log_repository import MySQLTapLogRepository
from .logs.repository import TapLogRepository
from .logs.service import LogService
from .realtime.broker import EventBroker
from .taps.resolver import TapResolver
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import UserService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    users_repo: UserRepository
    logs_repo: TapLogRepository
    broker: EventBroker

    user_service: UserService
    log_service: LogService
    tap_resolver: TapResolver


def wire(
    *,
    users_repo: UserRepository,
    logs_repo: TapLogRepository,
    conn: Optional[DatabaseConnection] = None,
    broker: Optional[EventBroker] = None,
    time_zone: str = DEFAULT_TIME_ZONE,
    daily_limit: int = DEFAULT_DAILY_TAP_LIMIT,
    recent_limit: int = DEFAULT_RECENT_LOGS_LIMIT,
    phone_pattern: str = DEFAULT_PHONE_PATTERN,
    queue_size: int = 100,
) -> Container:
    """Assemble services over the given repositories (tests pass in-memory ones)."""
    broker = broker or EventBroker(queue_size=queue_size)

    user_service = UserService(users_repo, phone_pattern=phone_pattern)
    log_service = LogService(logs_repo, time_zone=time_zone, recent_limit=recent_limit)
    tap_resolver = TapResolver(
        users_repo,
        logs_repo,
        broker,
        time_zone=time_zone,
        daily_limit=daily_limit,
        recent_limit=recent_limit,
    )

    return Container(
        conn=conn,
        users_repo=users_repo,
        logs_repo=logs_repo,
        broker=broker,
        user_service=user_service,
        log_service=log_service,
        tap_resolver=tap_resolver,
    )


def build_container(*, db_config: dict, **options) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return wire(
        users_repo=MySQLUserRepository(conn),
        logs_repo=MySQLTapLogRepository(conn),
        conn=conn,
        **options,
    )
