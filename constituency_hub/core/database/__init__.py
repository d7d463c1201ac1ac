"""
Centralized database layer for the constituency hub.

Structure:
- entities/: SQLModel table definitions grouped by feature area
- session.py: Global engine and session factory management
- utils.py: Database utility functions (engine, session, timestamps)
"""

from .base import Base, TimestampedTable, new_id
from .session import (
    async_session_maker,
    engine,
    get_session,
    init_db,
)
from .utils import (
    create_all,
    create_engine,
    create_sessionmaker,
    plain_values,
    to_naive_utc,
    utc_now_naive,
)

__all__ = [
    "Base",
    "TimestampedTable",
    "async_session_maker",
    "create_all",
    "create_engine",
    "create_sessionmaker",
    "engine",
    "get_session",
    "init_db",
    "new_id",
    "plain_values",
    "to_naive_utc",
    "utc_now_naive",
]
