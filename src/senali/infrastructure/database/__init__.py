"""
Database infrastructure components.
"""

from senali.infrastructure.database.connection import (
    Base,
    DatabaseManager,
    get_db_manager,
    get_async_session,
)

__all__ = [
    "Base",
    "DatabaseManager",
    "get_db_manager",
    "get_async_session",
]
