"""Persistence layer: ORM tables and session management."""

from expense_tracker.db.session import (
    build_engine,
    configure_engine,
    get_db,
    get_engine,
    init_db,
    reset_engine,
    session_scope,
)
from expense_tracker.db.tables import (
    Base,
    EmployeeRecord,
    EstimateRecord,
    ExpenseRecord,
    ProjectRecord,
    UserRecord,
    to_document,
)

__all__ = [
    "Base",
    "EmployeeRecord",
    "EstimateRecord",
    "ExpenseRecord",
    "ProjectRecord",
    "UserRecord",
    "to_document",
    "build_engine",
    "configure_engine",
    "get_db",
    "get_engine",
    "init_db",
    "reset_engine",
    "session_scope",
]
