"""Database layer for agencyledger application."""

from agencyledger.database.base import Database
from agencyledger.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
