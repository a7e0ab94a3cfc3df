"""Database utilities."""

from __future__ import annotations

from .session import Database, get_db_session

__all__ = ["Database", "get_db_session"]
