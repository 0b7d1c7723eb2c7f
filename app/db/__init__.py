"""Database package: engine, session, base."""

from app.db.session import async_session_maker, get_db, storage_boundary

__all__ = ["async_session_maker", "get_db", "storage_boundary"]
