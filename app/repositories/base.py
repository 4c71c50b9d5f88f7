"""Base repository class."""

from collections.abc import Callable
from typing import Any

import duckdb
from loguru import logger

from app.repositories.db import get_db, reconnect_db


class BaseRepository:
    """Base repository with common functionality.

    Uses the thread-local connection unless one is passed in.
    """

    def __init__(self, read_only: bool = True, conn: duckdb.DuckDBPyConnection | None = None):
        self._owns_conn = conn is None
        self._db = get_db(read_only) if conn is None else conn
        self._read_only = read_only
        self._cache: dict[str, Any] = {}
        logger.debug("{} initialized", self.__class__.__name__)

    def clear_cache(self) -> None:
        """Clear in-memory cache."""
        self._cache.clear()
        logger.debug("Cache cleared")

    def refresh(self) -> None:
        """Reconnect to database and clear cache."""
        if self._owns_conn:
            self._db = reconnect_db(self._read_only)
        self.clear_cache()
        logger.info("Repository refreshed")

    def _cached(self, key: str, fn: Callable[[], Any]) -> Any:
        """Get from cache or compute."""
        if key not in self._cache:
            self._cache[key] = fn()
            logger.debug("Cache miss: {}", key)
        return self._cache[key]

    def _require_writable(self) -> None:
        if self._read_only:
            raise RuntimeError(f"{self.__class__.__name__} is read-only")

    def execute(self, query: str, params: list | None = None) -> Any:
        """Execute SQL query."""
        if params:
            return self._db.execute(query, params)
        return self._db.execute(query)

    def fetchall(self, query: str, params: list | None = None) -> list:
        """Execute and fetch all rows."""
        return self.execute(query, params).fetchall()

    def fetchone(self, query: str, params: list | None = None) -> Any:
        """Execute and fetch one row."""
        return self.execute(query, params).fetchone()
