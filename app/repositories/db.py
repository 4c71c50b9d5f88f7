"""DuckDB connection management.

One connection per thread. A thread that first opened the store read-only is
moved to a writable connection the first time a writer asks for one; seeding
and the dashboard share the connection afterwards.
"""

import threading
from pathlib import Path

import duckdb
from loguru import logger

from app.models import ALL_DDL
from settings import DB_PATH

CANVASS_TABLES = ("mohalla", "household", "enhanced_voter", "influencer")

_local = threading.local()


def _missing_tables(conn: duckdb.DuckDBPyConnection) -> set[str]:
    rows = conn.execute(
        "SELECT table_name FROM information_schema.tables WHERE table_name IN (?, ?, ?, ?)",
        list(CANVASS_TABLES),
    ).fetchall()
    return set(CANVASS_TABLES) - {r[0] for r in rows}


def init_tables(conn: duckdb.DuckDBPyConnection) -> None:
    """Create any missing canvass table and its indexes."""
    missing = _missing_tables(conn)
    if not missing:
        return

    for ddl in ALL_DDL:
        conn.execute(ddl)
    logger.info("DB tables initialized: {}", ", ".join(sorted(missing)))


def _ensure_store(path: str) -> None:
    """Create the database file (and its directory) with empty tables."""
    if path == ":memory:" or Path(path).exists():
        return
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    logger.warning("DB not found: {}. Creating empty store.", path)
    conn = duckdb.connect(path)
    try:
        init_tables(conn)
    finally:
        conn.close()


def get_db(read_only: bool = True) -> duckdb.DuckDBPyConnection:
    """Get the thread-local connection, upgrading it when a writer needs one."""
    conn = getattr(_local, "conn", None)
    if conn is not None and getattr(_local, "read_only", True) and not read_only:
        close_db()
        conn = None
    if conn is None:
        _ensure_store(DB_PATH)
        _local.conn = duckdb.connect(DB_PATH, read_only=read_only)
        _local.read_only = read_only
        logger.debug("DB connected: {} (read_only={})", DB_PATH, read_only)
    return _local.conn


def close_db() -> None:
    """Close the thread-local connection."""
    conn = getattr(_local, "conn", None)
    if conn is not None:
        conn.close()
        _local.conn = None
        logger.debug("DB connection closed")


def reconnect_db(read_only: bool = True) -> duckdb.DuckDBPyConnection:
    """Reopen the store, picking up changes made by other processes."""
    close_db()
    return get_db(read_only)


def memory_connection() -> duckdb.DuckDBPyConnection:
    """Fresh in-memory database with the canvass tables (tests, dry runs)."""
    conn = duckdb.connect(":memory:")
    init_tables(conn)
    return conn
