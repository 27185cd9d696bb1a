"""
Database connection management for the API.

Provides a get_db() dependency that opens a per-request SQLite connection and
closes it after the response is sent, and get_store() which wraps that
connection in the SqliteExecutor used by every data access operation.  The
database path is resolved once at startup from the APP_DB_PATH environment
variable (default: nc_news.sqlite).
"""

import os
import sqlite3
from collections.abc import Generator
from pathlib import Path

from fastapi import Depends, HTTPException

from news_data.store import SqliteExecutor

_DB_PATH: Path = Path(os.getenv("APP_DB_PATH", "nc_news.sqlite"))


def get_db_path() -> Path:
    """Return the configured database path."""
    return _DB_PATH


def set_db_path(db_path: Path) -> None:
    global _DB_PATH
    _DB_PATH = Path(db_path)


def _make_conn(db_path: Path) -> sqlite3.Connection:
    """Open a single SQLite connection with standard pragmas.

    Args:
        db_path: Path to the SQLite database file.
    """
    conn = sqlite3.connect(str(db_path), check_same_thread=False,
                           timeout=10)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode=WAL")
    conn.execute("PRAGMA synchronous=NORMAL")
    conn.execute("PRAGMA busy_timeout=5000")
    conn.execute("PRAGMA foreign_keys=ON")
    return conn


def get_db() -> Generator[sqlite3.Connection, None, None]:
    """FastAPI dependency: yield a SQLite connection, close on exit.

    Raises HTTP 503 with a friendly message if the database file is missing,
    instead of letting SQLite create an empty one.
    """
    if not _DB_PATH.exists():
        raise HTTPException(
            status_code=503,
            detail=(
                f"Database not found at '{_DB_PATH}'. "
                "Run 'python -m news_data.seed' to build it."
            ),
        )
    conn = _make_conn(_DB_PATH)
    try:
        yield conn
    finally:
        conn.close()


def get_store(conn: sqlite3.Connection = Depends(get_db)) -> SqliteExecutor:
    """FastAPI dependency: the query executor for this request's connection.

    Usage in a route::

        @router.get("/example")
        def example(db: SqliteExecutor = Depends(get_store)):
            ...
    """
    return SqliteExecutor(conn)
