"""User reads."""

from typing import Any

from news_data.existence import user_exists
from news_data.store import QueryExecutor


def fetch_users(db: QueryExecutor) -> list[dict[str, Any]]:
    return db.execute("SELECT username, name, avatar_url FROM users").rows


def fetch_user(db: QueryExecutor, username: str) -> dict[str, Any]:
    """Return one user, with the same checks used before dependent writes."""
    return user_exists(db, username)
