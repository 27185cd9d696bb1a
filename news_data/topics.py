"""Topic reads."""

from typing import Any

from news_data.store import QueryExecutor


def fetch_topics(db: QueryExecutor) -> list[dict[str, Any]]:
    return db.execute("SELECT slug, description FROM topics").rows
