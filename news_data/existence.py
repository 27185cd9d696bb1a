"""Existence checks run before dependent reads and writes.

Each check either returns the matching row or raises ``NotFound``.
"""

from typing import Any

from news_data.errors import BadRequest, NotFound
from news_data.store import QueryExecutor, QueryResult

NO_ARTICLE = "no article of this ID in database"
NO_USER = "no user of this username in database"
NO_COMMENT = "no comment of this ID in database"
NO_TOPIC = "no topic of this slug in database"


def article_exists(db: QueryExecutor, article_id: Any) -> dict[str, Any]:
    """Confirm the article exists.

    A malformed id is rejected by the store (``StoreError`` 22P02) and is
    left to propagate.
    """
    result = db.execute(
        "SELECT article_id FROM articles WHERE article_id = as_integer(?)",
        (article_id,),
    )
    row = result.first()
    if row is None:
        raise NotFound(NO_ARTICLE)
    return row


def user_exists(db: QueryExecutor, username: Any) -> dict[str, Any]:
    """Confirm the user exists and return their row.

    Usernames made up entirely of digits are refused before the store is
    queried.
    """
    if not isinstance(username, str) or username.isdigit():
        raise BadRequest("invalid data type")
    result = db.execute(
        "SELECT username, name, avatar_url FROM users WHERE username = ?",
        (username,),
    )
    row = result.first()
    if row is None:
        raise NotFound(NO_USER)
    return row


def topic_exists(db: QueryExecutor, slug: Any) -> dict[str, Any]:
    if not isinstance(slug, str):
        raise BadRequest("invalid data type")
    result = db.execute("SELECT slug FROM topics WHERE slug = ?", (slug,))
    row = result.first()
    if row is None:
        raise NotFound(NO_TOPIC)
    return row


def comment_exists(result: QueryResult) -> dict[str, Any]:
    """Check a comment mutation touched a row and return that row.

    Comment updates and deletes go straight to the store; a zero affected
    row count is what signals the comment was not there.
    """
    if result.rowcount == 0 or not result.rows:
        raise NotFound(NO_COMMENT)
    return result.rows[0]
