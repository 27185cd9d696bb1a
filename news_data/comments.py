"""Comment reads and writes."""

import logging
from typing import Any

from news_data.errors import BadRequest
from news_data.existence import article_exists, comment_exists, user_exists
from news_data.store import QueryExecutor

logger = logging.getLogger(__name__)

COMMENT_REQUIRED_KEYS = ("username", "body")

_COMMENT_COLUMNS = "comment_id, body, article_id, author, votes, created_at"


def fetch_comments(db: QueryExecutor, article_id: Any) -> list[dict[str, Any]]:
    """Return an article's comments, most recent first."""
    article_exists(db, article_id)
    result = db.execute(
        f"SELECT {_COMMENT_COLUMNS} FROM comments "
        "WHERE article_id = as_integer(?) "
        "ORDER BY created_at DESC, comment_id DESC",
        (article_id,),
    )
    return result.rows


def insert_comment(
    db: QueryExecutor, article_id: Any, payload: dict[str, Any],
) -> dict[str, Any]:
    """Insert a comment on an existing article by an existing user.

    Raises:
        NotFound: The article or the user does not exist.
        BadRequest: ``username`` or ``body`` is missing, or the username is
            malformed.
    """
    article_exists(db, article_id)
    if any(payload.get(key) is None for key in COMMENT_REQUIRED_KEYS):
        raise BadRequest("expected body key missing")
    user_exists(db, payload["username"])

    result = db.execute(
        "INSERT INTO comments (body, article_id, author) "
        f"VALUES (?, as_integer(?), ?) RETURNING {_COMMENT_COLUMNS}",
        (payload["body"], article_id, payload["username"]),
    )
    row = result.rows[0]
    logger.info(
        "comment inserted comment_id=%s article_id=%s", row["comment_id"], row["article_id"],
    )
    return row


def update_comment_votes(
    db: QueryExecutor, comment_id: Any, payload: dict[str, Any],
) -> dict[str, Any]:
    """Add ``inc_votes`` to a comment's votes and return the updated row."""
    if "inc_votes" not in payload:
        raise BadRequest("no inc_votes property found")
    result = db.execute(
        "UPDATE comments SET votes = checked_add(votes, as_integer(?)) "
        f"WHERE comment_id = as_integer(?) RETURNING {_COMMENT_COLUMNS}",
        (payload["inc_votes"], comment_id),
    )
    return comment_exists(result)


def remove_comment(db: QueryExecutor, comment_id: Any) -> dict[str, Any]:
    """Delete a comment and return the removed row."""
    result = db.execute(
        f"DELETE FROM comments WHERE comment_id = as_integer(?) RETURNING {_COMMENT_COLUMNS}",
        (comment_id,),
    )
    row = comment_exists(result)
    logger.info("comment deleted comment_id=%s", row["comment_id"])
    return row
