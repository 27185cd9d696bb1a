"""Article reads and writes.

All article reads share one SELECT that left-joins comments and counts them
per article, so ``comment_count`` is always the live number of comment rows.
"""

import logging
from typing import Any

from news_data.errors import BadRequest, NotFound
from news_data.existence import NO_ARTICLE, article_exists, topic_exists, user_exists
from news_data.query import build_order_clause, build_where_clause, validate_article_query
from news_data.store import QueryExecutor

logger = logging.getLogger(__name__)

ARTICLE_REQUIRED_KEYS = ("author", "title", "body", "topic", "article_img_url")

_LIST_COLUMNS = """
    articles.article_id, articles.title, articles.topic, articles.author,
    articles.created_at, articles.votes, articles.article_img_url,
    COUNT(comments.comment_id) AS comment_count
"""

_DETAIL_COLUMNS = """
    articles.article_id, articles.title, articles.topic, articles.author,
    articles.body, articles.created_at, articles.votes, articles.article_img_url,
    COUNT(comments.comment_id) AS comment_count
"""

_FROM_JOIN = """
    FROM articles
    LEFT JOIN comments ON comments.article_id = articles.article_id
"""


def fetch_articles(
    db: QueryExecutor,
    topic: str | None = None,
    sort_by: str | None = None,
    order: str | None = None,
) -> list[dict[str, Any]]:
    """Return articles with their comment counts, filtered and sorted.

    Args:
        db: Query executor.
        topic: Optional topic slug (case-insensitive).
        sort_by: Optional column from the sort whitelist (default created_at).
        order: Optional "asc" or "desc" (default desc).

    Returns:
        List of article rows without the body.  Empty when a known topic has
        no articles.

    Raises:
        InvalidFilter: Unknown topic.
        InvalidSort: Unknown sort column or order.
    """
    query = validate_article_query(db, topic=topic, sort_by=sort_by, order=order)
    where, params = build_where_clause(topic=query.topic)
    sql = (
        f"SELECT {_LIST_COLUMNS} {_FROM_JOIN} {where} "
        f"GROUP BY articles.article_id {build_order_clause(query)}"
    )
    return db.execute(sql, params).rows


def fetch_article_by_id(db: QueryExecutor, article_id: Any) -> dict[str, Any]:
    """Return one article, including its body and comment count."""
    result = db.execute(
        f"SELECT {_DETAIL_COLUMNS} {_FROM_JOIN} "
        "WHERE articles.article_id = as_integer(?) "
        "GROUP BY articles.article_id",
        (article_id,),
    )
    row = result.first()
    if row is None:
        raise NotFound(NO_ARTICLE)
    return row


def insert_article(db: QueryExecutor, payload: dict[str, Any]) -> dict[str, Any]:
    """Insert a new article and return it as ``fetch_article_by_id`` would.

    Raises:
        BadRequest: A required key is missing or the author is malformed.
        NotFound: The author or topic does not exist.
    """
    if any(payload.get(key) is None for key in ARTICLE_REQUIRED_KEYS):
        raise BadRequest("expected body key missing")
    user_exists(db, payload["author"])
    topic_exists(db, payload["topic"])

    result = db.execute(
        "INSERT INTO articles (title, topic, author, body, article_img_url) "
        "VALUES (?, ?, ?, ?, ?) RETURNING article_id",
        (
            payload["title"],
            payload["topic"],
            payload["author"],
            payload["body"],
            payload["article_img_url"],
        ),
    )
    article_id = result.rows[0]["article_id"]
    logger.info("article inserted article_id=%s author=%s", article_id, payload["author"])
    return fetch_article_by_id(db, article_id)


def update_article_votes(
    db: QueryExecutor, article_id: Any, payload: dict[str, Any],
) -> dict[str, Any]:
    """Add ``inc_votes`` to the article's vote count and return the row.

    A zero or missing ``inc_votes`` is rejected.
    """
    article_exists(db, article_id)
    inc_votes = payload.get("inc_votes")
    if not inc_votes:
        raise BadRequest("Bad request")
    result = db.execute(
        "UPDATE articles SET votes = checked_add(votes, as_integer(?)) "
        "WHERE article_id = as_integer(?) "
        "RETURNING article_id, title, topic, author, body, created_at, "
        "votes, article_img_url",
        (inc_votes, article_id),
    )
    row = result.first()
    if row is None:
        raise NotFound(NO_ARTICLE)
    return row
