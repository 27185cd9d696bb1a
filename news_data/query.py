"""Query validation and SQL fragment builders for article collections.

Whitelists for sortable columns and directions live in the constant tables
below; nothing from a request reaches the SQL text unless it has been
looked up in one of them.  Filter values are always bound as parameters.
"""

from dataclasses import dataclass
from typing import Any

from news_data.errors import InvalidFilter, InvalidSort
from news_data.store import QueryExecutor


# sort_by value -> SQL expression.  comment_count is the aggregate alias
# produced by the article SELECT, the rest are raw article columns.
ARTICLE_SORT_COLUMNS: dict[str, str] = {
    "article_id":      "articles.article_id",
    "title":           "articles.title",
    "topic":           "articles.topic",
    "author":          "articles.author",
    "body":            "articles.body",
    "created_at":      "articles.created_at",
    "votes":           "articles.votes",
    "article_img_url": "articles.article_img_url",
    "comment_count":   "comment_count",
}

SORT_DIRECTIONS: dict[str, str] = {
    "asc":  "ASC",
    "desc": "DESC",
}

DEFAULT_SORT = "created_at"
DEFAULT_ORDER = "desc"


@dataclass(frozen=True)
class ArticleQuery:
    """Normalized article collection query."""
    topic: str | None
    sort_column: str
    sort_direction: str


def fetch_topic_slugs(db: QueryExecutor) -> list[str]:
    """Return the slugs of every topic currently in the store."""
    result = db.execute("SELECT slug FROM topics")
    return [row["slug"] for row in result.rows]


def resolve_topic(db: QueryExecutor, topic: str) -> str:
    """Match *topic* case-insensitively against live topic slugs.

    Returns:
        The slug as stored.

    Raises:
        InvalidFilter: If no topic matches.
    """
    wanted = topic.strip().lower()
    for slug in fetch_topic_slugs(db):
        if slug.lower() == wanted:
            return slug
    raise InvalidFilter(f"unknown topic: {topic!r}")


def resolve_sort(sort_by: str | None) -> str:
    """Return the SQL expression for *sort_by*, defaulting to created_at."""
    if sort_by is None:
        return ARTICLE_SORT_COLUMNS[DEFAULT_SORT]
    column = ARTICLE_SORT_COLUMNS.get(sort_by.strip().lower())
    if column is None:
        raise InvalidSort(f"unknown sort_by: {sort_by!r}")
    return column


def resolve_order(order: str | None) -> str:
    """Return ASC/DESC for *order*, defaulting to DESC."""
    if order is None:
        return SORT_DIRECTIONS[DEFAULT_ORDER]
    direction = SORT_DIRECTIONS.get(order.strip().lower())
    if direction is None:
        raise InvalidSort(f"unknown order: {order!r}")
    return direction


def validate_article_query(
    db: QueryExecutor,
    topic: str | None = None,
    sort_by: str | None = None,
    order: str | None = None,
) -> ArticleQuery:
    """Validate and normalize the optional article collection parameters.

    The topic is checked against the topics table, not a fixed list, so it
    is only queried for when a topic was actually supplied.

    Raises:
        InvalidFilter: Unknown topic.
        InvalidSort: Unknown sort column or direction.
    """
    sort_column = resolve_sort(sort_by)
    sort_direction = resolve_order(order)
    topic_filter = resolve_topic(db, topic) if topic is not None else None
    return ArticleQuery(
        topic=topic_filter,
        sort_column=sort_column,
        sort_direction=sort_direction,
    )


def build_where_clause(topic: str | None = None) -> tuple[str, list[Any]]:
    """Build a SQL WHERE clause from an already-validated topic filter.

    Returns:
        Tuple of (where_clause_string, params_list). The where_clause_string
        starts with "WHERE " if any conditions exist, or is "" if none.
    """
    conditions: list[str] = []
    params: list[Any] = []

    if topic is not None:
        conditions.append("articles.topic = ?")
        params.append(topic)

    where = "WHERE " + " AND ".join(conditions) if conditions else ""
    return where, params


def build_order_clause(query: ArticleQuery) -> str:
    """Build the ORDER BY clause for a validated query.

    Ties are broken on article_id so equal sort keys come back in a stable
    order.
    """
    return (
        f"ORDER BY {query.sort_column} {query.sort_direction}, "
        f"articles.article_id {query.sort_direction}"
    )
