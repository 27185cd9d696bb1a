"""Data access layer for the news API.

Query validation, existence checks and one operation per entity/action,
all running parameterized statements through a ``QueryExecutor``.
"""

from news_data.errors import (
    ApiError,
    BadRequest,
    ErrorKind,
    InvalidFilter,
    InvalidSort,
    NotFound,
)
from news_data.store import (
    INVALID_TEXT_REPRESENTATION,
    NUMERIC_VALUE_OUT_OF_RANGE,
    QueryExecutor,
    QueryResult,
    SqliteExecutor,
    StoreError,
)
from news_data.query import ArticleQuery, validate_article_query
from news_data.existence import article_exists, comment_exists, user_exists
from news_data.topics import fetch_topics
from news_data.articles import (
    fetch_article_by_id,
    fetch_articles,
    insert_article,
    update_article_votes,
)
from news_data.comments import (
    fetch_comments,
    insert_comment,
    remove_comment,
    update_comment_votes,
)
from news_data.users import fetch_user, fetch_users

__all__ = [
    "ApiError", "BadRequest", "ErrorKind", "InvalidFilter", "InvalidSort", "NotFound",
    "INVALID_TEXT_REPRESENTATION", "NUMERIC_VALUE_OUT_OF_RANGE", "QueryExecutor", "QueryResult",
    "SqliteExecutor",
    "StoreError",
    "ArticleQuery", "validate_article_query",
    "article_exists", "comment_exists", "user_exists",
    "fetch_topics",
    "fetch_article_by_id", "fetch_articles", "insert_article", "update_article_votes",
    "fetch_comments", "insert_comment", "remove_comment", "update_comment_votes",
    "fetch_user", "fetch_users",
]
