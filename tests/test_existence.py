"""
Tests for news_data/existence.py — precondition checks.
"""
import pytest

from news_data.errors import BadRequest, NotFound
from news_data.existence import (
    article_exists,
    comment_exists,
    topic_exists,
    user_exists,
)
from news_data.store import INVALID_TEXT_REPRESENTATION, QueryResult, StoreError


class TestArticleExists:
    def test_existing(self, store):
        assert article_exists(store, 1) == {"article_id": 1}

    def test_string_id_accepted(self, store):
        assert article_exists(store, "3") == {"article_id": 3}

    def test_missing(self, store):
        with pytest.raises(NotFound) as exc_info:
            article_exists(store, 9999)
        assert exc_info.value.msg == "no article of this ID in database"

    def test_malformed_id_left_to_store(self, store):
        with pytest.raises(StoreError) as exc_info:
            article_exists(store, "abc")
        assert exc_info.value.code == INVALID_TEXT_REPRESENTATION


class TestUserExists:
    def test_existing(self, store):
        row = user_exists(store, "butter_bridge")
        assert row["name"] == "jonny"

    def test_missing(self, store):
        with pytest.raises(NotFound) as exc_info:
            user_exists(store, "nobody")
        assert exc_info.value.msg == "no user of this username in database"

    def test_all_digit_username_rejected_before_query(self):
        class _NoStore:
            def execute(self, sql, params=()):
                raise AssertionError("store should not be queried")

        with pytest.raises(BadRequest) as exc_info:
            user_exists(_NoStore(), "12345")
        assert exc_info.value.msg == "invalid data type"

    def test_non_string_username_rejected(self, store):
        with pytest.raises(BadRequest):
            user_exists(store, 42)

    def test_username_with_digits_allowed(self, store):
        with pytest.raises(NotFound):
            user_exists(store, "user123")


class TestTopicExists:
    def test_existing(self, store):
        assert topic_exists(store, "paper") == {"slug": "paper"}

    def test_missing(self, store):
        with pytest.raises(NotFound) as exc_info:
            topic_exists(store, "dogs")
        assert exc_info.value.msg == "no topic of this slug in database"


class TestCommentExists:
    def test_row_returned(self):
        result = QueryResult(rows=[{"comment_id": 1}], rowcount=1)
        assert comment_exists(result) == {"comment_id": 1}

    def test_zero_rows_affected(self):
        with pytest.raises(NotFound) as exc_info:
            comment_exists(QueryResult(rows=[], rowcount=0))
        assert exc_info.value.msg == "no comment of this ID in database"
        assert exc_info.value.status == 404
