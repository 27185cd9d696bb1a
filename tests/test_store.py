"""
Tests for news_data/store.py — SqliteExecutor, as_integer() and checked_add().
"""
import sqlite3

import pytest

from news_data.store import (
    INVALID_TEXT_REPRESENTATION,
    NUMERIC_VALUE_OUT_OF_RANGE,
    QueryResult,
    SqliteExecutor,
    StoreError,
)


@pytest.fixture()
def executor():
    conn = sqlite3.connect(":memory:")
    conn.execute("CREATE TABLE t (id INTEGER PRIMARY KEY, n INTEGER NOT NULL)")
    conn.executemany("INSERT INTO t (n) VALUES (?)", [(1,), (2,), (3,)])
    conn.commit()
    try:
        yield SqliteExecutor(conn)
    finally:
        conn.close()


class TestExecute:
    def test_select_returns_dict_rows(self, executor):
        result = executor.execute("SELECT id, n FROM t ORDER BY id")
        assert isinstance(result, QueryResult)
        assert result.rows == [{"id": 1, "n": 1}, {"id": 2, "n": 2}, {"id": 3, "n": 3}]
        assert result.rowcount == 3

    def test_positional_params(self, executor):
        result = executor.execute("SELECT n FROM t WHERE id = ?", (2,))
        assert result.first() == {"n": 2}

    def test_first_on_empty(self, executor):
        result = executor.execute("SELECT n FROM t WHERE id = ?", (99,))
        assert result.first() is None
        assert result.rowcount == 0

    def test_update_without_returning_reports_affected_rows(self, executor):
        result = executor.execute("UPDATE t SET n = n + 1 WHERE id <= ?", (2,))
        assert result.rows == []
        assert result.rowcount == 2

    def test_returning_counts_returned_rows(self, executor):
        result = executor.execute("DELETE FROM t WHERE id = ? RETURNING id, n", (3,))
        assert result.rows == [{"id": 3, "n": 3}]
        assert result.rowcount == 1

    def test_writes_are_committed(self, executor):
        executor.execute("INSERT INTO t (n) VALUES (?)", (10,))
        # Visible to a fresh statement on the same connection and not pending.
        assert executor._conn.in_transaction is False
        result = executor.execute("SELECT COUNT(*) AS c FROM t")
        assert result.first()["c"] == 4

    def test_driver_error_wrapped(self, executor):
        with pytest.raises(StoreError) as exc_info:
            executor.execute("SELECT * FROM missing_table")
        assert exc_info.value.code == "OperationalError"

    def test_constraint_error_wrapped(self, executor):
        with pytest.raises(StoreError) as exc_info:
            executor.execute("INSERT INTO t (n) VALUES (?)", (None,))
        assert exc_info.value.code == "IntegrityError"


class TestAsInteger:
    @pytest.mark.parametrize("value,expected", [
        (7, 7), ("7", 7), (" 7 ", 7), ("-3", -3), ("+4", 4), (2.0, 2),
    ])
    def test_accepts_integer_values(self, executor, value, expected):
        result = executor.execute("SELECT as_integer(?) AS v", (value,))
        assert result.first()["v"] == expected

    @pytest.mark.parametrize("value", ["abc", "1.5", 1.5, "", "12abc", None, "99999999999999999999"])
    def test_rejects_non_integers(self, executor, value):
        with pytest.raises(StoreError) as exc_info:
            executor.execute("SELECT n FROM t WHERE id = as_integer(?)", (value,))
        assert exc_info.value.code == INVALID_TEXT_REPRESENTATION

    def test_unbindable_value_is_a_type_error(self, executor):
        with pytest.raises(StoreError) as exc_info:
            executor.execute("SELECT n FROM t WHERE id = as_integer(?)", ([1, 2],))
        assert exc_info.value.code == INVALID_TEXT_REPRESENTATION

    def test_failed_write_is_rolled_back(self, executor):
        with pytest.raises(StoreError):
            executor.execute("INSERT INTO t (n) VALUES (as_integer(?))", ("nope",))
        result = executor.execute("SELECT COUNT(*) AS c FROM t")
        assert result.first()["c"] == 3

    def test_type_error_flag_resets_between_statements(self, executor):
        with pytest.raises(StoreError):
            executor.execute("SELECT as_integer(?)", ("x",))
        with pytest.raises(StoreError) as exc_info:
            executor.execute("SELECT * FROM missing_table")
        assert exc_info.value.code != INVALID_TEXT_REPRESENTATION

    @pytest.mark.parametrize("value", [True, False])
    def test_booleans_are_a_type_error(self, executor, value):
        with pytest.raises(StoreError) as exc_info:
            executor.execute("SELECT as_integer(?) AS v", (value,))
        assert exc_info.value.code == INVALID_TEXT_REPRESENTATION


_INT64_MAX = 2 ** 63 - 1


class TestCheckedAdd:
    def test_adds_in_range(self, executor):
        result = executor.execute("SELECT checked_add(?, ?) AS v", (_INT64_MAX - 1, 1))
        assert result.first() == {"v": _INT64_MAX}

    @pytest.mark.parametrize("left,right", [(_INT64_MAX, 1), (-_INT64_MAX - 1, -1)])
    def test_overflow_is_out_of_range(self, executor, left, right):
        with pytest.raises(StoreError) as exc_info:
            executor.execute("SELECT checked_add(?, ?) AS v", (left, right))
        assert exc_info.value.code == NUMERIC_VALUE_OUT_OF_RANGE

    def test_overflowing_update_is_rolled_back(self, executor):
        executor.execute("UPDATE t SET n = ? WHERE id = 1", (_INT64_MAX - 5,))
        with pytest.raises(StoreError) as exc_info:
            executor.execute(
                "UPDATE t SET n = checked_add(n, as_integer(?)) RETURNING id, n", (10,),
            )
        assert exc_info.value.code == NUMERIC_VALUE_OUT_OF_RANGE
        rows = executor.execute("SELECT id, n FROM t ORDER BY id").rows
        assert rows == [
            {"id": 1, "n": _INT64_MAX - 5}, {"id": 2, "n": 2}, {"id": 3, "n": 3},
        ]

    def test_failed_integer_check_is_out_of_range(self):
        conn = sqlite3.connect(":memory:")
        conn.execute(
            "CREATE TABLE v (votes INTEGER NOT NULL CHECK (typeof(votes) = 'integer'))"
        )
        executor = SqliteExecutor(conn)
        try:
            with pytest.raises(StoreError) as exc_info:
                executor.execute("INSERT INTO v (votes) VALUES (?)", (1.5,))
            assert exc_info.value.code == NUMERIC_VALUE_OUT_OF_RANGE
        finally:
            conn.close()
