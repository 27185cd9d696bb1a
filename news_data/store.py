"""Query execution against the relational store.

Every statement goes through ``QueryExecutor.execute(sql, params)`` with
positional ``?`` placeholders; values are never interpolated into the SQL
text.

Integer-typed parameters are wrapped in the ``as_integer()`` SQL function,
which the SQLite executor registers on its connection.  A value that cannot
be read as an integer makes the executor raise ``StoreError`` with code
``22P02`` (the "invalid text representation" code Postgres drivers report),
so callers can tell a malformed id apart from any other store fault.

Vote updates add through ``checked_add()``, which refuses a sum outside the
64-bit range instead of letting SQLite fall back to a float.  The executor
reports that with code ``22003`` (numeric value out of range), as it does a
failed ``CHECK (typeof(votes) = 'integer')`` on the vote columns.
"""

import logging
import re
import sqlite3
from dataclasses import dataclass, field
from typing import Any, Protocol, Sequence

logger = logging.getLogger(__name__)

INVALID_TEXT_REPRESENTATION = "22P02"
NUMERIC_VALUE_OUT_OF_RANGE = "22003"

_INTEGER_TEXT = re.compile(r"^\s*[+-]?\d+\s*$")
_BINDABLE = (int, float, str, bytes)
_INT64_MIN, _INT64_MAX = -(2 ** 63), 2 ** 63 - 1


class StoreError(Exception):
    """A fault reported by the store, tagged with a driver-style code."""

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.code = code


@dataclass
class QueryResult:
    """Rows returned by a statement plus the number of rows it touched."""
    rows: list[dict[str, Any]] = field(default_factory=list)
    rowcount: int = 0

    def first(self) -> dict[str, Any] | None:
        return self.rows[0] if self.rows else None


class QueryExecutor(Protocol):
    def execute(self, sql: str, params: Sequence[Any] = ()) -> QueryResult:
        ...


class SqliteExecutor:
    """QueryExecutor over a single sqlite3 connection.

    Each statement runs in its own transaction: committed when it succeeds,
    rolled back when it raises.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn
        self._bad_value: Any = None
        self._bad_value_seen = False
        self._overflow_seen = False
        conn.create_function("as_integer", 1, self._as_integer, deterministic=True)
        conn.create_function("checked_add", 2, self._checked_add, deterministic=True)

    def _as_integer(self, value: Any) -> int:
        number: int | None = None
        if isinstance(value, int):
            number = value
        elif isinstance(value, float) and value.is_integer():
            number = int(value)
        elif isinstance(value, str) and _INTEGER_TEXT.match(value):
            number = int(value)
        if number is not None and _INT64_MIN <= number <= _INT64_MAX:
            return number
        self._bad_value = value
        self._bad_value_seen = True
        raise ValueError(f"invalid input syntax for type integer: {value!r}")

    def _checked_add(self, left: Any, right: Any) -> int:
        total = left + right
        if _INT64_MIN <= total <= _INT64_MAX:
            return total
        self._overflow_seen = True
        raise OverflowError(f"integer out of range: {left!r} + {right!r}")

    def execute(self, sql: str, params: Sequence[Any] = ()) -> QueryResult:
        self._bad_value_seen = False
        self._overflow_seen = False
        logger.debug("execute sql=%s params=%r", " ".join(sql.split()), list(params))
        for value in params:
            # sqlite3 binds True/False as 1/0, so booleans never reach as_integer().
            if isinstance(value, bool):
                raise StoreError(
                    f"invalid input syntax for type integer: {value!r}",
                    code=INVALID_TEXT_REPRESENTATION,
                )
            out_of_range = isinstance(value, int) and not _INT64_MIN <= value <= _INT64_MAX
            if out_of_range or (value is not None and not isinstance(value, _BINDABLE)):
                raise StoreError(
                    f"cannot bind parameter {value!r}",
                    code=INVALID_TEXT_REPRESENTATION,
                )
        try:
            with self._conn:
                cursor = self._conn.execute(sql, list(params))
                if cursor.description is None:
                    return QueryResult(rows=[], rowcount=max(cursor.rowcount, 0))
                columns = [d[0] for d in cursor.description]
                rows = [dict(zip(columns, r)) for r in cursor.fetchall()]
        except sqlite3.Error as exc:
            if self._bad_value_seen:
                raise StoreError(
                    f"invalid input syntax for type integer: {self._bad_value!r}",
                    code=INVALID_TEXT_REPRESENTATION,
                ) from exc
            check_failed = (
                isinstance(exc, sqlite3.IntegrityError)
                and "CHECK constraint failed" in str(exc)
            )
            if self._overflow_seen or check_failed:
                raise StoreError(str(exc), code=NUMERIC_VALUE_OUT_OF_RANGE) from exc
            raise StoreError(str(exc), code=type(exc).__name__) from exc
        return QueryResult(rows=rows, rowcount=len(rows))
