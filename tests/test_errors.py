"""
Tests for the error taxonomy (news_data/errors.py) and the HTTP error
dispatcher (news_api/errors.py).
"""
import pytest

pytest.importorskip("fastapi")

from fastapi.exceptions import RequestValidationError  # noqa: E402
from starlette.exceptions import HTTPException as StarletteHTTPException  # noqa: E402

from news_api.errors import dispatch_error  # noqa: E402
from news_data.errors import (  # noqa: E402
    ApiError,
    BadRequest,
    ErrorKind,
    InvalidFilter,
    InvalidSort,
    NotFound,
)
from news_data.store import (  # noqa: E402
    INVALID_TEXT_REPRESENTATION,
    NUMERIC_VALUE_OUT_OF_RANGE,
    StoreError,
)


class TestErrorKinds:
    def test_statuses(self):
        assert BadRequest("x").status == 400
        assert NotFound("x").status == 404
        assert ApiError("x").status == 500

    def test_kinds(self):
        assert BadRequest("x").kind is ErrorKind.BAD_REQUEST
        assert NotFound("x").kind is ErrorKind.NOT_FOUND

    @pytest.mark.parametrize("cls", [InvalidFilter, InvalidSort])
    def test_query_errors_hide_detail(self, cls):
        exc = cls("unknown column 'bogus'")
        assert isinstance(exc, BadRequest)
        assert exc.msg == "Bad request"
        assert exc.detail == "unknown column 'bogus'"

    def test_repr(self):
        assert repr(NotFound("gone")) == "NotFound('gone')"


class TestDispatchError:
    def test_bad_request_echoed(self):
        assert dispatch_error(BadRequest("expected body key missing")) == (
            400, "expected body key missing",
        )

    def test_not_found_echoed(self):
        assert dispatch_error(NotFound("no article of this ID in database")) == (
            404, "no article of this ID in database",
        )

    def test_internal_api_error_hidden(self):
        assert dispatch_error(ApiError("secret")) == (500, "Internal server error")

    def test_invalid_text_representation(self):
        exc = StoreError("bad integer", code=INVALID_TEXT_REPRESENTATION)
        assert dispatch_error(exc) == (400, "Bad request - invalid data type")

    def test_other_store_error(self):
        exc = StoreError("database is locked", code="OperationalError")
        assert dispatch_error(exc) == (500, "Internal server error")

    @pytest.mark.parametrize("status", [404, 405])
    def test_unmatched_route(self, status):
        assert dispatch_error(StarletteHTTPException(status_code=status)) == (
            404, "Not found - this path does not exist",
        )

    def test_other_http_error_passes_through(self):
        exc = StarletteHTTPException(status_code=503, detail="Database not found")
        assert dispatch_error(exc) == (503, "Database not found")

    def test_request_validation(self):
        assert dispatch_error(RequestValidationError([])) == (400, "Bad request")

    def test_unknown_exception(self):
        assert dispatch_error(KeyError("x")) == (500, "Internal server error")

    def test_numeric_value_out_of_range(self):
        exc = StoreError("integer out of range", code=NUMERIC_VALUE_OUT_OF_RANGE)
        assert dispatch_error(exc) == (400, "Bad request - invalid data type")
