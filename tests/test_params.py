"""Tests for the Params assembler."""

from __future__ import annotations

import base64
import logging
from types import SimpleNamespace

import pytest

from hanko_pagination import (
    Cursor,
    DEFAULT_PAGE_SIZE,
    ErrorKind,
    Filter,
    FilterOperator,
    InvalidFilterError,
    InvalidOrderByError,
    InvalidPageSizeError,
    InvalidPageTokenError,
    Options,
    Order,
    PaginationError,
    Params,
    QueryParamError,
    encode_token,
    from_request,
    must,
    parse,
)


class TestDefaults:
    def test_empty_query(self) -> None:
        params = parse({}, Options())
        assert params.page_size == DEFAULT_PAGE_SIZE
        assert params.page_token == ""
        assert params.cursor == Cursor()
        assert params.orders == ()
        assert params.filters == ()

    def test_none_query_and_options(self) -> None:
        assert parse(None) == Params(page_size=DEFAULT_PAGE_SIZE)


class TestPageSize:
    def test_requested_size(self) -> None:
        params = parse({"pageSize": "30"}, Options(default_page_size=25, max_page_size=40))
        assert params.page_size == 30

    def test_large_size_is_clamped(self) -> None:
        params = parse({"pageSize": "400"}, Options(default_page_size=25, max_page_size=40))
        assert params.page_size == 40

    def test_blank_size_uses_default(self) -> None:
        params = parse({"pageSize": "  "}, Options(default_page_size=25, max_page_size=40))
        assert params.page_size == 25

    @pytest.mark.parametrize(("raw", "expected"), [(" 12 ", 12), ("+7", 7), ("007", 7)])
    def test_integer_forms(self, raw: str, expected: int) -> None:
        assert parse({"pageSize": raw}).page_size == expected

    @pytest.mark.parametrize("raw", ["abc", "0", "-5", "1.5", "1_000", "١٢", "9" * 5000])
    def test_invalid_size(self, raw: str) -> None:
        with pytest.raises(InvalidPageSizeError):
            parse({"pageSize": raw}, Options(max_page_size=40))

    def test_first_value_wins(self) -> None:
        assert parse({"pageSize": ["10", "20"]}).page_size == 10


class TestPageToken:
    def test_token_is_decoded(self) -> None:
        token = encode_token(Cursor(start_after=["abc", 123]))
        params = parse({"pageToken": token})
        assert params.page_token == token
        assert params.cursor.start_after[0] == "abc"
        assert params.cursor.start_after[1] == 123

    def test_token_is_trimmed(self) -> None:
        token = encode_token(Cursor(start_after=["abc"]))
        assert parse({"pageToken": f"  {token} "}).page_token == token

    def test_invalid_token(self) -> None:
        with pytest.raises(InvalidPageTokenError):
            parse({"pageToken": "!!!invalid!!!"})

    def test_token_with_non_array_cursor_is_rejected(self) -> None:
        token = base64.urlsafe_b64encode(b'{"startAfter":0}').rstrip(b"=").decode("ascii")
        with pytest.raises(InvalidPageTokenError):
            parse({"pageToken": token})


class TestOrdersAndFilters:
    def test_order_by(self, order_options: Options) -> None:
        params = parse({"orderBy": ["createdAt desc", "updatedAt asc,score desc"]}, order_options)
        assert params.orders == (
            Order(field="createdAt", desc=True),
            Order(field="updatedAt", desc=False),
            Order(field="score", desc=True),
        )

    def test_order_by_without_allow_list(self) -> None:
        with pytest.raises(InvalidOrderByError):
            parse({"orderBy": "createdAt desc"}, Options())

    def test_order_by_invalid_direction(self) -> None:
        options = Options(allowed_order_fields=frozenset({"createdAt"}))
        with pytest.raises(InvalidOrderByError):
            parse({"orderBy": "createdAt invalid"}, options)

    def test_order_by_unknown_field(self, order_options: Options) -> None:
        with pytest.raises(InvalidOrderByError):
            parse({"orderBy": "unknown desc"}, order_options)

    def test_filters(self, filter_options: Options) -> None:
        params = parse(
            {"filter": ["status == active", "score >= 10", "tags array-contains premium"]},
            filter_options,
        )
        assert params.filters == (
            Filter(field="status", op=FilterOperator.EQ, value="active"),
            Filter(field="score", op=FilterOperator.GE, value="10"),
            Filter(field="tags", op=FilterOperator.ARRAY_CONTAINS, value="premium"),
        )

    def test_filter_without_allow_list(self) -> None:
        with pytest.raises(InvalidFilterError):
            parse({"filter": "status == active"}, Options())

    def test_filter_disallowed_operator(self, filter_options: Options) -> None:
        with pytest.raises(InvalidFilterError):
            parse({"filter": "status != active"}, filter_options)

    def test_filter_disallowed_field(self, filter_options: Options) -> None:
        with pytest.raises(InvalidFilterError):
            parse({"filter": "unknown == value"}, filter_options)


class TestQueryContainers:
    def test_raw_query_string(self) -> None:
        options = Options(
            allowed_order_fields=frozenset({"createdAt", "score"}),
            allowed_filter_fields={"status": frozenset({FilterOperator.EQ})},
        )
        params = parse(
            "?pageSize=20&orderBy=createdAt+desc&orderBy=score&filter=status+%3D%3D+active",
            options,
        )
        assert params.page_size == 20
        assert params.orders == (
            Order(field="createdAt", desc=True),
            Order(field="score", desc=False),
        )
        assert params.filters == (Filter(field="status", op=FilterOperator.EQ, value="active"),)

    def test_multi_items_container(self, order_options: Options) -> None:
        class MultiDict:
            def multi_items(self) -> list[tuple[str, str]]:
                return [("orderBy", "score"), ("orderBy", "createdAt desc")]

        params = parse(MultiDict(), order_options)
        assert [o.field for o in params.orders] == ["score", "createdAt"]

    def test_unsupported_container(self) -> None:
        with pytest.raises(TypeError):
            parse(42)


class TestFailureOrder:
    def test_page_size_is_checked_first(self) -> None:
        with pytest.raises(InvalidPageSizeError):
            parse({"pageSize": "abc", "pageToken": "!!!", "orderBy": "x", "filter": "y"})

    def test_page_token_before_order_by(self) -> None:
        with pytest.raises(InvalidPageTokenError):
            parse({"pageToken": "!!!", "orderBy": "x", "filter": "y"})

    def test_order_by_before_filter(self) -> None:
        with pytest.raises(InvalidOrderByError):
            parse({"orderBy": "x", "filter": "y"})


class TestErrors:
    def test_error_carries_kind_and_param(self) -> None:
        with pytest.raises(QueryParamError) as exc_info:
            parse({"pageSize": "abc"})
        err = exc_info.value
        assert isinstance(err, PaginationError)
        assert err.kind is ErrorKind.INVALID_PAGE_SIZE
        assert err.param == "pageSize"
        assert err.status_code == 400
        assert err.errors == {"pageSize": ["must be an integer"]}
        assert str(err) == "pagination: invalid pageSize: must be an integer"

    def test_rejections_are_logged_at_debug(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.DEBUG, logger="hanko.pagination")
        with pytest.raises(InvalidPageSizeError):
            parse({"pageSize": "0"})
        records = [r for r in caplog.records if r.name == "hanko.pagination"]
        assert records
        assert all(r.levelno == logging.DEBUG for r in records)
        assert "invalid_page_size" in records[-1].getMessage()


class TestFromRequest:
    def test_reads_query_params(self) -> None:
        request = SimpleNamespace(query_params={"pageSize": "20"})
        assert from_request(request).page_size == 20  # type: ignore[arg-type]

    def test_missing_request(self) -> None:
        with pytest.raises(ValueError):
            from_request(None)  # type: ignore[arg-type]


class TestMust:
    def test_zero_value_gets_default(self) -> None:
        assert must(Params()).page_size == DEFAULT_PAGE_SIZE

    def test_positive_size_is_unchanged(self) -> None:
        params = Params(page_size=15, orders=(Order(field="score"),))
        assert must(params) is params

    def test_other_fields_are_kept(self) -> None:
        params = Params(page_token="abc", orders=(Order(field="score"),))
        ensured = must(params)
        assert ensured.page_size == DEFAULT_PAGE_SIZE
        assert ensured.page_token == "abc"
        assert ensured.orders == params.orders
