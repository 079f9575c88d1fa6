"""Listing query parsing — page size, page tokens, orderBy and filter."""

from __future__ import annotations

from .context import (
    clear_params,
    from_context,
    from_context_or_default,
    params_scope,
    reset_params,
    with_params,
)
from .exceptions import (
    ErrorKind,
    InvalidFilterError,
    InvalidOrderByError,
    InvalidPageSizeError,
    InvalidPageTokenError,
    PaginationError,
    QueryParamError,
    TokenEncodeError,
)
from .memory import Page, paginate
from .models import Cursor, CursorValue, Filter, Order, Params
from .operators import OPERATOR_PRIORITY, SUPPORTED_OPERATORS, FilterOperator
from .options import DEFAULT_MAX_PAGE_SIZE, DEFAULT_PAGE_SIZE, Options
from .params import from_request, must, parse, parse_page_size
from .query_string import build_query_string, cursor_from_document, next_page_token
from .syntax import MAX_FILTER_VALUE_LENGTH, parse_filters, parse_orders
from .token import decode_token, encode_token

__all__ = [
    "DEFAULT_MAX_PAGE_SIZE",
    "DEFAULT_PAGE_SIZE",
    "MAX_FILTER_VALUE_LENGTH",
    "OPERATOR_PRIORITY",
    "SUPPORTED_OPERATORS",
    "Cursor",
    "CursorValue",
    "ErrorKind",
    "Filter",
    "FilterOperator",
    "InvalidFilterError",
    "InvalidOrderByError",
    "InvalidPageSizeError",
    "InvalidPageTokenError",
    "Options",
    "Order",
    "Page",
    "PaginationError",
    "Params",
    "QueryParamError",
    "TokenEncodeError",
    "build_query_string",
    "clear_params",
    "cursor_from_document",
    "decode_token",
    "encode_token",
    "from_context",
    "from_context_or_default",
    "from_request",
    "must",
    "next_page_token",
    "paginate",
    "params_scope",
    "parse",
    "parse_filters",
    "parse_orders",
    "parse_page_size",
    "reset_params",
    "with_params",
]
