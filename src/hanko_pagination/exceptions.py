"""Pagination package exceptions."""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Stable identifiers for the client-facing validation failures."""

    INVALID_PAGE_SIZE = "invalid_page_size"
    INVALID_PAGE_TOKEN = "invalid_page_token"
    INVALID_ORDER_BY = "invalid_order_by"
    INVALID_FILTER = "invalid_filter"


class PaginationError(Exception):
    """Root exception for the hanko-pagination package."""


class QueryParamError(PaginationError):
    """Raised when a listing query parameter is malformed or not allowed.

    Carries structured errors: ``{param: [messages]}``. Callers should branch
    on the exception class (or :attr:`kind`), never on the message text.
    """

    kind: ErrorKind
    param: str
    status_code = 400

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        self.errors: dict[str, list[str]] = {self.param: [detail]} if detail else {}
        message = f"pagination: invalid {self.param}"
        if detail:
            message += f": {detail}"
        super().__init__(message)


class InvalidPageSizeError(QueryParamError):
    """Raised when ``pageSize`` is not a positive integer."""

    kind = ErrorKind.INVALID_PAGE_SIZE
    param = "pageSize"


class InvalidPageTokenError(QueryParamError):
    """Raised when ``pageToken`` cannot be decoded into a cursor."""

    kind = ErrorKind.INVALID_PAGE_TOKEN
    param = "pageToken"


class InvalidOrderByError(QueryParamError):
    """Raised when ordering is unsupported, malformed or uses a disallowed field."""

    kind = ErrorKind.INVALID_ORDER_BY
    param = "orderBy"


class InvalidFilterError(QueryParamError):
    """Raised when filtering is unsupported, malformed or not allowed."""

    kind = ErrorKind.INVALID_FILTER
    param = "filter"


class TokenEncodeError(PaginationError):
    """Raised when a cursor cannot be serialised into a page token."""
