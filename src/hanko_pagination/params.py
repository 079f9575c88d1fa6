"""Params assembler — query values + Options -> validated Params."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any
from urllib.parse import parse_qsl

from .exceptions import InvalidPageSizeError, QueryParamError
from .models import Params
from .options import DEFAULT_PAGE_SIZE, Options
from .syntax import parse_filters, parse_orders
from .token import decode_token

if TYPE_CHECKING:
    from starlette.requests import Request

logger = logging.getLogger("hanko.pagination")

PAGE_SIZE_PARAM = "pageSize"
PAGE_TOKEN_PARAM = "pageToken"
ORDER_BY_PARAM = "orderBy"
FILTER_PARAM = "filter"

_INTEGER = re.compile(r"[+-]?[0-9]+")


def parse(query: Any, options: Options | None = None) -> Params:
    """Parse listing query parameters into :class:`Params`.

    ``query`` may be a raw query string, a mapping of name to a string or a
    list of strings, or a multi-dict such as Starlette's ``QueryParams``.

    Steps run in a fixed order (page size, page token, orderBy, filter) and
    the first failure is raised; nothing is returned partially.

    Raises:
        InvalidPageSizeError, InvalidPageTokenError, InvalidOrderByError,
        InvalidFilterError: On malformed or disallowed input.
    """
    opts = options or Options()
    values = _normalise_query(query)
    try:
        page_size = parse_page_size(_first(values, PAGE_SIZE_PARAM), opts)

        page_token = _first(values, PAGE_TOKEN_PARAM).strip()
        cursor = decode_token(page_token) if page_token else None

        orders = parse_orders(values.get(ORDER_BY_PARAM, []), opts.allowed_order_fields)
        filters = parse_filters(values.get(FILTER_PARAM, []), opts)
    except QueryParamError as err:
        logger.debug("Rejected listing query (%s): %s", err.kind.value, err)
        raise

    params = Params(page_size=page_size, orders=orders, filters=filters)
    if cursor is not None:
        params = params.model_copy(update={"page_token": page_token, "cursor": cursor})
    return params


def from_request(request: Request, options: Options | None = None) -> Params:
    """Parse the listing query parameters of a Starlette/FastAPI request."""
    if request is None:
        raise ValueError("pagination: request is required")
    return parse(request.query_params, options)


def parse_page_size(raw: str | None, options: Options) -> int:
    """Resolve the requested page size.

    Blank input yields the endpoint default. Values above the maximum are
    clamped; non-integers and values below one are rejected.
    """
    max_page_size = options.effective_max_page_size
    raw = (raw or "").strip()
    if not raw:
        return options.effective_default_page_size
    if _INTEGER.fullmatch(raw) is None:
        raise InvalidPageSizeError("must be an integer")
    try:
        value = int(raw)
    except ValueError as e:
        raise InvalidPageSizeError("must be an integer") from e
    if value <= 0:
        raise InvalidPageSizeError("must be greater than zero")
    return min(value, max_page_size)


def must(params: Params) -> Params:
    """Return ``params`` with a positive page size, defaulting when unset."""
    if params.page_size <= 0:
        return params.model_copy(update={"page_size": DEFAULT_PAGE_SIZE})
    return params


def _first(values: Mapping[str, list[str]], key: str) -> str:
    found = values.get(key)
    return found[0] if found else ""


def _normalise_query(query: Any) -> dict[str, list[str]]:
    """Flatten supported query containers into ``{name: [values]}``."""
    if query is None:
        return {}
    if isinstance(query, str):
        pairs = parse_qsl(query.lstrip("?"), keep_blank_values=True)
    elif hasattr(query, "multi_items"):
        pairs = list(query.multi_items())
    elif isinstance(query, Mapping):
        pairs = []
        for key, raw in query.items():
            if isinstance(raw, (list, tuple)):
                pairs.extend((key, str(v)) for v in raw)
            elif raw is not None:
                pairs.append((key, str(raw)))
    else:
        raise TypeError(f"unsupported query container: {type(query).__name__}")

    values: dict[str, list[str]] = {}
    for key, value in pairs:
        values.setdefault(key, []).append(value)
    return values
