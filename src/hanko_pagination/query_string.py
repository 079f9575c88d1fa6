"""Next-page tokens and query strings for pagination links."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date, datetime
from enum import Enum
from typing import TYPE_CHECKING, Any
from urllib.parse import urlencode

from .exceptions import TokenEncodeError
from .models import Cursor
from .params import FILTER_PARAM, ORDER_BY_PARAM, PAGE_SIZE_PARAM, PAGE_TOKEN_PARAM
from .token import encode_token

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .models import CursorValue, Order, Params

_MISSING = object()


def cursor_from_document(
    document: Any,
    orders: Sequence[Order],
    *,
    id_field: str | None = None,
) -> Cursor:
    """Build a ``start_after`` cursor from the last document of a page.

    Values are read in ``orders`` order; dotted field names walk nested
    mappings or attributes. ``id_field`` appends a tie-breaker value.
    """
    fields = [o.field for o in orders]
    if id_field and id_field not in fields:
        fields.append(id_field)
    try:
        values = [to_cursor_value(name, lookup_field(document, name)) for name in fields]
    except KeyError as e:
        raise TokenEncodeError(f"pagination: document has no field {e.args[0]!r}") from e
    return Cursor(start_after=values)


def next_page_token(
    document: Any,
    orders: Sequence[Order],
    *,
    id_field: str | None = None,
) -> str:
    """Return the page token that resumes after ``document``."""
    return encode_token(cursor_from_document(document, orders, id_field=id_field))


def build_query_string(params: Params, *, page_token: str | None = None) -> str:
    """Serialise ``params`` back into query parameters.

    ``page_token`` replaces the token carried by ``params``; pass ``""`` to
    drop it (e.g. for a "first page" link).
    """
    pairs: list[tuple[str, str | int]] = []
    if params.page_size > 0:
        pairs.append((PAGE_SIZE_PARAM, params.page_size))
    token = params.page_token if page_token is None else page_token
    if token:
        pairs.append((PAGE_TOKEN_PARAM, token))
    if params.orders:
        pairs.append(
            (ORDER_BY_PARAM, ",".join(f"{o.field} {o.direction}" for o in params.orders))
        )
    for f in params.filters:
        pairs.append((FILTER_PARAM, f"{f.field} {f.op.value} {f.value}"))
    return urlencode(pairs)


def lookup_field(document: Any, name: str) -> Any:
    """Resolve a dotted field name against nested mappings or attributes.

    Raises:
        KeyError: If any segment of ``name`` is missing.
    """
    current = document
    for part in name.split("."):
        if isinstance(current, Mapping):
            current = current.get(part, _MISSING)
        else:
            current = getattr(current, part, _MISSING)
        if current is _MISSING:
            raise KeyError(name)
    return current


def to_cursor_value(name: str, value: Any) -> CursorValue:
    """Convert a document value into a scalar usable in a cursor."""
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (str, bool, int, float)):
        return value
    raise TokenEncodeError(
        f"pagination: field {name!r} has unsupported cursor value {type(value).__name__}"
    )
