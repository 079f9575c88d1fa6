"""In-memory evaluation of Params over a list of documents.

Mirrors how the document store applies a parsed listing query: filters,
compound ordering, cursor positioning and the page-size limit. Useful for
tests and for small, static collections.
"""

from __future__ import annotations

import functools
from typing import TYPE_CHECKING, Any

from pydantic import ConfigDict

from .exceptions import TokenEncodeError
from .models import ValueObject
from .operators import FilterOperator
from .params import must
from .query_string import lookup_field, next_page_token, to_cursor_value

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence

    from .models import Cursor, CursorValue, Filter, Params


class Page(ValueObject):
    """One page of documents plus the token for the next one."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    items: tuple[Any, ...]
    page_size: int
    next_page_token: str = ""


def paginate(documents: Iterable[Any], params: Params, *, id_field: str | None = None) -> Page:
    """Apply ``params`` to ``documents`` and return the requested page.

    Documents missing an ordered field are excluded, as a document store
    would. ``id_field`` adds an ascending tie-breaker to the sort key.
    """
    params = must(params)
    key_fields = [o.field for o in params.orders]
    if id_field and id_field not in key_fields:
        key_fields.append(id_field)
    descending = [o.desc for o in params.orders] + [False] * (len(key_fields) - len(params.orders))

    rows: list[tuple[tuple[CursorValue, ...], Any]] = []
    for doc in documents:
        if not all(_matches(doc, f) for f in params.filters):
            continue
        try:
            key = tuple(to_cursor_value(name, lookup_field(doc, name)) for name in key_fields)
        except (KeyError, TokenEncodeError):
            continue
        rows.append((key, doc))

    def compare(a: Sequence[CursorValue], b: Sequence[CursorValue]) -> int:
        for left, right, desc in zip(a, b, descending):
            if left == right:
                continue
            try:
                result = -1 if left < right else 1  # type: ignore[operator]
            except TypeError:
                result = -1 if str(left) < str(right) else 1
            return -result if desc else result
        return 0

    rows.sort(key=functools.cmp_to_key(lambda x, y: compare(x[0], y[0])))
    rows = [row for row in rows if _after_cursor(row[0], params.cursor, compare)]

    items = tuple(doc for _, doc in rows[: params.page_size])
    token = ""
    if len(rows) > params.page_size and items:
        token = next_page_token(items[-1], params.orders, id_field=id_field)
    return Page(items=items, next_page_token=token, page_size=params.page_size)


def _after_cursor(
    key: tuple[CursorValue, ...],
    cursor: Cursor,
    compare: Callable[[Sequence[CursorValue], Sequence[CursorValue]], int],
) -> bool:
    if cursor.start_after and compare(key, cursor.start_after) <= 0:
        return False
    return not (cursor.start_at and compare(key, cursor.start_at) < 0)


def _matches(document: Any, flt: Filter) -> bool:
    try:
        actual = lookup_field(document, flt.field)
    except KeyError:
        return False
    if flt.op is FilterOperator.ARRAY_CONTAINS:
        if not isinstance(actual, (list, tuple, set, frozenset)):
            return False
        return any(item == _coerce(flt.value, item) for item in actual)

    expected = _coerce(flt.value, actual)
    try:
        if flt.op is FilterOperator.EQ:
            return bool(actual == expected)
        if flt.op is FilterOperator.GT:
            return bool(actual > expected)
        if flt.op is FilterOperator.LT:
            return bool(actual < expected)
        if flt.op is FilterOperator.GE:
            return bool(actual >= expected)
        return bool(actual <= expected)
    except TypeError:
        return False


def _coerce(raw: str, like: Any) -> Any:
    """Convert the filter string to the type of the document value ``like``."""
    if isinstance(like, bool):
        lowered = raw.lower()
        if lowered in ("true", "false"):
            return lowered == "true"
        return raw
    if isinstance(like, int):
        try:
            return int(raw)
        except ValueError:
            return raw
    if isinstance(like, float):
        try:
            return float(raw)
        except ValueError:
            return raw
    return raw
