"""Grammar for the ``orderBy`` and ``filter`` query parameters.

``orderBy`` values are comma-separated clauses of the form ``field``,
``field direction`` or ``field:direction`` where direction is ``asc`` or
``desc`` (case-insensitive). ``filter`` values are single predicates of the
form ``field<operator>value``, e.g. ``status == active`` or
``tags array-contains premium``.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from .exceptions import InvalidFilterError, InvalidOrderByError
from .models import Filter, Order
from .operators import OPERATOR_PRIORITY, FilterOperator

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .options import Options

# Longest filter value kept after sanitising; longer values are truncated.
MAX_FILTER_VALUE_LENGTH = 512

_FIELD_NAME = re.compile(r"[A-Za-z0-9_.]+")
_QUOTES = "\"'"


def is_valid_field_name(name: str) -> bool:
    """Return True if ``name`` only uses ASCII letters, digits, ``_`` and ``.``."""
    return bool(name) and _FIELD_NAME.fullmatch(name) is not None


# ── orderBy ──────────────────────────────────────────────────────────


def parse_order_clause(clause: str) -> Order:
    """Parse one ``field [direction]`` clause."""
    clause = clause.strip()
    if not clause:
        raise InvalidOrderByError("empty orderBy value")

    if ":" in clause and " " not in clause:
        clause = clause.replace(":", " ")

    segments = clause.split()
    if not segments:
        raise InvalidOrderByError("empty orderBy value")
    if len(segments) > 2:
        raise InvalidOrderByError(f"invalid orderBy format {clause!r}")

    field = segments[0]
    if not is_valid_field_name(field):
        raise InvalidOrderByError(f"invalid field {field!r}")

    desc = False
    if len(segments) == 2:
        direction = segments[1].lower()
        if direction == "desc":
            desc = True
        elif direction != "asc":
            raise InvalidOrderByError(f"invalid direction {segments[1]!r}")

    return Order(field=field, desc=desc)


def parse_orders(values: Iterable[str], allowed: Iterable[str]) -> tuple[Order, ...]:
    """Parse every ``orderBy`` value against the ``allowed`` field set.

    Clauses are read left to right across all values. Exact duplicates are
    dropped; the first occurrence keeps its position, which decides the
    compound sort precedence.
    """
    values = list(values)
    if not values:
        return ()
    allowed_set = {f for f in allowed if f}
    if not allowed_set:
        raise InvalidOrderByError("ordering not supported")

    seen: set[tuple[str, bool]] = set()
    orders: list[Order] = []
    for raw in values:
        for part in raw.split(","):
            if not part.strip():
                continue
            order = parse_order_clause(part)
            if order.field not in allowed_set:
                raise InvalidOrderByError(f"field {order.field!r} is not allowed")
            key = (order.field, order.desc)
            if key in seen:
                continue
            seen.add(key)
            orders.append(order)
    return tuple(orders)


# ── filter ───────────────────────────────────────────────────────────


def split_filter(raw: str) -> tuple[str, FilterOperator, str]:
    """Split ``raw`` into ``(field, operator, value)``.

    Operators are tried in :data:`OPERATOR_PRIORITY` order using their first
    occurrence; the first one leaving a non-empty field and value wins.
    """
    for candidate in OPERATOR_PRIORITY:
        token = candidate.value
        idx = raw.find(token)
        if idx <= 0:
            continue
        field = raw[:idx].strip()
        value = raw[idx + len(token) :].strip()
        if not field or not value:
            continue
        return field, candidate, value
    raise InvalidFilterError(f"missing operator in {raw!r}")


def sanitize_filter_value(value: str) -> str:
    """Normalise a raw filter value.

    Trims whitespace, strips one layer of surrounding quotes, replaces
    line breaks with spaces and truncates to :data:`MAX_FILTER_VALUE_LENGTH`.
    """
    value = value.strip()
    if not value:
        return ""
    if value[0] in _QUOTES:
        value = value[1:]
    if value and value[-1] in _QUOTES:
        value = value[:-1]
    value = value.replace("\n", " ").replace("\r", " ").strip()
    return value[:MAX_FILTER_VALUE_LENGTH]


def parse_filter_clause(raw: str) -> Filter:
    """Parse one ``field<operator>value`` predicate."""
    raw = raw.strip()
    if not raw:
        raise InvalidFilterError("empty filter value")

    field, op, value = split_filter(raw)
    if not is_valid_field_name(field):
        raise InvalidFilterError(f"invalid field {field!r}")

    value = sanitize_filter_value(value)
    if not value:
        raise InvalidFilterError(f"empty value for field {field!r}")

    return Filter(field=field, op=op, value=value)


def parse_filters(values: Iterable[str], options: Options) -> tuple[Filter, ...]:
    """Parse every ``filter`` value and check it against ``options``."""
    values = list(values)
    if not values:
        return ()
    if not options.allowed_filter_fields:
        raise InvalidFilterError("filtering not supported")

    filters: list[Filter] = []
    for raw in values:
        if not raw.strip():
            continue
        parsed = parse_filter_clause(raw)
        allowed_ops = options.allowed_operators(parsed.field)
        if allowed_ops is None:
            raise InvalidFilterError(f"field {parsed.field!r} is not allowed")
        if parsed.op not in allowed_ops:
            raise InvalidFilterError(
                f"operator {parsed.op.value!r} is not allowed for field {parsed.field!r}"
            )
        filters.append(parsed)
    return tuple(filters)
