"""Per-endpoint parsing configuration and global defaults."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Union

from .operators import SUPPORTED_OPERATORS, FilterOperator
from .syntax import is_valid_field_name

logger = logging.getLogger("hanko.pagination")

# Fallback number of items returned when the client omits pageSize.
DEFAULT_PAGE_SIZE = 50
# Upper bound applied when an endpoint does not configure its own maximum.
DEFAULT_MAX_PAGE_SIZE = 100

OperatorLike = Union[FilterOperator, str]


@dataclass(frozen=True)
class Options:
    """Allow-lists and page-size limits for one listing endpoint.

    Build one instance per endpoint (typically at import time) and share it
    read-only between requests.

    Attributes:
        default_page_size: Page size used when ``pageSize`` is absent.
            Non-positive values fall back to :data:`DEFAULT_PAGE_SIZE`.
        max_page_size: Largest accepted page size; larger requests are
            clamped. Non-positive values fall back to
            :data:`DEFAULT_MAX_PAGE_SIZE`.
        allowed_order_fields: Fields accepted in ``orderBy``. Empty means
            ordering is not supported.
        allowed_filter_fields: Field -> allowed operators for ``filter``.
            An empty operator set allows every operator. Empty mapping means
            filtering is not supported.
    """

    default_page_size: int = 0
    max_page_size: int = 0
    allowed_order_fields: frozenset[str] = frozenset()
    allowed_filter_fields: Mapping[str, frozenset[FilterOperator]] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "allowed_order_fields",
            frozenset(f for f in self.allowed_order_fields if f),
        )
        object.__setattr__(
            self,
            "allowed_filter_fields",
            MappingProxyType(_normalise_filter_fields(self.allowed_filter_fields)),
        )

    def __hash__(self) -> int:
        return hash(
            (
                self.default_page_size,
                self.max_page_size,
                self.allowed_order_fields,
                frozenset(self.allowed_filter_fields.items()),
            )
        )

    @property
    def effective_max_page_size(self) -> int:
        if self.max_page_size > 0:
            return self.max_page_size
        return DEFAULT_MAX_PAGE_SIZE

    @property
    def effective_default_page_size(self) -> int:
        default = self.default_page_size if self.default_page_size > 0 else DEFAULT_PAGE_SIZE
        return min(default, self.effective_max_page_size)

    def allowed_operators(self, field_name: str) -> frozenset[FilterOperator] | None:
        """Return the operators allowed for ``field_name`` or ``None`` if not filterable."""
        return self.allowed_filter_fields.get(field_name)


def _normalise_filter_fields(
    raw: Mapping[str, Iterable[OperatorLike]],
) -> dict[str, frozenset[FilterOperator]]:
    normalised: dict[str, frozenset[FilterOperator]] = {}
    for name, ops in raw.items():
        if not is_valid_field_name(name):
            logger.debug("Ignoring filter field with invalid name %r", name)
            continue
        allowed = frozenset(_coerce_operators(ops))
        normalised[name] = allowed or SUPPORTED_OPERATORS
    return normalised


def _coerce_operators(ops: Iterable[OperatorLike]) -> Iterable[FilterOperator]:
    for op in ops:
        try:
            yield FilterOperator(op)
        except ValueError:
            logger.debug("Ignoring unsupported filter operator %r", op)
