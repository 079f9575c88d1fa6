"""Immutable value objects produced by the query parameter parser."""

from __future__ import annotations

from typing import Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictFloat, StrictInt, StrictStr

from .operators import FilterOperator

# Scalar sort-key value carried by a cursor. Nested structures are not allowed.
CursorValue = Union[StrictStr, StrictBool, StrictInt, StrictFloat]


class ValueObject(BaseModel):
    """Base class for the package's value objects.

    Instances are immutable and compared by their attributes.
    """

    model_config = ConfigDict(frozen=True)


class Cursor(ValueObject):
    """Position marker used to resume a paged document-store query.

    ``start_after`` is an exclusive position, ``start_at`` an inclusive one.
    Each holds the sort-key values of a document, in ``orderBy`` order.
    """

    start_after: tuple[CursorValue, ...] = ()
    start_at: tuple[CursorValue, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.start_after and not self.start_at


class Order(ValueObject):
    """A single ``orderBy`` clause."""

    field: str
    desc: bool = False

    @property
    def direction(self) -> str:
        return "desc" if self.desc else "asc"


class Filter(ValueObject):
    """A single ``filter`` predicate. ``value`` is left as a string."""

    field: str
    op: FilterOperator
    value: str


class Params(ValueObject):
    """Pagination, sorting and filtering values extracted from a request."""

    page_size: int = 0
    page_token: str = ""
    cursor: Cursor = Field(default_factory=Cursor)
    orders: tuple[Order, ...] = ()
    filters: tuple[Filter, ...] = ()
