"""Request-scoped Params using ContextVar.

Lets handlers attach parsed pagination parameters once and read them further
down the call chain without threading them through every function.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token

from .models import Params
from .options import DEFAULT_PAGE_SIZE
from .params import must

_params_context: ContextVar[Params | None] = ContextVar("pagination_params", default=None)


def with_params(params: Params) -> Token[Params | None]:
    """Attach ``params`` to the current context.

    Returns:
        A Token that can be passed to :func:`reset_params`.
    """
    return _params_context.set(params)


def from_context() -> Params | None:
    """Return the attached params, or None if nothing was attached."""
    return _params_context.get()


def from_context_or_default() -> Params:
    """Return the attached params, falling back to a default page size.

    Never raises; a missing or non-positive page size becomes
    :data:`~hanko_pagination.options.DEFAULT_PAGE_SIZE`.
    """
    params = _params_context.get()
    if params is None:
        return Params(page_size=DEFAULT_PAGE_SIZE)
    return must(params)


def reset_params(token: Token[Params | None]) -> None:
    """Restore the value seen before the matching :func:`with_params` call."""
    _params_context.reset(token)


def clear_params() -> None:
    """Detach any params from the current context."""
    _params_context.set(None)


@contextmanager
def params_scope(params: Params) -> Iterator[Params]:
    """Attach ``params`` for the duration of a ``with`` block."""
    token = with_params(params)
    try:
        yield params
    finally:
        reset_params(token)
