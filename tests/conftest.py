"""Shared fixtures for hanko-pagination tests."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from hanko_pagination import FilterOperator, Options, clear_params


@pytest.fixture(autouse=True)
def _isolated_params_context() -> Iterator[None]:
    """Params attached during a test must not leak into the next one."""
    yield
    clear_params()


@pytest.fixture
def order_options() -> Options:
    return Options(allowed_order_fields=frozenset({"createdAt", "updatedAt", "score"}))


@pytest.fixture
def filter_options() -> Options:
    return Options(
        allowed_filter_fields={
            "status": frozenset({FilterOperator.EQ}),
            "score": frozenset({FilterOperator.GE}),
            "tags": frozenset({FilterOperator.ARRAY_CONTAINS}),
        }
    )
