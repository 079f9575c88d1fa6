"""FastAPI dependencies for listing endpoints.

Provides a Depends factory that parses the listing query parameters of the
current request and makes the result available via the request context.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from fastapi import HTTPException, Request

from ...context import with_params
from ...exceptions import QueryParamError
from ...models import Params
from ...params import from_request

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from ...options import Options


def problem_detail(err: QueryParamError) -> dict[str, Any]:
    """Build the HTTP 400 detail payload for a rejected query parameter."""
    return {
        "error": err.kind.value,
        "param": err.param,
        "message": str(err),
    }


def pagination_params(
    options: Options | None = None,
) -> Callable[[Request], Awaitable[Params]]:
    """Create a dependency that parses pagination, ordering and filters.

    Args:
        options: Allow-lists and page-size limits for the endpoint.

    Returns:
        An async dependency returning the parsed Params.

    Raises:
        HTTPException: 400 when the query parameters are invalid.

    Example:
        ```python
        from fastapi import APIRouter, Depends
        from hanko_pagination import Options
        from hanko_pagination.contrib.fastapi import pagination_params

        ORDERS_LISTING = Options(
            allowed_order_fields={"createdAt", "total"},
            allowed_filter_fields={"status": ["=="]},
        )

        router = APIRouter()

        @router.get("/orders")
        async def list_orders(params = Depends(pagination_params(ORDERS_LISTING))):
            ...
        ```
    """

    async def dependency(request: Request) -> Params:
        try:
            params = from_request(request, options)
        except QueryParamError as err:
            raise HTTPException(status_code=err.status_code, detail=problem_detail(err)) from err
        with_params(params)
        return params

    return dependency
