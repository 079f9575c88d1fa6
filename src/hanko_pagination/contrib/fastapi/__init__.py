"""FastAPI integration for hanko-pagination."""

from .dependencies import pagination_params, problem_detail

__all__: list[str] = [
    "pagination_params",
    "problem_detail",
]
