"""
Translation of query parameters into search filter and pagination specs.
"""

from rest_framework.request import Request

from learning_paths.data import FilterSpec, PaginationSpec

FILTER_PARAMS = {
    "category": "category",
    "difficulty": "difficulty",
    "search": "search",
    "aiRelevance": "ai_relevance",
}


def get_filter_spec(request: Request) -> FilterSpec:
    """
    Build the filter spec for a search request.

    Empty parameters are dropped. The user id is only set for authenticated users.
    """
    params = request.query_params
    filters = {field: params.get(param) for param, field in FILTER_PARAMS.items() if params.get(param)}

    user = getattr(request, "user", None)
    if user is not None and user.is_authenticated:
        filters["user_id"] = str(user.pk)

    return FilterSpec(**filters)


def get_pagination_spec(request: Request) -> PaginationSpec:
    """Collect the raw pagination parameters. The search engine normalizes them."""
    params = request.query_params
    return PaginationSpec(
        page=params.get("page"),
        limit=params.get("limit"),
        sort_by=params.get("sortBy"),
        sort_order=params.get("sortOrder"),
    )
