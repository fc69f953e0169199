"""Django settings for the learning_paths app."""

import logging
from dataclasses import dataclass

from django.conf import settings
from django.utils.module_loading import import_string

log = logging.getLogger(__name__)

DEFAULT_RELEVANCE_BACKEND = "learning_paths.relevance.KeywordRelevanceBackend"
DEFAULT_SORT_BY = "createdAt"

# Public sort field names accepted in `sortBy`.
SORTABLE_FIELDS = ("createdAt", "updatedAt", "title", "category", "difficulty", "stepCount")


@dataclass(frozen=True)
class SearchDefaults:
    """
    Defaults and limits applied when normalizing pagination input.

    Values left out of a request, or that cannot be parsed, take these defaults.
    """

    page: int = 1
    limit: int = 10
    max_limit: int = 100
    sort_by: str = DEFAULT_SORT_BY
    sort_order: str = "desc"


def get_search_defaults() -> SearchDefaults:
    """
    Build the search defaults from the Django settings.

    Read on every call so that `override_settings` is honored. A default sort field
    that is not sortable is replaced by "createdAt".
    """
    sort_by = getattr(settings, "LEARNING_PATHS_DEFAULT_SORT_BY", DEFAULT_SORT_BY)
    if sort_by not in SORTABLE_FIELDS:
        log.warning(
            "[LearningPaths] LEARNING_PATHS_DEFAULT_SORT_BY %r is not sortable, using %r", sort_by, DEFAULT_SORT_BY
        )
        sort_by = DEFAULT_SORT_BY

    return SearchDefaults(
        page=getattr(settings, "LEARNING_PATHS_DEFAULT_PAGE", 1),
        limit=getattr(settings, "LEARNING_PATHS_DEFAULT_PAGE_SIZE", 10),
        max_limit=getattr(settings, "LEARNING_PATHS_MAX_PAGE_SIZE", 100),
        sort_by=sort_by,
        sort_order=getattr(settings, "LEARNING_PATHS_DEFAULT_SORT_ORDER", "desc"),
    )


def get_relevance_backend():
    """Instantiate the relevance backend configured in `LEARNING_PATHS_RELEVANCE_BACKEND`."""
    backend_path = getattr(settings, "LEARNING_PATHS_RELEVANCE_BACKEND", DEFAULT_RELEVANCE_BACKEND)
    return import_string(backend_path)()
