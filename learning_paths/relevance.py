"""
Relevance backends used to narrow search results to paths relevant to a user.

The backend is chosen with the `LEARNING_PATHS_RELEVANCE_BACKEND` setting.
"""

import logging

from django.db.models import Q, QuerySet

log = logging.getLogger(__name__)


class BaseRelevanceBackend:
    """Interface for relevance backends."""

    def filter_queryset(self, queryset: QuerySet, tag: str, user_id: str) -> QuerySet:
        """
        Return the subset of `queryset` relevant to `user_id` for the given relevance `tag`.

        Implementations must not raise when the user is unknown.
        """
        raise NotImplementedError


class KeywordRelevanceBackend(BaseRelevanceBackend):
    """
    Treat the relevance tag as a topic of interest.

    A path is relevant when its category equals the tag or its title or description
    mentions it. The user is not used for personalization here.
    """

    def filter_queryset(self, queryset: QuerySet, tag: str, user_id: str) -> QuerySet:
        log.debug("[LearningPaths] Applying keyword relevance %r for user %s", tag, user_id)
        return queryset.filter(Q(category=tag) | Q(title__icontains=tag) | Q(description__icontains=tag))
