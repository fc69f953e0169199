"""
Storage access for learning paths, backed by the Django ORM.
"""

import logging
from uuid import UUID

from django.db import transaction
from django.db.models import Count, Q, QuerySet

from .data import SORT_ASC, FilterSpec, PathStats
from .models import LearningPath, LearningPathStep
from .settings import get_relevance_backend

log = logging.getLogger(__name__)

# Public sort field name -> queryset ordering expression.
SORT_COLUMNS = {
    "createdAt": "created",
    "updatedAt": "modified",
    "title": "title",
    "category": "category",
    "difficulty": "difficulty",
    "stepCount": "num_steps",
}


class LearningPathRepository:
    """
    Look up, count and mutate learning paths.

    The repository knows how to express a `FilterSpec` as a query; deciding which
    filter and pagination to use is the job of the search engine.
    """

    def __init__(self, relevance_backend=None):
        self.relevance_backend = relevance_backend or get_relevance_backend()

    def snapshot(self):
        """Return a context in which consecutive reads see consistent data."""
        return transaction.atomic()

    def get_queryset(self) -> QuerySet:
        """Return all learning paths with their steps prefetched."""
        return LearningPath.objects.prefetch_related("steps")

    def apply_filter(self, queryset: QuerySet, filter_spec: FilterSpec) -> QuerySet:
        """Narrow `queryset` to the paths matching every non-empty field of `filter_spec`."""
        if filter_spec.category:
            queryset = queryset.filter(category=filter_spec.category)
        if filter_spec.difficulty:
            queryset = queryset.filter(difficulty=filter_spec.difficulty)
        if filter_spec.search:
            queryset = queryset.filter(
                Q(title__icontains=filter_spec.search) | Q(description__icontains=filter_spec.search)
            )
        if filter_spec.ai_relevance and filter_spec.user_id:
            queryset = self.relevance_backend.filter_queryset(
                queryset, filter_spec.ai_relevance, filter_spec.user_id
            )
        return queryset

    def count(self, filter_spec: FilterSpec) -> int:
        return self.apply_filter(LearningPath.objects.all(), filter_spec).count()

    def find(self, filter_spec: FilterSpec, sort: tuple[str, str], skip: int, limit: int) -> list[LearningPath]:
        """
        Return up to `limit` matching paths after skipping `skip` of them.

        `sort` is a `(field, order)` pair of public names. Ties are broken by id so
        that the ordering is total.
        """
        sort_by, sort_order = sort
        column = SORT_COLUMNS[sort_by]

        queryset = self.apply_filter(self.get_queryset(), filter_spec)
        if column == "num_steps":
            queryset = queryset.annotate(num_steps=Count("steps"))

        ordering = column if sort_order == SORT_ASC else f"-{column}"
        queryset = queryset.order_by(ordering, "id")
        return list(queryset[skip : skip + limit])

    def find_one(self, path_id: UUID) -> LearningPath | None:
        return self.get_queryset().filter(pk=path_id).first()

    def find_by_category(self, category: str) -> list[LearningPath]:
        return list(self.get_queryset().filter(category=category).order_by("-created", "id"))

    def aggregate_stats(self) -> PathStats:
        """Count paths overall, per category and per difficulty, and count all steps."""
        with self.snapshot():
            by_category = (
                LearningPath.objects.values("category").annotate(count=Count("id")).order_by("category")
            )
            by_difficulty = (
                LearningPath.objects.exclude(difficulty="")
                .values("difficulty")
                .annotate(count=Count("id"))
                .order_by("difficulty")
            )
            return PathStats(
                total=LearningPath.objects.count(),
                total_steps=LearningPathStep.objects.count(),
                by_category={row["category"]: row["count"] for row in by_category},
                by_difficulty={row["difficulty"]: row["count"] for row in by_difficulty},
            )

    def insert(self, path: LearningPath) -> LearningPath:
        with transaction.atomic():
            path.save(force_insert=True)
        return path

    def update(self, path_id: UUID, fields: dict) -> LearningPath | None:
        """
        Apply `fields` to a path in a single transaction.

        Returns the refreshed path, or None if it does not exist.
        """
        with transaction.atomic():
            path = LearningPath.objects.select_for_update().filter(pk=path_id).first()
            if path is None:
                return None
            for name, value in fields.items():
                setattr(path, name, value)
            path.save(update_fields=[*fields, "modified"])
        return self.find_one(path_id)

    def delete(self, path_id: UUID) -> bool:
        """Delete a path together with its steps. Returns False if the path does not exist."""
        with transaction.atomic():
            deleted, per_model = LearningPath.objects.filter(pk=path_id).delete()
        if deleted:
            log.debug(
                "[LearningPaths] Deleted path %s with %s steps",
                path_id,
                per_model.get(LearningPathStep._meta.label, 0),
            )
        return deleted > 0
