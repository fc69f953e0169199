"""
Search, lookup and management of learning paths.

`PathSearchEngine` owns the policy (what matches, how results are ordered and
sliced, which input is valid) and delegates the storage work to a
`LearningPathRepository`.
"""

import logging
import math
from collections.abc import Mapping
from contextlib import contextmanager
from dataclasses import replace
from uuid import UUID

from django.db import DatabaseError

from .api.v1.serializers import LearningPathWriteSerializer
from .data import FilterSpec, PageResult, PaginationSpec, PathStats
from .exceptions import InfrastructureError, InvalidData, InvalidId, NotFound
from .models import LearningPath
from .repository import LearningPathRepository
from .settings import SearchDefaults, get_search_defaults

log = logging.getLogger(__name__)

REQUIRED_FIELDS = ("title", "description", "category")
# Serializer error codes meaning a required field was not filled in.
MISSING_CODES = {"required", "blank", "null"}


class PathSearchEngine:
    """
    Entry point for every learning path operation exposed by the API.

    The engine is stateless; a new instance per request is fine.
    """

    def __init__(self, repository: LearningPathRepository | None = None, defaults: SearchDefaults | None = None):
        self.repository = repository or LearningPathRepository()
        self.defaults = defaults or get_search_defaults()

    @contextmanager
    def _storage_errors(self, operation: str):
        """Translate storage failures into `InfrastructureError`, keeping the details in the log."""
        try:
            yield
        except DatabaseError as exc:
            log.exception("[LearningPaths] Storage failure during %s: %s", operation, exc)
            raise InfrastructureError() from exc

    def normalize_pagination(self, pagination: PaginationSpec | None) -> PaginationSpec:
        return (pagination or PaginationSpec()).normalize(self.defaults)

    def search(self, filter_spec: FilterSpec | None = None, pagination: PaginationSpec | None = None) -> PageResult:
        """
        Return one page of the paths matching `filter_spec`.

        Paths are ordered by the requested sort field, then by id, so repeated calls
        against unchanged data return the same pages.
        """
        filter_spec = filter_spec or FilterSpec()
        if filter_spec.ai_relevance and not filter_spec.user_id:
            # Relevance needs a user; without one the request behaves as if it was not asked for.
            filter_spec = replace(filter_spec, ai_relevance=None)

        pagination = self.normalize_pagination(pagination)

        with self._storage_errors("search"):
            with self.repository.snapshot():
                total = self.repository.count(filter_spec)
                paths = self.repository.find(
                    filter_spec,
                    (pagination.sort_by, pagination.sort_order),
                    pagination.offset,
                    pagination.limit,
                )

        total_pages = math.ceil(total / pagination.limit)
        return PageResult(
            paths=paths,
            total=total,
            page=pagination.page,
            limit=pagination.limit,
            total_pages=total_pages,
            has_next=pagination.page < total_pages,
            has_prev=pagination.page > 1,
        )

    def get_path_by_id(self, path_id) -> LearningPath:
        pk = self.validate_id(path_id)
        with self._storage_errors("get_path_by_id"):
            path = self.repository.find_one(pk)
        if path is None:
            raise NotFound()
        return path

    def get_paths_by_category(self, category: str) -> list[LearningPath]:
        """Return every path of `category`, newest first. An empty category matches nothing."""
        if not category:
            return []
        with self._storage_errors("get_paths_by_category"):
            return self.repository.find_by_category(category)

    def get_path_stats(self) -> PathStats:
        with self._storage_errors("get_path_stats"):
            return self.repository.aggregate_stats()

    def create_path(self, data: Mapping) -> LearningPath:
        """
        Create a learning path without steps.

        Raises:
            InvalidData: If title, description or category is missing or empty,
                or if any provided field is invalid.
        """
        fields = self.clean_fields(data, partial=False)
        with self._storage_errors("create_path"):
            path = self.repository.insert(LearningPath(**fields))
        log.info("[LearningPaths] Created path %s in category %s", path.pk, path.category)
        return path

    def update_path(self, path_id, data: Mapping) -> LearningPath:
        """
        Update only the provided fields of a path. Steps are left untouched.

        Raises:
            InvalidId: If `path_id` is malformed.
            InvalidData: If any provided field is invalid.
            NotFound: If the path does not exist.
        """
        pk = self.validate_id(path_id)
        fields = self.clean_fields(data, partial=True)
        with self._storage_errors("update_path"):
            path = self.repository.update(pk, fields)
        if path is None:
            raise NotFound()
        log.info("[LearningPaths] Updated path %s fields %s", pk, sorted(fields))
        return path

    def delete_path(self, path_id) -> None:
        """Delete a path. Its steps are deleted with it."""
        pk = self.validate_id(path_id)
        with self._storage_errors("delete_path"):
            deleted = self.repository.delete(pk)
        if not deleted:
            raise NotFound()
        log.info("[LearningPaths] Deleted path %s", pk)

    @staticmethod
    def validate_id(path_id) -> UUID:
        """
        Return `path_id` as a UUID.

        Raises `InvalidId` unless it is a UUID or its canonical string form (hyphenated,
        any letter case).
        """
        if isinstance(path_id, UUID):
            return path_id
        try:
            pk = UUID(str(path_id))
        except ValueError as exc:
            raise InvalidId() from exc
        if str(pk) != str(path_id).lower():
            raise InvalidId()
        return pk

    @staticmethod
    def clean_fields(data, partial: bool) -> dict:
        """
        Validate the editable fields of a path with `LearningPathWriteSerializer`.

        Unknown keys are ignored. With `partial=False` title, description and category
        must be present and not blank.
        """
        serializer = LearningPathWriteSerializer(data=data, partial=partial)
        if serializer.is_valid():
            return dict(serializer.validated_data)

        errors = serializer.errors
        if not partial and any(
            getattr(detail, "code", None) in MISSING_CODES
            for name in REQUIRED_FIELDS
            for detail in errors.get(name, [])
        ):
            raise InvalidData("Title, description, and category are required")

        raise InvalidData(
            "; ".join(f"{name}: {' '.join(str(detail) for detail in details)}" for name, details in errors.items())
        )
