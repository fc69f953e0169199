"""
Views for LearningPath search and management.
"""

import logging

from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import APIException
from rest_framework.exceptions import NotFound as NotFoundError
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from learning_paths.exceptions import InfrastructureError, InvalidData, InvalidId, NotFound
from learning_paths.search import PathSearchEngine

from .filters import get_filter_spec, get_pagination_spec
from .serializers import LearningPathSerializer, PaginationSerializer, PathStatsSerializer

logger = logging.getLogger(__name__)


class BadRequest(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Bad request."
    default_code = "bad_request"


# Generic message returned for storage failures, per action.
FAILURE_MESSAGES = {
    "list": "Failed to search paths",
    "create": "Failed to create path",
    "retrieve": "Failed to fetch path",
    "update": "Failed to update path",
    "partial_update": "Failed to update path",
    "destroy": "Failed to delete path",
    "by_category": "Failed to fetch paths by category",
    "stats": "Failed to get path statistics",
}


class LearningPathViewSet(viewsets.ViewSet):
    """
    ViewSet for searching and managing learning paths.

    - List, retrieve, stats and category listing: available to everyone
    - Create, update, delete: available to authenticated users only
    """

    lookup_field = "id"
    lookup_value_regex = "[^/]+"

    def get_permissions(self):
        """
        Set permissions based on action.
        - Read operations: AllowAny
        - Write operations (create, update, partial_update, destroy): IsAuthenticated
        """
        if self.action in ["create", "update", "partial_update", "destroy"]:
            return [IsAuthenticated()]
        return [AllowAny()]

    @property
    def engine(self) -> PathSearchEngine:
        if not hasattr(self, "_engine"):
            self._engine = PathSearchEngine()
        return self._engine

    def handle_exception(self, exc):
        """Map learning path service errors to HTTP errors."""
        if isinstance(exc, (InvalidId, InvalidData)):
            exc = BadRequest(exc.message)
        elif isinstance(exc, NotFound):
            exc = NotFoundError(exc.message)
        elif isinstance(exc, InfrastructureError):
            logger.error("[LearningPaths] Action %s failed: %s", self.action, exc.message)
            exc = APIException(FAILURE_MESSAGES.get(self.action, APIException.default_detail))
        return super().handle_exception(exc)

    def list(self, request):
        """
        Search learning paths.

        Query parameters: category, difficulty, search, aiRelevance, page, limit, sortBy, sortOrder.
        """
        result = self.engine.search(get_filter_spec(request), get_pagination_spec(request))
        return Response(
            {
                "paths": LearningPathSerializer(result.paths, many=True).data,
                "pagination": PaginationSerializer(result).data,
            }
        )

    def create(self, request):
        path = self.engine.create_path(request.data)
        return Response({"path": LearningPathSerializer(path).data}, status=status.HTTP_201_CREATED)

    def retrieve(self, request, id=None):  # pylint: disable=redefined-builtin
        path = self.engine.get_path_by_id(id)
        return Response({"path": LearningPathSerializer(path).data})

    def update(self, request, id=None):  # pylint: disable=redefined-builtin
        path = self.engine.update_path(id, request.data)
        return Response({"path": LearningPathSerializer(path).data})

    def partial_update(self, request, id=None):  # pylint: disable=redefined-builtin
        return self.update(request, id=id)

    def destroy(self, request, id=None):  # pylint: disable=redefined-builtin
        self.engine.delete_path(id)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=False, methods=["get"], url_path="stats")
    def stats(self, request):
        stats = self.engine.get_path_stats()
        return Response({"stats": PathStatsSerializer(stats).data})

    @action(detail=False, methods=["get"], url_path=r"category/(?P<category>[^/]+)", url_name="by-category")
    def by_category(self, request, category=None):
        paths = self.engine.get_paths_by_category(category)
        return Response({"paths": LearningPathSerializer(paths, many=True).data, "total": len(paths)})
