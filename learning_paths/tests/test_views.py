# pylint: disable=missing-module-docstring,missing-class-docstring,redefined-outer-name,unused-argument
import uuid
from unittest.mock import patch

import pytest
from django.db import DatabaseError
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from learning_paths.models import LearningPath, LearningPathStep
from learning_paths.repository import LearningPathRepository

from .factories import LearningPathFactory


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def authenticated_client(api_client, user):
    api_client.force_authenticate(user=user)
    return api_client


@pytest.fixture
def web_paths():
    return LearningPathFactory.create_batch(13, category="web-development")


@pytest.mark.django_db
class TestLearningPathSearch:

    def test_list_envelope(self, api_client, learning_path_with_steps):
        """Test that the list endpoint returns paths and pagination metadata."""
        response = api_client.get(reverse("learning-path-list"))

        assert response.status_code == status.HTTP_200_OK
        assert response.data["pagination"] == {
            "total": 1,
            "page": 1,
            "limit": 10,
            "totalPages": 1,
            "hasNext": False,
            "hasPrev": False,
        }
        item = response.data["paths"][0]
        assert item["id"] == str(learning_path_with_steps.id)
        assert item["stepCount"] == 3
        assert [step["order"] for step in item["steps"]] == [1, 2, 3]
        assert set(item) == {
            "id",
            "title",
            "description",
            "category",
            "difficulty",
            "stepCount",
            "steps",
            "createdAt",
            "updatedAt",
        }
        assert set(item["steps"][0]) == {"id", "name", "description", "order", "resources"}

    def test_category_page(self, api_client, web_paths):
        LearningPathFactory.create_batch(2, category="mobile-development")

        response = api_client.get(reverse("learning-path-list"), {"category": "web-development", "page": 2, "limit": 5})

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data["paths"]) == 5
        assert response.data["pagination"] == {
            "total": 13,
            "page": 2,
            "limit": 5,
            "totalPages": 3,
            "hasNext": True,
            "hasPrev": True,
        }

    def test_out_of_range_pagination_is_clamped(self, api_client, learning_path):
        response = api_client.get(reverse("learning-path-list"), {"page": "-5", "limit": "500"})

        assert response.status_code == status.HTTP_200_OK
        assert response.data["pagination"]["page"] == 1
        assert response.data["pagination"]["limit"] == 100

    def test_non_numeric_pagination(self, api_client, learning_path):
        response = api_client.get(reverse("learning-path-list"), {"page": "first", "limit": "many"})

        assert response.status_code == status.HTTP_200_OK
        assert response.data["pagination"]["page"] == 1
        assert response.data["pagination"]["limit"] == 10

    def test_search_and_sort(self, api_client):
        LearningPathFactory(title="Node.js Backend", description="Express")
        LearningPathFactory(title="Django", description="A Python backend framework")
        LearningPathFactory(title="React", description="Frontend")

        response = api_client.get(
            reverse("learning-path-list"), {"search": "backend", "sortBy": "title", "sortOrder": "asc"}
        )

        assert [item["title"] for item in response.data["paths"]] == ["Django", "Node.js Backend"]

    def test_uppercase_sort_order_is_descending(self, api_client):
        for title in ("Alpha", "Bravo"):
            LearningPathFactory(title=title)

        response = api_client.get(reverse("learning-path-list"), {"sortBy": "title", "sortOrder": "ASC"})

        assert [item["title"] for item in response.data["paths"]] == ["Bravo", "Alpha"]

    def test_ai_relevance_ignored_for_anonymous_user(self, api_client):
        LearningPathFactory(category="python", title="Python", description="Basics")
        LearningPathFactory(category="web-development", title="React", description="Components")

        response = api_client.get(reverse("learning-path-list"), {"aiRelevance": "python"})

        assert response.data["pagination"]["total"] == 2

    def test_ai_relevance_for_authenticated_user(self, authenticated_client):
        LearningPathFactory(category="python", title="Python", description="Basics")
        LearningPathFactory(category="web-development", title="React", description="Components")

        response = authenticated_client.get(reverse("learning-path-list"), {"aiRelevance": "python"})

        assert response.data["pagination"]["total"] == 1
        assert response.data["paths"][0]["category"] == "python"

    def test_storage_failure(self, api_client):
        with patch.object(LearningPathRepository, "count", side_effect=DatabaseError("connection refused")):
            response = api_client.get(reverse("learning-path-list"))

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.data["detail"] == "Failed to search paths"


@pytest.mark.django_db
class TestLearningPathDetail:

    def test_retrieve(self, api_client, learning_path_with_steps):
        url = reverse("learning-path-detail", args=[learning_path_with_steps.id])
        response = api_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data["path"]["title"] == learning_path_with_steps.title
        assert response.data["path"]["stepCount"] == 3

    def test_invalid_id_returns_400(self, api_client):
        response = api_client.get(reverse("learning-path-detail", args=["not-a-valid-id"]))

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["detail"] == "Invalid path ID"

    def test_missing_path_returns_404(self, api_client):
        response = api_client.get(reverse("learning-path-detail", args=[uuid.uuid4()]))

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data["detail"] == "Path not found"


@pytest.mark.django_db
class TestLearningPathWrite:

    def test_create(self, authenticated_client):
        data = {"title": "React Fundamentals", "description": "Master React.js", "category": "web-development"}
        response = authenticated_client.post(reverse("learning-path-list"), data, format="json")

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data["path"]["title"] == "React Fundamentals"
        assert response.data["path"]["stepCount"] == 0
        assert response.data["path"]["steps"] == []
        assert LearningPath.objects.filter(pk=response.data["path"]["id"]).exists()

    def test_create_requires_authentication(self, api_client):
        data = {"title": "React Fundamentals", "description": "Master React.js", "category": "web-development"}
        response = api_client.post(reverse("learning-path-list"), data, format="json")

        assert response.status_code in (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN)
        assert not LearningPath.objects.exists()

    def test_create_invalid_data(self, authenticated_client):
        data = {"title": "", "description": "x", "category": "y"}
        response = authenticated_client.post(reverse("learning-path-list"), data, format="json")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["detail"] == "Title, description, and category are required"

    @pytest.mark.parametrize(
        "data",
        [
            {"title": "a\x00b", "description": "x", "category": "y"},
            {"title": "x", "description": "x", "category": "y", "difficulty": 0},
        ],
    )
    def test_create_rejected_field_values(self, authenticated_client, data):
        response = authenticated_client.post(reverse("learning-path-list"), data, format="json")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert not LearningPath.objects.exists()

    def test_partial_update(self, authenticated_client, learning_path):
        url = reverse("learning-path-detail", args=[learning_path.id])
        response = authenticated_client.patch(url, {"difficulty": "advanced"}, format="json")

        assert response.status_code == status.HTTP_200_OK
        assert response.data["path"]["difficulty"] == "advanced"
        assert response.data["path"]["title"] == learning_path.title

    def test_update(self, authenticated_client, learning_path):
        url = reverse("learning-path-detail", args=[learning_path.id])
        response = authenticated_client.put(url, {"title": "Renamed"}, format="json")

        assert response.status_code == status.HTTP_200_OK
        learning_path.refresh_from_db()
        assert learning_path.title == "Renamed"

    def test_update_invalid_data(self, authenticated_client, learning_path):
        url = reverse("learning-path-detail", args=[learning_path.id])
        response = authenticated_client.patch(url, {"category": ""}, format="json")

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_update_missing_path(self, authenticated_client):
        url = reverse("learning-path-detail", args=[uuid.uuid4()])
        response = authenticated_client.patch(url, {"title": "x"}, format="json")

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_delete(self, authenticated_client, learning_path_with_steps):
        url = reverse("learning-path-detail", args=[learning_path_with_steps.id])
        response = authenticated_client.delete(url)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not LearningPathStep.objects.exists()
        assert authenticated_client.get(url).status_code == status.HTTP_404_NOT_FOUND

    def test_delete_invalid_id(self, authenticated_client):
        response = authenticated_client.delete(reverse("learning-path-detail", args=["not-a-valid-id"]))

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_delete_requires_authentication(self, api_client, learning_path):
        response = api_client.delete(reverse("learning-path-detail", args=[learning_path.id]))

        assert response.status_code in (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN)
        assert LearningPath.objects.filter(pk=learning_path.pk).exists()


@pytest.mark.django_db
class TestLearningPathCollections:

    def test_by_category(self, api_client, web_paths):
        LearningPathFactory(category="mobile-development")

        response = api_client.get(reverse("learning-path-by-category", args=["web-development"]))

        assert response.status_code == status.HTTP_200_OK
        assert response.data["total"] == 13
        assert len(response.data["paths"]) == 13

    def test_by_unknown_category(self, api_client, learning_path):
        response = api_client.get(reverse("learning-path-by-category", args=["unknown"]))

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {"paths": [], "total": 0}

    def test_stats(self, api_client):
        LearningPathFactory.create_batch(2, category="web-development", difficulty="beginner")
        LearningPathFactory(category="mobile-development", difficulty="advanced")

        response = api_client.get(reverse("learning-path-stats"))

        assert response.status_code == status.HTTP_200_OK
        assert response.data["stats"] == {
            "total": 3,
            "totalSteps": 0,
            "byCategory": {"mobile-development": 1, "web-development": 2},
            "byDifficulty": {"advanced": 1, "beginner": 2},
        }

    def test_stats_storage_failure(self, api_client):
        with patch.object(LearningPathRepository, "aggregate_stats", side_effect=DatabaseError("boom")):
            response = api_client.get(reverse("learning-path-stats"))

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.data["detail"] == "Failed to get path statistics"
