"""
Serializers for LearningPath.
"""

from rest_framework import serializers

from learning_paths.models import LearningPath, LearningPathStep


class LearningPathStepSerializer(serializers.ModelSerializer):
    class Meta:
        model = LearningPathStep
        fields = ["id", "name", "description", "order", "resources"]


class LearningPathSerializer(serializers.ModelSerializer):
    """Serializer for a learning path and its ordered steps."""

    steps = LearningPathStepSerializer(many=True, read_only=True)
    stepCount = serializers.IntegerField(source="step_count", read_only=True)
    createdAt = serializers.DateTimeField(source="created", read_only=True)
    updatedAt = serializers.DateTimeField(source="modified", read_only=True)

    class Meta:
        model = LearningPath
        fields = [
            "id",
            "title",
            "description",
            "category",
            "difficulty",
            "stepCount",
            "steps",
            "createdAt",
            "updatedAt",
        ]


class LearningPathWriteSerializer(serializers.ModelSerializer):
    """
    Serializer validating the editable fields when creating and updating learning paths.

    Required fields, blank handling, lengths and difficulty choices come from the model.
    Surrounding whitespace is trimmed.
    """

    class Meta:
        model = LearningPath
        fields = ["title", "description", "category", "difficulty"]


# pylint: disable=abstract-method
class PaginationSerializer(serializers.Serializer):
    """
    Serializer for the pagination metadata of a search result.
    """

    total = serializers.IntegerField()
    page = serializers.IntegerField()
    limit = serializers.IntegerField()
    totalPages = serializers.IntegerField(source="total_pages")
    hasNext = serializers.BooleanField(source="has_next")
    hasPrev = serializers.BooleanField(source="has_prev")


class PathStatsSerializer(serializers.Serializer):
    total = serializers.IntegerField()
    totalSteps = serializers.IntegerField(source="total_steps")
    byCategory = serializers.DictField(source="by_category", child=serializers.IntegerField())
    byDifficulty = serializers.DictField(source="by_difficulty", child=serializers.IntegerField())
