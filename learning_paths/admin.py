"""
Django Admin for learning_paths.
"""

from django.contrib import admin

from .models import LearningPath, LearningPathStep


class LearningPathStepInline(admin.TabularInline):
    """Inline Admin for Learning Path step."""

    model = LearningPathStep
    fields = ("order", "name", "description", "resources")
    ordering = ("order",)
    extra = 0


@admin.register(LearningPath)
class LearningPathAdmin(admin.ModelAdmin):
    """Admin for Learning Path."""

    model = LearningPath

    search_fields = [
        "title",
        "description",
    ]
    list_display = (
        "title",
        "category",
        "difficulty",
        "step_count",
        "created",
    )
    list_filter = ("category", "difficulty")
    readonly_fields = ("id", "created", "modified")

    inlines = [
        LearningPathStepInline,
    ]

    def get_queryset(self, request):
        """Prefetch the steps used to compute the step count column."""
        return super().get_queryset(request).prefetch_related("steps")

    @admin.display(description="Steps")
    def step_count(self, obj: LearningPath) -> int:
        return obj.step_count
