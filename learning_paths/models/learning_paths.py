"""
Learning Path core models.
"""

from uuid import uuid4

from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models
from django.utils.translation import gettext_lazy as _
from model_utils.models import TimeStampedModel

LEVEL_CHOICES = [
    ("beginner", _("Beginner")),
    ("intermediate", _("Intermediate")),
    ("advanced", _("Advanced")),
]

TITLE_MAX_LENGTH = 255
CATEGORY_MAX_LENGTH = 100


class LearningPath(TimeStampedModel):
    """
    A Learning Path, containing an ordered sequence of steps.

    `created` and `modified` are exposed as `createdAt` and `updatedAt` by the API.

    .. no_pii:
    """

    id = models.UUIDField(primary_key=True, default=uuid4, editable=False)
    title = models.CharField(max_length=TITLE_MAX_LENGTH)
    description = models.TextField()
    category = models.CharField(
        max_length=CATEGORY_MAX_LENGTH,
        db_index=True,
        help_text=_("Category slug of this Learning Path. Example: 'web-development'."),
    )
    difficulty = models.CharField(max_length=32, blank=True, choices=LEVEL_CHOICES)

    steps: "models.Manager[LearningPathStep]"

    def __str__(self):
        """User-friendly string representation of this model."""
        return self.title

    @property
    def step_count(self) -> int:
        """
        Return the number of steps in this learning path.

        Computed from the step list on every read, so it cannot drift from it.
        Uses the prefetched steps when available.
        """
        return len(self.steps.all())

    def save(self, *args, **kwargs):
        """Check the mandatory text fields before saving."""
        for field in ("title", "description", "category"):
            if not getattr(self, field):
                raise ValidationError(f"Learning Path {field} cannot be empty.")

        super().save(*args, **kwargs)


class LearningPathStep(TimeStampedModel):
    """
    A step in a Learning Path, consisting of a named unit of content and an ordinal position.

    .. no_pii:
    """

    class Meta:
        """Model options."""

        ordering = ("order", "id")
        constraints = [
            models.UniqueConstraint(fields=("learning_path", "order"), name="unique_step_order_per_path"),
        ]

    learning_path = models.ForeignKey(LearningPath, related_name="steps", on_delete=models.CASCADE)
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    order = models.PositiveIntegerField(
        validators=[MinValueValidator(1)],
        verbose_name=_("Sequential order"),
        help_text=_("Ordinal position of this step in the sequence of the Learning Path."),
    )
    resources = models.JSONField(
        default=list,
        blank=True,
        help_text=_("Ordered list of resource URLs for this step."),
    )

    def __str__(self):
        """User-friendly string representation of this model."""
        return "{}: {}".format(self.order, self.name)

    def save(self, *args, **kwargs):
        """Validate the step name and order before saving."""
        if not self.name:
            raise ValidationError("Step name cannot be empty.")
        if not self.order or self.order < 1:
            raise ValidationError("Step order must be a positive integer.")

        super().save(*args, **kwargs)
