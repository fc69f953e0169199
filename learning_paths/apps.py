"""
learning_paths Django application initialization.
"""

from django.apps import AppConfig


class LearningPathsConfig(AppConfig):
    """
    Configuration for the learning_paths Django application.
    """

    name = "learning_paths"
    verbose_name = "Learning Paths"
    default_auto_field = "django.db.models.AutoField"
