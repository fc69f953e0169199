"""
Models package for learning_paths.
"""

from .learning_paths import (
    CATEGORY_MAX_LENGTH,
    LEVEL_CHOICES,
    TITLE_MAX_LENGTH,
    LearningPath,
    LearningPathStep,
)

__all__ = [
    "CATEGORY_MAX_LENGTH",
    "LEVEL_CHOICES",
    "TITLE_MAX_LENGTH",
    "LearningPath",
    "LearningPathStep",
]
