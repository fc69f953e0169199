"""Pytest fixtures."""

# pylint: disable=redefined-outer-name

import pytest

from learning_paths.search import PathSearchEngine
from learning_paths.tests.factories import (
    LearningPathFactory,
    LearningPathStepFactory,
    UserFactory,
)


@pytest.fixture
def user():
    """Create a single user for testing."""
    return UserFactory()


@pytest.fixture
def learning_path():
    """Create a single learning path for testing."""
    return LearningPathFactory()


@pytest.fixture
def learning_path_with_steps(learning_path):
    """Create a learning path with three ordered steps."""
    for order in (1, 2, 3):
        LearningPathStepFactory(learning_path=learning_path, order=order)
    return learning_path


@pytest.fixture
def engine():
    """Create a search engine using the configured defaults."""
    return PathSearchEngine()
