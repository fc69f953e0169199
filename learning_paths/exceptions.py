"""
Errors raised by the learning path service layer.
"""


class LearningPathError(Exception):
    """Base class for all learning path service errors."""

    default_message = "Learning path error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidData(LearningPathError):
    """Required input fields are missing or violate the Learning Path invariants."""

    default_message = "Invalid path data"


class InvalidId(LearningPathError):
    """The identifier is not a well-formed path identifier."""

    default_message = "Invalid path ID"


class NotFound(LearningPathError):
    """No learning path exists for a well-formed identifier."""

    default_message = "Path not found"


class InfrastructureError(LearningPathError):
    """The storage layer failed. The original error is chained, never exposed."""

    default_message = "Storage unavailable"
