class ClassificationError(Exception):
    """Raised when a document cannot be classified."""


class ClassificationNetworkError(ClassificationError):
    """Raised when the AI provider call fails due to network/infrastructure issues."""
