"""
Adaptive engine error taxonomy.

The engine itself only raises ValidationError. NotFoundError and SnapshotError
belong to the lookup layer in front of it (snapshot loading, the CLI).
"""


class AdaptiveEngineError(Exception):
    """Base class for adaptive engine errors."""
    pass


class ValidationError(AdaptiveEngineError):
    """Raised when a required input or profile field is missing."""
    pass


class NotFoundError(AdaptiveEngineError):
    """Raised when a learner or course cannot be resolved."""
    pass


class SnapshotError(AdaptiveEngineError):
    """Raised when a snapshot file cannot be read or does not match the schema."""
    pass
