"""Domain errors raised by the screening core and its storage collaborators.

Endpoints translate these into HTTP responses; the core itself never retries
or swallows them.
"""

from typing import Any, Optional


class ScreeningError(Exception):
    """Base class for all domain errors."""


class ValidationError(ScreeningError):
    """A request is missing required fields or carries unusable values."""


class NotFoundError(ScreeningError):
    def __init__(self, message: str, *, key: Optional[str] = None):
        super().__init__(message)
        self.key = key


class DuplicateStudentError(ScreeningError):
    def __init__(self, message: str, *, existing: Any = None):
        super().__init__(message)
        self.existing = existing


class StorageError(ScreeningError):
    """Opaque wrapper around a persistence failure; the original error is chained."""


class RecordConflictError(StorageError):
    """A screening record for the student was created concurrently."""
