"""Custom exceptions for Clarity List."""


class ClarityListError(Exception):
    """Base exception for all Clarity List errors."""


class TaskValidationError(ClarityListError, ValueError):
    """Raised when task input is rejected before a task is created or edited."""

    def __init__(self, message: str, field: str = "description"):
        super().__init__(message)
        self.field = field


class TaskNotFoundError(ClarityListError, LookupError):
    """Raised when no task matches an ID or ID suffix."""


class AmbiguousTaskError(TaskNotFoundError):
    """Raised when an ID suffix matches more than one task."""

    def __init__(self, message: str, candidates: list[str] | None = None):
        super().__init__(message)
        self.candidates = candidates or []


class SubmissionInProgressError(ClarityListError):
    """Raised when a task is submitted while another submission is in flight."""


class PersistenceError(ClarityListError):
    """Raised when the persisted task slot cannot be read or written."""


class EstimationUnavailable(ClarityListError):
    """Raised when an estimation request fails (network, timeout, bad response)."""
