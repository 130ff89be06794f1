"""Exception types raised by fuzzy_select."""

from typing import Optional


class FuzzySelectError(Exception):
    """Base class for all fuzzy_select errors."""


class ValidationError(FuzzySelectError, ValueError):
    """Raised when an argument is rejected before scoring."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class InvariantViolation(FuzzySelectError, RuntimeError):
    """Raised on an internal programming defect; never recovered from."""


class SettingsError(FuzzySelectError, ValueError):
    """Raised when a settings file exists but is not a usable mapping."""
