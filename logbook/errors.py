"""Error types raised inside the engine and reported back as results."""

from typing import Iterable, List, Union


class LogbookError(Exception):
    """Base class for all logbook errors."""

    def __init__(self, errors: Union[str, Iterable[str]]):
        if isinstance(errors, str):
            errors = [errors]
        self.errors: List[str] = list(errors)
        super().__init__("; ".join(self.errors))


class ValidationError(LogbookError):
    """Malformed input to a create or update call."""


class SessionConflictError(LogbookError):
    """A tracking session is already running."""


class NotFoundError(LogbookError):
    """Referenced record does not exist."""
