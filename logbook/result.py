"""Result dataclass returned by user-facing operations."""

from dataclasses import dataclass, field
from typing import Any, List, Optional

from .errors import LogbookError


@dataclass
class Result:
    """Outcome of a mutating operation: either a value or a list of errors."""

    success: bool
    value: Any = None
    errors: List[str] = field(default_factory=list)
    error_type: Optional[str] = None
    warnings: List[str] = field(default_factory=list)

    @classmethod
    def ok(cls, value: Any = None, warnings: Optional[List[str]] = None) -> "Result":
        return cls(success=True, value=value, warnings=list(warnings or []))

    @classmethod
    def failure(cls, error: LogbookError) -> "Result":
        return cls(
            success=False,
            errors=list(error.errors),
            error_type=type(error).__name__,
        )

    @property
    def trip(self):
        return self.value if self.success else None

    @property
    def vehicle(self):
        return self.value if self.success else None

    def __bool__(self) -> bool:
        return self.success
