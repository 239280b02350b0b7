"""ComplianceStatus dataclass for the outcome of a logbook evaluation."""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class ComplianceStatus:
    """Whether a logbook period can currently substantiate a tax claim."""

    can_be_used_for_tax: bool
    warnings: List[str] = field(default_factory=list)
    expiry_date: Optional[str] = None
    consecutive_weeks: int = 0
    period_weeks: int = 0
    gap_weeks: List[int] = field(default_factory=list)
    is_expired: bool = False

    @property
    def is_valid(self) -> bool:
        return self.can_be_used_for_tax and not self.warnings
