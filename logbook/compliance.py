"""Compliance evaluation of a logbook period against the 12-week, 5-year rule."""

import logging
from datetime import date
from typing import List, Optional, Sequence

from .calculations import week_bounds
from .compliance_status import ComplianceStatus
from .logbook_period import LogbookPeriod
from .weekly_summary import WeeklySummary

logger = logging.getLogger(__name__)


def find_gap_weeks(
    period: LogbookPeriod, summaries: Sequence[WeeklySummary]
) -> List[int]:
    """Week indices within the required window that have no trips."""
    populated = {s.week_index for s in summaries if s.is_complete}
    return [i for i in range(period.target_weeks) if i not in populated]


def count_consecutive_weeks(
    period: LogbookPeriod, summaries: Sequence[WeeklySummary]
) -> int:
    """Number of populated weeks counted from week 0 up to the first gap."""
    populated = {s.week_index for s in summaries if s.is_complete}
    count = 0
    while count in populated:
        count += 1
    return count


def compute_compliance(
    period: Optional[LogbookPeriod],
    summaries: Sequence[WeeklySummary],
    today: Optional[date] = None,
) -> ComplianceStatus:
    """
    Decide whether a logbook period currently substantiates a tax claim.

    Logic:
    - Every week index from 0 to 11 with no summary is a gap and gets a warning
    - Usable only with at least 12 summaries and no gaps in weeks 0-11
    - Expiry is always start date + 5 years; once today is past it the
      logbook is void even if it was complete

    Recompute on every read: the result depends on today.
    """
    if today is None:
        today = date.today()

    if period is None:
        return ComplianceStatus(
            can_be_used_for_tax=False,
            warnings=["No logbook period has been started"],
        )

    warnings = []
    gaps = find_gap_weeks(period, summaries)
    for index in gaps:
        start, end = week_bounds(period.start, index)
        warnings.append(
            f"Week {index + 1} ({start.isoformat()} to {end.isoformat()}) "
            f"has no trips recorded"
        )

    populated_weeks = sum(1 for s in summaries if s.is_complete)
    can_use = populated_weeks >= period.target_weeks and not gaps

    is_expired = today > period.expiry
    if is_expired:
        warnings.append(
            f"Logbook expired on {period.expiry_date}; "
            f"a new {period.target_weeks}-week logbook is required"
        )
        can_use = False

    status = ComplianceStatus(
        can_be_used_for_tax=can_use,
        warnings=warnings,
        expiry_date=period.expiry_date,
        consecutive_weeks=count_consecutive_weeks(period, summaries),
        period_weeks=populated_weeks,
        gap_weeks=gaps,
        is_expired=is_expired,
    )
    logger.debug(
        "Compliance for period %s as of %s: usable=%s, %d gap(s)",
        period.id,
        today.isoformat(),
        can_use,
        len(gaps),
    )
    return status
