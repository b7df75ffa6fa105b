"""Collection-period arithmetic.

Periods are chained: each one starts where the previous one ended, and its
end is ``add_one_period(start)``. A period is the half-open interval
``[start, end)`` and is complete once its end is on or before ``as_of``.

Month steps overflow like a calendar that keeps the day number: Jan 31 plus
one month is Mar 3 in a common year (Feb has 28 days, so the 3 surplus days
roll into March).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterator

from dateutil.relativedelta import relativedelta

from loan_tracker.models.enums import DurationUnit


def add_months(day: date, n: int) -> date:
    """Add ``n`` calendar months, rolling a too-large day into the next month.

    ``relativedelta`` clamps Jan 31 + 1 month to Feb 28; the days the clamp
    removed are added back, giving Mar 3.
    """
    clamped = day + relativedelta(months=n)
    return clamped + timedelta(days=day.day - clamped.day)


@dataclass(frozen=True)
class Period:
    """One complete collection period."""

    index: int  # 0-based
    start: date
    end: date  # exclusive

    def contains(self, day: date) -> bool:
        return self.start <= day < self.end


class PeriodWalker:
    """Walk collection periods of a fixed unit.

    Parameters
    ----------
    unit : DurationUnit
        Period length: one day, one week or one calendar month.
    """

    __slots__ = ("unit",)

    def __init__(self, unit: DurationUnit = DurationUnit.MONTHS) -> None:
        self.unit = unit

    def _advance(self, day: date, n: int) -> date:
        if self.unit == DurationUnit.DAYS:
            return day + timedelta(days=n)
        if self.unit == DurationUnit.WEEKS:
            return day + timedelta(weeks=n)
        return add_months(day, n)

    def add_one_period(self, day: date) -> date:
        """Advance ``day`` by one period."""
        return self._advance(day, 1)

    def boundary(self, start: date, n: int) -> date:
        """Return ``start`` moved ``n`` periods in a single step.

        Used for term ends (final due dates), which are measured from the
        start date directly rather than period by period.
        """
        return self._advance(start, n)

    def iter_periods(self, start: date | None, as_of: date) -> Iterator[Period]:
        """Yield every complete period between ``start`` and ``as_of``."""
        if start is None:
            return
        index = 0
        period_start = start
        period_end = self.add_one_period(start)
        while period_end <= as_of:
            yield Period(index=index, start=period_start, end=period_end)
            index += 1
            period_start = period_end
            period_end = self.add_one_period(period_end)

    def complete_periods(self, start: date | None, as_of: date) -> int:
        """Count complete periods between ``start`` and ``as_of``."""
        return sum(1 for _ in self.iter_periods(start, as_of))

    def next_due_date(self, start: date | None, as_of: date) -> date | None:
        """Apply ``add_one_period`` from ``start`` until past ``as_of``.

        ``None`` when the start date is unknown.
        """
        if start is None:
            return None
        due = self.add_one_period(start)
        while due <= as_of:
            due = self.add_one_period(due)
        return due
