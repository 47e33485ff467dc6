"""Calendar month arithmetic"""

import calendar
from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True, order=True)
class CalendarMonth:
    """A (year, month) pair used as the simulation clock"""

    year: int
    month: int

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            raise ValueError(f"month must be in 1..12, got {self.month}")

    @classmethod
    def from_date(cls, value: date) -> "CalendarMonth":
        return cls(value.year, value.month)

    @property
    def first_day(self) -> date:
        return date(self.year, self.month, 1)

    def plus(self, months: int) -> "CalendarMonth":
        """Return the calendar month `months` after this one (negative goes back)"""
        index = self.year * 12 + (self.month - 1) + months
        return CalendarMonth(index // 12, index % 12 + 1)

    def months_until(self, other: "CalendarMonth") -> int:
        return (other.year - self.year) * 12 + (other.month - self.month)

    def day(self, day_of_month: int) -> date:
        """Date in this month, clamping the day to the month length (31 -> 30/29/28)"""
        last = calendar.monthrange(self.year, self.month)[1]
        return date(self.year, self.month, min(day_of_month, last))

    def isoformat(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"

    def __str__(self) -> str:
        return self.isoformat()


def add_months(from_date: date, months: int) -> date:
    """Add calendar months to a date, keeping the day where the target month allows"""
    target = CalendarMonth.from_date(from_date).plus(months)
    return target.day(from_date.day)
