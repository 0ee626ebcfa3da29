"""
Calendar Period Helpers

Month and year ranges used by every time-bucketed aggregation.

DESIGN DECISION: Month indices are 0-based and normalized arithmetically,
so index -1 is December of the previous year and index 12 is January of
the next. Iterating backwards across a year boundary needs no special case.

None of these helpers read the clock. The reference date is always an
argument.
"""

import calendar
from datetime import date

from finance_tracker.models.results import DateRange, MonthRef


def month_ref(year: int, month_index: int) -> MonthRef:
    """Build a normalized month reference from a possibly out-of-range index."""
    normalized_year, normalized_index = divmod(year * 12 + month_index, 12)
    return MonthRef(year=normalized_year, month_index=normalized_index)


def month_of(day: date) -> MonthRef:
    """Month containing a date."""
    return MonthRef(year=day.year, month_index=day.month - 1)


def shift_month(month: MonthRef, offset: int) -> MonthRef:
    """Month `offset` months after (negative: before) the given month."""
    return month_ref(month.year, month.month_index + offset)


def days_in_month(month: MonthRef) -> int:
    return calendar.monthrange(month.year, month.month)[1]


def month_bounds(month: MonthRef) -> DateRange:
    """Inclusive first/last day of a month."""
    return DateRange(
        start=date(month.year, month.month, 1),
        end=date(month.year, month.month, days_in_month(month)),
    )


def month_range(year: int, month_index: int) -> DateRange:
    """
    Inclusive [first day, last day] of a month.

    month_range(2024, 1)  -> 2024-02-01 .. 2024-02-29
    month_range(2024, -1) -> 2023-12-01 .. 2023-12-31
    """
    return month_bounds(month_ref(year, month_index))


def year_range(year: int) -> DateRange:
    """January 1st through December 31st."""
    return DateRange(start=date(year, 1, 1), end=date(year, 12, 31))


def last_n_months(n: int, reference_date: date) -> list[MonthRef]:
    """
    The `n` most recent months ending with the reference date's month,
    oldest first. Non-positive `n` gives an empty list.
    """
    current = month_of(reference_date)
    return [shift_month(current, offset) for offset in range(-(n - 1), 1)] if n > 0 else []


def days_elapsed(month: MonthRef, today: date) -> int:
    """
    Days of the month that count toward a daily average.

    Inside the month this is today's day number; for any other month the
    whole month counts.
    """
    if month_of(today) == month:
        return today.day
    return days_in_month(month)
