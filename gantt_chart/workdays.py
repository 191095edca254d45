"""Working-day calendar arithmetic."""

from datetime import date, timedelta

from gantt_chart.errors import InvalidDate, InvalidDuration

# Days off (0: Monday ... 6: Sunday)
WEEKEND_DAYS = (5, 6)
WORKDAYS_PER_WEEK = 5


def is_weekend(day: date) -> bool:
    """Return True for Saturdays and Sundays."""
    return day.weekday() in WEEKEND_DAYS


def _shift(day: date, days: int) -> date:
    try:
        return day + timedelta(days=days)
    except OverflowError:
        raise InvalidDate(f"Date out of range: {day} shifted by {days} day(s)") from None


def next_weekday(day: date) -> date:
    """Return ``day`` if it is a weekday, else the following Monday."""
    while is_weekend(day):
        day = _shift(day, 1)
    return day


def add_working_days(day: date, n: int) -> date:
    """Advance ``day`` by ``n`` working days, skipping weekends entirely.

    The result is the first working day after a task of ``n`` days starting
    on ``day``: Monday plus 3 is Thursday, Thursday plus 5 is the following
    Thursday. ``n == 0`` returns ``day`` unchanged.

    Raises:
        InvalidDuration: If n is negative
        InvalidDate: If the result is outside the representable date range
    """
    if n < 0:
        raise InvalidDuration(f"Duration must not be negative, got {n}")
    if n == 0:
        return day

    # Whole weeks only keep their weekday when starting from a weekday
    if not is_weekend(day):
        full_weeks, n = divmod(n, WORKDAYS_PER_WEEK)
        day = _shift(day, full_weeks * 7)

    while n > 0:
        day = _shift(day, 1)
        if not is_weekend(day):
            n -= 1
    return day


def count_weekdays(start: date, end: date) -> int:
    """Count weekdays in the half-open range [start, end)."""
    if end <= start:
        return 0

    total_days = (end - start).days
    full_weeks, remainder = divmod(total_days, 7)

    weekdays = full_weeks * WORKDAYS_PER_WEEK
    start_weekday = start.weekday()
    for i in range(remainder):
        if (start_weekday + i) % 7 not in WEEKEND_DAYS:
            weekdays += 1
    return weekdays


def last_working_day(start: date, end: date) -> date:
    """Final working day of a span whose ``end`` is exclusive.

    Zero-length spans (milestones) finish on their start day.
    """
    if end <= start:
        return start
    day = _shift(end, -1)
    while is_weekend(day) and day > start:
        day = _shift(day, -1)
    return day
