"""Date manipulation utilities"""

import calendar

from household_ledger.domain.exceptions import ValidationError


def days_in_month(month: int, year: int) -> int:
    """Number of calendar days in month/year (28-31)"""
    if not 1 <= month <= 12:
        raise ValidationError(f"Month must be between 1 and 12, got {month}")
    return calendar.monthrange(year, month)[1]


def validate_calendar_day(day: int, month: int, year: int) -> None:
    """Raise ValidationError unless day/month/year names a real calendar date"""
    for label, value in (("Day", day), ("Month", month), ("Year", year)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValidationError(f"{label} must be an integer, got {value!r}")
    if year < 1:
        raise ValidationError(f"Year must be positive, got {year}")
    last_day = days_in_month(month, year)
    if not 1 <= day <= last_day:
        raise ValidationError(f"Day {day} does not exist in {month}/{year}")
