from calendar import monthrange
from datetime import date
from typing import Tuple


def days_in_month(year: int, month: int) -> int:
    return monthrange(year, month)[1]


def clamp_day_to_month(day: int, year: int, month: int) -> int:
    """
    Reduce a configured day-of-month to the last real day of the given month.
    day=31 gives 30 in April, 29 in February 2024 and 28 in February 2023.
    """
    return min(day, days_in_month(year, month))


def add_months(year: int, month: int, months: int) -> Tuple[int, int]:
    index = year * 12 + (month - 1) + months
    return index // 12, index % 12 + 1


def first_occurrence_after(day_of_month: int, reference: date) -> date:
    """
    First due date for a bill paid on ``day_of_month``, strictly after ``reference``.
    A candidate falling on the reference date itself rolls to the next month.
    """
    candidate = date(
        reference.year,
        reference.month,
        clamp_day_to_month(day_of_month, reference.year, reference.month),
    )
    if candidate <= reference:
        year, month = add_months(reference.year, reference.month, 1)
        candidate = date(year, month, clamp_day_to_month(day_of_month, year, month))
    return candidate


def advance_one_month(current_due: date, day_of_month: int) -> date:
    # Unconditional: the result may still be in the past.
    year, month = add_months(current_due.year, current_due.month, 1)
    return date(year, month, clamp_day_to_month(day_of_month, year, month))


def same_month_due_date(day_of_month: int, reference: date) -> date:
    return date(
        reference.year,
        reference.month,
        clamp_day_to_month(day_of_month, reference.year, reference.month),
    )
