from datetime import date
from typing import Optional

from fintrack.domain.exceptions import InvalidDayOfMonth, UnsupportedVariantChange
from fintrack.domain.helpers.calendar_math import (
    advance_one_month,
    first_occurrence_after,
    same_month_due_date,
)
from fintrack.domain.models import (
    Plain,
    Recurring,
    Scheduled,
    Transaction,
    validate_day_of_month,
)


def create_recurring(day_of_month: int, reference_date: date) -> Recurring:
    validate_day_of_month(day_of_month)
    return Recurring(
        day_of_month=day_of_month,
        next_due_date=first_occurrence_after(day_of_month, reference_date),
        paid=False,
    )


def mark_paid(transaction: Transaction, reference_date: date) -> None:
    """
    Mark a bill as paid for its current cycle.

    Recurring bills move to the next cycle with advance_one_month, which does not
    look at reference_date. Plain and scheduled transactions keep no paid state,
    so nothing is stored for them.
    The caller is responsible for the ownership check.
    """
    variant = transaction.variant
    if isinstance(variant, Recurring):
        variant.paid = True
        variant.next_due_date = advance_one_month(
            variant.next_due_date, variant.day_of_month
        )


def toggle_recurrence(
    transaction: Transaction,
    enable: bool,
    day_of_month: Optional[int],
    reference_date: date,
) -> None:
    if isinstance(transaction.variant, Scheduled):
        if enable:
            raise UnsupportedVariantChange(
                "A transaction with a due date cannot be made recurring"
            )
        return
    if not enable:
        # Dropping the Recurring variant clears day, next due date and paid together
        transaction.variant = Plain()
        return
    if day_of_month is None:
        raise InvalidDayOfMonth(day_of_month)
    variant = transaction.variant
    if isinstance(variant, Recurring):
        # An edit moves the due date but leaves the paid flag alone
        validate_day_of_month(day_of_month)
        variant.day_of_month = day_of_month
        variant.next_due_date = first_occurrence_after(day_of_month, reference_date)
        return
    transaction.variant = create_recurring(day_of_month, reference_date)


def reset_cycle_if_past_due(transaction: Transaction, reference_date: date) -> bool:
    """
    Start a new cycle for a recurring bill whose due date has passed.

    The new due date is the clamped day in the reference month, not the month
    after the old due date. Returns whether anything changed.
    """
    variant = transaction.variant
    if not isinstance(variant, Recurring) or variant.next_due_date >= reference_date:
        return False
    variant.paid = False
    variant.next_due_date = same_month_due_date(variant.day_of_month, reference_date)
    return True
