import calendar
from datetime import date
from typing import Dict, Iterable, List

from fintrack.domain.helpers.calendar_math import days_in_month
from fintrack.domain.models import MonthGrid, Recurring, Scheduled, Transaction


def project_calendar(
    year: int,
    month: int,
    recurring_bills: Iterable[Transaction],
    scheduled_transactions: Iterable[Transaction],
) -> Dict[int, List[Transaction]]:
    """
    Bucket bills by the day of month they fall on in (year, month).

    Recurring bills are placed by next_due_date and come first, scheduled
    transactions by due_date after them. Days without entries are left out.
    """
    first_day = date(year, month, 1)
    last_day = date(year, month, days_in_month(year, month))
    result: Dict[int, List[Transaction]] = {}

    def place(transaction: Transaction, due: date) -> None:
        if first_day <= due <= last_day:
            result.setdefault(due.day, []).append(transaction)

    for bill in recurring_bills:
        if isinstance(bill.variant, Recurring) and bill.variant.next_due_date:
            place(bill, bill.variant.next_due_date)
    for trans in scheduled_transactions:
        if isinstance(trans.variant, Scheduled):
            place(trans, trans.variant.due_date)
    return result


def month_grid(year: int, month: int) -> MonthGrid:
    return MonthGrid(
        year=year,
        month=month,
        month_name=calendar.month_name[month].upper(),
        first_weekday=date(year, month, 1).isoweekday(),
        days_in_month=days_in_month(year, month),
    )
