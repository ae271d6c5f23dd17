from datetime import date, timedelta
from typing import Callable, Dict, Iterable, List

from fintrack.domain.models import BillFilter, Recurring, Transaction

BillPredicate = Callable[[Recurring, date], bool]


def _due_within(days: int) -> BillPredicate:
    def predicate(bill: Recurring, today: date) -> bool:
        return (
            not bill.paid
            and bill.next_due_date is not None
            and today <= bill.next_due_date <= today + timedelta(days=days)
        )

    return predicate


def _overdue(bill: Recurring, today: date) -> bool:
    return (
        not bill.paid
        and bill.next_due_date is not None
        and bill.next_due_date < today
    )


PREDICATES: Dict[BillFilter, BillPredicate] = {
    BillFilter.ALL: lambda bill, today: True,
    BillFilter.UPCOMING_7: _due_within(7),
    BillFilter.UPCOMING_30: _due_within(30),
    BillFilter.OVERDUE: _overdue,
    BillFilter.PAID: lambda bill, today: bill.paid,
    BillFilter.UNPAID: lambda bill, today: not bill.paid,
}


def filter_bills(
    bills: Iterable[Transaction], bill_filter: BillFilter, today: date
) -> List[Transaction]:
    predicate = PREDICATES[bill_filter]
    return [
        b
        for b in bills
        if isinstance(b.variant, Recurring) and predicate(b.variant, today)
    ]


def bills_due_within(
    bills: Iterable[Transaction], days_ahead: int, today: date
) -> List[Transaction]:
    """
    Recurring bills due between today and today + days_ahead inclusive,
    paid or not.
    """
    end = today + timedelta(days=days_ahead)
    return [
        b
        for b in bills
        if isinstance(b.variant, Recurring) and today <= b.variant.next_due_date <= end
    ]
