from datetime import date
from decimal import Decimal

from fintrack.domain.models import (
    Plain,
    Recurring,
    Scheduled,
    Transaction,
    TransactionKind,
)


def make_bill(
    day_of_month: int,
    next_due_date: date,
    paid: bool = False,
    description: str = "Rent",
    owner_id: str = "alice",
) -> Transaction:
    return Transaction(
        owner_id=owner_id,
        description=description,
        amount=Decimal("100.00"),
        kind=TransactionKind.EXPENSE,
        category="Housing",
        variant=Recurring(day_of_month, next_due_date, paid),
    )


def make_scheduled(due_date: date, description: str = "Car insurance") -> Transaction:
    return Transaction(
        owner_id="alice",
        description=description,
        amount=Decimal("450.00"),
        kind=TransactionKind.EXPENSE,
        category="Insurance",
        variant=Scheduled(due_date),
    )


def make_plain(
    amount: str = "10.00",
    kind: TransactionKind = TransactionKind.EXPENSE,
    description: str = "Coffee",
) -> Transaction:
    return Transaction(
        owner_id="alice",
        description=description,
        amount=Decimal(amount),
        kind=kind,
        category="Food",
        variant=Plain(),
    )
