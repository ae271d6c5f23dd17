from decimal import Decimal
from typing import Iterable

from fintrack.domain.models import Totals, Transaction, TransactionKind


def get_signed_amount(transaction: Transaction) -> Decimal:
    """
    Returns the signed amount for a transaction depending on its kind.
    Stored amounts are always positive: EXPENSE is negated, INCOME kept.
    """
    if transaction.kind == TransactionKind.EXPENSE:
        return -transaction.amount
    return transaction.amount


def total_by_kind(transactions: Iterable[Transaction], kind: TransactionKind) -> Decimal:
    return sum((t.amount for t in transactions if t.kind == kind), Decimal("0"))


def balance(transactions: Iterable[Transaction]) -> Decimal:
    return sum((get_signed_amount(t) for t in transactions), Decimal("0"))


def summarize(transactions: Iterable[Transaction]) -> Totals:
    items = list(transactions)
    income = total_by_kind(items, TransactionKind.INCOME)
    expense = total_by_kind(items, TransactionKind.EXPENSE)
    return Totals(income=income, expense=expense, balance=income - expense)
