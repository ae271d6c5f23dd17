# fintrack/domain/models.py
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Optional, Union

from fintrack.domain.exceptions import InvalidDayOfMonth, InvalidTransaction

MIN_DAY_OF_MONTH = 1
MAX_DAY_OF_MONTH = 31

# Matches the Numeric(14, 2) amount column
AMOUNT_QUANTUM = Decimal("0.01")
MAX_AMOUNT = Decimal("1e12")


class TransactionKind(Enum):
    INCOME = "INCOME"
    EXPENSE = "EXPENSE"


class BillFilter(Enum):
    ALL = "all"
    UPCOMING_7 = "upcoming7"
    UPCOMING_30 = "upcoming30"
    OVERDUE = "overdue"
    PAID = "paid"
    UNPAID = "unpaid"

    @classmethod
    def parse(cls, key: Optional[str]) -> "BillFilter":
        """Case-sensitive lookup; anything unrecognized means ALL."""
        try:
            return cls(key)
        except ValueError:
            return cls.ALL


def validate_day_of_month(day_of_month) -> int:
    if (
        isinstance(day_of_month, bool)
        or not isinstance(day_of_month, int)
        or not MIN_DAY_OF_MONTH <= day_of_month <= MAX_DAY_OF_MONTH
    ):
        raise InvalidDayOfMonth(day_of_month)
    return day_of_month


@dataclass(frozen=True)
class Plain:
    pass


@dataclass(frozen=True)
class Scheduled:
    due_date: date


@dataclass
class Recurring:
    day_of_month: int
    next_due_date: date
    paid: bool = False

    def __post_init__(self):
        validate_day_of_month(self.day_of_month)


Variant = Union[Plain, Scheduled, Recurring]


@dataclass
class Transaction:
    owner_id: str
    description: str
    amount: Decimal
    kind: TransactionKind
    category: str
    variant: Variant = field(default_factory=Plain)
    id: Optional[int] = None
    created_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self):
        self.amount = parse_amount(self.amount)
        validate_details(self.description, self.amount, self.category)
        if not isinstance(self.kind, TransactionKind):
            raise InvalidTransaction(f"Invalid transaction kind: {self.kind}")

    @property
    def is_recurring(self) -> bool:
        return isinstance(self.variant, Recurring)

    @property
    def is_scheduled(self) -> bool:
        return isinstance(self.variant, Scheduled)

    @property
    def calendar_date(self) -> Optional[date]:
        """The date a calendar shows this transaction on, if any."""
        if isinstance(self.variant, Recurring):
            return self.variant.next_due_date
        if isinstance(self.variant, Scheduled):
            return self.variant.due_date
        return None


def validate_details(description: str, amount: Decimal, category: str) -> None:
    if not description or not description.strip():
        raise InvalidTransaction("Description is required")
    if not category or not category.strip():
        raise InvalidTransaction("Category is required")
    if not amount.is_finite() or amount <= 0:
        raise InvalidTransaction("Amount must be greater than 0")
    if amount >= MAX_AMOUNT:
        raise InvalidTransaction("Amount must be less than 1,000,000,000,000")
    if amount != amount.quantize(AMOUNT_QUANTUM):
        raise InvalidTransaction("Amount cannot have more than two decimal places")


def parse_amount(amount) -> Decimal:
    if isinstance(amount, Decimal):
        return amount
    try:
        return Decimal(str(amount))
    except InvalidOperation:
        raise InvalidTransaction(f"Invalid amount: {amount}")


def parse_kind(kind) -> TransactionKind:
    if isinstance(kind, TransactionKind):
        return kind
    try:
        return TransactionKind(kind)
    except ValueError:
        raise InvalidTransaction(f"Invalid transaction kind: {kind}")


@dataclass(frozen=True)
class Totals:
    income: Decimal
    expense: Decimal
    balance: Decimal


@dataclass(frozen=True)
class MonthGrid:
    year: int
    month: int
    month_name: str
    first_weekday: int  # ISO weekday of the 1st, Monday=1
    days_in_month: int
