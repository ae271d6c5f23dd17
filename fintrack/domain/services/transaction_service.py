import logging
import re
from datetime import MAXYEAR, MINYEAR, date, datetime
from typing import Dict, List, Optional

from dateutil.parser import isoparse
from sqlalchemy.orm import Session

from fintrack.data.repositories import transaction_repository as repo
from fintrack.domain.exceptions import (
    InvalidDate,
    TransactionNotFound,
    UnauthorizedAccess,
)
from fintrack.domain.helpers import bill_lifecycle
from fintrack.domain.helpers.bill_filters import bills_due_within, filter_bills
from fintrack.domain.helpers.calendar_projection import month_grid, project_calendar
from fintrack.domain.helpers.sum import summarize
from fintrack.domain.models import (
    BillFilter,
    MonthGrid,
    Plain,
    Scheduled,
    Totals,
    Transaction,
    parse_amount,
    parse_kind,
    validate_details,
)

logger = logging.getLogger(__name__)

repo.create_transaction_tables()

ISO_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")


def _get_owned_or_raise(db: Session, transaction_id: int, owner_id: str) -> Transaction:
    transaction = repo.find_by_id(db, transaction_id)
    if transaction is None:
        raise TransactionNotFound(transaction_id)
    if transaction.owner_id != owner_id:
        logger.warning(
            "Owner %s tried to access transaction %s", owner_id, transaction_id
        )
        raise UnauthorizedAccess()
    return transaction


def parse_due_date(value) -> date:
    """Accepts a date or a full YYYY-MM-DD string; anything else is InvalidDate."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not ISO_DATE_RE.fullmatch(value.strip()):
        raise InvalidDate(f"Invalid due date: {value!r}")
    try:
        return isoparse(value.strip()).date()
    except (ValueError, OverflowError):
        raise InvalidDate(f"Invalid due date: {value!r}")


def list_transactions(
    db: Session,
    owner_id: str,
    kind: Optional[str] = None,
    category: Optional[str] = None,
) -> List[Transaction]:
    kind_enum = parse_kind(kind) if kind else None
    return repo.find_by_owner(db, owner_id, kind_enum, category)


def get_transaction(db: Session, transaction_id: int, owner_id: str) -> Transaction:
    return _get_owned_or_raise(db, transaction_id, owner_id)


def create_transaction(
    db: Session,
    owner_id: str,
    description: str,
    amount,
    kind,
    category: str,
) -> Transaction:
    transaction = Transaction(
        owner_id=owner_id,
        description=description,
        amount=parse_amount(amount),
        kind=parse_kind(kind),
        category=category,
        variant=Plain(),
    )
    saved = repo.save(db, transaction)
    logger.info("Created transaction %s for owner %s", saved.id, owner_id)
    return saved


def create_scheduled_transaction(
    db: Session,
    owner_id: str,
    description: str,
    amount,
    kind,
    category: str,
    due_date,
) -> Transaction:
    transaction = Transaction(
        owner_id=owner_id,
        description=description,
        amount=parse_amount(amount),
        kind=parse_kind(kind),
        category=category,
        variant=Scheduled(due_date=parse_due_date(due_date)),
    )
    saved = repo.save(db, transaction)
    logger.info(
        "Created scheduled transaction %s due %s for owner %s",
        saved.id,
        saved.variant.due_date,
        owner_id,
    )
    return saved


def create_recurring_transaction(
    db: Session,
    owner_id: str,
    description: str,
    amount,
    kind,
    category: str,
    day_of_month: int,
    today: Optional[date] = None,
) -> Transaction:
    today = today or date.today()
    transaction = Transaction(
        owner_id=owner_id,
        description=description,
        amount=parse_amount(amount),
        kind=parse_kind(kind),
        category=category,
        variant=bill_lifecycle.create_recurring(day_of_month, today),
    )
    saved = repo.save(db, transaction)
    logger.info(
        "Created recurring bill %s on day %s, next due %s",
        saved.id,
        day_of_month,
        saved.variant.next_due_date,
    )
    return saved


def update_transaction(
    db: Session,
    transaction_id: int,
    owner_id: str,
    description: str,
    amount,
    kind,
    category: str,
    is_recurring: bool = False,
    day_of_month: Optional[int] = None,
    today: Optional[date] = None,
) -> Transaction:
    today = today or date.today()
    transaction = _get_owned_or_raise(db, transaction_id, owner_id)
    amount = parse_amount(amount)
    kind = parse_kind(kind)
    validate_details(description, amount, category)

    bill_lifecycle.toggle_recurrence(transaction, is_recurring, day_of_month, today)
    transaction.description = description
    transaction.amount = amount
    transaction.kind = kind
    transaction.category = category

    saved = repo.save(db, transaction)
    logger.info("Updated transaction %s", transaction_id)
    return saved


def delete_transaction(db: Session, transaction_id: int, owner_id: str) -> None:
    transaction = _get_owned_or_raise(db, transaction_id, owner_id)
    repo.delete(db, transaction)
    logger.info("Deleted transaction %s for owner %s", transaction_id, owner_id)


def mark_transaction_paid(
    db: Session, transaction_id: int, owner_id: str, today: Optional[date] = None
) -> Transaction:
    today = today or date.today()
    transaction = _get_owned_or_raise(db, transaction_id, owner_id)
    bill_lifecycle.mark_paid(transaction, today)
    if not transaction.is_recurring:
        logger.info("Transaction %s has no payment cycle to advance", transaction_id)
        return transaction
    saved = repo.save(db, transaction)
    logger.info(
        "Marked bill %s paid, next due %s",
        transaction_id,
        saved.variant.next_due_date,
    )
    return saved


def reset_monthly_bills(
    db: Session, owner_id: str, today: Optional[date] = None
) -> int:
    today = today or date.today()
    count = 0
    for bill in repo.find_recurring_by_owner(db, owner_id):
        if bill_lifecycle.reset_cycle_if_past_due(bill, today):
            repo.save(db, bill)
            count += 1
    if count:
        logger.info("Reset %s past-due bills for owner %s", count, owner_id)
    return count


def get_filtered_bills(
    db: Session,
    owner_id: str,
    filter_key: Optional[str] = None,
    today: Optional[date] = None,
) -> List[Transaction]:
    today = today or date.today()
    bills = repo.find_recurring_by_owner(db, owner_id)
    return filter_bills(bills, BillFilter.parse(filter_key), today)


def get_upcoming_bills(
    db: Session, owner_id: str, days_ahead: int, today: Optional[date] = None
) -> List[Transaction]:
    today = today or date.today()
    return bills_due_within(repo.find_recurring_by_owner(db, owner_id), days_ahead, today)


def get_bills_calendar(
    db: Session, owner_id: str, year: int, month: int
) -> tuple[MonthGrid, Dict[int, List[Transaction]]]:
    if not MINYEAR <= year <= MAXYEAR:
        raise InvalidDate(f"Invalid year: {year}")
    if not 1 <= month <= 12:
        raise InvalidDate(f"Invalid month: {month}")
    days = project_calendar(
        year,
        month,
        repo.find_recurring_by_owner(db, owner_id),
        repo.find_scheduled_by_owner(db, owner_id),
    )
    return month_grid(year, month), days


def get_totals(db: Session, owner_id: str) -> Totals:
    return summarize(repo.find_by_owner(db, owner_id))