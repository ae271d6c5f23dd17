from datetime import datetime
from typing import List, Optional

from sqlalchemy import Boolean, Column, Date, DateTime
from sqlalchemy import Enum as SAEnum
from sqlalchemy import Integer, Numeric, String

from fintrack.data.base import Base, engine
from fintrack.domain.models import (
    Plain,
    Recurring,
    Scheduled,
    Transaction,
    TransactionKind,
)


class TransactionORM(Base):
    __tablename__ = "transactions"
    id = Column(Integer, primary_key=True, autoincrement=True, index=True)
    owner_id = Column(String, nullable=False, index=True)
    description = Column(String, nullable=False)
    amount = Column(Numeric(14, 2), nullable=False)
    kind = Column(SAEnum(TransactionKind), nullable=False)
    category = Column(String, nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    due_date = Column(Date, nullable=True)
    is_recurring = Column(Boolean, nullable=False, default=False)
    day_of_month = Column(Integer, nullable=True)
    next_due_date = Column(Date, nullable=True)
    is_paid = Column(Boolean, nullable=False, default=False)


def create_transaction_tables():
    Base.metadata.create_all(bind=engine)


def transaction_to_domain(orm: TransactionORM) -> Transaction:
    if orm.is_recurring:
        variant = Recurring(
            day_of_month=orm.day_of_month,
            next_due_date=orm.next_due_date,
            paid=bool(orm.is_paid),
        )
    elif orm.due_date is not None:
        variant = Scheduled(due_date=orm.due_date)
    else:
        variant = Plain()
    return Transaction(
        id=orm.id,
        owner_id=orm.owner_id,
        description=orm.description,
        amount=orm.amount,
        kind=orm.kind,
        category=orm.category,
        created_at=orm.created_at,
        variant=variant,
    )


def _copy_to_orm(transaction: Transaction, orm: TransactionORM) -> None:
    orm.description = transaction.description
    orm.amount = transaction.amount
    orm.kind = transaction.kind
    orm.category = transaction.category
    variant = transaction.variant
    orm.due_date = variant.due_date if isinstance(variant, Scheduled) else None
    if isinstance(variant, Recurring):
        orm.is_recurring = True
        orm.day_of_month = variant.day_of_month
        orm.next_due_date = variant.next_due_date
        orm.is_paid = variant.paid
    else:
        orm.is_recurring = False
        orm.day_of_month = None
        orm.next_due_date = None
        orm.is_paid = False


def find_by_owner(
    db,
    owner_id: str,
    kind: Optional[TransactionKind] = None,
    category: Optional[str] = None,
) -> List[Transaction]:
    query = db.query(TransactionORM).filter(TransactionORM.owner_id == owner_id)
    if kind is not None:
        query = query.filter(TransactionORM.kind == kind)
    if category:
        query = query.filter(TransactionORM.category == category)
    rows = query.order_by(TransactionORM.id).all()
    return [transaction_to_domain(t) for t in rows]


def find_recurring_by_owner(db, owner_id: str) -> List[Transaction]:
    rows = (
        db.query(TransactionORM)
        .filter(TransactionORM.owner_id == owner_id, TransactionORM.is_recurring.is_(True))
        .order_by(TransactionORM.id)
        .all()
    )
    return [transaction_to_domain(t) for t in rows]


def find_scheduled_by_owner(db, owner_id: str) -> List[Transaction]:
    rows = (
        db.query(TransactionORM)
        .filter(
            TransactionORM.owner_id == owner_id,
            TransactionORM.is_recurring.is_(False),
            TransactionORM.due_date.isnot(None),
        )
        .order_by(TransactionORM.id)
        .all()
    )
    return [transaction_to_domain(t) for t in rows]


def find_by_id(db, transaction_id: int) -> Optional[Transaction]:
    orm = db.get(TransactionORM, transaction_id)
    if not orm:
        return None
    return transaction_to_domain(orm)


def save(db, transaction: Transaction) -> Transaction:
    """
    Insert a new transaction or overwrite the stored one (last write wins).
    owner_id and created_at are only written on insert.
    """
    orm = db.get(TransactionORM, transaction.id) if transaction.id is not None else None
    if orm is None:
        orm = TransactionORM(
            owner_id=transaction.owner_id,
            created_at=transaction.created_at,
        )
        db.add(orm)
    _copy_to_orm(transaction, orm)
    db.commit()
    db.refresh(orm)
    return transaction_to_domain(orm)


def delete(db, transaction: Transaction) -> bool:
    orm = db.get(TransactionORM, transaction.id)
    if not orm:
        return False
    db.delete(orm)
    db.commit()
    return True
