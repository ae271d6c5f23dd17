from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from fintrack.data.base import SessionLocal
from fintrack.domain.models import Recurring, Scheduled, Transaction
from fintrack.domain.services import transaction_service
from fintrack.domain.services.auth_service import get_current_owner


class TransactionResponse(BaseModel):
    id: int
    description: str
    amount: Decimal
    kind: str
    category: str
    created_at: datetime
    variant: str
    due_date: Optional[date] = None
    is_recurring: bool = False
    day_of_month: Optional[int] = None
    next_due_date: Optional[date] = None
    is_paid: bool = False

    @staticmethod
    def from_domain(t: Transaction) -> "TransactionResponse":
        variant = t.variant
        return TransactionResponse(
            id=t.id,
            description=t.description,
            amount=t.amount,
            kind=t.kind.value,
            category=t.category,
            created_at=t.created_at,
            variant=type(variant).__name__.lower(),
            due_date=variant.due_date if isinstance(variant, Scheduled) else None,
            is_recurring=isinstance(variant, Recurring),
            day_of_month=variant.day_of_month if isinstance(variant, Recurring) else None,
            next_due_date=(
                variant.next_due_date if isinstance(variant, Recurring) else None
            ),
            is_paid=variant.paid if isinstance(variant, Recurring) else False,
        )


class TotalsResponse(BaseModel):
    total_income: Decimal
    total_expense: Decimal
    balance: Decimal


class SubmitTransactionRequest(BaseModel):
    description: str
    amount: Decimal
    type: str = Field(..., description="INCOME or EXPENSE")
    category: str
    is_recurring: bool = False
    day_of_month: Optional[int] = None
    due_date: Optional[str] = Field(None, description="ISO date for a one-time due date")


class UpdateTransactionRequest(BaseModel):
    description: str
    amount: Decimal
    type: str
    category: str
    is_recurring: bool = False
    day_of_month: Optional[int] = None


router = APIRouter(prefix="/api/transactions", tags=["transactions"])


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@router.get("", response_model=List[TransactionResponse])
def get_all_transactions_endpoint(
    db: Session = Depends(get_db),
    owner_id: str = Depends(get_current_owner),
    kind: Optional[str] = Query(None, description="INCOME or EXPENSE"),
    category: Optional[str] = Query(None, description="Exact category"),
):
    transactions = transaction_service.list_transactions(db, owner_id, kind, category)
    return [TransactionResponse.from_domain(t) for t in transactions]


@router.get("/summary", response_model=TotalsResponse)
def get_summary(
    db: Session = Depends(get_db), owner_id: str = Depends(get_current_owner)
):
    totals = transaction_service.get_totals(db, owner_id)
    return TotalsResponse(
        total_income=totals.income,
        total_expense=totals.expense,
        balance=totals.balance,
    )


@router.post(
    "", response_model=TransactionResponse, status_code=status.HTTP_201_CREATED
)
def submit_transaction(
    req: SubmitTransactionRequest,
    db: Session = Depends(get_db),
    owner_id: str = Depends(get_current_owner),
):
    common = dict(
        owner_id=owner_id,
        description=req.description,
        amount=req.amount,
        kind=req.type,
        category=req.category,
    )
    if req.is_recurring:
        transaction = transaction_service.create_recurring_transaction(
            db, day_of_month=req.day_of_month, **common
        )
    elif req.due_date:
        transaction = transaction_service.create_scheduled_transaction(
            db, due_date=req.due_date, **common
        )
    else:
        transaction = transaction_service.create_transaction(db, **common)
    return TransactionResponse.from_domain(transaction)


@router.get("/{transaction_id}", response_model=TransactionResponse)
def get_transaction(
    transaction_id: int,
    db: Session = Depends(get_db),
    owner_id: str = Depends(get_current_owner),
):
    transaction = transaction_service.get_transaction(db, transaction_id, owner_id)
    return TransactionResponse.from_domain(transaction)


@router.put("/{transaction_id}", response_model=TransactionResponse)
def update_transaction(
    transaction_id: int,
    req: UpdateTransactionRequest,
    db: Session = Depends(get_db),
    owner_id: str = Depends(get_current_owner),
):
    transaction = transaction_service.update_transaction(
        db,
        transaction_id,
        owner_id,
        description=req.description,
        amount=req.amount,
        kind=req.type,
        category=req.category,
        is_recurring=req.is_recurring,
        day_of_month=req.day_of_month,
    )
    return TransactionResponse.from_domain(transaction)


@router.delete("/{transaction_id}")
def delete_transaction(
    transaction_id: int,
    db: Session = Depends(get_db),
    owner_id: str = Depends(get_current_owner),
):
    transaction_service.delete_transaction(db, transaction_id, owner_id)
    return {"deleted": 1}
