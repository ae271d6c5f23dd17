from datetime import date
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel
from sqlalchemy.orm import Session

from fintrack.domain.services import transaction_service
from fintrack.domain.services.auth_service import get_current_owner
from fintrack.presentation.transactions_api import TransactionResponse, get_db


class CalendarResponse(BaseModel):
    year: int
    month: int
    month_name: str
    first_weekday: int
    days_in_month: int
    today: date
    days: Dict[int, List[TransactionResponse]]


router = APIRouter(prefix="/api/bills", tags=["bills"])


@router.get("", response_model=List[TransactionResponse])
def get_bills(
    db: Session = Depends(get_db),
    owner_id: str = Depends(get_current_owner),
    filter: Optional[str] = Query(
        "all", description="all, upcoming7, upcoming30, overdue, paid or unpaid"
    ),
):
    bills = transaction_service.get_filtered_bills(db, owner_id, filter)
    return [TransactionResponse.from_domain(b) for b in bills]


@router.get("/upcoming", response_model=List[TransactionResponse])
def get_upcoming_bills(
    db: Session = Depends(get_db),
    owner_id: str = Depends(get_current_owner),
    days: int = Query(7, ge=0, le=366),
):
    bills = transaction_service.get_upcoming_bills(db, owner_id, days)
    return [TransactionResponse.from_domain(b) for b in bills]


@router.get("/calendar", response_model=CalendarResponse)
def get_bills_calendar(
    db: Session = Depends(get_db),
    owner_id: str = Depends(get_current_owner),
    year: Optional[int] = Query(None, ge=1, le=9999),
    month: Optional[int] = Query(None, ge=1, le=12),
):
    today = date.today()
    grid, days = transaction_service.get_bills_calendar(
        db, owner_id, year or today.year, month or today.month
    )
    return CalendarResponse(
        year=grid.year,
        month=grid.month,
        month_name=grid.month_name,
        first_weekday=grid.first_weekday,
        days_in_month=grid.days_in_month,
        today=today,
        days={
            day: [TransactionResponse.from_domain(t) for t in entries]
            for day, entries in days.items()
        },
    )


@router.post("/{transaction_id}/mark-paid", response_model=TransactionResponse)
def mark_bill_paid(
    transaction_id: int,
    db: Session = Depends(get_db),
    owner_id: str = Depends(get_current_owner),
):
    transaction = transaction_service.mark_transaction_paid(db, transaction_id, owner_id)
    return TransactionResponse.from_domain(transaction)


@router.post("/reset")
def reset_bills(
    db: Session = Depends(get_db), owner_id: str = Depends(get_current_owner)
):
    return {"reset": transaction_service.reset_monthly_bills(db, owner_id)}
