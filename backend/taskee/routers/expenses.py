"""Expenses router."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from taskee.database import get_db
from taskee.dependencies import Actor, get_current_actor
from taskee.models.entries import Expense
from taskee.routers.entry_routes import register_entry_routes
from taskee.schemas.entries import ExpenseCreate, ExpenseResponse

router = APIRouter(prefix="/api/v1/expenses", tags=["Expenses"])


@router.post("/", response_model=ExpenseResponse)
def create_expense(
    body: ExpenseCreate,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    expense = Expense(
        org_id=actor.org_id,
        user_id=actor.user_id,
        date=body.date,
        amount=body.amount,
        category=body.category.strip(),
        receipt_url=(body.receipt_url or "").strip() or None,
    )
    db.add(expense)
    db.commit()
    db.refresh(expense)
    return expense


register_entry_routes(router, Expense, ExpenseResponse)
