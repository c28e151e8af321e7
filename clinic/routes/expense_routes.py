from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
from typing import List, Optional

from ..database import get_db, commit
from ..exceptions import NotFound
from ..models import Expense
from ..schemas import ExpenseCreate, ExpenseUpdate, ExpenseResponse
from ..utils.dates import month_range

router = APIRouter()

def get_expense_or_404(db: Session, expense_id: int) -> Expense:
    expense = db.query(Expense).filter(Expense.id == expense_id).first()
    if not expense:
        raise NotFound.for_entity("Expense", expense_id)
    return expense

@router.get("", response_model=List[ExpenseResponse])
def list_expenses(month: Optional[str] = None, db: Session = Depends(get_db)):
    query = db.query(Expense)
    if month:
        start, end = month_range(month)
        query = query.filter(Expense.date >= start, Expense.date <= end)
    return query.order_by(Expense.date.desc(), Expense.id.desc()).all()

@router.post("", response_model=ExpenseResponse, status_code=status.HTTP_201_CREATED)
def create_expense(expense_in: ExpenseCreate, db: Session = Depends(get_db)):
    data = expense_in.dict(exclude_none=True)
    expense = Expense(**data)
    db.add(expense)
    db.flush()
    expense_id = expense.id
    commit(db, "create expense")
    return get_expense_or_404(db, expense_id)

@router.patch("/{expense_id}", response_model=ExpenseResponse)
def update_expense(expense_id: int, expense_in: ExpenseUpdate, db: Session = Depends(get_db)):
    expense = get_expense_or_404(db, expense_id)
    for field, value in expense_in.dict(exclude_unset=True).items():
        # description may be cleared, the rest are required columns
        if value is None and field != "description":
            continue
        setattr(expense, field, value)
    commit(db, "update expense")
    return get_expense_or_404(db, expense_id)

@router.delete("/{expense_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_expense(expense_id: int, db: Session = Depends(get_db)):
    expense = get_expense_or_404(db, expense_id)
    db.delete(expense)
    commit(db, "delete expense")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
