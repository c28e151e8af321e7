from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from ..database import get_db
from ..schemas import BillCreate, SettlePayment, BillResponse, BillWithItems
from ..services import BillingService

router = APIRouter()

@router.get("", response_model=List[BillWithItems])
def list_bills(db: Session = Depends(get_db)):
    return BillingService.list_bills(db)

@router.get("/{bill_id}", response_model=BillWithItems)
def get_bill(bill_id: int, db: Session = Depends(get_db)):
    return BillingService.get_bill(db, bill_id)

@router.post("", response_model=BillResponse, status_code=status.HTTP_201_CREATED)
def create_bill(bill_in: BillCreate, db: Session = Depends(get_db)):
    return BillingService.create_bill(db, bill_in)

@router.post("/{bill_id}/settle", response_model=BillResponse)
def settle_payment(bill_id: int, payment: SettlePayment, db: Session = Depends(get_db)):
    return BillingService.settle_payment(db, bill_id, payment.amount)
