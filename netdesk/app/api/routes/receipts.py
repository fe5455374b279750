from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from netdesk.app.db import get_db
from netdesk.app.domain.contracts import ReceiptContract
from netdesk.app.services import receipt_service

router = APIRouter(prefix="/api/receipts", tags=["receipts"])


@router.get("/{payment_id}", response_model=ReceiptContract)
def payment_receipt(payment_id: int, db: Session = Depends(get_db)):
    return receipt_service.payment_receipt(db, payment_id)
