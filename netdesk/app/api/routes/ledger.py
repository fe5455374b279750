# netdesk/app/api/routes/ledger.py
from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from netdesk.app.db import get_db
from netdesk.app.domain.contracts import AmountInWordsContract, CustomerLedgerContract
from netdesk.app.finance.money import parse_amount
from netdesk.app.finance.words import amount_to_words
from netdesk.app.services import ledger_service

router = APIRouter(prefix="/api", tags=["ledger"])


# -------------------------
# Endpoints
# -------------------------

@router.get("/customer-ledger/{customer_id}", response_model=CustomerLedgerContract)
def customer_ledger(customer_id: int, db: Session = Depends(get_db)):
    return ledger_service.customer_ledger(db, customer_id)


@router.get("/amount-in-words", response_model=AmountInWordsContract)
def amount_in_words(
    amount: str = Query(..., description="Amount in rupees; paise are dropped"),
):
    # Parsed here rather than by the query validator so every bad amount
    # (negative, NaN, junk, too large) gets the InvalidAmount 422 body.
    value = parse_amount(amount)
    words = amount_to_words(value)
    return {"amount": float(value), "words": words}
