from __future__ import annotations

import datetime as dt
from datetime import date, datetime
from typing import List, Literal, Optional

from pydantic import BaseModel


class LedgerEntryContract(BaseModel):
    # Field shares its name with the type; reference the type through the module.
    date: Optional[dt.date] = None
    type: Literal["opening_balance", "invoice", "payment"]
    description: str
    debit: float
    credit: float
    balance: float
    reference_id: Optional[int] = None


class CustomerLedgerContract(BaseModel):
    customer_id: int
    entries: List[LedgerEntryContract]
    balance: float
    total_debit: float
    total_credit: float


class AmountInWordsContract(BaseModel):
    amount: float
    words: str


class ReceiptContract(BaseModel):
    payment_id: int
    invoice_id: int
    customer_id: int
    customer_name: str

    received_at: datetime
    method: str
    method_label: str
    collected_by: str

    subtotal: float
    discount: float
    penalty: float
    paid_amount: float
    balance: float

    next_due_date: date
    amount_in_words: str
