from __future__ import annotations

import calendar
import logging
from datetime import date
from typing import Any, Dict

from fastapi import HTTPException
from sqlalchemy.orm import Session

from netdesk.app.finance.money import to_amount
from netdesk.app.finance.words import amount_to_words
from netdesk.app.models import Payment

logger = logging.getLogger(__name__)

PAYMENT_METHOD_LABELS = {
    "cash": "Cash",
    "bank": "Bank Transfer",
    "mobile_money": "Mobile Money",
    "online": "Online",
}


def payment_method_label(method: str) -> str:
    return PAYMENT_METHOD_LABELS.get(method, method)


def add_months(d: date, months: int) -> date:
    """Shift by calendar months, clamping to the last day (Jan 31 + 1 -> Feb 28/29)."""
    month_index = d.month - 1 + months
    year = d.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(d.day, last_day))


def payment_receipt(db: Session, payment_id: int) -> Dict[str, Any]:
    """
    Printed receipt for one payment against its invoice.

    `balance` is what remains on that invoice after this payment, not the
    customer's ledger balance.
    """
    payment = db.get(Payment, payment_id)
    if not payment:
        raise HTTPException(status_code=404, detail="payment not found")

    invoice = payment.invoice
    customer = payment.customer
    paid = to_amount(payment.amount, field="payment.amount")
    subtotal = to_amount(invoice.total_amount, field="invoice.total_amount")
    balance = subtotal - paid
    if balance < 0:
        logger.warning(
            "Payment %s exceeds invoice %s total (%s > %s)",
            payment.id,
            invoice.id,
            paid,
            subtotal,
        )

    return {
        "payment_id": payment.id,
        "invoice_id": invoice.id,
        "customer_id": customer.id,
        "customer_name": customer.name,
        "received_at": payment.received_at,
        "method": payment.method,
        "method_label": payment_method_label(payment.method),
        "collected_by": payment.collected_by,
        "subtotal": float(subtotal),
        "discount": float(invoice.discount_amount or 0),
        "penalty": float(invoice.penalty_amount or 0),
        "paid_amount": float(paid),
        "balance": float(balance),
        "next_due_date": add_months(invoice.due_date, 1),
        "amount_in_words": amount_to_words(paid),
    }
