from __future__ import annotations

import logging
from typing import Any, Dict, List

from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session

from netdesk.app.finance.ledger import Invoice, Payment, Statement, reconstruct
from netdesk.app.models import Customer, Invoice as InvoiceRow, OpeningBalance, Payment as PaymentRow

logger = logging.getLogger(__name__)


def require_customer(db: Session, customer_id: int) -> Customer:
    customer = db.get(Customer, customer_id)
    if not customer:
        logger.warning("Ledger requested for missing customer_id=%s", customer_id)
        raise HTTPException(status_code=404, detail="customer not found")
    return customer


def _invoice_from_row(row: InvoiceRow) -> Invoice:
    return Invoice(
        total_amount=row.total_amount,
        issue_date=row.issue_date,
        due_date=row.due_date,
        id=row.id,
        created_at=row.created_at,
        period_start=row.period_start,
        period_end=row.period_end,
    )


def _payment_from_row(row: PaymentRow) -> Payment:
    return Payment(
        amount=row.amount,
        received_at=row.received_at,
        invoice_id=row.invoice_id,
        id=row.id,
        method=row.method,
        collected_by=row.collected_by,
    )


def customer_statement(db: Session, customer_id: int) -> Statement:
    require_customer(db, customer_id)

    ob = db.execute(
        select(OpeningBalance).where(OpeningBalance.customer_id == customer_id)
    ).scalars().first()
    invoice_rows = db.execute(
        select(InvoiceRow).where(InvoiceRow.customer_id == customer_id)
    ).scalars().all()
    payment_rows = db.execute(
        select(PaymentRow).where(PaymentRow.customer_id == customer_id)
    ).scalars().all()

    statement = reconstruct(
        ob.amount if ob else 0,
        [_invoice_from_row(r) for r in invoice_rows],
        [_payment_from_row(r) for r in payment_rows],
        opening_date=ob.as_of_date if ob else None,
    )
    logger.info(
        "Customer ledger customer_id=%s invoices=%s payments=%s balance=%s",
        customer_id,
        len(invoice_rows),
        len(payment_rows),
        statement.balance,
    )
    return statement


def statement_payload(customer_id: int, statement: Statement) -> Dict[str, Any]:
    entries: List[Dict[str, Any]] = [
        {
            "date": e.date,
            "type": e.type,
            "description": e.description,
            "debit": float(e.debit),
            "credit": float(e.credit),
            "balance": float(e.balance),
            "reference_id": e.reference_id,
        }
        for e in statement.entries
    ]
    return {
        "customer_id": customer_id,
        "entries": entries,
        "balance": float(statement.balance),
        "total_debit": float(statement.total_debit),
        "total_credit": float(statement.total_credit),
    }


def customer_ledger(db: Session, customer_id: int) -> Dict[str, Any]:
    return statement_payload(customer_id, customer_statement(db, customer_id))
