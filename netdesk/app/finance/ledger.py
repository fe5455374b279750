"""
Finance - customer ledger reconstruction.

Responsibility:
- Fold a customer's invoices and payments into an account statement with a
  running balance, starting from the carried-forward opening balance.

Design notes:
- PURE: no database access, no logging, no mutation of the inputs. The service
  layer fetches rows and maps them into the value objects below.
- Deterministic: the same logical invoices/payments produce the same statement
  regardless of the order they are passed in.
- Positive balances mean the customer owes money (invoices debit, payments credit).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone
from decimal import Decimal
from typing import Iterable, List, Literal, Optional, Sequence, Tuple

from .money import ZERO, Amount, to_amount

EntryType = Literal["opening_balance", "invoice", "payment"]

OPENING_BALANCE: EntryType = "opening_balance"
INVOICE: EntryType = "invoice"
PAYMENT: EntryType = "payment"

# Opening row sorts ahead of everything on its date; invoices and payments
# share a group so they interleave by timestamp, and an invoice wins an
# exact timestamp tie with a payment.
_GROUP = {OPENING_BALANCE: 0, INVOICE: 1, PAYMENT: 1}
_KIND_RANK = {OPENING_BALANCE: 0, INVOICE: 1, PAYMENT: 2}


# -------------------------
# Source records (read-only)
# -------------------------

@dataclass(frozen=True)
class Invoice:
    total_amount: Amount
    issue_date: date
    due_date: Optional[date] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None   # ordering within issue_date
    period_start: Optional[date] = None
    period_end: Optional[date] = None


@dataclass(frozen=True)
class Payment:
    amount: Amount
    received_at: datetime
    invoice_id: Optional[int] = None
    id: Optional[int] = None
    method: str = "cash"
    collected_by: Optional[str] = None


# -------------------------
# Statement
# -------------------------

@dataclass(frozen=True)
class LedgerEntry:
    """
    A single row of a customer account statement.

    Invariants:
    - balance == previous balance + debit - credit
    - at most one of debit/credit is nonzero
    """
    date: Optional[date]
    type: EntryType
    description: str
    debit: Decimal
    credit: Decimal
    balance: Decimal
    reference_id: Optional[int] = None


@dataclass(frozen=True)
class Statement:
    entries: Tuple[LedgerEntry, ...] = field(default_factory=tuple)
    balance: Decimal = ZERO

    @property
    def total_debit(self) -> Decimal:
        return sum((e.debit for e in self.entries), ZERO)

    @property
    def total_credit(self) -> Decimal:
        return sum((e.credit for e in self.entries), ZERO)


@dataclass(frozen=True)
class _Event:
    type: EntryType
    date: date
    timestamp: datetime
    amount: Decimal
    description: str
    reference_id: Optional[int]
    index: int


def _naive_utc(ts: datetime) -> datetime:
    # Mixed aware/naive timestamps cannot be compared; aware ones are taken to UTC.
    if ts.tzinfo is not None:
        return ts.astimezone(timezone.utc).replace(tzinfo=None)
    return ts


def _invoice_description(inv: Invoice) -> str:
    label = f"Invoice #{inv.id}" if inv.id is not None else "Invoice"
    if inv.period_start and inv.period_end:
        return f"{label} - {inv.period_start.isoformat()} to {inv.period_end.isoformat()}"
    return label


def _payment_description(pay: Payment) -> str:
    if pay.collected_by:
        return f"Payment - {pay.method} ({pay.collected_by})"
    return f"Payment - {pay.method}"


def _collect_events(invoices: Iterable[Invoice], payments: Iterable[Payment]) -> List[_Event]:
    events: List[_Event] = []
    index = 0

    for inv in invoices:
        amount = to_amount(inv.total_amount, field="invoice.total_amount")
        ts = inv.created_at or datetime.combine(inv.issue_date, time.min)
        events.append(
            _Event(
                type=INVOICE,
                date=inv.issue_date,
                timestamp=_naive_utc(ts),
                amount=amount,
                description=_invoice_description(inv),
                reference_id=inv.id,
                index=index,
            )
        )
        index += 1

    for pay in payments:
        amount = to_amount(pay.amount, field="payment.amount")
        ts = _naive_utc(pay.received_at)
        events.append(
            _Event(
                type=PAYMENT,
                date=ts.date(),
                timestamp=ts,
                amount=amount,
                description=_payment_description(pay),
                reference_id=pay.id,
                index=index,
            )
        )
        index += 1

    return events


def _sort_key(e: _Event) -> tuple:
    # Content fields come before the input index so shuffled input yields the
    # same statement; the index only separates otherwise identical events.
    return (
        e.date,
        _GROUP[e.type],
        e.timestamp,
        _KIND_RANK[e.type],
        e.reference_id is None,
        e.reference_id or 0,
        e.amount,
        e.description,
        e.index,
    )


def reconstruct(
    opening_balance: Amount = 0,
    invoices: Iterable[Invoice] = (),
    payments: Iterable[Payment] = (),
    *,
    opening_date: Optional[date] = None,
) -> Statement:
    """
    Build a customer's account statement.

    The opening balance becomes the first row when it is nonzero, or when the
    customer has no activity at all (so the statement is never empty).
    Zero-amount invoices and payments do not move the balance and are left out,
    so a fully discounted invoice does not appear on the statement (the
    statement page previously listed every invoice, including zero totals).

    Raises:
        InvalidAmount: negative invoice/payment amount, or any non-finite or
            non-numeric amount.
    """
    opening = to_amount(opening_balance, field="opening_balance", allow_negative=True)
    events = sorted(
        (e for e in _collect_events(invoices, payments) if e.amount != 0),
        key=_sort_key,
    )

    entries: List[LedgerEntry] = []
    balance = opening

    if opening != 0 or not events:
        entries.append(
            LedgerEntry(
                date=opening_date or (events[0].date if events else None),
                type=OPENING_BALANCE,
                description="Opening Balance",
                debit=opening if opening > 0 else ZERO,
                credit=-opening if opening < 0 else ZERO,
                balance=balance,
            )
        )

    for e in events:
        if e.type == INVOICE:
            debit, credit = e.amount, ZERO
        else:
            debit, credit = ZERO, e.amount
        balance = balance + debit - credit
        entries.append(
            LedgerEntry(
                date=e.date,
                type=e.type,
                description=e.description,
                debit=debit,
                credit=credit,
                balance=balance,
                reference_id=e.reference_id,
            )
        )

    return Statement(entries=tuple(entries), balance=balance)


class LedgerIntegrityError(ValueError):
    pass


def check_ledger_integrity(
    entries: Sequence[LedgerEntry],
    *,
    opening_balance: Amount = 0,
) -> dict:
    """
    Side-effect-free statement integrity check.

    Invariants:
    - An opening row, if present, is first and carries the opening balance.
    - Every other row is one-sided (debit xor credit) with non-negative amounts.
    - Running balances are continuous.
    - Rows are in date order.
    - Closing balance == opening + invoices - payments.
    """
    rows = list(entries)
    opening = to_amount(opening_balance, field="opening_balance", allow_negative=True)

    invoiced = ZERO
    paid = ZERO
    prev_date: Optional[date] = None
    last_balance = opening
    if rows and rows[0].type == OPENING_BALANCE:
        last_balance = ZERO

    for idx, row in enumerate(rows):
        if not (row.debit.is_finite() and row.credit.is_finite() and row.balance.is_finite()):
            raise LedgerIntegrityError(f"Invariant violation: non-finite amount at row {idx}.")
        if row.debit < 0 or row.credit < 0:
            raise LedgerIntegrityError(f"Invariant violation: negative debit/credit at row {idx}.")
        if row.debit != 0 and row.credit != 0:
            raise LedgerIntegrityError(f"Invariant violation: two-sided entry at row {idx}.")

        if row.type == OPENING_BALANCE:
            if idx != 0:
                raise LedgerIntegrityError(
                    f"Invariant violation: opening balance row at position {idx}."
                )
            if row.balance != opening:
                raise LedgerIntegrityError(
                    "Invariant violation: opening row does not carry the opening balance."
                )
        else:
            if row.debit == 0 and row.credit == 0:
                raise LedgerIntegrityError(f"Invariant violation: empty entry at row {idx}.")
            if row.type == INVOICE and row.credit != 0:
                raise LedgerIntegrityError(f"Invariant violation: invoice credited at row {idx}.")
            if row.type == PAYMENT and row.debit != 0:
                raise LedgerIntegrityError(f"Invariant violation: payment debited at row {idx}.")
            if row.date is None:
                raise LedgerIntegrityError(f"Invariant violation: undated entry at row {idx}.")
            if prev_date is not None and row.date < prev_date:
                raise LedgerIntegrityError(
                    "Invariant violation: ledger rows are not in date order."
                )
            prev_date = row.date
            invoiced += row.debit
            paid += row.credit

        expected = last_balance + row.debit - row.credit
        if row.balance != expected:
            raise LedgerIntegrityError(
                f"Invariant violation: running balance mismatch at row {idx}."
            )
        last_balance = row.balance

    closing = opening + invoiced - paid
    if last_balance != closing:
        raise LedgerIntegrityError(
            "Invariant violation: closing balance does not reconcile to opening + invoices - payments."
        )

    return {
        "rows": len(rows),
        "invoiced_total": invoiced,
        "paid_total": paid,
        "closing_balance": closing,
    }
