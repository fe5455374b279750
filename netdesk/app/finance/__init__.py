from .ledger import (
    Invoice,
    LedgerEntry,
    LedgerIntegrityError,
    Payment,
    Statement,
    check_ledger_integrity,
    reconstruct,
)
from .money import InvalidAmount, parse_amount, to_amount
from .words import amount_to_words

__all__ = [
    "InvalidAmount",
    "Invoice",
    "LedgerEntry",
    "LedgerIntegrityError",
    "Payment",
    "Statement",
    "amount_to_words",
    "check_ledger_integrity",
    "parse_amount",
    "reconstruct",
    "to_amount",
]
