"""Domain contracts and shared types."""

from netdesk.app.domain.contracts import (  # noqa: F401
    AmountInWordsContract,
    CustomerLedgerContract,
    LedgerEntryContract,
    ReceiptContract,
)
