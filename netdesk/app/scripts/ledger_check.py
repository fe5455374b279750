from __future__ import annotations

import argparse
import logging
from typing import List, Optional

from sqlalchemy import select

from netdesk.app.db import session_scope
from netdesk.app.finance.ledger import LedgerIntegrityError, check_ledger_integrity
from netdesk.app.models import Customer, OpeningBalance
from netdesk.app.services.ledger_service import customer_statement

logger = logging.getLogger(__name__)


def run_check(customer_ids: Optional[List[int]] = None) -> int:
    """
    Rebuild each customer's statement twice and verify it.

    Returns the number of customers whose statement failed a check.
    """
    failures = 0
    with session_scope() as db:
        ids = customer_ids or list(db.execute(select(Customer.id).order_by(Customer.id)).scalars())
        for customer_id in ids:
            if db.get(Customer, customer_id) is None:
                failures += 1
                print(f"customer {customer_id}: not found")
                continue

            ob = db.execute(
                select(OpeningBalance).where(OpeningBalance.customer_id == customer_id)
            ).scalars().first()
            opening = ob.amount if ob else 0

            first = customer_statement(db, customer_id)
            second = customer_statement(db, customer_id)
            if first != second:
                failures += 1
                print(f"customer {customer_id}: statement is not deterministic")
                continue

            try:
                summary = check_ledger_integrity(first.entries, opening_balance=opening)
            except LedgerIntegrityError as exc:
                failures += 1
                print(f"customer {customer_id}: {exc}")
                continue

            print(
                f"customer {customer_id}: {summary['rows']} rows, "
                f"closing balance {summary['closing_balance']}"
            )

    if failures:
        print(f"❌ Ledger check failed for {failures} customer(s)")
    else:
        print("✅ Ledger check passed")
    return failures


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Verify customer ledger statements.")
    parser.add_argument("customer_ids", nargs="*", type=int, help="Customer ids (default: all)")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.WARNING)
    raise SystemExit(1 if run_check(args.customer_ids) else 0)


if __name__ == "__main__":
    main()
