from __future__ import annotations

from datetime import date, datetime

from netdesk.app.models import Customer, Invoice, OpeningBalance, Payment
from netdesk.app.services import ledger_service


def _invoice(db, customer_id: int, issue: date, total: int, created_at: datetime) -> Invoice:
    inv = Invoice(
        customer_id=customer_id,
        period_start=issue.replace(day=1),
        period_end=issue.replace(day=28),
        issue_date=issue,
        due_date=issue.replace(day=10),
        total_amount=total,
        created_at=created_at,
    )
    db.add(inv)
    db.flush()
    return inv


def _seed(db, *, opening: int | None = 500):
    customer = Customer(name="Bilal Ahmed", address="House 12, Street 4", contact="0300-1234567")
    db.add(customer)
    db.flush()

    if opening is not None:
        db.add(OpeningBalance(customer_id=customer.id, amount=opening, as_of_date=date(2024, 1, 1)))

    jan = _invoice(db, customer.id, date(2024, 1, 5), 1500, datetime(2024, 1, 5, 11, 0))
    feb = _invoice(db, customer.id, date(2024, 2, 5), 1500, datetime(2024, 2, 5, 11, 0))
    db.add(Payment(
        invoice_id=jan.id,
        customer_id=customer.id,
        amount=1000,
        method="cash",
        collected_by="Usman",
        received_at=datetime(2024, 1, 10, 16, 30),
    ))
    # Paid the same morning the invoice was raised, but before it was created.
    db.add(Payment(
        invoice_id=feb.id,
        customer_id=customer.id,
        amount=2000,
        method="bank",
        collected_by="Usman",
        received_at=datetime(2024, 2, 5, 9, 0),
    ))
    db.commit()
    return customer, jan, feb


def test_customer_ledger_endpoint_returns_statement(api_client, db_session):
    customer, jan, feb = _seed(db_session)

    resp = api_client.get(f"/api/customer-ledger/{customer.id}")

    assert resp.status_code == 200
    body = resp.json()
    assert body["customer_id"] == customer.id
    assert [e["type"] for e in body["entries"]] == [
        "opening_balance",
        "invoice",
        "payment",
        "payment",
        "invoice",
    ]
    assert [e["balance"] for e in body["entries"]] == [500.0, 2000.0, 1000.0, -1000.0, 500.0]
    assert body["entries"][0]["date"] == "2024-01-01"
    assert body["entries"][0]["reference_id"] is None
    assert body["entries"][1]["description"] == f"Invoice #{jan.id} - 2024-01-01 to 2024-01-28"
    assert body["entries"][3]["description"] == "Payment - bank (Usman)"
    assert body["entries"][4]["reference_id"] == feb.id
    assert body["balance"] == 500.0
    assert body["total_debit"] == 3500.0
    assert body["total_credit"] == 3000.0


def test_customer_without_activity_gets_one_row(api_client, db_session):
    customer = Customer(name="New Connection")
    db_session.add(customer)
    db_session.commit()

    resp = api_client.get(f"/api/customer-ledger/{customer.id}")

    assert resp.status_code == 200
    body = resp.json()
    assert len(body["entries"]) == 1
    assert body["entries"][0]["type"] == "opening_balance"
    assert body["entries"][0]["date"] is None
    assert body["balance"] == 0.0


def test_customer_ledger_missing_customer_is_404(api_client, db_session):
    resp = api_client.get("/api/customer-ledger/9999")

    assert resp.status_code == 404
    assert resp.json()["detail"] == "customer not found"


def test_ledger_service_ignores_other_customers(db_session):
    customer, _, _ = _seed(db_session, opening=None)
    other, _, _ = _seed(db_session, opening=-200)

    statement = ledger_service.customer_statement(db_session, customer.id)
    other_statement = ledger_service.customer_statement(db_session, other.id)

    assert statement.entries[0].type == "invoice"
    assert len(statement.entries) == 4
    assert statement.balance == 0
    assert other_statement.entries[0].credit == 200
    assert other_statement.balance == -200


def test_amount_in_words_endpoint(api_client):
    resp = api_client.get("/api/amount-in-words", params={"amount": "250000"})

    assert resp.status_code == 200
    assert resp.json() == {"amount": 250000.0, "words": "TWO LAKH FIFTY THOUSAND RUPEES ONLY"}


def test_amount_in_words_endpoint_truncates_paise(api_client):
    resp = api_client.get("/api/amount-in-words", params={"amount": "1999.99"})

    assert resp.status_code == 200
    assert resp.json()["words"] == "ONE THOUSAND NINE HUNDRED NINETY NINE RUPEES ONLY"


def test_amount_in_words_endpoint_rejects_negative_amount(api_client):
    resp = api_client.get("/api/amount-in-words", params={"amount": "-5"})

    assert resp.status_code == 422
    body = resp.json()
    assert body["error_code"] == "ERR_INVALID_AMOUNT"
    assert body["details"] == {"field": "amount", "reason": "must not be negative"}


def test_amount_in_words_endpoint_rejects_non_numeric_amount(api_client):
    resp = api_client.get("/api/amount-in-words", params={"amount": "lots"})

    assert resp.status_code == 422
    body = resp.json()
    assert body["error_code"] == "ERR_INVALID_AMOUNT"
    assert body["details"] == {"field": "amount", "reason": "not a number"}


def test_amount_in_words_endpoint_rejects_nan(api_client):
    resp = api_client.get("/api/amount-in-words", params={"amount": "NaN"})

    assert resp.status_code == 422
    body = resp.json()
    assert body["error_code"] == "ERR_INVALID_AMOUNT"
    assert body["details"] == {"field": "amount", "reason": "not finite"}


def test_amount_in_words_endpoint_rejects_amounts_too_large_to_spell(api_client):
    resp = api_client.get("/api/amount-in-words", params={"amount": "1e400"})

    assert resp.status_code == 422
    body = resp.json()
    assert body["error_code"] == "ERR_INVALID_AMOUNT"
    assert body["details"]["reason"] == "above 99999999999999"
