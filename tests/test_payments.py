from __future__ import annotations

from datetime import date

import pytest

from app.core.errors import InvalidRequest, InvalidTransition, ResourceNotFound
from app.services import order_service, payment_service


@pytest.fixture()
def order(db):
    return order_service.create_order(db, client_name="Ayu", event_date=date(2025, 6, 14), total_price=1000)


def test_pending_payment_does_not_count_until_verified(db, order):
    payment = payment_service.create_payment(db, order.id, amount=400, payment_date=date(2025, 5, 1))
    assert payment.status == "pending"
    assert payment.payment_type == "dp"
    db.refresh(order)
    assert (order.paid_amount, order.payment_status) == (0, "unpaid")

    payment = payment_service.verify_payment(db, payment.id)
    assert payment.status == "verified"
    assert payment.verified_at is not None
    db.refresh(order)
    assert (order.paid_amount, order.payment_status) == (400, "partial")

    second = payment_service.create_payment(db, order.id, amount=600, payment_type="full", payment_method="cash")
    payment_service.verify_payment(db, second.id)
    db.refresh(order)
    assert (order.paid_amount, order.payment_status) == (1000, "paid")


def test_rejected_payment_never_counts(db, order):
    payment = payment_service.create_payment(db, order.id, amount=1000)
    payment = payment_service.reject_payment(db, payment.id, "Transfer not received")

    assert payment.status == "rejected"
    assert payment.rejected_reason == "Transfer not received"
    db.refresh(order)
    assert order.paid_amount == 0

    with pytest.raises(InvalidTransition):
        payment_service.verify_payment(db, payment.id)


def test_verify_twice_is_rejected(db, order):
    payment = payment_service.create_payment(db, order.id, amount=250)
    payment_service.verify_payment(db, payment.id)

    with pytest.raises(InvalidTransition) as exc:
        payment_service.verify_payment(db, payment.id)
    assert "already verified" in exc.value.message
    with pytest.raises(InvalidTransition):
        payment_service.reject_payment(db, payment.id)

    db.refresh(order)
    assert order.paid_amount == 250


def test_deleting_verified_payment_reduces_paid_amount(db, order):
    kept = payment_service.create_payment(db, order.id, amount=300)
    dropped = payment_service.create_payment(db, order.id, amount=700)
    payment_service.verify_payment(db, kept.id)
    payment_service.verify_payment(db, dropped.id)
    db.refresh(order)
    assert order.payment_status == "paid"

    payment_service.delete_payment(db, dropped.id)
    db.refresh(order)
    assert (order.paid_amount, order.payment_status) == (300, "partial")
    with pytest.raises(ResourceNotFound):
        payment_service.get_payment(db, dropped.id)


def test_payment_rules(db, order):
    with pytest.raises(InvalidRequest):
        payment_service.create_payment(db, order.id, amount=0)
    with pytest.raises(ResourceNotFound):
        payment_service.create_payment(db, "missing", amount=100)

    order_service.update_order(db, order.id, {"status": "cancelled"})
    with pytest.raises(InvalidRequest):
        payment_service.create_payment(db, order.id, amount=100)


def test_payment_endpoints(client):
    order = client.post("/api/orders", json={"client_name": "Ayu", "event_date": "2025-06-14", "total_price": 2000}).json()

    res = client.post(f"/api/orders/{order['id']}/payments", json={"amount": 500, "payment_method": "transfer", "proof_url": "https://files.example/proof.jpg"})
    assert res.status_code == 201
    payment = res.json()
    assert payment["status"] == "pending"
    assert client.get(f"/api/orders/{order['id']}").json()["paid_amount"] == 0

    res = client.post(f"/api/payments/{payment['id']}/verify")
    assert res.status_code == 200
    assert res.json()["status"] == "verified"
    assert client.get(f"/api/orders/{order['id']}").json()["payment_status"] == "partial"

    res = client.post(f"/api/payments/{payment['id']}/verify")
    assert res.status_code == 422
    assert res.json()["code"] == "invalid_transition"

    other = client.post(f"/api/orders/{order['id']}/payments", json={"amount": 1500}).json()
    assert [p["id"] for p in client.get("/api/payments", params={"status": "pending"}).json()] == [other["id"]]
    res = client.post(f"/api/payments/{other['id']}/reject", json={"reason": "Blurry proof"})
    assert res.json()["rejected_reason"] == "Blurry proof"

    assert len(client.get(f"/api/orders/{order['id']}/payments").json()) == 2
    assert client.post(f"/api/orders/{order['id']}/payments", json={"amount": -5}).status_code == 422
    assert client.post("/api/orders/nope/payments", json={"amount": 5}).status_code == 404
    assert client.get("/api/payments/nope").status_code == 404

    assert client.delete(f"/api/payments/{payment['id']}").json() == {"ok": True}
    assert client.get(f"/api/orders/{order['id']}").json()["paid_amount"] == 0

    actions = [a["action_type"] for a in client.get("/api/audit-logs").json()]
    assert {"PAYMENT_CREATE", "PAYMENT_VERIFY", "PAYMENT_REJECT", "PAYMENT_DELETE"} <= set(actions)
