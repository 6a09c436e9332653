from decimal import Decimal

import pytest

from app.config import settings
from app.db import SessionLocal
from app.domain import lifecycle
from app.domain.cart import Cart
from app.domain.catalog import Medicine
from app.domain.enums import MedicineCategory, OrderStatus, UserRole
from app.domain.errors import IllegalTransition, TransitionNotAuthorized
from app.domain.orders import OrderBook, checkout
from app.domain.session import Actor
from app.services.order_service import OrderService

RX = Medicine(id="2", name="Atorvastatin 10mg", price=Decimal("5.20"), stock=45,
              category=MedicineCategory.PRESCRIPTION, requires_prescription=True)
PATIENT = Actor(id="p", name="pat", role=UserRole.PATIENT)
PHARMACIST = Actor(id="rx", name="phil", role=UserRole.PHARMACIST)
ADMIN = Actor(id="ad", name="ada", role=UserRole.ADMIN)


def _pending_order():
    cart = Cart()
    cart.add(RX)
    return checkout(cart, PATIENT, OrderBook())


def test_capability_table():
    P, A, R, K = (OrderStatus.PENDING_VERIFICATION, OrderStatus.APPROVED,
                  OrderStatus.REJECTED, OrderStatus.PACKED)
    for role in (UserRole.PHARMACIST, UserRole.ADMIN):
        assert lifecycle.can_transition(role, P, A)
        assert lifecycle.can_transition(role, P, R)
        assert lifecycle.can_transition(role, A, K)
        assert not lifecycle.can_transition(role, P, K)
        assert not lifecycle.can_transition(role, K, R)
    assert not lifecycle.can_transition(UserRole.PATIENT, P, A)
    assert not lifecycle.can_transition(None, P, A)


def test_terminal_states_have_no_exits():
    for state in lifecycle.TERMINAL_STATES:
        assert lifecycle.next_statuses(state) == []
        for target in OrderStatus:
            assert not lifecycle.is_legal(state, target)


def test_pending_to_packed_is_illegal_and_leaves_order():
    order = _pending_order()
    with pytest.raises(IllegalTransition) as exc:
        lifecycle.transition(order, OrderStatus.PACKED, PHARMACIST)
    assert exc.value.from_status == OrderStatus.PENDING_VERIFICATION
    assert exc.value.to_status == OrderStatus.PACKED
    assert order.status == OrderStatus.PENDING_VERIFICATION


def test_patient_cannot_approve():
    order = _pending_order()
    with pytest.raises(TransitionNotAuthorized):
        lifecycle.transition(order, OrderStatus.APPROVED, PATIENT)
    assert order.status == OrderStatus.PENDING_VERIFICATION


def test_full_path_then_reject_after_packed_fails():
    order = _pending_order()
    lifecycle.transition(order, OrderStatus.APPROVED, PHARMACIST)
    lifecycle.transition(order, OrderStatus.PACKED, ADMIN)
    assert order.status == OrderStatus.PACKED
    with pytest.raises(IllegalTransition):
        lifecycle.transition(order, OrderStatus.REJECTED, PHARMACIST)
    assert order.status == OrderStatus.PACKED


def test_every_status_has_a_label():
    for status in OrderStatus:
        assert status.label
    for category in MedicineCategory:
        assert category.label


def test_api_prescription_scenario(patient, pharmacist):
    patient.post("/api/cart/items", json={"medicine_id": "2"})
    order = patient.post("/api/orders").json()["order"]
    assert order["status"] == "PENDING_VERIFICATION"
    assert Decimal(str(order["total_amount"])) == Decimal("5.20")
    assert order["prescription_url"]
    url = f"/api/orders/{order['id']}/status"

    r = pharmacist.post(url, json={"status": "PACKED"})
    assert r.status_code == 409
    assert r.json()["detail"]["from"] == "PENDING_VERIFICATION"
    assert pharmacist.get(f"/api/orders/{order['id']}").json()["status"] == "PENDING_VERIFICATION"

    r = pharmacist.post(url, json={"status": "APPROVED"})
    assert r.status_code == 200
    assert r.json()["status"] == "APPROVED"

    r = pharmacist.post(url, json={"status": "PACKED"})
    assert r.status_code == 200
    assert r.json()["status"] == "PACKED"

    r = pharmacist.post(url, json={"status": "REJECTED"})
    assert r.status_code == 409
    assert pharmacist.get(f"/api/orders/{order['id']}").json()["status"] == "PACKED"


def test_api_patient_transition_is_forbidden(patient):
    patient.post("/api/cart/items", json={"medicine_id": "2"})
    order_id = patient.post("/api/orders").json()["order"]["id"]
    r = patient.post(f"/api/orders/{order_id}/status", json={"status": "APPROVED"})
    assert r.status_code == 403
    assert patient.get(f"/api/orders/{order_id}").json()["status"] == "PENDING_VERIFICATION"


def test_api_reject_prescription_order(patient, pharmacist):
    patient.post("/api/cart/items", json={"medicine_id": "4"})
    order_id = patient.post("/api/orders").json()["order"]["id"]
    r = pharmacist.post(f"/api/orders/{order_id}/status", json={"status": "REJECTED"})
    assert r.status_code == 200
    assert r.json()["next_statuses"] == []
    r = pharmacist.post(f"/api/orders/{order_id}/status", json={"status": "APPROVED"})
    assert r.status_code == 409


def test_api_transition_unknown_order(pharmacist):
    r = pharmacist.post("/api/orders/NOPE/status", json={"status": "APPROVED"})
    assert r.status_code == 404


def test_api_transition_unknown_status(pharmacist):
    r = pharmacist.post("/api/orders/NOPE/status", json={"status": "LOST"})
    assert r.status_code == 422


def test_api_next_statuses_follow_the_caller_role(patient, pharmacist):
    patient.post("/api/cart/items", json={"medicine_id": "2"})
    order = patient.post("/api/orders").json()["order"]
    assert order["next_statuses"] == []
    r = pharmacist.get(f"/api/orders/{order['id']}")
    assert r.json()["next_statuses"] == ["APPROVED", "REJECTED"]
    assert patient.get(f"/api/orders/{order['id']}").json()["next_statuses"] == []


def test_next_statuses_filtered_by_role():
    P = OrderStatus.PENDING_VERIFICATION
    assert lifecycle.next_statuses(P, UserRole.PATIENT) == []
    assert lifecycle.next_statuses(P, UserRole.ADMIN) == lifecycle.next_statuses(P)


def test_api_transition_busy_order_is_503(patient, pharmacist, monkeypatch):
    patient.post("/api/cart/items", json={"medicine_id": "2"})
    order_id = patient.post("/api/orders").json()["order"]["id"]
    monkeypatch.setattr(settings, "ORDER_LOCK_TIMEOUT_SECONDS", 0)

    db = SessionLocal()
    try:
        held = OrderService(db)._lock_for(order_id)
        with held:
            r = pharmacist.post(f"/api/orders/{order_id}/status", json={"status": "APPROVED"})
            assert r.status_code == 503
    finally:
        db.close()

    assert pharmacist.get(f"/api/orders/{order_id}").json()["status"] == "PENDING_VERIFICATION"
    r = pharmacist.post(f"/api/orders/{order_id}/status", json={"status": "APPROVED"})
    assert r.status_code == 200
