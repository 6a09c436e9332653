from decimal import Decimal

from app.domain import projections
from app.domain.catalog import Medicine
from app.domain.enums import MedicineCategory, OrderStatus
from app.domain.orders import Order


def _order(total, status):
    return Order(id=total, user_id="u", lines=(), total_amount=Decimal(total), status=status)


def test_projections():
    orders = [_order("4.50", OrderStatus.APPROVED),
              _order("5.20", OrderStatus.PENDING_VERIFICATION),
              _order("25.00", OrderStatus.REJECTED)]
    # rejected orders still count towards sales
    assert projections.total_sales(orders) == Decimal("34.70")
    assert projections.pending_count(orders) == 1
    assert projections.total_sales([]) == Decimal("0")

    medicines = [Medicine(id=str(s), name="m", price=Decimal("1"), stock=s,
                          category=MedicineCategory.OTC) for s in (0, 9, 10, 50)]
    assert projections.low_stock_count(medicines) == 2
    assert projections.low_stock_count(medicines, threshold=11) == 3


def test_stats_endpoint(patient, pharmacist):
    patient.post("/api/cart/items", json={"medicine_id": "2"})
    rx_id = patient.post("/api/orders").json()["order"]["id"]
    patient.post("/api/cart/items", json={"medicine_id": "1"})
    patient.post("/api/orders")
    pharmacist.post(f"/api/orders/{rx_id}/status", json={"status": "REJECTED"})

    stats = pharmacist.get("/api/admin/stats").json()
    assert Decimal(str(stats["total_sales"])) == Decimal("6.70")
    assert stats["pending_count"] == 0
    # demo catalog: Vitamin D3 (8) and Insulin Pen (5)
    assert stats["low_stock_count"] == 2
    assert stats["order_count"] == 2


def test_stats_are_operator_only(patient, client):
    assert patient.get("/api/admin/stats").status_code == 403
    assert client.get("/api/admin/stats").status_code == 401
