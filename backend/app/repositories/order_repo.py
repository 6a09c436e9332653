from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy.orm import Session

from app.domain.enums import OrderStatus
from app.domain.orders import Order, OrderLine
from app.models.order import OrderLineRow, OrderRow
from app.utils.money import from_cents, to_cents


def to_domain(row: OrderRow) -> Order:
    return Order(
        id=row.order_number,
        user_id=row.user_id,
        lines=tuple(
            OrderLine(
                medicine_id=l.medicine_id,
                name=l.name,
                brand=l.brand or "",
                category=l.category,
                requires_prescription=bool(l.requires_prescription),
                unit_price=from_cents(l.price_cents),
                quantity=l.qty,
            )
            for l in row.lines
        ),
        total_amount=from_cents(row.total_cents),
        status=row.status,
        prescription_url=row.prescription_url,
        created_at=_utc(row.created_at),
    )


def _utc(ts: datetime) -> datetime:
    # sqlite hands back naive datetimes
    return ts.replace(tzinfo=timezone.utc) if ts.tzinfo is None else ts


class OrderRepository:
    """
    SQL-backed order collection. Exposes the same `contains`/`add` contract
    the checkout expects from domain.orders.OrderBook, listing newest-first.
    """

    def __init__(self, db: Session):
        self.db = db

    def _row(self, order_id: str) -> Optional[OrderRow]:
        return (
            self.db.query(OrderRow).filter(OrderRow.order_number == order_id).first()
        )

    def contains(self, order_id: str) -> bool:
        return self._row(order_id) is not None

    def add(self, order: Order) -> Order:
        row = OrderRow(
            order_number=order.id,
            user_id=order.user_id,
            status=order.status,
            total_cents=to_cents(order.total_amount),
            prescription_url=order.prescription_url,
            created_at=order.created_at,
        )
        for l in order.lines:
            row.lines.append(
                OrderLineRow(
                    medicine_id=l.medicine_id,
                    name=l.name,
                    brand=l.brand,
                    category=l.category,
                    requires_prescription=l.requires_prescription,
                    price_cents=to_cents(l.unit_price),
                    qty=l.quantity,
                )
            )
        self.db.add(row)
        self.db.flush()
        return order

    def get(self, order_id: str) -> Optional[Order]:
        row = self._row(order_id)
        return to_domain(row) if row else None

    def get_for_update(self, order_id: str) -> Optional[OrderRow]:
        return (
            self.db.query(OrderRow)
            .filter(OrderRow.order_number == order_id)
            .with_for_update()
            .first()
        )

    def list(self) -> List[Order]:
        rows = self.db.query(OrderRow).order_by(OrderRow.pk.desc()).all()
        return [to_domain(r) for r in rows]

    def list_for_user(self, user_id: str) -> List[Order]:
        rows = (
            self.db.query(OrderRow)
            .filter(OrderRow.user_id == user_id)
            .order_by(OrderRow.pk.desc())
            .all()
        )
        return [to_domain(r) for r in rows]

    def list_pending_since(self, cutoff: datetime) -> List[Order]:
        rows = (
            self.db.query(OrderRow)
            .filter(
                OrderRow.status == OrderStatus.PENDING_VERIFICATION,
                OrderRow.created_at <= cutoff,
            )
            .order_by(OrderRow.pk)
            .all()
        )
        return [to_domain(r) for r in rows]
