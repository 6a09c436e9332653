from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel

from app.domain import lifecycle
from app.domain.enums import MedicineCategory, OrderStatus, UserRole
from app.domain.orders import Order


class TransitionIn(BaseModel):
    status: OrderStatus


class OrderLineOut(BaseModel):
    medicine_id: str
    name: str
    brand: str
    category: MedicineCategory
    requires_prescription: bool
    unit_price: Decimal
    quantity: int
    subtotal: Decimal


class OrderOut(BaseModel):
    id: str
    user_id: str
    items: List[OrderLineOut]
    total_amount: Decimal
    status: OrderStatus
    status_label: str
    prescription_url: Optional[str] = None
    timestamp: datetime
    next_statuses: List[OrderStatus]

    @classmethod
    def from_domain(cls, o: Order, role: Optional[UserRole] = None) -> "OrderOut":
        """`next_statuses` lists only the moves `role` may make (none without a role)."""
        return cls(
            id=o.id,
            user_id=o.user_id,
            items=[
                OrderLineOut(
                    medicine_id=l.medicine_id,
                    name=l.name,
                    brand=l.brand,
                    category=l.category,
                    requires_prescription=l.requires_prescription,
                    unit_price=l.unit_price,
                    quantity=l.quantity,
                    subtotal=l.subtotal,
                )
                for l in o.lines
            ],
            total_amount=o.total_amount,
            status=o.status,
            status_label=o.status.label,
            prescription_url=o.prescription_url,
            timestamp=o.created_at,
            next_statuses=lifecycle.next_statuses(o.status, role) if role else [],
        )


class CheckoutOut(BaseModel):
    order: OrderOut
    message: str
    next_page: str
