from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import Dict, List, Optional, Tuple
from uuid import uuid4

from app.domain.cart import Cart, CartLine
from app.domain.enums import MedicineCategory, OrderStatus
from app.domain.errors import AuthenticationRequired
from app.domain.session import Actor

DEFAULT_PRESCRIPTION_URL = "mock_prescription.pdf"


@dataclass(frozen=True)
class OrderLine:
    medicine_id: str
    name: str
    brand: str
    category: MedicineCategory
    requires_prescription: bool
    unit_price: Decimal
    quantity: int

    @classmethod
    def from_cart_line(cls, line: CartLine) -> "OrderLine":
        m = line.medicine
        return cls(
            medicine_id=m.id,
            name=m.name,
            brand=m.brand,
            category=m.category,
            requires_prescription=m.requires_prescription,
            unit_price=m.price,
            quantity=line.quantity,
        )

    @property
    def subtotal(self) -> Decimal:
        return self.unit_price * self.quantity


@dataclass
class Order:
    id: str
    user_id: str
    lines: Tuple[OrderLine, ...]
    total_amount: Decimal
    status: OrderStatus
    prescription_url: Optional[str] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def requires_prescription(self) -> bool:
        return any(l.requires_prescription for l in self.lines)


class OrderBook:
    """In-memory order collection. Orders are kept newest-first."""

    def __init__(self):
        self._orders: List[Order] = []
        self._by_id: Dict[str, Order] = {}

    def add(self, order: Order) -> Order:
        self._orders.insert(0, order)
        self._by_id[order.id] = order
        return order

    def contains(self, order_id: str) -> bool:
        return order_id in self._by_id

    def get(self, order_id: str) -> Optional[Order]:
        return self._by_id.get(order_id)

    def list(self) -> List[Order]:
        return list(self._orders)

    def __len__(self):
        return len(self._orders)


def new_order_id(orders, length: int = 8) -> str:
    while True:
        candidate = uuid4().hex[:length].upper()
        if not orders.contains(candidate):
            return candidate


def build_order(
    cart: Cart,
    actor: Actor,
    order_id: str,
    prescription_url: str = DEFAULT_PRESCRIPTION_URL,
    now: Optional[datetime] = None,
) -> Order:
    lines = tuple(OrderLine.from_cart_line(l) for l in cart.lines)
    requires_rx = any(l.requires_prescription for l in lines)
    return Order(
        id=order_id,
        user_id=actor.id,
        lines=lines,
        total_amount=sum((l.subtotal for l in lines), Decimal("0")),
        status=(
            OrderStatus.PENDING_VERIFICATION if requires_rx else OrderStatus.APPROVED
        ),
        prescription_url=prescription_url if requires_rx else None,
        created_at=now or datetime.now(timezone.utc),
    )


def checkout(
    cart: Cart,
    actor: Optional[Actor],
    orders,
    prescription_url: str = DEFAULT_PRESCRIPTION_URL,
    id_length: int = 8,
    clear_cart: bool = True,
) -> Optional[Order]:
    """
    Turn the cart into an order and record it.

    `orders` is any collection exposing `contains(order_id)` and `add(order)`
    (OrderBook, or the SQL-backed OrderRepository).

    Raises AuthenticationRequired without touching the cart when no actor is
    signed in. An empty cart returns None and records nothing. On success the
    order is added to `orders` and, unless `clear_cart` is False, the cart
    is cleared. Callers that commit the order elsewhere pass False and clear
    the cart once the commit has gone through.
    """
    if actor is None:
        raise AuthenticationRequired("Sign in to place an order")
    if cart.is_empty():
        return None
    order = build_order(
        cart,
        actor,
        new_order_id(orders, id_length),
        prescription_url=prescription_url,
    )
    orders.add(order)
    if clear_cart:
        cart.clear()
    return order
