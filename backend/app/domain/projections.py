from decimal import Decimal
from typing import Iterable

from app.domain.catalog import Medicine
from app.domain.enums import OrderStatus
from app.domain.orders import Order

LOW_STOCK_THRESHOLD = 10


def total_sales(orders: Iterable[Order]) -> Decimal:
    # every status counts, rejected orders included
    return sum((o.total_amount for o in orders), Decimal("0"))


def pending_count(orders: Iterable[Order]) -> int:
    return sum(1 for o in orders if o.status == OrderStatus.PENDING_VERIFICATION)


def low_stock_count(
    medicines: Iterable[Medicine], threshold: int = LOW_STOCK_THRESHOLD
) -> int:
    return sum(1 for m in medicines if m.stock < threshold)
