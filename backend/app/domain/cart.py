from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, List

from app.domain.catalog import Medicine


@dataclass(frozen=True)
class CartLine:
    medicine: Medicine
    quantity: int

    def __post_init__(self):
        if self.quantity < 1:
            raise ValueError("cart line quantity must be >= 1")

    @property
    def subtotal(self) -> Decimal:
        return self.medicine.price * self.quantity


class Cart:
    """
    Lines keyed by medicine id, each medicine at most once.

    Totals are computed on read. A line never holds a quantity below 1:
    setting a quantity of zero or less removes the line.
    """

    def __init__(self):
        self._lines: Dict[str, CartLine] = {}

    def add(self, medicine: Medicine) -> CartLine:
        existing = self._lines.get(medicine.id)
        if existing:
            line = CartLine(existing.medicine, existing.quantity + 1)
        else:
            line = CartLine(medicine, 1)
        self._lines[medicine.id] = line
        return line

    def set_quantity(self, medicine_id: str, qty: int) -> None:
        existing = self._lines.get(medicine_id)
        if existing is None:
            # stale reference from the client, nothing to do
            return
        if qty <= 0:
            del self._lines[medicine_id]
        else:
            self._lines[medicine_id] = CartLine(existing.medicine, qty)

    def clear(self) -> None:
        self._lines.clear()

    @property
    def lines(self) -> List[CartLine]:
        return list(self._lines.values())

    def get(self, medicine_id: str):
        return self._lines.get(medicine_id)

    @property
    def total_quantity(self) -> int:
        return sum(l.quantity for l in self._lines.values())

    @property
    def total_amount(self) -> Decimal:
        return sum((l.subtotal for l in self._lines.values()), Decimal("0"))

    @property
    def requires_prescription(self) -> bool:
        return any(l.medicine.requires_prescription for l in self._lines.values())

    def is_empty(self) -> bool:
        return not self._lines

    def __len__(self):
        return len(self._lines)
