from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from app.domain.enums import MedicineCategory
from app.domain.errors import CatalogException

CENT = Decimal("0.01")


@dataclass(frozen=True)
class Medicine:
    """
    Immutable catalog record. Edits produce a new instance, so any cart line
    or order line holding an older instance keeps its snapshot.
    """

    id: str
    name: str
    price: Decimal
    stock: int
    category: MedicineCategory
    brand: str = ""
    original_price: Optional[Decimal] = None
    requires_prescription: bool = False
    description: str = ""
    image_url: str = ""

    def __post_init__(self):
        if self.price < 0:
            raise ValueError("price must not be negative")
        if self.stock < 0:
            raise ValueError("stock must not be negative")
        if self.original_price is not None and self.original_price < self.price:
            raise ValueError("original_price must be >= price")
        for name in ("price", "original_price"):
            value = getattr(self, name)
            if value is not None and value != value.quantize(CENT):
                raise ValueError(f"{name} must have at most 2 decimal places")

    def with_changes(self, **changes) -> "Medicine":
        return replace(self, **changes)


def matches(medicine: Medicine, q: Optional[str] = None, category=None) -> bool:
    if category is not None and medicine.category != category:
        return False
    if q:
        needle = q.lower()
        return needle in medicine.name.lower() or needle in medicine.brand.lower()
    return True


class Catalog:
    """In-memory catalog keyed by medicine id, in insertion order."""

    def __init__(self, medicines: Iterable[Medicine] = ()):
        self._items: Dict[str, Medicine] = {}
        for m in medicines:
            self.create(m)

    def get(self, medicine_id: str) -> Optional[Medicine]:
        return self._items.get(medicine_id)

    def list(self, q: Optional[str] = None, category=None) -> List[Medicine]:
        return [m for m in self._items.values() if matches(m, q, category)]

    def create(self, medicine: Medicine) -> Medicine:
        if medicine.id in self._items:
            raise CatalogException(f"Medicine already exists: {medicine.id}")
        self._items[medicine.id] = medicine
        return medicine

    def update(self, medicine: Medicine) -> Medicine:
        if medicine.id not in self._items:
            raise CatalogException(f"Medicine not found: {medicine.id}")
        self._items[medicine.id] = medicine
        return medicine

    def delete(self, medicine_id: str) -> bool:
        return self._items.pop(medicine_id, None) is not None

    def __len__(self):
        return len(self._items)
