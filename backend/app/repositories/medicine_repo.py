from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.domain.catalog import Medicine
from app.domain.enums import MedicineCategory
from app.domain.errors import CatalogException
from app.models.medicine import MedicineRow
from app.utils.money import from_cents, to_cents


def to_domain(row: MedicineRow) -> Medicine:
    return Medicine(
        id=row.id,
        name=row.name,
        brand=row.brand or "",
        price=from_cents(row.price_cents),
        original_price=from_cents(row.original_price_cents),
        stock=row.stock,
        requires_prescription=bool(row.requires_prescription),
        category=row.category,
        description=row.description or "",
        image_url=row.image_url or "",
    )


def _apply(row: MedicineRow, m: Medicine) -> MedicineRow:
    row.name = m.name
    row.brand = m.brand
    row.price_cents = to_cents(m.price)
    row.original_price_cents = (
        to_cents(m.original_price) if m.original_price is not None else None
    )
    row.stock = m.stock
    row.requires_prescription = m.requires_prescription
    row.category = m.category
    row.description = m.description
    row.image_url = m.image_url
    return row


class MedicineRepository:
    """SQL-backed catalog with the same contract as domain.catalog.Catalog."""

    def __init__(self, db: Session):
        self.db = db

    def get(self, medicine_id: str) -> Optional[Medicine]:
        row = self.db.get(MedicineRow, medicine_id)
        return to_domain(row) if row else None

    def list(
        self, q: Optional[str] = None, category: Optional[MedicineCategory] = None
    ) -> List[Medicine]:
        query = self.db.query(MedicineRow)
        if category is not None:
            query = query.filter(MedicineRow.category == category)
        if q:
            like = f"%{q}%"
            query = query.filter(
                or_(MedicineRow.name.ilike(like), MedicineRow.brand.ilike(like))
            )
        return [to_domain(r) for r in query.order_by(MedicineRow.name).all()]

    def create(self, medicine: Medicine) -> Medicine:
        if self.db.get(MedicineRow, medicine.id) is not None:
            raise CatalogException(f"Medicine already exists: {medicine.id}")
        row = _apply(MedicineRow(id=medicine.id), medicine)
        self.db.add(row)
        self.db.flush()
        return to_domain(row)

    def update(self, medicine: Medicine) -> Medicine:
        row = self.db.get(MedicineRow, medicine.id)
        if row is None:
            raise CatalogException(f"Medicine not found: {medicine.id}")
        _apply(row, medicine)
        self.db.flush()
        return to_domain(row)

    def delete(self, medicine_id: str) -> bool:
        row = self.db.get(MedicineRow, medicine_id)
        if row is None:
            return False
        self.db.delete(row)
        self.db.flush()
        return True
