from decimal import Decimal
from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, model_validator

from app.domain.catalog import Medicine
from app.domain.enums import MedicineCategory


class MedicineIn(BaseModel):
    id: Optional[str] = None
    name: str = Field(..., min_length=1)
    brand: str = ""
    price: Decimal = Field(..., ge=0, decimal_places=2)
    original_price: Optional[Decimal] = Field(None, ge=0, decimal_places=2)
    stock: int = Field(0, ge=0)
    requires_prescription: bool = False
    category: MedicineCategory = MedicineCategory.OTC
    description: str = ""
    image_url: str = ""

    @model_validator(mode="after")
    def _discount_not_below_price(self):
        if self.original_price is not None and self.original_price < self.price:
            raise ValueError("original_price must be >= price")
        return self

    def to_domain(self, medicine_id: Optional[str] = None) -> Medicine:
        return Medicine(
            id=medicine_id or self.id or uuid4().hex[:9],
            name=self.name,
            brand=self.brand,
            price=self.price,
            original_price=self.original_price,
            stock=self.stock,
            requires_prescription=self.requires_prescription,
            category=self.category,
            description=self.description,
            image_url=self.image_url,
        )


class MedicineOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    name: str
    brand: str
    price: Decimal
    original_price: Optional[Decimal] = None
    stock: int
    requires_prescription: bool
    category: MedicineCategory
    category_label: str
    description: str
    image_url: str
    low_stock: bool

    @classmethod
    def from_domain(cls, m: Medicine, low_stock_threshold: int) -> "MedicineOut":
        return cls(
            id=m.id,
            name=m.name,
            brand=m.brand,
            price=m.price,
            original_price=m.original_price,
            stock=m.stock,
            requires_prescription=m.requires_prescription,
            category=m.category,
            category_label=m.category.label,
            description=m.description,
            image_url=m.image_url,
            low_stock=m.stock < low_stock_threshold,
        )
