from sqlalchemy import Boolean, Column, Enum, Integer, String, Text

from app.db import Base
from app.domain.enums import MedicineCategory


class MedicineRow(Base):
    __tablename__ = "medicines"

    id = Column(String(64), primary_key=True, index=True)
    name = Column(String(256), nullable=False)
    brand = Column(String(128), nullable=False, default="")
    description = Column(Text, nullable=True)
    price_cents = Column(Integer, nullable=False, default=0)
    original_price_cents = Column(Integer, nullable=True)
    image_url = Column(String(512), nullable=True)
    stock = Column(Integer, default=0, nullable=False)
    requires_prescription = Column(Boolean, default=False, nullable=False)
    category = Column(Enum(MedicineCategory), nullable=False, default=MedicineCategory.OTC)

    def __repr__(self):
        return f"<Medicine id={self.id} name={self.name}>"
