from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, Enum, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from app.db import Base
from app.domain.enums import MedicineCategory, OrderStatus


class OrderRow(Base):
    __tablename__ = "orders"
    pk = Column(Integer, primary_key=True, autoincrement=True)
    order_number = Column(String(32), unique=True, nullable=False, index=True)
    user_id = Column(String(64), nullable=False, index=True)
    status = Column(Enum(OrderStatus), nullable=False, index=True)
    total_cents = Column(Integer, nullable=False, default=0)
    prescription_url = Column(String(512), nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    lines = relationship(
        "OrderLineRow",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderLineRow.id",
    )


class OrderLineRow(Base):
    __tablename__ = "order_lines"
    id = Column(Integer, primary_key=True, autoincrement=True)
    order_pk = Column(Integer, ForeignKey("orders.pk"), nullable=False, index=True)
    # snapshot of the medicine at checkout, no FK so catalog deletes keep history
    medicine_id = Column(String(64), nullable=False)
    name = Column(String(256), nullable=False)
    brand = Column(String(128), nullable=False, default="")
    category = Column(Enum(MedicineCategory), nullable=False)
    requires_prescription = Column(Boolean, nullable=False, default=False)
    price_cents = Column(Integer, nullable=False)
    qty = Column(Integer, nullable=False)

    order = relationship("OrderRow", back_populates="lines")
