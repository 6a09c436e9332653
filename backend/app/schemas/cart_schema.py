from decimal import Decimal
from typing import List

from pydantic import BaseModel

from app.domain.cart import Cart


class AddItemIn(BaseModel):
    medicine_id: str


class SetQuantityIn(BaseModel):
    quantity: int


class CartLineOut(BaseModel):
    medicine_id: str
    name: str
    unit_price: Decimal
    quantity: int
    subtotal: Decimal
    requires_prescription: bool


class CartOut(BaseModel):
    lines: List[CartLineOut]
    total_quantity: int
    total_amount: Decimal
    requires_prescription: bool

    @classmethod
    def from_domain(cls, cart: Cart) -> "CartOut":
        return cls(
            lines=[
                CartLineOut(
                    medicine_id=l.medicine.id,
                    name=l.medicine.name,
                    unit_price=l.medicine.price,
                    quantity=l.quantity,
                    subtotal=l.subtotal,
                    requires_prescription=l.medicine.requires_prescription,
                )
                for l in cart.lines
            ],
            total_quantity=cart.total_quantity,
            total_amount=cart.total_amount,
            requires_prescription=cart.requires_prescription,
        )
