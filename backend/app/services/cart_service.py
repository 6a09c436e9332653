from sqlalchemy.orm import Session

from app.domain.cart import Cart, CartLine
from app.domain.errors import CatalogException
from app.domain.session import SessionContext
from app.repositories.medicine_repo import MedicineRepository


class CartService:
    def __init__(self, db: Session):
        self.db = db
        self.medicine_repo = MedicineRepository(db)

    def add_item(self, ctx: SessionContext, medicine_id: str) -> CartLine:
        medicine = self.medicine_repo.get(medicine_id)
        if not medicine:
            raise CatalogException(f"Medicine not found: {medicine_id}")
        # stock is informational, nothing is reserved here
        return ctx.cart.add(medicine)

    def update_line(self, ctx: SessionContext, medicine_id: str, qty: int) -> Cart:
        ctx.cart.set_quantity(medicine_id, qty)
        return ctx.cart
