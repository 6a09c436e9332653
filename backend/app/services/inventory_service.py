from typing import List, Optional

from sqlalchemy.orm import Session

from app.domain.catalog import Medicine
from app.domain.enums import MedicineCategory
from app.domain.errors import AuthenticationRequired, CatalogException, TransitionNotAuthorized
from app.domain.session import Actor
from app.repositories.medicine_repo import MedicineRepository
from app.utils.logging import get_logger

log = get_logger("inventory")


def require_operator(actor: Optional[Actor]) -> Actor:
    if actor is None:
        raise AuthenticationRequired("Sign in required")
    if not actor.is_operator:
        raise TransitionNotAuthorized("Pharmacist only area")
    return actor


class InventoryService:
    """Catalog reads for everyone, writes for pharmacists and admins."""

    def __init__(self, db: Session):
        self.db = db
        self.repo = MedicineRepository(db)

    def browse(
        self, q: Optional[str] = None, category: Optional[MedicineCategory] = None
    ) -> List[Medicine]:
        return self.repo.list(q=q, category=category)

    def get(self, medicine_id: str) -> Medicine:
        m = self.repo.get(medicine_id)
        if m is None:
            raise CatalogException(f"Medicine not found: {medicine_id}")
        return m

    def create(self, actor: Optional[Actor], medicine: Medicine) -> Medicine:
        require_operator(actor)
        m = self.repo.create(medicine)
        self.db.commit()
        log.info(f"medicine {m.id} created by {actor.id}")
        return m

    def update(self, actor: Optional[Actor], medicine: Medicine) -> Medicine:
        require_operator(actor)
        m = self.repo.update(medicine)
        self.db.commit()
        log.info(f"medicine {m.id} updated by {actor.id}: price={m.price} stock={m.stock}")
        return m

    def delete(self, actor: Optional[Actor], medicine_id: str) -> None:
        require_operator(actor)
        if not self.repo.delete(medicine_id):
            raise CatalogException(f"Medicine not found: {medicine_id}")
        self.db.commit()
        log.info(f"medicine {medicine_id} deleted by {actor.id}")
