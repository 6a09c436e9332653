from typing import Dict, Optional

from sqlalchemy.orm import Session

from app.config import settings
from app.domain import projections
from app.domain.session import Actor
from app.repositories.medicine_repo import MedicineRepository
from app.repositories.order_repo import OrderRepository
from app.services.inventory_service import require_operator


class DashboardService:
    def __init__(self, db: Session):
        self.db = db
        self.orders = OrderRepository(db)
        self.medicines = MedicineRepository(db)

    def stats(self, actor: Optional[Actor]) -> Dict:
        require_operator(actor)
        orders = self.orders.list()
        medicines = self.medicines.list()
        return {
            "total_sales": projections.total_sales(orders),
            "pending_count": projections.pending_count(orders),
            "low_stock_count": projections.low_stock_count(
                medicines, settings.LOW_STOCK_THRESHOLD
            ),
            "order_count": len(orders),
            "medicine_count": len(medicines),
        }
