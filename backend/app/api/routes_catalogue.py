from fastapi import APIRouter, Depends, HTTPException, Query
from typing import Optional
from sqlalchemy.orm import Session
from app.config import settings
from app.db import get_db
from app.domain.enums import MedicineCategory
from app.domain.errors import CatalogException
from app.schemas.medicine_schema import MedicineOut
from app.services.inventory_service import InventoryService

router = APIRouter(tags=["catalogue"])

def _parse_category(category: Optional[str]) -> Optional[MedicineCategory]:
    if not category or category == "All":
        return None
    try:
        return MedicineCategory(category)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Unknown category: {category}")

@router.get("", summary="List medicines")
def list_medicines(
    q: Optional[str] = Query(None, description="search name or brand"),
    category: Optional[str] = Query(None, description="category or 'All'"),
    db: Session = Depends(get_db),
):
    svc = InventoryService(db)
    items = svc.browse(q=q, category=_parse_category(category))
    return {
        "items": [MedicineOut.from_domain(m, settings.LOW_STOCK_THRESHOLD) for m in items],
        "total": len(items),
    }

@router.get("/{medicine_id}", summary="Get medicine by id")
def get_medicine(medicine_id: str, db: Session = Depends(get_db)):
    svc = InventoryService(db)
    try:
        m = svc.get(medicine_id)
    except CatalogException:
        raise HTTPException(status_code=404, detail="Medicine not found")
    return MedicineOut.from_domain(m, settings.LOW_STOCK_THRESHOLD)
