from app.api.deps import get_session, http_error
from app.config import settings
from app.db import get_db
from app.domain.errors import AuthenticationRequired, CatalogException, TransitionNotAuthorized
from app.domain.session import SessionContext
from app.schemas.medicine_schema import MedicineIn, MedicineOut
from app.services.inventory_service import InventoryService
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

router = APIRouter(prefix="/api/inventory", tags=["inventory"])

_REFUSALS = (AuthenticationRequired, TransitionNotAuthorized)


@router.post("/medicines", status_code=201)
def create_medicine(
    payload: MedicineIn,
    ctx: SessionContext = Depends(get_session),
    db: Session = Depends(get_db),
):
    svc = InventoryService(db)
    try:
        m = svc.create(ctx.current_actor(), payload.to_domain())
    except _REFUSALS as e:
        raise http_error(e)
    except CatalogException as e:
        raise HTTPException(status_code=409, detail=str(e))
    return MedicineOut.from_domain(m, settings.LOW_STOCK_THRESHOLD)


@router.put("/medicines/{medicine_id}")
def update_medicine(
    medicine_id: str,
    payload: MedicineIn,
    ctx: SessionContext = Depends(get_session),
    db: Session = Depends(get_db),
):
    svc = InventoryService(db)
    try:
        m = svc.update(ctx.current_actor(), payload.to_domain(medicine_id))
    except _REFUSALS + (CatalogException,) as e:
        raise http_error(e)
    return MedicineOut.from_domain(m, settings.LOW_STOCK_THRESHOLD)


@router.delete("/medicines/{medicine_id}")
def delete_medicine(
    medicine_id: str,
    ctx: SessionContext = Depends(get_session),
    db: Session = Depends(get_db),
):
    svc = InventoryService(db)
    try:
        svc.delete(ctx.current_actor(), medicine_id)
    except _REFUSALS + (CatalogException,) as e:
        raise http_error(e)
    return {"ok": True}
