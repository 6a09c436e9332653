from app.api.deps import get_session, http_error
from app.db import get_db
from app.domain.errors import CatalogException
from app.domain.session import SessionContext
from app.schemas.cart_schema import AddItemIn, CartOut, SetQuantityIn
from app.services.cart_service import CartService
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

router = APIRouter(prefix="/api/cart", tags=["cart"])


@router.get("", summary="Get cart", response_model=CartOut)
def get_cart(ctx: SessionContext = Depends(get_session)):
    return CartOut.from_domain(ctx.cart)


@router.post("/items", summary="Add one unit of a medicine", response_model=CartOut)
def add_item(
    payload: AddItemIn,
    ctx: SessionContext = Depends(get_session),
    db: Session = Depends(get_db),
):
    svc = CartService(db)
    try:
        svc.add_item(ctx, payload.medicine_id)
    except CatalogException as e:
        raise http_error(e)
    return CartOut.from_domain(ctx.cart)


@router.put(
    "/items/{medicine_id}",
    summary="Set line quantity (<= 0 removes the line)",
    response_model=CartOut,
)
def set_quantity(
    medicine_id: str,
    payload: SetQuantityIn,
    ctx: SessionContext = Depends(get_session),
    db: Session = Depends(get_db),
):
    svc = CartService(db)
    cart = svc.update_line(ctx, medicine_id, payload.quantity)
    return CartOut.from_domain(cart)
