from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from app.api.deps import get_session, http_error
from app.db import get_db
from app.domain.errors import (
    AuthenticationRequired,
    IllegalTransition,
    OrderNotFound,
    TransitionNotAuthorized,
)
from app.domain.session import SessionContext
from app.schemas.order_schema import CheckoutOut, OrderOut, TransitionIn
from app.services.order_service import OrderService, OrderServiceException

router = APIRouter(tags=["orders"])

RX_MESSAGE = "Order Placed! Please wait for Pharmacist Verification."
OK_MESSAGE = "Order Placed Successfully!"

@router.post("", summary="Checkout the session cart", response_model=CheckoutOut)
def checkout(ctx: SessionContext = Depends(get_session), db: Session = Depends(get_db)):
    svc = OrderService(db)
    try:
        order = svc.checkout(ctx)
    except AuthenticationRequired as e:
        raise http_error(e)
    if order is None:
        raise HTTPException(status_code=400, detail="Cart is empty")
    actor = ctx.current_actor()
    return CheckoutOut(
        order=OrderOut.from_domain(order, actor.role),
        message=RX_MESSAGE if order.requires_prescription else OK_MESSAGE,
        next_page="dashboard" if actor.is_operator else "catalog",
    )

@router.get("", summary="List orders, newest first")
def list_orders(ctx: SessionContext = Depends(get_session), db: Session = Depends(get_db)):
    svc = OrderService(db)
    actor = ctx.current_actor()
    try:
        orders = svc.list_orders(actor)
    except AuthenticationRequired as e:
        raise http_error(e)
    return {"items": [OrderOut.from_domain(o, actor.role) for o in orders], "total": len(orders)}

@router.get("/{order_id}", summary="Get one order", response_model=OrderOut)
def get_order(order_id: str, ctx: SessionContext = Depends(get_session), db: Session = Depends(get_db)):
    svc = OrderService(db)
    actor = ctx.current_actor()
    try:
        return OrderOut.from_domain(svc.get_order(order_id, actor), actor.role)
    except (AuthenticationRequired, OrderNotFound) as e:
        raise http_error(e)

@router.post("/{order_id}/status", summary="Move an order to a new status", response_model=OrderOut)
def transition_order(
    order_id: str,
    payload: TransitionIn,
    ctx: SessionContext = Depends(get_session),
    db: Session = Depends(get_db),
):
    svc = OrderService(db)
    actor = ctx.current_actor()
    try:
        order = svc.transition(order_id, payload.status, actor)
    except (OrderNotFound, IllegalTransition, TransitionNotAuthorized) as e:
        raise http_error(e)
    except OrderServiceException as e:
        raise HTTPException(status_code=503, detail=str(e))
    return OrderOut.from_domain(order, actor.role)
