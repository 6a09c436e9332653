import os
import tempfile
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from filelock import FileLock, Timeout
from sqlalchemy.orm import Session

from app.config import settings
from app.domain import lifecycle, orders
from app.domain.enums import OrderStatus
from app.domain.errors import AuthenticationRequired, OrderNotFound
from app.domain.orders import Order
from app.domain.session import Actor, SessionContext
from app.repositories.order_repo import OrderRepository, to_domain
from app.utils.logging import get_logger
from app.utils.transactions import smart_transaction

log = get_logger("orders")


class OrderServiceException(Exception):
    pass


class OrderService:
    def __init__(self, db: Session):
        self.db = db
        self.order_repo = OrderRepository(db)

    def _lock_for(self, order_id: str) -> FileLock:
        locks_dir = os.path.join(tempfile.gettempdir(), "mediswift_locks")
        os.makedirs(locks_dir, exist_ok=True)
        return FileLock(os.path.join(locks_dir, f"order_{order_id}.lock"))

    def checkout(self, ctx: SessionContext) -> Optional[Order]:
        """
        Place an order from the session cart.

        Returns None for an empty cart. Raises AuthenticationRequired when
        nobody is signed in; the cart is untouched in both cases.
        """
        actor = ctx.current_actor()
        if actor is None:
            log.info(f"checkout refused for session {ctx.session_id}: not signed in")
        with smart_transaction(self.db):
            order = orders.checkout(
                ctx.cart,
                actor,
                self.order_repo,
                prescription_url=settings.PRESCRIPTION_PLACEHOLDER_URL,
                id_length=settings.ORDER_ID_LENGTH,
                clear_cart=False,
            )
        self.db.commit()
        if order:
            # only once the order is durable
            ctx.cart.clear()
            log.info(
                f"order {order.id} placed by {order.user_id}: "
                f"total={order.total_amount} status={order.status.value}"
            )
        return order

    def list_orders(self, actor: Optional[Actor]) -> List[Order]:
        if actor is None:
            raise AuthenticationRequired("Sign in to view orders")
        if actor.is_operator:
            return self.order_repo.list()
        return self.order_repo.list_for_user(actor.id)

    def get_order(self, order_id: str, actor: Optional[Actor]) -> Order:
        if actor is None:
            raise AuthenticationRequired("Sign in to view orders")
        order = self.order_repo.get(order_id)
        if order is None or (not actor.is_operator and order.user_id != actor.id):
            raise OrderNotFound(f"Order not found: {order_id}")
        return order

    def transition(
        self, order_id: str, to_status: OrderStatus, actor: Optional[Actor]
    ) -> Order:
        """
        Apply one lifecycle transition under a per-order lock.

        IllegalTransition / TransitionNotAuthorized propagate to the caller and
        the stored status is left as it was.
        """
        lock = self._lock_for(order_id)
        try:
            with lock.acquire(timeout=settings.ORDER_LOCK_TIMEOUT_SECONDS):
                with smart_transaction(self.db):
                    row = self.order_repo.get_for_update(order_id)
                    if row is None:
                        raise OrderNotFound(f"Order not found: {order_id}")
                    order = to_domain(row)
                    previous = order.status
                    try:
                        lifecycle.transition(order, to_status, actor)
                    except Exception as e:
                        log.warning(f"transition refused for {order_id}: {e}")
                        raise
                    row.status = order.status
                    self.db.flush()
                self.db.commit()
        except Timeout:
            raise OrderServiceException("Could not acquire order lock; try again")
        log.info(
            f"order {order_id}: {previous.value} -> {order.status.value} "
            f"by {actor.id} ({actor.role.value})"
        )
        return order

    def find_stalled_verifications(
        self, older_than_minutes: Optional[int] = None
    ) -> List[Order]:
        """
        Orders waiting on prescription verification for too long.
        Reporting only: nothing is timed out or changed.
        """
        minutes = older_than_minutes
        if minutes is None:
            minutes = settings.STALLED_VERIFICATION_MINUTES
        cutoff = datetime.now(timezone.utc) - timedelta(minutes=minutes)
        stalled = self.order_repo.list_pending_since(cutoff)
        if stalled:
            log.warning(
                f"{len(stalled)} order(s) pending verification for over "
                f"{minutes} min: {[o.id for o in stalled]}"
            )
        return stalled
