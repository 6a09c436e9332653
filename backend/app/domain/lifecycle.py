from typing import Dict, FrozenSet, Optional, Tuple

from app.domain.enums import OrderStatus, UserRole
from app.domain.errors import IllegalTransition, TransitionNotAuthorized
from app.domain.orders import Order
from app.domain.session import Actor

_OPERATORS = frozenset({UserRole.PHARMACIST, UserRole.ADMIN})

TRANSITIONS: Dict[Tuple[OrderStatus, OrderStatus], FrozenSet[UserRole]] = {
    (OrderStatus.PENDING_VERIFICATION, OrderStatus.APPROVED): _OPERATORS,
    (OrderStatus.PENDING_VERIFICATION, OrderStatus.REJECTED): _OPERATORS,
    (OrderStatus.APPROVED, OrderStatus.PACKED): _OPERATORS,
}

TERMINAL_STATES = frozenset({OrderStatus.REJECTED, OrderStatus.DELIVERED})


def is_legal(from_status: OrderStatus, to_status: OrderStatus) -> bool:
    return (from_status, to_status) in TRANSITIONS


def can_transition(
    role: Optional[UserRole], from_status: OrderStatus, to_status: OrderStatus
) -> bool:
    """Single capability check: may `role` move an order from -> to."""
    allowed = TRANSITIONS.get((from_status, to_status))
    if allowed is None or role is None:
        return False
    return role in allowed


def next_statuses(from_status: OrderStatus, role: Optional[UserRole] = None):
    return [
        to
        for (frm, to) in TRANSITIONS
        if frm == from_status and (role is None or can_transition(role, frm, to))
    ]


def transition(order: Order, to_status: OrderStatus, actor: Optional[Actor]) -> Order:
    """Move `order` to `to_status`. The order is left untouched on refusal."""
    current = order.status
    if not is_legal(current, to_status):
        raise IllegalTransition(current, to_status)
    role = actor.role if actor else None
    if not can_transition(role, current, to_status):
        raise TransitionNotAuthorized(
            f"Role {role.value if role else 'anonymous'} may not move order "
            f"{order.id} from {current.value} to {to_status.value}"
        )
    order.status = to_status
    return order
