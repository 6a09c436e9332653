from app.domain.enums import OrderStatus


class AuthenticationRequired(Exception):
    """Raised when an operation needs a signed-in actor and there is none."""

    redirect = "auth"


class TransitionNotAuthorized(Exception):
    pass


class IllegalTransition(Exception):
    def __init__(self, from_status: OrderStatus, to_status: OrderStatus):
        self.from_status = from_status
        self.to_status = to_status
        super().__init__(
            f"Illegal transition {from_status.value} -> {to_status.value}"
        )


class OrderNotFound(Exception):
    pass


class CatalogException(Exception):
    pass
