from fastapi import HTTPException, Request, Response

from app.config import settings
from app.domain.errors import (
    AuthenticationRequired,
    CatalogException,
    IllegalTransition,
    OrderNotFound,
    TransitionNotAuthorized,
)
from app.domain.session import SessionContext


def get_session(request: Request, response: Response) -> SessionContext:
    """Resolve (or open) the caller's session and keep the cookie set."""
    sessions = request.app.state.sessions
    ctx = sessions.get_or_create(request.cookies.get(settings.SESSION_COOKIE))
    response.set_cookie(settings.SESSION_COOKIE, ctx.session_id, httponly=True, samesite="Lax")
    return ctx


def http_error(e: Exception) -> HTTPException:
    """Map a core refusal onto the HTTP status the client expects."""
    if isinstance(e, AuthenticationRequired):
        return HTTPException(
            status_code=401,
            detail={"message": str(e), "redirect": e.redirect},
        )
    if isinstance(e, TransitionNotAuthorized):
        return HTTPException(status_code=403, detail=str(e))
    if isinstance(e, IllegalTransition):
        return HTTPException(
            status_code=409,
            detail={
                "message": str(e),
                "from": e.from_status.value,
                "to": e.to_status.value,
            },
        )
    if isinstance(e, (OrderNotFound, CatalogException)):
        return HTTPException(status_code=404, detail=str(e))
    return HTTPException(status_code=400, detail=str(e))
