from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import get_session, http_error
from app.db import get_db
from app.domain.errors import AuthenticationRequired, TransitionNotAuthorized
from app.domain.session import SessionContext
from app.services.dashboard_service import DashboardService

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.get("/stats", summary="Operations dashboard figures")
def stats(ctx: SessionContext = Depends(get_session), db: Session = Depends(get_db)):
    svc = DashboardService(db)
    try:
        return svc.stats(ctx.current_actor())
    except (AuthenticationRequired, TransitionNotAuthorized) as e:
        raise http_error(e)
