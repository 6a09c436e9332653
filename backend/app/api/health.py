from app.db import engine
from fastapi import APIRouter, Request
from sqlalchemy import text

router = APIRouter()


@router.get("/health", tags=["health"])
def health(request: Request):
    db_ok = False
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
            db_ok = True
    except Exception:
        db_ok = False
    assistant_ok = request.app.state.assistant.adapter.health_check()

    return {
        # the assistant degrades to canned replies, so only the db decides status
        "status": "ok" if db_ok else "degraded",
        "db": db_ok,
        "assistant": assistant_ok,
    }
