from contextlib import asynccontextmanager

from apscheduler.schedulers.background import BackgroundScheduler
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.health import router as health_router
from app.api.routes_admin import router as admin_router
from app.api.routes_assistant import router as assistant_router
from app.api.routes_auth import router as auth_router
from app.api.routes_cart import router as cart_router
from app.api.routes_catalogue import router as catalogue_router
from app.api.routes_inventory import router as inventory_router
from app.api.routes_order import router as order_router
from app.config import settings
from app.db import SessionLocal, init_db
from app.repositories.session_repo import SessionRepository
from app.services.assistant_service import AssistantService
from app.services.order_service import OrderService
from app.utils.logging import get_logger

log = get_logger("app")


def stalled_verification_job():
    db = SessionLocal()
    try:
        OrderService(db).find_stalled_verifications()
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # startup
    init_db()

    # report orders stuck waiting on a pharmacist; nothing is auto-expired
    scheduler = BackgroundScheduler()
    scheduler.add_job(
        stalled_verification_job,
        "interval",
        seconds=settings.STALLED_SWEEP_INTERVAL_SECONDS,
        id="stalled_verifications",
    )
    scheduler.add_job(
        lambda: app.state.sessions.evict_idle(),
        "interval",
        seconds=settings.SESSION_SWEEP_INTERVAL_SECONDS,
        id="idle_sessions",
    )
    scheduler.start()
    log.info("MediSwift backend started")

    try:
        yield
    finally:
        scheduler.shutdown(wait=False)


app = FastAPI(title="MediSwift - Backend", version="0.1.0", lifespan=lifespan)
app.state.sessions = SessionRepository(
    max_sessions=settings.MAX_SESSIONS,
    idle_seconds=settings.SESSION_IDLE_MINUTES * 60,
)
app.state.assistant = AssistantService()

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.FRONTEND_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health_router, prefix="/api", tags=["health"])

app.include_router(auth_router, tags=["auth"])

app.include_router(catalogue_router, prefix="/api/products", tags=["catalogue"])

app.include_router(cart_router, tags=["cart"])

app.include_router(order_router, prefix="/api/orders", tags=["orders"])

app.include_router(inventory_router, tags=["inventory"])

app.include_router(admin_router, tags=["admin"])

app.include_router(assistant_router, tags=["assistant"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host=settings.APP_HOST, port=settings.APP_PORT)
