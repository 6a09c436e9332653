import os
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from app.config import settings
from app.utils.logging import get_logger

log = get_logger("db")

DATABASE_URL = settings.DATABASE_URL
_connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(DATABASE_URL, future=True, echo=False, connect_args=_connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()

DEMO_MEDICINES = [
    {"id": "1", "name": "Crocin Advance", "brand": "GSK", "price_cents": 150, "stock": 120,
     "requires_prescription": False, "category": "OTC", "description": "Paracetamol 650mg for fever",
     "image_url": "https://images.unsplash.com/photo-1584017911766-d451b3d0e843?auto=format&fit=crop&q=80&w=400"},
    {"id": "2", "name": "Atorvastatin 10mg", "brand": "Sun Pharma", "price_cents": 520, "stock": 45,
     "requires_prescription": True, "category": "PRESCRIPTION", "description": "Cholesterol lowering",
     "image_url": "https://images.unsplash.com/photo-1587854692152-cbe660dbde88?auto=format&fit=crop&q=80&w=400"},
    {"id": "3", "name": "Vitamin D3", "brand": "HealthKart", "price_cents": 1200, "original_price_cents": 1500,
     "stock": 8, "requires_prescription": False, "category": "SUPPLEMENTS", "description": "Bone health",
     "image_url": "https://images.unsplash.com/photo-1550572017-edd951aa8f72?auto=format&fit=crop&q=80&w=400"},
    {"id": "4", "name": "Insulin Pen", "brand": "Novo Nordisk", "price_cents": 2500, "stock": 5,
     "requires_prescription": True, "category": "DIABETES", "description": "Insulin delivery device",
     "image_url": "https://images.unsplash.com/photo-1579165466741-7f35a4755657?auto=format&fit=crop&q=80&w=400"},
    {"id": "5", "name": "Baby Wipes", "brand": "Pampers", "price_cents": 350, "stock": 200,
     "requires_prescription": False, "category": "BABY_CARE", "description": "Gentle wipes",
     "image_url": "https://images.unsplash.com/photo-1622483767028-3f66f32aef97?auto=format&fit=crop&q=80&w=400"},
]

def init_db(reset: bool = False):
    """
    Initialize DB schema.

    Behavior:
      - If `reset` is passed or RESET_DB env var is 1/true/yes, drop & recreate tables.
      - Otherwise, leave existing tables in place.
      - Seed the demo catalog when the medicines table is empty (SEED_DEMO_CATALOG).
    """
    # model modules must be imported so metadata is populated
    from app.models import medicine, order  # noqa: F401
    from app.models.medicine import MedicineRow
    from app.domain.enums import MedicineCategory

    env_reset = os.environ.get("RESET_DB", "false").lower() in ("1", "true", "yes")
    if reset or env_reset:
        log.info("Resetting database...")
        Base.metadata.drop_all(bind=engine)

    Base.metadata.create_all(bind=engine)

    if not settings.SEED_DEMO_CATALOG:
        return
    s = SessionLocal()
    try:
        if s.query(MedicineRow).first() is None:
            for ent in DEMO_MEDICINES:
                s.add(MedicineRow(**dict(ent, category=MedicineCategory[ent["category"]])))
            s.commit()
            log.info(f"Seeded {len(DEMO_MEDICINES)} demo medicines.")
    finally:
        s.close()

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
