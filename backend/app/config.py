from pydantic_settings import BaseSettings
from typing import List

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./dev.db"
    APP_HOST: str = "127.0.0.1"
    APP_PORT: int = 8000
    FRONTEND_ORIGINS: List[str] = ["http://localhost:3000"]
    SESSION_COOKIE: str = "session_id"
    SESSION_IDLE_MINUTES: int = 120
    MAX_SESSIONS: int = 10000
    SESSION_SWEEP_INTERVAL_SECONDS: int = 300
    SEED_DEMO_CATALOG: bool = True

    LOW_STOCK_THRESHOLD: int = 10
    PRESCRIPTION_PLACEHOLDER_URL: str = "mock_prescription.pdf"
    ORDER_ID_LENGTH: int = 8
    ORDER_LOCK_TIMEOUT_SECONDS: int = 10
    STALLED_VERIFICATION_MINUTES: int = 60
    STALLED_SWEEP_INTERVAL_SECONDS: int = 300

    GEMINI_API_KEY: str = ""
    GEMINI_MODEL: str = "gemini-2.5-flash"
    ASSISTANT_TEMPERATURE: float = 0.7

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

settings = Settings()
