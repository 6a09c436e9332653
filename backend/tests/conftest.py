import os

# must be set before the app (and its engine) is imported
os.environ["DATABASE_URL"] = "sqlite:///./test_mediswift.db"
os.environ["SEED_DEMO_CATALOG"] = "true"

import pytest
from fastapi.testclient import TestClient

from app.db import init_db
from app.main import app
from app.repositories.session_repo import SessionRepository
from app.services.assistant_service import AssistantService


class FakeAssistantAdapter:
    def __init__(self, reply="Take it with water.", error=None):
        self.reply = reply
        self.error = error
        self.prompts = []

    async def generate(self, prompt):
        self.prompts.append(prompt)
        if self.error:
            raise self.error
        return self.reply

    def health_check(self):
        return True


@pytest.fixture(autouse=True)
def fresh_state():
    init_db(reset=True)
    app.state.sessions = SessionRepository()
    app.state.assistant = AssistantService(FakeAssistantAdapter())
    yield


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def pharmacist():
    c = TestClient(app)
    r = c.post("/api/auth/login", json={"email": "rx@mediswift.test", "role": "PHARMACIST"})
    assert r.status_code == 200
    return c


@pytest.fixture
def patient():
    c = TestClient(app)
    r = c.post("/api/auth/login", json={"email": "jane@mediswift.test", "role": "PATIENT"})
    assert r.status_code == 200
    return c
