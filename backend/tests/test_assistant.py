import asyncio

from app.main import app
from app.services.assistant_service import EMPTY_REPLY, FALLBACK_REPLY, AssistantService
from conftest import FakeAssistantAdapter


def test_ask_returns_model_text():
    svc = AssistantService(FakeAssistantAdapter(reply="Rest and fluids."))
    assert asyncio.run(svc.ask("flu?")) == "Rest and fluids."


def test_ask_falls_back_on_failure():
    svc = AssistantService(FakeAssistantAdapter(error=RuntimeError("quota")))
    assert asyncio.run(svc.ask("flu?")) == FALLBACK_REPLY


def test_ask_handles_empty_reply():
    svc = AssistantService(FakeAssistantAdapter(reply=""))
    assert asyncio.run(svc.ask("flu?")) == EMPTY_REPLY


def test_chat_history_is_appended_in_order(client):
    r = client.post("/api/assistant", json={"text": "Can I take paracetamol?"})
    assert r.status_code == 200
    assert r.json() == {"role": "assistant", "text": "Take it with water."}
    client.post("/api/assistant", json={"text": "And ibuprofen?"})

    messages = client.get("/api/assistant/history").json()["messages"]
    assert [m["role"] for m in messages] == ["user", "assistant", "user", "assistant"]
    assert messages[2]["text"] == "And ibuprofen?"


def test_failure_still_answers(client):
    app.state.assistant = AssistantService(FakeAssistantAdapter(error=TimeoutError()))
    r = client.post("/api/assistant", json={"text": "hello"})
    assert r.status_code == 200
    assert r.json()["text"] == FALLBACK_REPLY


def test_blank_question_rejected(client):
    assert client.post("/api/assistant", json={"text": "   "}).status_code == 400
    assert client.get("/api/assistant/history").json()["messages"] == []


def test_chat_does_not_touch_cart(client):
    client.post("/api/cart/items", json={"medicine_id": "1"})
    client.post("/api/assistant", json={"text": "hi"})
    assert client.get("/api/cart").json()["total_quantity"] == 1
