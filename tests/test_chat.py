"""
Tests for POST /api/v1/chat.

Covers the main scenarios a chat request can hit:
- Missing API key (should degrade gracefully with 503)
- Invalid input (empty message → 422 validation error)
- Successful round (mocked assistant returns a turn result)
- Assistant failure (internal error → 500 with meaningful message)
- Full round through the real dispatcher with a mocked model
"""
from unittest.mock import AsyncMock, MagicMock, patch

from langchain_core.messages import AIMessage

from flightdesk.agent import ScheduleAssistant, TurnResult
from flightdesk.dependencies import get_assistant
from flightdesk.main import app
from flightdesk.models.chat import ChatTurn


def _override_assistant(assistant):
    app.dependency_overrides[get_assistant] = lambda: assistant


def test_chat_returns_503_without_api_key(client):
    """When the API key isn't configured, chat should return 503 instead of crashing."""
    with patch("flightdesk.routers.chat.settings") as mock_settings:
        mock_settings.anthropic_api_key = ""
        resp = client.post("/api/v1/chat/", json={"message": "Any conflicts?"})
        assert resp.status_code == 503
        assert "ANTHROPIC_API_KEY" in resp.json()["detail"]


def test_chat_validates_empty_message(client):
    resp = client.post("/api/v1/chat/", json={"message": ""})
    assert resp.status_code == 422


def test_chat_validates_history_roles(client):
    resp = client.post("/api/v1/chat/", json={
        "message": "hi",
        "history": [{"role": "tool", "content": "x"}],
    })
    assert resp.status_code == 422


def test_chat_success(client):
    result = TurnResult(
        answer="Flight F2 has been updated.",
        tool_used="edit_flight",
        data_changed=True,
        history=[
            ChatTurn(role="user", content="Move F2 to A3"),
            ChatTurn(role="assistant", content="Flight F2 has been updated."),
        ],
    )
    assistant = MagicMock()
    assistant.ask = AsyncMock(return_value=result)
    _override_assistant(assistant)

    with patch("flightdesk.routers.chat.settings") as mock_settings:
        mock_settings.anthropic_api_key = "test-key"
        resp = client.post("/api/v1/chat/", json={"message": "Move F2 to A3"})

    assert resp.status_code == 200
    data = resp.json()
    assert data["answer"] == "Flight F2 has been updated."
    assert data["tool_used"] == "edit_flight"
    assert data["data_changed"] is True
    assert [t["role"] for t in data["history"]] == ["user", "assistant"]


def test_chat_agent_error_returns_500(client):
    assistant = MagicMock()
    assistant.ask = AsyncMock(side_effect=RuntimeError("graph exploded"))
    _override_assistant(assistant)

    with patch("flightdesk.routers.chat.settings") as mock_settings:
        mock_settings.anthropic_api_key = "test-key"
        resp = client.post("/api/v1/chat/", json={"message": "test"})
    assert resp.status_code == 500
    assert "Agent error" in resp.json()["detail"]


def test_chat_delete_round_updates_shared_store(client):
    """A delete_flight tool call through the real assistant removes F5 from the app's store."""
    llm = MagicMock()
    llm.bind_tools.return_value = llm
    llm.invoke.return_value = AIMessage(content="", tool_calls=[
        {"name": "delete_flight", "args": {"flightId": "F5"}, "id": "call_1", "type": "tool_call"},
    ])
    state = client.app.state
    _override_assistant(ScheduleAssistant(state.store, state.weather, llm=llm))

    with patch("flightdesk.routers.chat.settings") as mock_settings:
        mock_settings.anthropic_api_key = "test-key"
        resp = client.post("/api/v1/chat/", json={"message": "Cancel F5"})

    assert resp.status_code == 200
    assert resp.json()["data_changed"] is True
    ids = [f["id"] for f in client.get("/api/v1/flights/").json()]
    assert ids == ["F1", "F2", "F3", "F4"]
