"""Tests for the HTTP API."""
import uuid
from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from app.errors import BackendError, ExportError
from app.main import app
from app.services.flow_controller import ChatFlowController
from app.services.mock_llm import MockLLMClient


@pytest.fixture
def controller():
    return ChatFlowController(MockLLMClient())


@pytest.fixture
def client(controller):
    with patch("app.api.routes.get_flow_controller", return_value=controller):
        yield TestClient(app)


@pytest.fixture
def session_id(client):
    sid = f"test-{uuid.uuid4()}"
    resp = client.post("/api/session", json={"session_id": sid})
    assert resp.status_code == 200
    return sid


def send(client, session_id, message):
    return client.post("/api/chat", json={"session_id": session_id, "message": message})


class TestSessionEndpoints:
    """Test opening, resuming and clearing sessions."""

    def test_health(self, client):
        """Health endpoint reports status."""
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "healthy"

    def test_new_session_starts_with_greeting(self, client, controller):
        """A fresh session holds only the initial message."""
        sid = f"test-{uuid.uuid4()}"
        data = client.post("/api/session", json={"session_id": sid}).json()

        assert data["session_id"] == sid
        assert len(data["messages"]) == 1
        assert data["messages"][0]["text"] == controller.script.initial_message
        assert data["messages"][0]["sender"] == "assistant"
        assert data["itinerary_mode"] is False

    def test_default_session_key(self, client):
        """Without an id the fixed session key is used."""
        data = client.post("/api/session").json()
        assert data["session_id"] == "travelChatHistory"

    def test_resume_session(self, client, session_id):
        """Opening an existing session returns its transcript."""
        send(client, session_id, "Paris")
        data = client.post("/api/session", json={"session_id": session_id}).json()

        assert len(data["messages"]) == 3

    def test_clear_session(self, client, session_id):
        """Clearing resets the transcript and the script."""
        send(client, session_id, "Paris")
        data = client.delete(f"/api/session/{session_id}").json()
        assert len(data["messages"]) == 1

        resp = send(client, session_id, "Rome").json()
        assert resp["question_index"] == 1

    def test_unknown_session(self, client):
        """Unknown sessions give 404."""
        assert send(client, "missing", "hi").status_code == 404
        assert client.get("/api/messages/missing").status_code == 404
        assert client.get("/api/itinerary/missing/pdf").status_code == 404


class TestChatEndpoint:
    """Test chat turns over HTTP."""

    def test_chat_turn(self, client, session_id):
        """A turn returns the reply and the new question index."""
        data = send(client, session_id, "Paris").json()

        assert data["question_index"] == 1
        assert data["itinerary_mode"] is False
        assert "When are you planning to travel?" in data["message"]

        messages = client.get(f"/api/messages/{session_id}").json()["messages"]
        assert [m["sender"] for m in messages] == ["assistant", "user", "assistant"]

    def test_empty_message_rejected(self, client, session_id):
        """Empty and blank messages are refused."""
        assert send(client, session_id, "").status_code == 422
        assert send(client, session_id, "   ").status_code == 400

    def test_backend_failure_notice(self, client, controller, session_id):
        """Backend failures surface a generic notice and change nothing."""
        controller.llm = AsyncMock()
        controller.llm.generate = AsyncMock(side_effect=BackendError("401 invalid api key"))

        resp = send(client, session_id, "Paris")
        assert resp.status_code == 502
        assert resp.json()["detail"] == "Sorry, I encountered an error. Please try again."
        assert "api key" not in resp.text

        messages = client.get(f"/api/messages/{session_id}").json()["messages"]
        assert len(messages) == 1


class TestItineraryEndpoints:
    """Test preference, itinerary and PDF retrieval."""

    def _complete(self, client, session_id):
        for answer in ["I want to travel to Lisbon", "In April", "Solo", "Budget-friendly", "Food", "Yes"]:
            assert send(client, session_id, answer).status_code == 200

    def test_no_itinerary_yet(self, client, session_id):
        """Before itinerary mode there is no itinerary."""
        data = client.get(f"/api/itinerary/{session_id}").json()
        assert data["itinerary"] is None

    def test_itinerary_after_script(self, client, session_id):
        """After the script the itinerary and preferences are available."""
        self._complete(client, session_id)

        data = client.get(f"/api/itinerary/{session_id}").json()
        assert "Lisbon" in data["itinerary"]
        assert data["itinerary_mode"] is True

        prefs = client.get(f"/api/preferences/{session_id}").json()["preferences"]
        assert prefs["destination"] == "I want to travel to Lisbon"
        assert prefs["dates"] == "In April"

    def test_pdf_download(self, client, session_id):
        """The PDF is served as an attachment."""
        self._complete(client, session_id)
        resp = client.get(f"/api/itinerary/{session_id}/pdf")

        assert resp.status_code == 200
        assert resp.headers["content-type"] == "application/pdf"
        assert 'filename="travel-itinerary.pdf"' in resp.headers["content-disposition"]
        assert resp.content.startswith(b"%PDF")
        assert resp.headers["x-itinerary-mode"] == "true"

    def test_pdf_before_itinerary_mode(self, client, session_id):
        """An early export still works and reports itinerary mode off."""
        send(client, session_id, "Paris")
        resp = client.get(f"/api/itinerary/{session_id}/pdf")

        assert resp.status_code == 200
        assert resp.headers["x-itinerary-mode"] == "false"

    def test_pdf_failure_notice(self, client, controller, session_id):
        """Export failures surface a generic notice."""
        with patch.object(controller.exporter, "encode", side_effect=ExportError()):
            resp = client.get(f"/api/itinerary/{session_id}/pdf")

        assert resp.status_code == 500
        assert resp.json()["detail"] == "Failed to generate PDF. Please try again."
