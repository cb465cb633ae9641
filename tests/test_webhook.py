"""Tests for the Flask webhook endpoint."""

from datetime import date
from pathlib import Path

import pytest
from flask.testing import FlaskClient

from warikan.bot.dispatcher import BotContext
from warikan.config import Settings
from warikan.webhook import create_app


@pytest.fixture
def sent() -> list[tuple[str, str]]:
    return []


@pytest.fixture
def client(tmp_path: Path, sent: list[tuple[str, str]]) -> FlaskClient:
    settings = Settings(db_path=tmp_path / "warikan.db", web_app_url="https://example.com/app")
    context = BotContext(
        settings=settings,
        today=lambda: date(2025, 10, 19),
        send_reply=lambda token, message: sent.append((token, message)),
    )
    app = create_app(settings, context)
    app.config["TESTING"] = True
    return app.test_client()


class TestWebhookEndpoint:
    """Tests for POST /webhook."""

    def test_replies_and_acknowledges(self, client: FlaskClient, sent: list[tuple[str, str]]) -> None:
        """Should dispatch the message and answer 200."""
        response = client.post(
            "/webhook",
            json={"events": [{"replyToken": "t1", "message": {"type": "text", "text": "建て替え"}}]},
        )

        assert response.status_code == 200
        assert response.get_json() == {"status": "ok"}
        assert sent == [("t1", "建て替え記録アプリ:\nhttps://example.com/app")]

    def test_empty_events(self, client: FlaskClient, sent: list[tuple[str, str]]) -> None:
        """Should acknowledge verification calls without events."""
        response = client.post("/webhook", json={"events": []})

        assert response.status_code == 200
        assert sent == []

    def test_acknowledges_even_when_handling_fails(self, client: FlaskClient, sent: list[tuple[str, str]]) -> None:
        """Should still answer 200 after relaying an error to the chat."""
        response = client.post(
            "/webhook",
            json={"events": [{"replyToken": "t1", "message": {"text": "カード支払い"}}]},
        )

        assert response.status_code == 200
        assert sent[0][1].startswith("エラーが発生しました:")

    @pytest.mark.parametrize(
        "body",
        [
            {"events": [None]},
            {"events": {"a": 1}},
            {"events": ["not an event"]},
            {"events": None},
            {"events": [{"replyToken": "t1", "message": None}]},
            {"events": [{"replyToken": "t1", "message": {"text": 123}}]},
        ],
    )
    def test_malformed_events_are_ignored(
        self, client: FlaskClient, sent: list[tuple[str, str]], body: dict
    ) -> None:
        """Should acknowledge malformed events without replying."""
        response = client.post("/webhook", json=body)

        assert response.status_code == 200
        assert response.get_json() == {"status": "ok"}
        assert sent == []

    def test_rejects_non_json_body(self, client: FlaskClient) -> None:
        """Should answer 400 for a body that is not JSON."""
        response = client.post("/webhook", data="not json", content_type="text/plain")

        assert response.status_code == 400
        assert response.get_json() == {"error": "invalid JSON body"}

    def test_rejects_json_array(self, client: FlaskClient) -> None:
        """Should answer 400 for JSON that is not an object."""
        response = client.post("/webhook", json=[1, 2])

        assert response.status_code == 400


class TestHealthEndpoint:
    """Tests for GET /health."""

    def test_health(self, client: FlaskClient) -> None:
        """Should report ok."""
        response = client.get("/health")

        assert response.status_code == 200
        assert response.get_json() == {"status": "ok"}
