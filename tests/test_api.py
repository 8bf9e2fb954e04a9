"""Unit tests for aeon_dashboard.api.app."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from aeon_dashboard.api import create_app
from aeon_dashboard.config.settings import AppSettings
from aeon_dashboard.errors import (
    ConflictError,
    InvalidParamsError,
    NotFoundError,
    UnknownActionError,
)


@pytest.fixture
def dispatcher() -> MagicMock:
    dispatcher = MagicMock()
    dispatcher.dispatch = AsyncMock(return_value=[{"id": "1"}])
    return dispatcher


@pytest.fixture
def client(service: MagicMock, dispatcher: MagicMock):
    settings = AppSettings(database_url="postgresql+asyncpg://u:p@localhost/db")
    app = create_app(settings, service=service, dispatcher=dispatcher)
    with TestClient(app) as client:
        yield client


# ---------------------------------------------------------------------------
# POST /api/neon-query
# ---------------------------------------------------------------------------


class TestNeonQuery:
    """Tests for POST /api/neon-query."""

    def test_success_wraps_data(self, client: TestClient, dispatcher: MagicMock) -> None:
        response = client.post(
            "/api/neon-query", json={"action": "getTriggers", "params": {"guildId": "1"}}
        )

        assert response.status_code == 200
        assert response.json() == {"data": [{"id": "1"}]}
        dispatcher.dispatch.assert_awaited_once_with("getTriggers", {"guildId": "1"})

    def test_null_data(self, client: TestClient, dispatcher: MagicMock) -> None:
        dispatcher.dispatch.return_value = None
        response = client.post("/api/neon-query", json={"action": "getBotSettings"})
        assert response.status_code == 200
        assert response.json() == {"data": None}

    def test_missing_action(self, client: TestClient, dispatcher: MagicMock) -> None:
        response = client.post("/api/neon-query", json={"params": {}})

        assert response.status_code == 400
        assert response.json() == {"error": "Missing action"}
        dispatcher.dispatch.assert_not_awaited()

    def test_unknown_action(self, client: TestClient, dispatcher: MagicMock) -> None:
        dispatcher.dispatch.side_effect = UnknownActionError("dropTables")

        response = client.post("/api/neon-query", json={"action": "dropTables"})

        assert response.status_code == 400
        assert response.json() == {"error": "Unknown action: dropTables"}

    @pytest.mark.parametrize(
        "error",
        [
            InvalidParamsError("trigger_text: required"),
            NotFoundError("Vote not found"),
            ConflictError("User has already voted on this poll"),
            RuntimeError("database went away"),
        ],
    )
    def test_other_errors_are_500(
        self, client: TestClient, dispatcher: MagicMock, error: Exception
    ) -> None:
        dispatcher.dispatch.side_effect = error

        response = client.post("/api/neon-query", json={"action": "castVote"})

        assert response.status_code == 500
        assert response.json() == {"error": str(error)}

    def test_non_object_params(self, client: TestClient) -> None:
        response = client.post("/api/neon-query", json={"action": "getTriggers", "params": [1]})
        assert response.status_code == 500

    def test_non_object_body(self, client: TestClient) -> None:
        response = client.post("/api/neon-query", json=["getTriggers"])
        assert response.status_code == 400


# ---------------------------------------------------------------------------
# GET /api/health
# ---------------------------------------------------------------------------


class TestHealth:
    """Tests for GET /api/health."""

    def test_ok(self, client: TestClient) -> None:
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json() == {"ok": True}

    def test_database_down(self, client: TestClient, service: MagicMock) -> None:
        service.health.side_effect = ConnectionRefusedError("connection refused")

        response = client.get("/api/health")

        assert response.status_code == 500
        assert response.json() == {"ok": False, "error": "connection refused"}

    def test_provided_service_is_not_closed(
        self, service: MagicMock, dispatcher: MagicMock
    ) -> None:
        app = create_app(AppSettings(), service=service, dispatcher=dispatcher)
        with TestClient(app):
            pass
        service.close.assert_not_awaited()
