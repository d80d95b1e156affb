"""
Tests for the HTTP routes. The pipeline and chat service are mocked.
"""

import asyncio
import time
from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from app.agent.tools import SOURCE_ADAPTERS
from app.main import app
from app.schemas.search import SearchServiceType
@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


def test_health(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"ok": True}


def test_search_returns_pipeline_output(client: TestClient) -> None:
    out = {"answer": "北京晴，21°C", "service": SearchServiceType.WEATHER, "source": "weather", "fallback_used": False}
    with patch("app.api.routes.run_search_pipeline", AsyncMock(return_value=out)) as mock_run:
        response = client.post("/search", json={"query": "北京今天天气怎么样"})
    assert response.status_code == 200
    assert response.json() == {
        "answer": "北京晴，21°C",
        "service": "weather",
        "source": "weather",
        "fallback_used": False,
    }
    mock_run.assert_awaited_once_with("北京今天天气怎么样")


def test_search_failure_returns_empty_answer(client: TestClient) -> None:
    with patch("app.api.routes.run_search_pipeline", AsyncMock(side_effect=RuntimeError("boom"))):
        response = client.post("/search", json={"query": "anything"})
    assert response.status_code == 200
    assert response.json()["answer"] == ""


def test_search_deadline_returns_empty_answer(client: TestClient, monkeypatch) -> None:
    """A slow source is cut off by the pipeline deadline; the route answers empty, quickly."""

    async def slow_weather(http_client, query):
        await asyncio.sleep(2)

    search_fetch = AsyncMock()
    monkeypatch.setattr("app.agent.graph.SEARCH_PIPELINE_TIMEOUT", 0.05)
    with patch.dict(
        SOURCE_ADAPTERS,
        {SearchServiceType.WEATHER: slow_weather, SearchServiceType.SEARCH: search_fetch},
    ):
        started = time.monotonic()
        response = client.post("/search", json={"query": "北京天气"})
        elapsed = time.monotonic() - started
    assert response.status_code == 200
    assert response.json() == {"answer": "", "service": None, "source": None, "fallback_used": False}
    assert elapsed < 1.5
    search_fetch.assert_not_awaited()


def test_search_empty_query_returns_422(client: TestClient) -> None:
    response = client.post("/search", json={"query": ""})
    assert response.status_code == 422


def test_chat(client: TestClient) -> None:
    with patch("app.api.routes.answer_chat", AsyncMock(return_value={"answer": "不然呢？", "augmented": False})):
        response = client.post("/chat", json={"question": "你是AI吗"})
    assert response.status_code == 200
    assert response.json() == {"answer": "不然呢？", "augmented": False}


def test_chat_value_error_returns_400(client: TestClient) -> None:
    with patch("app.api.routes.answer_chat", AsyncMock(side_effect=ValueError("question is required"))):
        response = client.post("/chat", json={"question": " "})
    assert response.status_code == 400
    assert response.json()["detail"] == "question is required"
