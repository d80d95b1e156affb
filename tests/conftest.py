"""
Shared fixtures: a fake outbound HTTP backend built on httpx.MockTransport,
so no test touches the network or needs real API keys.
"""

import asyncio
import json
from collections.abc import Callable

import httpx
import pytest

LLM_HOST = "api.siliconflow.cn"

Handler = Callable[[httpx.Request], httpx.Response]


class FakeBackend:
    """Routes requests by host, records every request, and replays queued LLM answers."""

    def __init__(self) -> None:
        self.routes: dict[str, Handler] = {}
        self.requests: list[httpx.Request] = []
        self.llm_replies: list[str] = []

    def route(self, host: str, handler: Handler) -> None:
        self.routes[host] = handler

    def llm(self, *replies: str) -> None:
        self.llm_replies.extend(replies)

    def calls_to(self, host: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.host == host]

    @property
    def llm_calls(self) -> list[httpx.Request]:
        return self.calls_to(LLM_HOST)

    def llm_messages(self, index: int) -> list[dict]:
        return json.loads(self.llm_calls[index].content)["messages"]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.host == LLM_HOST and LLM_HOST not in self.routes:
            if not self.llm_replies:
                return httpx.Response(500, text="no reply queued")
            content = self.llm_replies.pop(0)
            return httpx.Response(200, json={"choices": [{"message": {"role": "assistant", "content": content}}]})
        handler = self.routes.get(request.url.host)
        if handler is None:
            return httpx.Response(404, text=f"no route for {request.url.host}")
        return handler(request)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))

    def run(self, fn, *args):
        """Await fn(client, *args) on a fresh event loop with a client bound to this backend."""

        async def go():
            async with self.client() as client:
                return await fn(client, *args)

        return asyncio.run(go())


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def llm_key(monkeypatch: pytest.MonkeyPatch) -> None:
    """Pretend the chat-completion key is configured."""
    monkeypatch.setattr("app.agent.llm.LLM_API_KEY", "test-key")
