"""
Shared outbound HTTP client factory.

One AsyncClient per pipeline run; timeout and optional proxy come from config.
"""

import httpx

from app.core.config import HTTP_PROXY, TOOLS_HTTP_TIMEOUT

USER_AGENT = "chat-search-augment/0.1"


def build_http_client(timeout: float = TOOLS_HTTP_TIMEOUT) -> httpx.AsyncClient:
    """Create the AsyncClient used by source adapters and LLM calls. Caller owns closing it."""
    return httpx.AsyncClient(
        timeout=timeout,
        proxy=HTTP_PROXY or None,
        headers={"User-Agent": USER_AGENT},
        follow_redirects=True,
    )
