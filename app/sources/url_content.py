"""
Raw URL adapter: fetch the literal URL from the query and keep textual bodies only.
"""

import logging

import httpx

from app.agent.intent import extract_url
from app.core.config import URL_CONTENT_MAX_BYTES, URL_CONTENT_MAX_CHARS
from app.core.errors import SourceUnavailableError
from app.schemas.search import SearchResult
from app.sources.base import ensure_ok, source_adapter, truncate

logger = logging.getLogger(__name__)

SOURCE = "url_content"

# Substrings of accepted Content-Type values
TEXTUAL_CONTENT_TYPES: tuple[str, ...] = (
    "text/",
    "json",
    "javascript",
    "ecmascript",
    "x-sh",
    "x-python",
    "xml",
)


def is_textual(content_type: str) -> bool:
    ct = (content_type or "").lower()
    return any(marker in ct for marker in TEXTUAL_CONTENT_TYPES)


@source_adapter(SOURCE)
async def fetch(client: httpx.AsyncClient, query: str) -> SearchResult | None:
    """
    Stream the URL: reject on status or Content-Type before touching the body,
    then read at most URL_CONTENT_MAX_BYTES.
    """
    url = extract_url(query)
    if not url:
        raise SourceUnavailableError("query has no URL")
    async with client.stream("GET", url) as response:
        ensure_ok(response, url)
        content_type = response.headers.get("content-type", "")
        if not is_textual(content_type):
            raise SourceUnavailableError(f"unsupported content type {content_type!r}")
        body = bytearray()
        async for chunk in response.aiter_bytes():
            body.extend(chunk)
            if len(body) >= URL_CONTENT_MAX_BYTES:
                break
        encoding = response.charset_encoding or "utf-8"
    text = bytes(body[:URL_CONTENT_MAX_BYTES]).decode(encoding, errors="replace").strip()
    logger.info("[sources:url_content] read %d bytes from %s", len(body), url)
    return SearchResult(
        source=SOURCE,
        content=f"{url} 内容：\n{truncate(text, URL_CONTENT_MAX_CHARS)}",
        confidence=0.8,
    )
