"""
Common plumbing for source adapters.

Every adapter is `async fetch(client, query) -> SearchResult | None` and is
wrapped with @source_adapter, which logs and turns any failure into None.
"""

import functools
import html
import logging
import re
from collections.abc import Awaitable, Callable

import httpx

from app.core.errors import SourceUnavailableError
from app.schemas.search import SearchResult

logger = logging.getLogger(__name__)

ELLIPSIS = "..."

_TAG_RE = re.compile(r"<[^>]+>")

SourceFetcher = Callable[[httpx.AsyncClient, str], Awaitable[SearchResult | None]]


def truncate(text: str, limit: int) -> str:
    """Cut text to limit characters and append a literal ellipsis when it was longer."""
    if len(text) <= limit:
        return text
    return text[:limit] + ELLIPSIS


def strip_tags(text: str) -> str:
    """Remove markup tags and unescape HTML entities."""
    return html.unescape(_TAG_RE.sub("", text or "")).strip()


def ensure_ok(response: httpx.Response, what: str) -> None:
    """Raise SourceUnavailableError unless the response is 2xx."""
    if not response.is_success:
        raise SourceUnavailableError(f"{what} returned {response.status_code}")


def source_adapter(name: str) -> Callable[[SourceFetcher], SourceFetcher]:
    """Decorate an adapter so it never raises: errors and empty content become None."""

    def decorator(fetch: SourceFetcher) -> SourceFetcher:
        @functools.wraps(fetch)
        async def wrapper(client: httpx.AsyncClient, query: str) -> SearchResult | None:
            logger.info("[sources:%s] IN  query=%r", name, query)
            try:
                result = await fetch(client, query)
            except SourceUnavailableError as e:
                logger.warning("[sources:%s] unavailable: %s", name, e.message)
                return None
            except httpx.TimeoutException:
                logger.warning("[sources:%s] request timed out", name)
                return None
            except Exception as e:
                logger.warning("[sources:%s] failed: %s", name, e)
                return None
            if result is None or not result.content.strip():
                logger.info("[sources:%s] OUT no result", name)
                return None
            logger.info("[sources:%s] OUT content_len=%d confidence=%.2f", name, len(result.content), result.confidence)
            return result

        return wrapper

    return decorator
