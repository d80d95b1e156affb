"""
Wikipedia adapter: keyword search for the top title, then its intro extract.
"""

import logging
import re

import httpx

from app.core.config import WIKIPEDIA_API_URL, WIKIPEDIA_MAX_CHARS, WIKIPEDIA_MIN_EXTRACT_CHARS
from app.core.errors import SourceUnavailableError
from app.schemas.search import SearchResult
from app.sources.base import ensure_ok, source_adapter, strip_tags, truncate

SOURCE = "wikipedia"

logger = logging.getLogger(__name__)

_QUESTION_NOISE = re.compile(
    r"(什么是|是什么|是谁|介绍一下|百科|维基百科|维基|wikipedia|wiki|what is|who is|请问|[?？!！。])",
    re.IGNORECASE,
)


def search_term(query: str) -> str:
    """Drop question phrasing so the search sees only the topic."""
    term = _QUESTION_NOISE.sub(" ", query or "")
    term = " ".join(term.split())
    return term or (query or "").strip()


@source_adapter(SOURCE)
async def fetch(client: httpx.AsyncClient, query: str) -> SearchResult | None:
    term = search_term(query)
    search = await client.get(
        WIKIPEDIA_API_URL,
        params={
            "action": "query",
            "list": "search",
            "srsearch": term,
            "srlimit": 1,
            "format": "json",
            "utf8": 1,
        },
    )
    ensure_ok(search, "wikipedia search")
    hits = (search.json().get("query") or {}).get("search") or []
    if not hits:
        raise SourceUnavailableError(f"no article for {term!r}")
    title = hits[0]["title"]
    snippet = strip_tags(hits[0].get("snippet") or "").strip()
    logger.info("[sources:wikipedia] top title=%r snippet=%r", title, snippet[:100])

    extract_resp = await client.get(
        WIKIPEDIA_API_URL,
        params={
            "action": "query",
            "prop": "extracts",
            "exintro": 1,
            "explaintext": 1,
            "redirects": 1,
            "titles": title,
            "format": "json",
            "utf8": 1,
        },
    )
    ensure_ok(extract_resp, "wikipedia extract")
    pages = (extract_resp.json().get("query") or {}).get("pages") or {}
    extract = ""
    for page in pages.values():
        extract = strip_tags(page.get("extract") or "")
        if extract:
            break
    if len(extract) <= WIKIPEDIA_MIN_EXTRACT_CHARS:
        raise SourceUnavailableError(f"extract for {title!r} too short ({len(extract)} chars)")
    content = f"{title}：{truncate(extract, WIKIPEDIA_MAX_CHARS)}"
    # the search snippet shows where the query matched; keep it unless the extract already says it
    if snippet and snippet not in extract:
        content += f"\n相关片段：{snippet}"
    return SearchResult(
        source=SOURCE,
        content=content,
        confidence=0.85,
    )
