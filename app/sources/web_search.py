"""
Aggregated web search adapter (Serper). Universal fallback of the pipeline.
"""

import httpx

from app.core.config import SEARCH_LOCALE_GL, SEARCH_LOCALE_HL, SERPER_API_KEY, SERPER_API_URL
from app.core.errors import SourceUnavailableError
from app.schemas.search import SearchResult
from app.sources.base import ensure_ok, source_adapter

SOURCE = "search"
TOP_RESULTS = 2


@source_adapter(SOURCE)
async def fetch(client: httpx.AsyncClient, query: str) -> SearchResult | None:
    if not SERPER_API_KEY:
        raise SourceUnavailableError("SERPER_API_KEY is not set")
    response = await client.post(
        SERPER_API_URL,
        json={"q": query, "gl": SEARCH_LOCALE_GL, "hl": SEARCH_LOCALE_HL, "num": 5},
        headers={"X-API-KEY": SERPER_API_KEY, "Content-Type": "application/json"},
    )
    ensure_ok(response, "web search")
    organic = response.json().get("organic") or []
    if not organic:
        return None
    blocks = []
    for i, r in enumerate(organic[:TOP_RESULTS], 1):
        title = (r.get("title") or "").strip()
        snippet = (r.get("snippet") or "").strip()
        link = (r.get("link") or "").strip()
        blocks.append(f"{i}. {title}\n{snippet}\n链接：{link}")
    return SearchResult(source=SOURCE, content="\n\n".join(blocks), confidence=0.7)
