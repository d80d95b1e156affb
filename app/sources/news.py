"""
News adapter: NewsAPI `everything` endpoint filtered by language.
"""

import httpx

from app.core.config import NEWS_API_KEY, NEWS_API_URL, NEWS_LANGUAGE
from app.core.errors import SourceUnavailableError
from app.schemas.search import SearchResult
from app.sources.base import ensure_ok, source_adapter

SOURCE = "news"
TOP_ARTICLES = 2


@source_adapter(SOURCE)
async def fetch(client: httpx.AsyncClient, query: str) -> SearchResult | None:
    if not NEWS_API_KEY:
        raise SourceUnavailableError("NEWS_API_KEY is not set")
    response = await client.get(
        NEWS_API_URL,
        params={"q": query, "language": NEWS_LANGUAGE, "sortBy": "publishedAt", "pageSize": 5},
        headers={"X-Api-Key": NEWS_API_KEY},
    )
    ensure_ok(response, "news search")
    data = response.json()
    if data.get("status") != "ok":
        raise SourceUnavailableError(f"news status {data.get('status')!r}: {data.get('message', '')}")
    articles = data.get("articles") or []
    if not articles:
        return None
    blocks = []
    for i, a in enumerate(articles[:TOP_ARTICLES], 1):
        title = (a.get("title") or "").strip()
        description = (a.get("description") or "").strip()
        link = (a.get("url") or "").strip()
        blocks.append(f"{i}. {title}\n{description}\n链接：{link}")
    return SearchResult(source=SOURCE, content="\n\n".join(blocks), confidence=0.8)
