"""
Source dispatch: the one mapping from SearchServiceType to source adapter.

Tools: weather (Open-Meteo), wikipedia, news (NewsAPI), github_trending,
github_repo (README), url_content, search (Serper web search).
"""

import logging

import httpx

from app.schemas.search import SearchResult, SearchServiceType
from app.sources import github, news, url_content, weather, web_search, wikipedia
from app.sources.base import SourceFetcher

logger = logging.getLogger(__name__)

SOURCE_ADAPTERS: dict[SearchServiceType, SourceFetcher] = {
    SearchServiceType.WEATHER: weather.fetch,
    SearchServiceType.WIKIPEDIA: wikipedia.fetch,
    SearchServiceType.NEWS: news.fetch,
    SearchServiceType.GITHUB_TRENDING: github.fetch_trending,
    SearchServiceType.GITHUB_REPO: github.fetch_readme,
    SearchServiceType.URL_CONTENT: url_content.fetch,
    SearchServiceType.SEARCH: web_search.fetch,
}

# Discovery metadata for the tool server
TOOL_DESCRIPTIONS: dict[SearchServiceType, str] = {
    SearchServiceType.WEATHER: "Current weather for the city named in the query (Open-Meteo).",
    SearchServiceType.WIKIPEDIA: "Encyclopedia intro for the topic of the query (Wikipedia).",
    SearchServiceType.NEWS: "Latest two news articles matching the query (NewsAPI).",
    SearchServiceType.GITHUB_TRENDING: "Top three GitHub repositories created in the last 24 hours.",
    SearchServiceType.GITHUB_REPO: "README of the https://github.com/{owner}/{repo} URL in the query.",
    SearchServiceType.URL_CONTENT: "Text content of the URL in the query (text, JSON, scripts).",
    SearchServiceType.SEARCH: "Top two web search results for the query (Serper).",
}


async def execute_tool(service: SearchServiceType, client: httpx.AsyncClient, query: str) -> SearchResult | None:
    """
    Run the adapter for service. Returns None for services without an adapter
    (SearchServiceType.NONE) and whenever the adapter finds nothing usable.
    """
    fetch = SOURCE_ADAPTERS.get(service)
    logger.info("[tools] execute_tool service=%s query=%r", service.value, query)
    if fetch is None:
        return None
    return await fetch(client, query)
