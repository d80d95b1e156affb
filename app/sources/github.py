"""
GitHub adapters: trending repositories (search API) and repository README
(raw content host).
"""

import logging
from datetime import datetime, timedelta, timezone

import httpx

from app.agent.intent import extract_url, parse_github_repo
from app.core.config import GITHUB_API_SEARCH_URL, GITHUB_RAW_HOST, GITHUB_TOKEN, README_MAX_CHARS
from app.core.errors import SourceUnavailableError
from app.schemas.search import SearchResult
from app.sources.base import ensure_ok, source_adapter, truncate

logger = logging.getLogger(__name__)

TRENDING_SOURCE = "github_trending"
README_SOURCE = "github_repo"
TRENDING_TOP_K = 3
README_FILENAMES: tuple[str, ...] = ("README.md", "readme.md", "README.MD", "README.rst", "README")


def _api_headers() -> dict[str, str]:
    headers = {"Accept": "application/vnd.github+json"}
    if GITHUB_TOKEN:
        headers["Authorization"] = f"Bearer {GITHUB_TOKEN}"
    return headers


@source_adapter(TRENDING_SOURCE)
async def fetch_trending(client: httpx.AsyncClient, query: str) -> SearchResult | None:
    """Top repositories created in the last 24 hours, by stars."""
    since = (datetime.now(timezone.utc) - timedelta(days=1)).strftime("%Y-%m-%dT%H:%M:%SZ")
    response = await client.get(
        GITHUB_API_SEARCH_URL,
        params={"q": f"created:>{since}", "sort": "stars", "order": "desc", "per_page": TRENDING_TOP_K},
        headers=_api_headers(),
    )
    ensure_ok(response, "github search")
    items = response.json().get("items") or []
    if not items:
        return None
    lines = ["GitHub 最近24小时热门项目："]
    for i, repo in enumerate(items[:TRENDING_TOP_K], 1):
        name = repo.get("full_name", "")
        stars = repo.get("stargazers_count", 0)
        language = repo.get("language") or "未知语言"
        description = (repo.get("description") or "暂无描述").strip()
        lines.append(f"{i}. {name}（★{stars}，{language}）\n   {description}\n   {repo.get('html_url', '')}")
    return SearchResult(source=TRENDING_SOURCE, content="\n".join(lines), confidence=0.85)


@source_adapter(README_SOURCE)
async def fetch_readme(client: httpx.AsyncClient, query: str) -> SearchResult | None:
    """README of the repository named by a https://github.com/{owner}/{repo} URL in the query."""
    parsed = parse_github_repo(extract_url(query) or "")
    if not parsed:
        raise SourceUnavailableError("query has no github repository URL")
    owner, repo = parsed
    for filename in README_FILENAMES:
        url = f"https://{GITHUB_RAW_HOST}/{owner}/{repo}/HEAD/{filename}"
        response = await client.get(url)
        if not response.is_success:
            logger.info("[sources:github_repo] %s -> %s", filename, response.status_code)
            continue
        text = response.text.strip()
        if not text:
            continue
        return SearchResult(
            source=README_SOURCE,
            content=f"{owner}/{repo} README：\n{truncate(text, README_MAX_CHARS)}",
            confidence=0.9,
        )
    raise SourceUnavailableError(f"no README found for {owner}/{repo}")
