"""
Intent oracle: does a query need search, and which backend answers it.

Local rules (URL shape, keyword tables) are tried first; the remote model is
only consulted when they are silent. Nothing here raises to the caller:
failures map to the fixed defaults (no search / SearchServiceType.SEARCH).
"""

import logging
import re
from urllib.parse import urlparse

import httpx

from app.agent.keywords import (
    NEWS_KEYWORDS,
    SEARCH_KEYWORDS,
    TRENDING_KEYWORDS,
    WEATHER_KEYWORDS,
    WIKI_KEYWORDS,
    contains_any,
)
from app.agent.llm import chat_completion
from app.core.config import INTENT_LLM_MODEL, INTENT_MAX_TOKENS, RAW_CONTENT_HOSTS, SERVICE_MAX_TOKENS
from app.core.errors import LLMUnavailableError
from app.schemas.search import SearchServiceType

logger = logging.getLogger(__name__)

URL_PATTERN = re.compile(r"https?://[^\s<>\"'，。；！？（）]+", re.IGNORECASE)
# Sentence punctuation that ends a URL pasted into prose
URL_TRAILING_PUNCTUATION = ".,;:!?)]}"
GITHUB_REPO_PATTERN = re.compile(
    r"^https?://(?:www\.)?github\.com/([A-Za-z0-9_.-]+)/([A-Za-z0-9_.-]+?)(?:\.git)?/?$",
    re.IGNORECASE,
)

# Services the remote classifier may answer with; anything else becomes SEARCH
MODEL_SELECTABLE_SERVICES: frozenset[SearchServiceType] = frozenset({
    SearchServiceType.WEATHER,
    SearchServiceType.WIKIPEDIA,
    SearchServiceType.NEWS,
    SearchServiceType.SEARCH,
})

# Keyword tables in priority order (first match wins)
_KEYWORD_RULES: tuple[tuple[tuple[str, ...], SearchServiceType], ...] = (
    (TRENDING_KEYWORDS, SearchServiceType.GITHUB_TRENDING),
    (WEATHER_KEYWORDS, SearchServiceType.WEATHER),
    (WIKI_KEYWORDS, SearchServiceType.WIKIPEDIA),
    (NEWS_KEYWORDS, SearchServiceType.NEWS),
    (SEARCH_KEYWORDS, SearchServiceType.SEARCH),
)

NEED_SEARCH_PROMPT = (
    "You decide whether a chat message needs real-time or external information "
    "(weather, news, current events, facts about specific people, places, products, "
    "prices, web pages) that a language model cannot reliably know.\n"
    "Greetings, small talk, opinions, jokes, coding help and general reasoning do NOT need search.\n"
    "Answer only YES or NO."
)

SERVICE_PROMPT = (
    "Classify the user's message into exactly one information service:\n"
    "weather - weather conditions or forecasts for a place\n"
    "wikipedia - definitions, encyclopedic facts about people, places, concepts\n"
    "news - recent events and news headlines\n"
    "search - anything else that needs a web search\n"
    "Answer with the service name only."
)


def extract_url(query: str) -> str | None:
    """Return the first http(s) URL in the query, or None."""
    match = URL_PATTERN.search(query or "")
    return match.group(0).rstrip(URL_TRAILING_PUNCTUATION) if match else None


def parse_github_repo(url: str) -> tuple[str, str] | None:
    """Return (owner, repo) for https://github.com/{owner}/{repo} with no further path, else None."""
    match = GITHUB_REPO_PATTERN.match((url or "").strip())
    if not match:
        return None
    return match.group(1), match.group(2)


def _service_for_url(url: str) -> SearchServiceType:
    host = (urlparse(url).hostname or "").lower()
    if host in RAW_CONTENT_HOSTS:
        return SearchServiceType.URL_CONTENT
    if parse_github_repo(url):
        return SearchServiceType.GITHUB_REPO
    return SearchServiceType.URL_CONTENT


def match_service_by_rules(query: str) -> SearchServiceType | None:
    """
    Local, synchronous service selection. Single source of truth for query -> backend.
    Returns None when no rule matches and the remote model has to decide.
    """
    url = extract_url(query)
    if url:
        return _service_for_url(url)
    for keywords, service in _KEYWORD_RULES:
        if contains_any(query, keywords):
            return service
    return None


def parse_service(raw: str) -> SearchServiceType:
    """Validate a model answer against MODEL_SELECTABLE_SERVICES; default SEARCH."""
    token = (raw or "").strip().strip("\"'`.。").lower()
    for service in MODEL_SELECTABLE_SERVICES:
        if token == service.value:
            return service
    logger.info("[intent:parse_service] unrecognized service %r -> search", raw)
    return SearchServiceType.SEARCH


async def needs_search_ai(client: httpx.AsyncClient, query: str) -> bool:
    """Ask the model whether the query needs external information. Any failure -> False."""
    logger.info("[intent:needs_search_ai] IN  query=%r", query)
    messages = [
        {"role": "system", "content": NEED_SEARCH_PROMPT},
        {"role": "user", "content": query},
    ]
    try:
        out = await chat_completion(
            client, messages, model=INTENT_LLM_MODEL, temperature=0.0, max_tokens=INTENT_MAX_TOKENS
        )
    except LLMUnavailableError as e:
        logger.warning("[intent:needs_search_ai] model unavailable, skipping search: %s", e)
        return False
    needs = "YES" in out.upper()
    logger.info("[intent:needs_search_ai] OUT raw=%r needs_search=%s", out, needs)
    return needs


async def determine_service(client: httpx.AsyncClient, query: str) -> SearchServiceType:
    """Pick the backend for the query: local rules first, then a 4-way model classification."""
    service = match_service_by_rules(query)
    if service is not None:
        logger.info("[intent:determine_service] OUT rule match service=%s", service.value)
        return service
    messages = [
        {"role": "system", "content": SERVICE_PROMPT},
        {"role": "user", "content": query},
    ]
    try:
        out = await chat_completion(
            client, messages, model=INTENT_LLM_MODEL, temperature=0.0, max_tokens=SERVICE_MAX_TOKENS
        )
    except LLMUnavailableError as e:
        logger.warning("[intent:determine_service] model unavailable, defaulting to search: %s", e)
        return SearchServiceType.SEARCH
    service = parse_service(out)
    logger.info("[intent:determine_service] OUT raw=%r service=%s", out, service.value)
    return service
