"""
Keyword tables and the fast needs-search heuristic.

Pure functions, no I/O. The per-service tables are consumed by
app.agent.intent.match_service_by_rules, which is the only place that maps a
query to a backend.
"""

TRENDING_KEYWORDS: tuple[str, ...] = (
    "github trending",
    "github热门",
    "github趋势",
    "热门项目",
    "热门仓库",
    "开源项目",
    "trending",
)

WEATHER_KEYWORDS: tuple[str, ...] = (
    "天气",
    "气温",
    "温度",
    "下雨",
    "下雪",
    "weather",
    "temperature",
    "forecast",
)

WIKI_KEYWORDS: tuple[str, ...] = (
    "百科",
    "维基",
    "是什么",
    "什么是",
    "是谁",
    "介绍一下",
    "wikipedia",
    "wiki",
    "what is",
    "who is",
)

NEWS_KEYWORDS: tuple[str, ...] = (
    "新闻",
    "头条",
    "热点",
    "最新消息",
    "news",
    "headline",
)

SEARCH_KEYWORDS: tuple[str, ...] = (
    "搜索",
    "搜一下",
    "查一下",
    "查询",
    "今天",
    "现在",
    "最近",
    "最新",
    "search",
    "google",
    "today",
    "latest",
    "current",
)

URL_MARKERS: tuple[str, ...] = ("http://", "https://")

# Union of every table, in classification order
TRIGGER_WORDS: tuple[str, ...] = (
    URL_MARKERS
    + TRENDING_KEYWORDS
    + WEATHER_KEYWORDS
    + WIKI_KEYWORDS
    + NEWS_KEYWORDS
    + SEARCH_KEYWORDS
)


def contains_any(query: str, keywords: tuple[str, ...]) -> bool:
    """Case-insensitive substring check of query against keywords."""
    text = (query or "").lower()
    return any(k in text for k in keywords)


def needs_search(query: str) -> bool:
    """True when the query contains any trigger word (current info, lookup, definition, URL)."""
    return contains_any(query, TRIGGER_WORDS)
