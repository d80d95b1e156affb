"""
Application configuration (env, settings, constants).

Responsibility: Centralize config loading, environment variables, and app-wide
constants. Keeps the rest of the app decoupled from how config is sourced.
"""

import os

from dotenv import load_dotenv

load_dotenv()

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO"

# Optional outbound proxy for every HTTP call (e.g. http://127.0.0.1:7890)
HTTP_PROXY: str = os.getenv("SEARCH_HTTP_PROXY", "").strip()

# API timeouts (seconds)
TOOLS_HTTP_TIMEOUT: float = 15.0
LLM_API_TIMEOUT: float = 30.0
SEARCH_PIPELINE_TIMEOUT: float = 60.0

# OpenAI-compatible chat completions (SiliconFlow by default)
LLM_API_URL: str = (
    os.getenv("LLM_API_URL", "https://api.siliconflow.cn/v1/chat/completions").strip()
    or "https://api.siliconflow.cn/v1/chat/completions"
)
LLM_API_KEY: str = os.getenv("SILICONFLOW_API_KEY", "").strip()

# Small model for intent classification and summarization, larger one for the final answer
INTENT_LLM_MODEL: str = (
    os.getenv("INTENT_LLM_MODEL", "Qwen/Qwen2.5-7B-Instruct").strip()
    or "Qwen/Qwen2.5-7B-Instruct"
)
CHAT_LLM_MODEL: str = (
    os.getenv("CHAT_LLM_MODEL", "moonshotai/Kimi-K2-Instruct-0905").strip()
    or "moonshotai/Kimi-K2-Instruct-0905"
)
INTENT_MAX_TOKENS: int = 10
SERVICE_MAX_TOKENS: int = 20
SUMMARY_MAX_TOKENS: int = 300
CHAT_MAX_TOKENS: int = 1024

# Serper (Google search aggregation)
SERPER_API_URL: str = "https://google.serper.dev/search"
SERPER_API_KEY: str = os.getenv("SERPER_API_KEY", "").strip()
SEARCH_LOCALE_GL: str = "cn"
SEARCH_LOCALE_HL: str = "zh-cn"

# NewsAPI
NEWS_API_URL: str = "https://newsapi.org/v2/everything"
NEWS_API_KEY: str = os.getenv("NEWS_API_KEY", "").strip()
NEWS_LANGUAGE: str = os.getenv("NEWS_LANGUAGE", "zh").strip() or "zh"

# GitHub (token is optional; unauthenticated search is rate-limited)
GITHUB_API_SEARCH_URL: str = "https://api.github.com/search/repositories"
GITHUB_RAW_HOST: str = "raw.githubusercontent.com"
GITHUB_TOKEN: str = os.getenv("GITHUB_TOKEN", "").strip()

# Hosts whose URLs are served as raw file content
RAW_CONTENT_HOSTS: frozenset[str] = frozenset({
    "raw.githubusercontent.com",
    "gist.githubusercontent.com",
    "raw.gitmirror.com",
})

# Wikipedia (MediaWiki action API)
WIKIPEDIA_API_URL: str = (
    os.getenv("WIKIPEDIA_API_URL", "https://zh.wikipedia.org/w/api.php").strip()
    or "https://zh.wikipedia.org/w/api.php"
)

# Open-Meteo weather API (no key required)
OPEN_METEO_GEOCODE: str = "https://geocoding-api.open-meteo.com/v1/search"
OPEN_METEO_FORECAST: str = "https://api.open-meteo.com/v1/forecast"
DEFAULT_WEATHER_CITY: str = os.getenv("DEFAULT_WEATHER_CITY", "北京").strip() or "北京"

# Content budgets handed to the summarizer (characters)
WIKIPEDIA_MAX_CHARS: int = 500
WIKIPEDIA_MIN_EXTRACT_CHARS: int = 50
README_MAX_CHARS: int = 1000
URL_CONTENT_MAX_CHARS: int = 1500
# Bytes read from a pasted URL before decoding; enough for URL_CONTENT_MAX_CHARS of CJK text
URL_CONTENT_MAX_BYTES: int = 16 * 1024

# Chat persona (final answer)
CHAT_TIMEZONE: str = "Asia/Shanghai"
