"""
Tests for the intent oracle: local service rules, model need-check and model service selection.
"""

import httpx
import pytest

from app.agent.intent import (
    determine_service,
    extract_url,
    match_service_by_rules,
    needs_search_ai,
    parse_github_repo,
    parse_service,
)
from app.schemas.search import SearchServiceType


class TestUrlHelpers:
    def test_extract_url_from_text(self) -> None:
        assert extract_url("看看这个 https://github.com/psf/requests 怎么样") == "https://github.com/psf/requests"

    @pytest.mark.parametrize(
        "query",
        ["看看 https://github.com/psf/requests.", "(https://github.com/psf/requests)", "链接：https://github.com/psf/requests，不错"],
    )
    def test_extract_url_drops_sentence_punctuation(self, query: str) -> None:
        assert extract_url(query) == "https://github.com/psf/requests"

    def test_extract_url_none(self) -> None:
        assert extract_url("no link here") is None

    def test_parse_github_repo(self) -> None:
        assert parse_github_repo("https://github.com/psf/requests") == ("psf", "requests")
        assert parse_github_repo("https://github.com/psf/requests/") == ("psf", "requests")
        assert parse_github_repo("https://github.com/psf/requests.git") == ("psf", "requests")

    def test_parse_github_repo_rejects_deeper_paths(self) -> None:
        assert parse_github_repo("https://github.com/psf/requests/tree/main") is None
        assert parse_github_repo("https://gitlab.com/psf/requests") is None


class TestMatchServiceByRules:
    @pytest.mark.parametrize(
        "query",
        ["北京今天天气怎么样", "上海的气温", "weather in London", "明天会下雨吗"],
    )
    def test_weather(self, query: str) -> None:
        assert match_service_by_rules(query) == SearchServiceType.WEATHER

    def test_github_repo_url(self) -> None:
        assert match_service_by_rules("https://github.com/langchain-ai/langgraph") == SearchServiceType.GITHUB_REPO

    def test_raw_content_url(self) -> None:
        url = "https://raw.githubusercontent.com/psf/requests/main/README.md"
        assert match_service_by_rules(url) == SearchServiceType.URL_CONTENT

    def test_other_url(self) -> None:
        assert match_service_by_rules("https://example.com/post/1") == SearchServiceType.URL_CONTENT
        assert match_service_by_rules("https://github.com/psf/requests/issues/1") == SearchServiceType.URL_CONTENT

    @pytest.mark.parametrize("query", ["看看 https://github.com/psf/requests.", "(https://github.com/psf/requests)"])
    def test_github_repo_url_in_prose(self, query: str) -> None:
        assert match_service_by_rules(query) == SearchServiceType.GITHUB_REPO
        assert parse_github_repo(extract_url(query)) == ("psf", "requests")

    def test_url_wins_over_keywords(self) -> None:
        assert match_service_by_rules("今天 https://github.com/psf/requests 的新闻") == SearchServiceType.GITHUB_REPO

    def test_trending_before_weather(self) -> None:
        assert match_service_by_rules("今天 github trending 有啥") == SearchServiceType.GITHUB_TRENDING

    def test_wikipedia(self) -> None:
        assert match_service_by_rules("什么是量子计算") == SearchServiceType.WIKIPEDIA

    def test_news(self) -> None:
        assert match_service_by_rules("有什么科技新闻") == SearchServiceType.NEWS

    def test_generic_search(self) -> None:
        assert match_service_by_rules("帮我搜索一下显卡价格") == SearchServiceType.SEARCH

    def test_no_rule(self) -> None:
        assert match_service_by_rules("讲讲周杰伦") is None


class TestParseService:
    def test_accepts_the_four_model_services(self) -> None:
        assert parse_service("weather") == SearchServiceType.WEATHER
        assert parse_service(" Wikipedia. ") == SearchServiceType.WIKIPEDIA
        assert parse_service("news") == SearchServiceType.NEWS
        assert parse_service("search") == SearchServiceType.SEARCH

    def test_narrows_everything_else_to_search(self) -> None:
        assert parse_service("github_trending") == SearchServiceType.SEARCH
        assert parse_service("url_content") == SearchServiceType.SEARCH
        assert parse_service("I think it is news") == SearchServiceType.SEARCH
        assert parse_service("") == SearchServiceType.SEARCH


class TestNeedsSearchAI:
    def test_yes(self, backend, llm_key) -> None:
        backend.llm("YES")
        assert backend.run(needs_search_ai, "周杰伦最近有什么动态") is True
        assert len(backend.llm_calls) == 1

    def test_no(self, backend, llm_key) -> None:
        backend.llm("NO")
        assert backend.run(needs_search_ai, "你好") is False

    def test_http_error_fails_closed(self, backend, llm_key) -> None:
        backend.route("api.siliconflow.cn", lambda request: httpx.Response(502, text="bad gateway"))
        assert backend.run(needs_search_ai, "你好") is False

    def test_transport_error_fails_closed(self, backend, llm_key) -> None:
        def boom(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        backend.route("api.siliconflow.cn", boom)
        assert backend.run(needs_search_ai, "你好") is False

    def test_missing_key_makes_no_call(self, backend, monkeypatch) -> None:
        monkeypatch.setattr("app.agent.llm.LLM_API_KEY", "")
        assert backend.run(needs_search_ai, "你好") is False
        assert backend.requests == []


class TestDetermineService:
    def test_weather_keyword_skips_model(self, backend, llm_key) -> None:
        assert backend.run(determine_service, "北京今天天气怎么样") == SearchServiceType.WEATHER
        assert backend.llm_calls == []

    def test_github_repo_skips_model(self, backend, llm_key) -> None:
        assert backend.run(determine_service, "https://github.com/psf/requests") == SearchServiceType.GITHUB_REPO
        assert backend.requests == []

    def test_model_classification(self, backend, llm_key) -> None:
        backend.llm("news")
        assert backend.run(determine_service, "讲讲周杰伦") == SearchServiceType.NEWS
        system_prompt = backend.llm_messages(0)[0]["content"]
        assert "weather" in system_prompt and "wikipedia" in system_prompt

    def test_model_answer_outside_set_defaults_to_search(self, backend, llm_key) -> None:
        backend.llm("github_trending")
        assert backend.run(determine_service, "讲讲周杰伦") == SearchServiceType.SEARCH

    def test_model_failure_defaults_to_search(self, backend, llm_key) -> None:
        backend.route("api.siliconflow.cn", lambda request: httpx.Response(500))
        assert backend.run(determine_service, "讲讲周杰伦") == SearchServiceType.SEARCH
