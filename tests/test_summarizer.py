"""
Tests for the result summarizer.
"""

import httpx

from app.agent.summarizer import summarize


def test_empty_input_makes_no_call(backend, llm_key) -> None:
    assert backend.run(summarize, "", "北京天气") == ""
    assert backend.run(summarize, "   ", "北京天气") == ""
    assert backend.requests == []


def test_returns_model_summary(backend, llm_key) -> None:
    backend.llm("北京今天晴，20°C。")
    out = backend.run(summarize, "北京当前天气：晴\n温度：20°C", "北京今天天气怎么样")
    assert out == "北京今天晴，20°C。"
    user_msg = backend.llm_messages(0)[1]["content"]
    assert "北京今天天气怎么样" in user_msg
    assert "温度：20°C" in user_msg
    payload = backend.llm_calls[0].content
    assert b'"max_tokens"' in payload


def test_model_failure_returns_raw_text(backend, llm_key) -> None:
    backend.route("api.siliconflow.cn", lambda request: httpx.Response(503))
    raw = "1. Title\nsnippet\n链接：https://example.com"
    assert backend.run(summarize, raw, "query") == raw


def test_empty_summary_returns_raw_text(backend, llm_key) -> None:
    backend.llm("")
    assert backend.run(summarize, "raw content", "query") == "raw content"


def test_missing_key_returns_raw_text(backend, monkeypatch) -> None:
    monkeypatch.setattr("app.agent.llm.LLM_API_KEY", "")
    assert backend.run(summarize, "raw content", "query") == "raw content"
    assert backend.requests == []
