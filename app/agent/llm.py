"""
Agent LLM: OpenAI-compatible chat completions over httpx (SiliconFlow by default).

Used three times per chat turn: intent classification, service selection and
summarization in the search pipeline, then the final persona answer.
"""

import logging
from typing import Any

import httpx

from app.core.config import INTENT_LLM_MODEL, LLM_API_KEY, LLM_API_TIMEOUT, LLM_API_URL
from app.core.errors import LLMUnavailableError

logger = logging.getLogger(__name__)


async def chat_completion(
    client: httpx.AsyncClient,
    messages: list[dict[str, Any]],
    *,
    model: str = INTENT_LLM_MODEL,
    temperature: float = 0.1,
    max_tokens: int = 256,
) -> str:
    """
    Call the chat-completions endpoint once. Returns the stripped message content.
    Raises LLMUnavailableError when the key is missing, the call fails, or the
    response has no message content.
    """
    if not LLM_API_KEY:
        logger.warning("[llm] no SILICONFLOW_API_KEY")
        raise LLMUnavailableError("SILICONFLOW_API_KEY is not set")
    headers = {"Authorization": f"Bearer {LLM_API_KEY}", "Content-Type": "application/json"}
    payload = {
        "model": model,
        "messages": messages,
        "temperature": temperature,
        "max_tokens": max_tokens,
    }
    prompt_len = sum(len(m.get("content") or "") for m in messages)
    logger.info("[llm] IN  model=%s prompt_len=%d max_tokens=%d", model, prompt_len, max_tokens)
    try:
        response = await client.post(LLM_API_URL, json=payload, headers=headers, timeout=LLM_API_TIMEOUT)
    except httpx.HTTPError as e:
        logger.warning("[llm] request failed: %s", e)
        raise LLMUnavailableError(f"request failed: {e}") from e
    if response.status_code != 200:
        logger.warning("[llm] LLM error %s: %s", response.status_code, response.text[:200])
        raise LLMUnavailableError(f"LLM returned {response.status_code}")
    try:
        data = response.json()
    except ValueError as e:
        raise LLMUnavailableError("LLM returned invalid JSON") from e
    if not isinstance(data, dict):
        raise LLMUnavailableError("LLM response is not an object")
    choices = data.get("choices") or []
    if not choices or not isinstance(choices[0], dict):
        raise LLMUnavailableError("LLM response has no choices")
    msg = choices[0].get("message") or {}
    content = msg.get("content") if isinstance(msg, dict) else None
    if content is not None and not isinstance(content, str):
        raise LLMUnavailableError("LLM message content is not text")
    out = (content or "").strip()
    logger.info("[llm] OUT response_len=%d", len(out))
    logger.debug("[llm] OUT response_full=%r", out)
    return out
