"""
Result summarizer: compress an adapter's raw text into a short, query-focused answer.
"""

import logging

import httpx

from app.agent.llm import chat_completion
from app.core.config import INTENT_LLM_MODEL, SUMMARY_MAX_TOKENS
from app.core.errors import LLMUnavailableError

logger = logging.getLogger(__name__)

SUMMARY_PROMPT = (
    "你是信息整理助手。根据用户的问题，把下面的检索结果压缩成一段简洁的中文答案，不超过200字。\n"
    "只保留与问题直接相关的事实、数字、时间和链接；不要编造检索结果里没有的信息；"
    "不要提到“检索结果”或“资料”这些词。"
)


async def summarize(client: httpx.AsyncClient, raw_text: str, query: str) -> str:
    """
    Summarize raw_text for query. Empty input returns "" without calling the model.
    On any model failure the raw text is returned unchanged.
    """
    if not raw_text or not raw_text.strip():
        return ""
    logger.info("[summarizer] IN  query=%r raw_len=%d", query, len(raw_text))
    messages = [
        {"role": "system", "content": SUMMARY_PROMPT},
        {"role": "user", "content": f"用户问题：{query}\n\n检索结果：\n{raw_text}"},
    ]
    try:
        summary = await chat_completion(
            client, messages, model=INTENT_LLM_MODEL, temperature=0.3, max_tokens=SUMMARY_MAX_TOKENS
        )
    except LLMUnavailableError as e:
        logger.warning("[summarizer] model unavailable, returning raw content: %s", e)
        return raw_text
    if not summary:
        logger.info("[summarizer] empty summary, returning raw content")
        return raw_text
    logger.info("[summarizer] OUT summary_len=%d", len(summary))
    return summary
