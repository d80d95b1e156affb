"""
Chat: compose the persona prompt, augment it with search results, and get the
final answer from the chat model.

Responsibility: the /chat command flow. The search pipeline stays a pure
function of the query text; this module is its only in-repo caller.
"""

import logging
from datetime import datetime
from zoneinfo import ZoneInfo

import httpx

from app.agent.graph import intelligent_search
from app.agent.llm import chat_completion
from app.core.config import CHAT_LLM_MODEL, CHAT_MAX_TOKENS, CHAT_TIMEZONE
from app.core.errors import LLMUnavailableError
from app.core.http import build_http_client

logger = logging.getLogger(__name__)

NO_ANSWER_REPLY = "未能获取到 AI 回复。"
UNAVAILABLE_REPLY = "聊天服务暂时不可用～"

_WEEKDAYS = ("星期一", "星期二", "星期三", "星期四", "星期五", "星期六", "星期日")

# (hour upper bound, description); first bound greater than the hour wins
_TIME_OF_DAY: tuple[tuple[int, str], ...] = (
    (6, "凌晨，快猝死了"),
    (9, "早八，困成狗"),
    (12, "上午，半梦半醒"),
    (14, "中午，干饭时间"),
    (18, "下午，继续摆烂"),
    (22, "晚上，开始夜猫子模式"),
    (24, "深夜，修仙时间"),
)

PERSONA_PROMPT = """你是风师傅，19岁大学生群友，非AI。毒舌嘴硬心软，游戏痴，梗百科，爱锐评。

**当前时间**：{time_string} {weekday}（{time_of_day}；仅作参考，不要主动提及）

**语言要求**：禁用AI腔，用我/哥们自称。回答精简，2-3句话搞定，编程/技术问题要详细。短句，偶尔用梗和Emoji。

**行为模式**：对线抓漏洞不骂脏话；日常抬杠锐评；技术问题认真回答，其他能短就短。"""

AUGMENT_BLOCK = "\n\n**实时信息**（回答时可参考，别说是查来的）：\n{info}"


def describe_time_of_day(hour: int) -> str:
    """Persona mood for an hour of the day (0-23)."""
    for bound, desc in _TIME_OF_DAY:
        if hour < bound:
            return desc
    return _TIME_OF_DAY[-1][1]


def build_system_prompt(now: datetime, augmentation: str = "") -> str:
    """Persona system prompt for the given local time, with optional search results appended."""
    prompt = PERSONA_PROMPT.format(
        time_string=now.strftime("%Y/%m/%d %H:%M"),
        weekday=_WEEKDAYS[now.weekday()],
        time_of_day=describe_time_of_day(now.hour),
    )
    if augmentation:
        prompt += AUGMENT_BLOCK.format(info=augmentation)
    return prompt


async def _answer(question: str, client: httpx.AsyncClient) -> dict:
    augmentation = await intelligent_search(question, client)
    now = datetime.now(ZoneInfo(CHAT_TIMEZONE))
    messages = [
        {"role": "system", "content": build_system_prompt(now, augmentation)},
        {"role": "user", "content": question},
    ]
    try:
        answer = await chat_completion(
            client, messages, model=CHAT_LLM_MODEL, temperature=0.8, max_tokens=CHAT_MAX_TOKENS
        )
    except LLMUnavailableError as e:
        logger.warning("[chat] chat model unavailable: %s", e)
        return {"answer": UNAVAILABLE_REPLY, "augmented": bool(augmentation)}
    return {"answer": answer or NO_ANSWER_REPLY, "augmented": bool(augmentation)}


async def answer_chat(question: str, client: httpx.AsyncClient | None = None) -> dict:
    """
    Answer one chat message. Returns {"answer": str, "augmented": bool}.
    Raises ValueError for an empty question.
    """
    q = (question or "").strip()
    if not q:
        raise ValueError("question is required")
    logger.info("[chat] START question=%r", q)
    if client is not None:
        out = await _answer(q, client)
    else:
        async with build_http_client() as own_client:
            out = await _answer(q, own_client)
    logger.info("[chat] END augmented=%s answer_len=%d", out["augmented"], len(out["answer"]))
    return out
