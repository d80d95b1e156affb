"""
LangGraph search pipeline: classify → select service → fetch → (fallback) → summarize.

Each query is one stateless run. At most two fetch stages (selected adapter,
then web search) and three model calls (need-check, service selection,
summary); any of them may be skipped. The caller only ever sees a string:
empty means "answer without augmentation".
"""

import asyncio
import logging
from typing import Literal, TypedDict

import httpx
from langgraph.graph import END, StateGraph

from app.agent.intent import determine_service, needs_search_ai
from app.agent.keywords import needs_search
from app.agent.summarizer import summarize
from app.agent.tools import execute_tool
from app.core.config import SEARCH_PIPELINE_TIMEOUT
from app.core.http import build_http_client
from app.schemas.search import SearchResult, SearchServiceType

logger = logging.getLogger(__name__)


class SearchState(TypedDict):
    query: str
    needs_search: bool
    service: SearchServiceType | None
    result: SearchResult | None
    fallback_used: bool
    answer: str


class SearchPipeline:
    """Graph nodes bound to one HTTP client. Build one per query; holds no other state."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self.client = client

    async def _classify(self, state: SearchState) -> dict:
        """Node 1: keyword heuristic, then the model need-check only if the heuristic says no."""
        query = state["query"]
        needs = needs_search(query)
        logger.info("[graph:classify] keyword needs_search=%s", needs)
        if not needs:
            needs = await needs_search_ai(self.client, query)
        logger.info("[graph:classify] OUT needs_search=%s", needs)
        return {"needs_search": needs}

    async def _select_service(self, state: SearchState) -> dict:
        """Node 2: pick the backend (local rules, then model)."""
        service = await determine_service(self.client, state["query"])
        logger.info("[graph:select_service] OUT service=%s", service.value)
        return {"service": service}

    async def _fetch(self, state: SearchState) -> dict:
        """Node 3: run the selected adapter once."""
        result = await execute_tool(state["service"], self.client, state["query"])
        logger.info("[graph:fetch] OUT service=%s hit=%s", state["service"].value, result is not None)
        return {"result": result}

    async def _fallback_fetch(self, state: SearchState) -> dict:
        """Node 4: universal web search fallback, attempted once."""
        result = await execute_tool(SearchServiceType.SEARCH, self.client, state["query"])
        logger.info("[graph:fallback_fetch] OUT hit=%s", result is not None)
        return {"result": result, "fallback_used": True}

    async def _summarize(self, state: SearchState) -> dict:
        """Node 5: compress the raw content; keep the raw content if the summary is empty."""
        content = state["result"].content
        summary = await summarize(self.client, content, state["query"])
        answer = summary or content
        logger.info("[graph:summarize] OUT answer_len=%d", len(answer))
        return {"answer": answer}

    def build_graph(self):
        """
        Build and compile the pipeline graph.
        classify → select_service → fetch/fallback_fetch → summarize → END,
        with early exits to END when no search is needed or nothing was found.
        """
        graph = StateGraph(SearchState)

        graph.add_node("classify", self._classify)
        graph.add_node("select_service", self._select_service)
        graph.add_node("fetch", self._fetch)
        graph.add_node("fallback_fetch", self._fallback_fetch)
        graph.add_node("summarize", self._summarize)

        graph.set_entry_point("classify")
        graph.add_conditional_edges("classify", _route_after_classify, ["select_service", END])
        graph.add_conditional_edges("select_service", _route_after_select, ["fetch", "fallback_fetch", END])
        graph.add_conditional_edges("fetch", _route_after_fetch, ["summarize", "fallback_fetch"])
        graph.add_conditional_edges("fallback_fetch", _route_after_fallback, ["summarize", END])
        graph.add_edge("summarize", END)

        return graph.compile()


def _route_after_classify(state: SearchState) -> Literal["select_service", "__end__"]:
    return "select_service" if state.get("needs_search") else END


def _route_after_select(state: SearchState) -> Literal["fetch", "fallback_fetch", "__end__"]:
    service = state.get("service")
    if service is None or service == SearchServiceType.NONE:
        return END
    if service == SearchServiceType.SEARCH:
        return "fallback_fetch"
    return "fetch"


def _route_after_fetch(state: SearchState) -> Literal["summarize", "fallback_fetch"]:
    return "summarize" if state.get("result") is not None else "fallback_fetch"


def _route_after_fallback(state: SearchState) -> Literal["summarize", "__end__"]:
    return "summarize" if state.get("result") is not None else END


async def _run(query: str, client: httpx.AsyncClient) -> dict:
    initial: SearchState = {
        "query": query,
        "needs_search": False,
        "service": None,
        "result": None,
        "fallback_used": False,
        "answer": "",
    }
    final = await SearchPipeline(client).build_graph().ainvoke(initial)
    result = final.get("result")
    service = final.get("service")
    return {
        "answer": (final.get("answer") or "").strip(),
        "service": service,
        "source": result.source if result is not None else None,
        "fallback_used": bool(final.get("fallback_used")),
    }


async def _run_with_own_client(query: str, client: httpx.AsyncClient | None) -> dict:
    if client is not None:
        return await _run(query, client)
    async with build_http_client() as own_client:
        return await _run(query, own_client)


async def run_search_pipeline(query: str, client: httpx.AsyncClient | None = None) -> dict:
    """
    Run the pipeline for one query. Returns answer, service, source, fallback_used.
    Creates (and closes) its own HTTP client when none is given.
    The whole run is bounded by SEARCH_PIPELINE_TIMEOUT; asyncio.TimeoutError is raised past it.
    """
    q = (query or "").strip()
    logger.info("[run_search_pipeline] START query=%r", q)
    if not q:
        return {"answer": "", "service": None, "source": None, "fallback_used": False}
    out = await asyncio.wait_for(_run_with_own_client(q, client), timeout=SEARCH_PIPELINE_TIMEOUT)
    logger.info(
        "[run_search_pipeline] END service=%s source=%s fallback_used=%s answer_len=%d",
        out["service"].value if out["service"] else None,
        out["source"],
        out["fallback_used"],
        len(out["answer"]),
    )
    return out


async def intelligent_search(query: str, client: httpx.AsyncClient | None = None) -> str:
    """
    Information augmentation for one chat query. Never raises; returns "" when no
    search was needed, nothing was found, or the pipeline failed or timed out.
    """
    try:
        out = await run_search_pipeline(query, client)
    except asyncio.TimeoutError:
        logger.warning("[intelligent_search] pipeline timed out after %.2fs", SEARCH_PIPELINE_TIMEOUT)
        return ""
    except Exception:
        logger.exception("[intelligent_search] pipeline failed")
        return ""
    return out["answer"]
