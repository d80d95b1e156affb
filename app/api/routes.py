"""
API route aggregator: register endpoints and delegate to the agent and services.
"""

import asyncio
import logging

from fastapi import APIRouter, HTTPException

from app.agent.graph import run_search_pipeline
from app.schemas.search import ChatRequest, ChatResponse, SearchRequest, SearchResponse
from app.services.chat_service import answer_chat

logger = logging.getLogger(__name__)
router = APIRouter()


# --- System ---

@router.get("/", tags=["system"])
def root():
    return {"status": "Search augmentation backend running"}


@router.get("/health", tags=["system"])
def health():
    return {"ok": True}


# --- Search ---

@router.post(
    "/search",
    response_model=SearchResponse,
    tags=["search"],
    summary="Run the information augmentation pipeline",
    description="Classify the query, fetch from the best source (web search fallback), and summarize. An empty answer means no augmentation.",
)
async def post_search(body: SearchRequest) -> SearchResponse:
    logger.info("[api:post_search] IN  query=%r", body.query)
    try:
        out = await run_search_pipeline(body.query)
    except asyncio.TimeoutError:
        logger.warning("[api:post_search] pipeline deadline exceeded")
        return SearchResponse()
    except Exception:
        logger.exception("Search pipeline failed")
        return SearchResponse()
    logger.info("[api:post_search] OUT service=%s answer_len=%d", out["service"], len(out["answer"]))
    return SearchResponse(**out)


# --- Chat ---

@router.post(
    "/chat",
    response_model=ChatResponse,
    tags=["chat"],
    summary="Chat with the persona (search-augmented)",
    description="Answer a message with the persona prompt, injecting search results when the question needs them. 400 on empty input.",
)
async def post_chat(body: ChatRequest) -> ChatResponse:
    logger.info("[api:post_chat] IN  question=%r", body.question)
    try:
        out = await answer_chat(body.question)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return ChatResponse(**out)
