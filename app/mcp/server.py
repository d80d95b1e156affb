"""
Minimal MCP-style tool server: exposes every source adapter as a standardized
tool so external agents can query one backend directly, bypassing
classification and summarization.
"""

import logging
from typing import Any

from fastapi import APIRouter, HTTPException

from app.agent.tools import SOURCE_ADAPTERS, TOOL_DESCRIPTIONS, execute_tool
from app.core.http import build_http_client
from app.schemas.search import SearchServiceType, ToolRequest

logger = logging.getLogger(__name__)

# MCP tool schema for discovery / documentation
tools = [
    {
        "name": service.value,
        "description": TOOL_DESCRIPTIONS[service],
        "input_schema": {"query": "string"},
    }
    for service in SOURCE_ADAPTERS
]

mcp_router = APIRouter(tags=["mcp"])


@mcp_router.get(
    "/tools",
    summary="MCP tool discovery",
    description="List the source tools this server exposes.",
)
def mcp_list_tools() -> dict[str, list[dict[str, Any]]]:
    return {"tools": tools}


@mcp_router.post(
    "/tools/{name}",
    summary="MCP tool: call one source adapter",
    description="Run a single source adapter for the query. Returns { result: { source, content, confidence } } or { result: null }.",
)
async def mcp_call_tool(name: str, body: ToolRequest) -> dict[str, Any]:
    """
    Run the adapter registered under name. 404 for unknown tools; empty query
    returns a null result without any outbound call.
    """
    try:
        service = SearchServiceType(name)
    except ValueError:
        service = None
    if service is None or service not in SOURCE_ADAPTERS:
        raise HTTPException(status_code=404, detail=f"Unknown tool: {name}")
    logger.info("MCP tool called: %s", name)
    query = (body.query or "").strip()
    if not query:
        return {"result": None}
    async with build_http_client() as client:
        result = await execute_tool(service, client, query)
    return {"result": result.model_dump() if result is not None else None}
