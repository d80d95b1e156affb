# Run from project root: uvicorn app.main:app --reload

import logging

from fastapi import FastAPI

from app.api.routes import router
from app.core.config import LOG_LEVEL
from app.mcp.server import mcp_router

logging.basicConfig(level=LOG_LEVEL)


app = FastAPI(title="Chat Search Augmentation Backend")
app.include_router(router)
app.include_router(mcp_router, prefix="/mcp")
