"""
HTTP service for the Pillora assistant.

Endpoints:
- POST /api/chat  run the drug-information pipeline for a conversation
- GET  /healthz   health check for external monitoring
- GET  /          basic connectivity check
"""

from __future__ import annotations

import traceback
from contextlib import asynccontextmanager

import httpx
from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse

from config import (
    logger,
    SERVICE_NAME,
    ENVIRONMENT,
    OPENFDA_TIMEOUT,
    GENERIC_ERROR_MESSAGE,
)
from models.schemas import ChatRequest
from services.chat_service import ChatPipeline, create_pipeline
from services.llm_service import LLMService
from services.openfda_service import OpenFDAClient
from utils.cache import drug_cache


@asynccontextmanager
async def lifespan(app: FastAPI):
    http = httpx.AsyncClient(timeout=OPENFDA_TIMEOUT)
    llm = LLMService()
    app.state.pipeline = create_pipeline(drug_cache, OpenFDAClient(http=http), llm)
    logger.info(f"[HTTP] {SERVICE_NAME} started ({ENVIRONMENT}), cache ttl={drug_cache.ttl}s")
    try:
        yield
    finally:
        await http.aclose()
        await llm.aclose()
        logger.info(f"[HTTP] {SERVICE_NAME} stopped")


# Minimal app with no docs endpoint (reduces attack surface)
app = FastAPI(docs_url=None, redoc_url=None, lifespan=lifespan)


def get_pipeline(request: Request) -> ChatPipeline:
    return request.app.state.pipeline


@app.post("/api/chat")
async def chat(request: Request, pipeline: ChatPipeline = Depends(get_pipeline)):
    """
    Body: {"messages": [{"role": "...", "content": "..."}, ...]}
    Returns {reply, recalls, drugInfo, interactions}, or a 500 with
    {error, status: "error"} on any failure including a malformed body.
    """
    try:
        payload = await request.json()
        chat_request = ChatRequest.model_validate(payload)
        response = await pipeline.handle(chat_request)
        return response.model_dump()
    except Exception as e:
        logger.error(f"[HTTP] Error in chat handler: {e}")
        logger.debug(traceback.format_exc())
        return JSONResponse(
            status_code=500,
            content={"error": str(e) or GENERIC_ERROR_MESSAGE, "status": "error"},
        )


@app.get("/healthz")
def health_check():
    """Health check endpoint for external monitoring."""
    return {"status": "ok", "service": SERVICE_NAME, "cache_entries": drug_cache.size()}


@app.get("/")
def root():
    """Root endpoint for basic connectivity check."""
    return {
        "service": SERVICE_NAME,
        "chat": "/api/chat",
        "healthz": "/healthz",
    }
