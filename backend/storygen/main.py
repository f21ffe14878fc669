"""
StoryGen Backend API
FastAPI application that turns a topic into fully-timed short-video scenes.

Run with:
    uvicorn storygen.main:app --app-dir backend
"""

import os
import uuid
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from .config import (
    API_TITLE,
    API_DESCRIPTION,
    API_VERSION,
    CORS_ORIGINS,
)
from .config.models import get_active_provider
from .core import (
    setup_logging,
    get_logger,
    set_request_id,
    clear_context,
)
from .routes import stories_router, campaigns_router

# Initialize logging
log_level = os.getenv("LOG_LEVEL", "INFO")
log_file = os.getenv("LOG_FILE")
use_json_logs = os.getenv("JSON_LOGS", "false").lower() == "true"
pipeline_log_file = os.getenv("PIPELINE_LOG_FILE")

setup_logging(
    level=log_level,
    log_file=Path(log_file) if log_file else None,
    use_json=use_json_logs,
    pipeline_log_file=Path(pipeline_log_file) if pipeline_log_file else None,
)

logger = get_logger(__name__, service="api")
logger.info("Starting StoryGen API", extra={
    "log_level": log_level,
    "json_logs": use_json_logs,
    "llm_provider": get_active_provider().value,
})

app = FastAPI(
    title=API_TITLE,
    description=API_DESCRIPTION,
    version=API_VERSION,
)


@app.middleware("http")
async def add_request_correlation(request: Request, call_next):
    """Attach a correlation id to every log line of the request"""
    request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))
    set_request_id(request_id)
    path = request.url.path

    logger.info(f"{request.method} {path}", extra={
        "method": request.method,
        "path": path,
    })

    try:
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id

        logger.info(f"Response: {response.status_code}", extra={
            "status_code": response.status_code,
            "method": request.method,
            "path": path,
        })
        return response
    finally:
        clear_context()


app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(stories_router)
app.include_router(campaigns_router)


@app.get("/")
async def root():
    """Root endpoint - API info"""
    return {
        "message": "StoryGen API - Turn a topic into timed short-video scenes",
        "version": API_VERSION,
    }


@app.get("/health")
async def health_check():
    return {"status": "healthy", "llm_provider": get_active_provider().value}
