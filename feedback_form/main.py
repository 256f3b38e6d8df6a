"""
Feedback Form API

Thin FastAPI service driving server-side feedback forms and forwarding
submitted feedback to Appboy.
"""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncGenerator
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from feedback_form.config import get_settings
from feedback_form.logging_config import configure_logging
from feedback_form.middleware import RequestIDMiddleware, SecurityHeadersMiddleware
from feedback_form.routers import feedback
from feedback_form.services.appboy_client import get_appboy_client
from feedback_form.services.http_client import close_shared_client

logger = logging.getLogger(__name__)

settings = get_settings()
configure_logging(settings.debug)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: drain pending feedback on shutdown."""
    yield
    await get_appboy_client().close()
    await close_shared_client()


app = FastAPI(
    title="Feedback Form API",
    description="Feedback form sessions forwarding user feedback to Appboy",
    version="0.1.0",
    lifespan=lifespan,
)

# Request ID + security headers
app.add_middleware(RequestIDMiddleware)
app.add_middleware(SecurityHeadersMiddleware)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "X-Request-ID"],
)

# Routers
app.include_router(feedback.router, prefix="/api")


def _check_config() -> str:
    """Verify the Appboy endpoint is configured. Returns 'ok' or 'fail'."""
    s = get_settings()
    if s.appboy_endpoint and s.appboy_api_key:
        return "ok"
    return "fail"


@app.get("/api/feedback/health")
async def health_check() -> JSONResponse:
    """Health check. Missing Appboy config degrades but does not fail."""
    checks = {"config": _check_config()}
    failed = [k for k, v in checks.items() if v != "ok"]
    if failed:
        logger.warning("Health check degraded — failed: %s", ", ".join(failed))

    result: dict[str, Any] = {
        "status": "degraded" if failed else "ok",
        "service": "feedback-form-api",
        "version": "0.1.0",
        "checks": checks,
    }
    return JSONResponse(content=result, status_code=200)
