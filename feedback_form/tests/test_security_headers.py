"""Tests for middleware — security headers, request IDs, and CORS."""

import logging

import pytest
from httpx import ASGITransport, AsyncClient

from feedback_form.logging_config import ContextFilter
from feedback_form.middleware import request_id_var


@pytest.mark.asyncio
async def test_security_headers_present(mock_settings):
    """Every response includes security headers."""
    from feedback_form.main import app

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as client:
        response = await client.get("/api/feedback/health")

    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"
    assert response.headers["Referrer-Policy"] == "strict-origin-when-cross-origin"
    assert response.headers["Cache-Control"] == "no-store"


@pytest.mark.asyncio
async def test_request_id_is_echoed(mock_settings):
    from feedback_form.main import app

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as client:
        given = await client.get(
            "/api/feedback/health", headers={"X-Request-ID": "abc-123"}
        )
        generated = await client.get("/api/feedback/health")

    assert given.headers["X-Request-ID"] == "abc-123"
    assert len(generated.headers["X-Request-ID"]) == 32


@pytest.mark.asyncio
async def test_cors_allows_explicit_methods(mock_settings):
    """CORS preflight returns explicit methods, not wildcard."""
    from feedback_form.main import app

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as client:
        response = await client.options(
            "/api/feedback/forms",
            headers={
                "Origin": "http://localhost:3000",
                "Access-Control-Request-Method": "POST",
            },
        )

    allowed = response.headers.get("Access-Control-Allow-Methods", "")
    assert "POST" in allowed
    assert "PUT" in allowed
    assert allowed != "*"


def test_context_filter_tags_records_with_request_id():
    record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)
    token = request_id_var.set("rid-1")
    try:
        ContextFilter().filter(record)
    finally:
        request_id_var.reset(token)
    assert record.request_id == "rid-1"


def test_context_filter_defaults_to_dash():
    record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)
    ContextFilter().filter(record)
    assert record.request_id == "-"
