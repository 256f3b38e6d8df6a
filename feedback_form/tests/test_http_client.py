"""Tests for http_client module — headers and Appboy POST error handling."""

import httpx
import pytest

from feedback_form.services.http_client import (
    appboy_headers,
    appboy_post,
    close_shared_client,
    get_shared_client,
)


class TestAppboyHeaders:
    def test_includes_json_content_type(self, mock_settings):
        headers = appboy_headers()
        assert headers["Content-Type"] == "application/json"
        assert headers["Accept"] == "application/json"

    def test_includes_api_key_when_present(self, mock_settings):
        headers = appboy_headers()
        assert headers["X-Appboy-Api-Key"] == "test-api-key"

    def test_omits_api_key_when_empty(self, mock_settings):
        mock_settings.appboy_api_key = ""
        assert "X-Appboy-Api-Key" not in appboy_headers()


class TestAppboyPost:
    @pytest.mark.asyncio
    async def test_returns_json_on_success(self, mock_settings, monkeypatch):
        seen = {}

        async def mock_post(self, url, **kwargs):
            seen["url"] = url
            seen["json"] = kwargs["json"]
            return httpx.Response(201, json={"message": "success"})

        monkeypatch.setattr(httpx.AsyncClient, "post", mock_post)
        result = await appboy_post("/feedback", {"message": "hi"})

        assert result == {"message": "success"}
        assert seen["url"] == "https://appboy.test/api/v3/feedback"
        assert seen["json"] == {"message": "hi"}

    @pytest.mark.asyncio
    async def test_empty_body_returns_empty_dict(self, mock_settings, monkeypatch):
        async def mock_post(self, url, **kwargs):
            return httpx.Response(204)

        monkeypatch.setattr(httpx.AsyncClient, "post", mock_post)
        assert await appboy_post("/events", {}) == {}

    @pytest.mark.asyncio
    async def test_returns_none_on_error_status(self, mock_settings, monkeypatch):
        async def mock_post(self, url, **kwargs):
            return httpx.Response(500, text="boom")

        monkeypatch.setattr(httpx.AsyncClient, "post", mock_post)
        assert await appboy_post("/feedback", {}) is None

    @pytest.mark.asyncio
    async def test_returns_none_on_transport_error(self, mock_settings, monkeypatch):
        async def mock_post(self, url, **kwargs):
            raise httpx.ConnectError("refused")

        monkeypatch.setattr(httpx.AsyncClient, "post", mock_post)
        assert await appboy_post("/feedback", {}) is None


@pytest.mark.asyncio
async def test_close_shared_client_resets_singleton(mock_settings):
    first = get_shared_client()
    await close_shared_client()
    assert first.is_closed
    assert get_shared_client() is not first
