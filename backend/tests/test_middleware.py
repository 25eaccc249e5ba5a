"""
Notes API - Middleware Tests
=============================

What:  CORS short-circuiting of OPTIONS and X-Request-ID propagation.
"""

import pytest


class TestCORS:

    @pytest.mark.asyncio
    async def test_plain_options_returns_no_content(self, test_client):
        response = await test_client.options("/api/notes")

        assert response.status_code == 204
        assert response.content == b""
        assert response.headers["access-control-allow-origin"] == "*"

    @pytest.mark.asyncio
    async def test_preflight_returns_no_content_with_allowed_methods(self, test_client):
        response = await test_client.options(
            "/api/notes/1",
            headers={
                "Origin": "http://localhost:3000",
                "Access-Control-Request-Method": "PUT",
                "Access-Control-Request-Headers": "Content-Type",
            },
        )

        assert response.status_code == 204
        assert response.headers["access-control-allow-origin"] == "*"
        allowed = response.headers["access-control-allow-methods"]
        for method in ("GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"):
            assert method in allowed

    @pytest.mark.asyncio
    async def test_preflight_for_unlisted_header_still_returns_no_content(self, test_client):
        response = await test_client.options(
            "/api/notes",
            headers={
                "Origin": "http://localhost:3000",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "X-Requested-With",
            },
        )

        assert response.status_code == 204
        assert response.content == b""
        assert response.headers["access-control-allow-origin"] == "*"
        assert response.headers["access-control-allow-headers"] == "Content-Type, Authorization"

    @pytest.mark.asyncio
    async def test_every_response_carries_cors_headers(self, test_client):
        response = await test_client.get("/api/notes")

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"
        assert response.headers["access-control-allow-methods"] == (
            "GET, POST, PUT, DELETE, PATCH, OPTIONS"
        )
        assert response.headers["access-control-allow-headers"] == "Content-Type, Authorization"

    @pytest.mark.asyncio
    async def test_simple_request_gets_allow_origin(self, test_client):
        response = await test_client.get(
            "/api/notes", headers={"Origin": "http://localhost:3000"}
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"


class TestRequestID:

    @pytest.mark.asyncio
    async def test_generated_request_id(self, test_client):
        response = await test_client.get("/api/notes")

        assert len(response.headers["x-request-id"]) == 8

    @pytest.mark.asyncio
    async def test_client_request_id_is_echoed_in_errors(self, test_client):
        response = await test_client.get(
            "/api/notes/99999", headers={"X-Request-ID": "trace-123"}
        )

        assert response.status_code == 404
        assert response.headers["x-request-id"] == "trace-123"
        assert response.json()["request_id"] == "trace-123"
