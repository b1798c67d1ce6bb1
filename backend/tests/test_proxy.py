"""
Registry API — Function Proxy Tests
=====================================

What:  GET /say against a fake function behind httpx.MockTransport.

What we test:
    ✅ Keyword is forwarded as ?param= and the body is relayed verbatim
    ✅ Missing / oversized keywords never reach the function
    ✅ Upstream failures become 502 without retries
"""

import httpx
import pytest

from app.exceptions import UpstreamServiceError


class TestSayRoute:
    @pytest.mark.asyncio
    async def test_relays_upstream_body(self, test_client, upstream_calls):
        response = await test_client.get("/say", params={"keyword": "  world  "})

        assert response.status_code == 200
        assert response.json() == {"response": {"message": "Hello, world"}}
        assert len(upstream_calls) == 1
        assert upstream_calls[0].url.params["param"] == "world"

    @pytest.mark.asyncio
    async def test_keyword_is_escaped_before_forwarding(self, test_client, upstream_calls):
        await test_client.get("/say", params={"keyword": "<hi>"})

        assert upstream_calls[0].url.params["param"] == "&lt;hi&gt;"

    @pytest.mark.asyncio
    async def test_missing_keyword(self, test_client, upstream_calls):
        response = await test_client.get("/say")

        assert response.status_code == 400
        messages = [entry["message"] for entry in response.json()["errors"]]
        assert messages == [
            "keyword query parameter is missing",
            "Keyword must be a string",
            "Keyword length must be between 1 and 100 characters",
        ]
        assert {entry["location"] for entry in response.json()["errors"]} == {"query"}
        assert upstream_calls == []

    @pytest.mark.asyncio
    async def test_keyword_too_long(self, test_client, upstream_calls):
        response = await test_client.get("/say", params={"keyword": "a" * 101})

        assert response.status_code == 400
        assert response.json()["errors"][0]["message"] == (
            "Keyword length must be between 1 and 100 characters"
        )
        assert upstream_calls == []

    @pytest.mark.asyncio
    async def test_oversized_keyword_never_reaches_function(self, test_client, upstream_calls):
        response = await test_client.get("/say", params={"keyword": "a" * 500})

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "keyword"
        assert response.json()["errors"][0]["location"] == "query"
        assert upstream_calls == []

    @pytest.mark.asyncio
    async def test_keyword_trimmed_and_escaped_together(self, test_client, upstream_calls):
        response = await test_client.get("/say", params={"keyword": "  <b>  "})

        assert response.status_code == 200
        assert upstream_calls[0].url.params["param"] == "&lt;b&gt;"

    @pytest.mark.asyncio
    async def test_blank_keyword(self, test_client, upstream_calls):
        response = await test_client.get("/say", params={"keyword": "    "})

        assert response.status_code == 400
        assert upstream_calls == []

    @pytest.mark.asyncio
    async def test_upstream_error_status_is_bad_gateway(
        self, test_client, upstream_calls, upstream_handler
    ):
        upstream_handler["respond"] = lambda request: httpx.Response(500, text="boom")

        response = await test_client.get("/say", params={"keyword": "hello"})

        assert response.status_code == 502
        assert response.json()["error"] == "upstream_error"
        assert "boom" not in response.text
        assert len(upstream_calls) == 1

    @pytest.mark.asyncio
    async def test_upstream_unreachable_is_bad_gateway(self, test_client, upstream_handler):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        upstream_handler["respond"] = refuse

        response = await test_client.get("/say", params={"keyword": "hello"})

        assert response.status_code == 502


class TestFunctionClient:
    @pytest.mark.asyncio
    async def test_non_json_body(self, function_client, upstream_handler):
        upstream_handler["respond"] = lambda request: httpx.Response(200, text="not json")

        with pytest.raises(UpstreamServiceError) as exc_info:
            await function_client.call("hello")
        assert exc_info.value.status_code == 200

    @pytest.mark.asyncio
    async def test_passes_through_any_json(self, function_client, upstream_handler):
        upstream_handler["respond"] = lambda request: httpx.Response(200, json=["a", 1, None])

        assert await function_client.call("hello") == ["a", 1, None]
