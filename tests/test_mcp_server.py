"""Tests for the MCP bridge's HTTP proxying."""
import asyncio

import httpx
import pytest

import mcp_server


def test_call_api_posts_json():
    seen = {}

    def handler(request: httpx.Request):
        seen["method"] = request.method
        seen["path"] = request.url.path
        seen["body"] = request.content
        return httpx.Response(201, json={"user": {"name": "Sanya"}, "matches": []})

    result = asyncio.run(mcp_server.call_api(
        "post", "/profiles", json={"name": "Sanya"}, transport=httpx.MockTransport(handler),
    ))
    assert result["user"]["name"] == "Sanya"
    assert seen["method"] == "POST"
    assert seen["path"] == "/profiles"


def test_call_api_passes_query_params():
    def handler(request: httpx.Request):
        return httpx.Response(200, json={"name": request.url.params["name"]})

    result = asyncio.run(mcp_server.call_api(
        "get", "/matches", params={"name": "Rahul"}, transport=httpx.MockTransport(handler),
    ))
    assert result == {"name": "Rahul"}


def test_call_api_non_json_response():
    transport = httpx.MockTransport(lambda request: httpx.Response(502, text="bad gateway"))
    result = asyncio.run(mcp_server.call_api("delete", "/shortlist/x", transport=transport))
    assert result == {"status_code": 502, "text": "bad gateway"}


def test_call_api_rejects_unknown_method():
    with pytest.raises(ValueError):
        asyncio.run(mcp_server.call_api("put", "/profiles"))


def test_every_tool_has_description():
    tools = asyncio.run(mcp_server.mcp.list_tools())
    assert {t.name for t in tools} == {
        "list_interests", "create_profile", "find_matches",
        "shortlist_user", "remove_from_shortlist", "get_shortlist",
    }
    for tool in tools:
        assert tool.description, tool.name


def test_api_server_uses_app_factory():
    server = mcp_server.build_api_server()
    assert server.config.factory is True
    assert server.config.app == "main:create_app"
    assert server.config.port == mcp_server.API_PORT
