# mcp_server.py
import asyncio
import logging
from typing import List

import httpx
import uvicorn
from mcp.server.fastmcp import FastMCP

from config import API_HOST, API_PORT, LOG_LEVEL

API_BASE = f"http://localhost:{API_PORT}"  # FastAPI address used by bridge

logger = logging.getLogger(__name__)

# create MCP server (bridge)
mcp = FastMCP("Friend Finder MCP Bridge")


# helper to call the HTTP endpoints
async def call_api(method: str, endpoint: str, json=None, params=None, transport=None):
    url = f"{API_BASE}{endpoint}"
    async with httpx.AsyncClient(timeout=10.0, transport=transport) as client:
        if method.lower() == "post":
            resp = await client.post(url, json=json)
        elif method.lower() == "get":
            resp = await client.get(url, params=params)
        elif method.lower() == "delete":
            resp = await client.delete(url)
        else:
            raise ValueError("unsupported method")
    try:
        return resp.json()
    except ValueError:
        logger.warning("Non-JSON response from %s (%s)", endpoint, resp.status_code)
        return {"status_code": resp.status_code, "text": resp.text}


# MCP tools that proxy to HTTP endpoints
@mcp.tool()
async def list_interests() -> dict:
    """List the interest tags a profile can choose from."""
    return await call_api("get", "/interests")


@mcp.tool()
async def create_profile(name: str, age: int, interests: List[str]) -> dict:
    """Create a profile and return it with its first matches."""
    payload = {"name": name, "age": age, "interests": interests}
    return await call_api("post", "/profiles", json=payload)


@mcp.tool()
async def find_matches(name: str) -> dict:
    """Ranked matches for the first profile with this name."""
    return await call_api("get", "/matches", params={"name": name})


@mcp.tool()
async def shortlist_user(user_id: str) -> dict:
    """Add a matched user to the shortlist."""
    return await call_api("post", f"/shortlist/{user_id}")


@mcp.tool()
async def remove_from_shortlist(user_id: str) -> dict:
    """Drop a user from the shortlist."""
    return await call_api("delete", f"/shortlist/{user_id}")


@mcp.tool()
async def get_shortlist() -> dict:
    """List the shortlisted profiles."""
    return await call_api("get", "/shortlist")


def build_api_server() -> uvicorn.Server:
    config = uvicorn.Config("main:create_app", factory=True, host=API_HOST, port=API_PORT, log_level="info")
    return uvicorn.Server(config)


async def main():
    """Serve the HTTP API and the stdio MCP bridge from one event loop."""
    logging.basicConfig(level=LOG_LEVEL)
    api = build_api_server()
    api_task = asyncio.create_task(api.serve())
    while not api.started and not api_task.done():
        await asyncio.sleep(0.05)
    logger.info("Friend Finder API listening on %s", API_BASE)

    try:
        await mcp.run_stdio_async()
    finally:
        api.should_exit = True
        await api_task


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Stopped")
