"""
STDIO MCP server for Seerr.

Runs as a child process of an MCP-capable assistant and forwards every tool
call to the Seerr REST API.

Environment variables:
    SEERR_URL      Base URL of the Seerr instance (default: http://localhost:5055)
    SEERR_API_KEY  API key for authentication (required)

stdout carries the JSON-RPC stream, so diagnostics go to stderr.
"""

from __future__ import annotations

import os
import sys
from typing import Any, List, Literal, Optional, Union

from mcp.server.fastmcp import FastMCP

from .client import SeerrApiClient

DEFAULT_SEERR_URL = "http://localhost:5055"


def create_server(client: SeerrApiClient) -> FastMCP:
    """Build the FastMCP server with one proxy tool per API operation."""
    server = FastMCP("seerr")

    @server.tool()
    async def get_status() -> Any:
        """Seerr server version and status."""
        return await client.get_status()

    @server.tool()
    async def search_requests(
        take: int = 10,
        skip: int = 0,
        filter: str = "all",
        sort: Literal["added", "modified"] = "added",
        media_type: Optional[Literal["movie", "tv", "all"]] = None,
        requested_by: Optional[int] = None,
    ) -> Any:
        """List media requests. filter: all, pending, approved, processing, declined, failed, completed, unavailable."""
        return await client.list_requests(
            take=take, skip=skip, filter=filter, sort=sort, media_type=media_type, requested_by=requested_by
        )

    @server.tool()
    async def get_request(request_id: int) -> Any:
        """Details of one media request."""
        return await client.get_request(request_id)

    @server.tool()
    async def create_request(
        media_type: Literal["movie", "tv"],
        media_id: int,
        seasons: Optional[Union[List[int], Literal["all"]]] = None,
        is_4k: bool = False,
        server_id: Optional[int] = None,
        profile_id: Optional[int] = None,
        root_folder: Optional[str] = None,
        tags: Optional[List[int]] = None,
    ) -> Any:
        """Submit a movie or TV request by TMDb id. For TV, pass season numbers or "all"."""
        return await client.create_request(
            media_type,
            media_id,
            seasons=seasons,
            is_4k=is_4k,
            server_id=server_id,
            profile_id=profile_id,
            root_folder=root_folder,
            tags=tags,
        )

    @server.tool()
    async def approve_request(request_id: int) -> Any:
        """Approve a pending request."""
        return await client.approve_request(request_id)

    @server.tool()
    async def decline_request(request_id: int, reason: Optional[str] = None) -> Any:
        """Decline a request with an optional reason."""
        return await client.decline_request(request_id, reason)

    @server.tool()
    async def list_routing_rules() -> Any:
        """Routing rules in evaluation order."""
        return await client.list_routing_rules()

    @server.tool()
    async def list_blocklist(take: int = 25, skip: int = 0, search: Optional[str] = None) -> Any:
        """Blocklisted titles, newest first."""
        return await client.list_blocklist(take=take, skip=skip, search=search)

    @server.tool()
    async def add_to_blocklist(tmdb_id: int, media_type: Literal["movie", "tv"], title: Optional[str] = None) -> Any:
        """Blocklist a title so it cannot be requested."""
        return await client.add_to_blocklist(tmdb_id, media_type, title)

    return server


def main() -> None:
    api_key = os.getenv("SEERR_API_KEY")
    if not api_key:
        sys.stderr.write("Error: SEERR_API_KEY environment variable is required.\n")
        sys.exit(1)

    seerr_url = os.getenv("SEERR_URL", DEFAULT_SEERR_URL)
    client = SeerrApiClient(seerr_url, api_key)
    server = create_server(client)
    sys.stderr.write(f"Seerr MCP STDIO server connected ({seerr_url})\n")
    server.run(transport="stdio")


if __name__ == "__main__":
    main()
