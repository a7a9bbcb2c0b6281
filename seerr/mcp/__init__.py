"""
MCP (Model Context Protocol) integration.

- client: async HTTP client for the Seerr REST API
- stdio: standalone STDIO MCP server proxying tool calls to that API
"""

from .client import SeerrApiClient, SeerrApiError

__all__ = ["SeerrApiClient", "SeerrApiError"]
