"""Seerr.

This package contains a media request and discovery server. Users search for
movies, TV shows and books, file requests for them, and administrators decide
which Radarr/Sonarr instance receives each approved request.

High-level architecture
-----------------------

- ``seerr.server``: FastAPI application, REST routers under ``/api/v1`` and
  authentication dependencies.
- ``seerr.lib``: request pipeline services (permissions, quotas, routing and
  override rules, blocklist, content filtering).
- ``seerr.core``: logging, monitoring, the SQLModel database layer and the
  JSON application settings file with its migrations.
- ``seerr.providers``: thin metadata provider clients (TMDb, TVDB) built on httpx.
- ``seerr.mcp``: stdio MCP server that proxies tool calls to the REST API.
"""

__version__ = "1.0.0"
