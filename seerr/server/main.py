"""
Main Application Entry Point.

This module initializes the FastAPI application, configures middleware (CORS,
request logging), registers exception handlers and includes all API routers.
It serves as the root of the web server.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from seerr.core.database import async_session_maker, init_db
from seerr.core.logging_config import get_logger, setup_logging
from seerr.core.monitoring import initialize_logfire
from seerr.core.settings import get_settings

from .api.v1 import blocklist, health, override_rules, requests, routing_rules, settings, users
from .core import constant
from .core.config import settings as server_settings
from .exception_handlers import setup_exception_handlers
from .middleware import LogfireMiddleware

# Initialize logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events.

    On startup: create SQLite tables, load (and migrate) the settings file,
    then run the settings migrations that write routing rules to the database.
    """
    logger.info(f"Starting up {constant.PROJECT_NAME} Server...")
    try:
        await init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}", exc_info=True)

    store = get_settings()
    try:
        async with async_session_maker() as session:
            await store.run_database_migrations(session)
    except Exception as e:
        logger.error(f"Settings database migrations failed: {e}", exc_info=True)

    yield

    logger.info(f"Shutting down {constant.PROJECT_NAME} Server...")


app = FastAPI(
    title=constant.PROJECT_NAME,
    description="""
    Seerr Server API

    Media request management: users request movies and series, administrators
    approve them and routing rules decide which Radarr/Sonarr instance receives them.
    """,
    version=constant.VERSION,
    openapi_url=f"{constant.API_V1_STR}/openapi.json",
    docs_url=f"{constant.API_V1_STR}/docs",
    redoc_url=f"{constant.API_V1_STR}/redoc",
    lifespan=lifespan,
)

cors = server_settings.cors
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors.origins,
    allow_credentials=cors.allow_credentials,
    allow_methods=cors.allow_methods,
    allow_headers=cors.allow_headers,
)
app.add_middleware(LogfireMiddleware)
setup_exception_handlers(app)
initialize_logfire(app)


app.include_router(health.router, tags=["health"])
app.include_router(users.router, prefix=f"{constant.API_V1_STR}/user")
app.include_router(requests.router, prefix=f"{constant.API_V1_STR}/request")
app.include_router(routing_rules.router, prefix=f"{constant.API_V1_STR}/settings/routing-rules")
app.include_router(settings.router, prefix=f"{constant.API_V1_STR}/settings")
app.include_router(override_rules.router, prefix=f"{constant.API_V1_STR}/overrideRule")
app.include_router(blocklist.router, prefix=f"{constant.API_V1_STR}/blocklist")


def run() -> None:
    """Serve the application with uvicorn using the configured host and port."""
    import uvicorn

    uvicorn.run(app, host=server_settings.server_host, port=server_settings.server_port)
