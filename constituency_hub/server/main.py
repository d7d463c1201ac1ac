"""
Main Application Entry Point.

This module initializes the FastAPI application, configures middleware (CORS,
request timing), registers the exception handlers and includes all API
routers. It serves as the root of the web server.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from constituency_hub.core.database import async_session_maker, init_db
from constituency_hub.core.logging_config import get_logger, setup_logging
from constituency_hub.core.monitoring import initialize_logfire

from .api.v1 import (
    achievements,
    ama,
    auth,
    contact,
    emergency,
    events,
    health,
    news,
    polls,
    site_settings,
    sms,
    store,
    voters,
    volunteers,
)
from .api.v1.admin import router as admin_router
from .core import constant
from .core.config import settings
from .exception_handlers import setup_exception_handlers
from .middleware import LogfireMiddleware
from .services.users import ensure_admin_user

# Initialize logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events.

    Creates missing tables and the bootstrap admin account on startup.
    """
    # Startup
    try:
        logger.info("Starting up Constituency Hub Server...")
        await init_db()
        logger.info("Database initialized successfully")
        async with async_session_maker() as session:
            await ensure_admin_user(session)
    except Exception as e:
        logger.error(f"Database initialization failed: {e}", exc_info=True)

    yield

    # Shutdown
    logger.info("Shutting down Constituency Hub Server...")


app = FastAPI(
    title=constant.PROJECT_NAME,
    description="""
    Constituency Hub Server API

    Backend for a parliamentary constituency portal: news and events, the
    achievements showcase, "ask me anything", public polls, voter lookup,
    the volunteer registry, emergency SOS, the merchandise store and the
    back-office administration behind them.
    """,
    version=constant.VERSION,
    openapi_url=f"{constant.API_V1_STR}/openapi.json",
    docs_url=f"{constant.API_V1_STR}/docs",
    redoc_url=f"{constant.API_V1_STR}/redoc",
    lifespan=lifespan,
)

# Set all CORS enabled origins
cors = settings.cors
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

API = constant.API_V1_STR

app.include_router(health.router, tags=["health"])
app.include_router(auth.router, prefix=f"{API}/auth", tags=["auth"])
app.include_router(news.router, prefix=API, tags=["news"])
app.include_router(events.router, prefix=f"{API}/events", tags=["events"])
app.include_router(achievements.router, prefix=f"{API}/achievements", tags=["achievements"])
app.include_router(ama.router, prefix=f"{API}/ama", tags=["ama"])
app.include_router(polls.router, prefix=f"{API}/polls", tags=["polls"])
app.include_router(voters.router, prefix=f"{API}/voters", tags=["voters"])
app.include_router(volunteers.router, prefix=f"{API}/volunteers", tags=["volunteers"])
app.include_router(emergency.router, prefix=f"{API}/emergency", tags=["emergency"])
app.include_router(store.router, prefix=f"{API}/store", tags=["store"])
app.include_router(contact.router, prefix=f"{API}/contact", tags=["contact"])
app.include_router(site_settings.router, prefix=f"{API}/settings", tags=["settings"])
app.include_router(sms.router, prefix=f"{API}/sms", tags=["sms"])
app.include_router(admin_router, prefix=f"{API}/admin")
