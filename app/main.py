# app/main.py (async version)

import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse
from contextlib import asynccontextmanager

from app.adapters.configuration.config import settings
from app.adapters.outbound.persistence.database import create_tables

# ─── UNIQUE LOGGING CONFIGURATION ─────────────────────────────────────────────────
level = logging.DEBUG if settings.DEBUG else getattr(logging, settings.LOG_LEVEL, logging.INFO)
logging.basicConfig(
    level=level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)


# ────────────────────────────────────────────────────────────────────────────────


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Async context manager to handle startup and shutdown events.
    """
    from app.adapters.outbound.notification.email_notifier import notification_dispatcher

    # Startup
    logger.info("Application starting up...")

    # Schema is normally managed by Alembic
    if settings.CREATE_TABLES_ON_STARTUP:
        await create_tables()
        logger.info("Database tables created")

    yield

    # Shutdown
    logger.info("Application shutting down...")
    if notification_dispatcher.pending:
        logger.info(f"Waiting for {notification_dispatcher.pending} pending notifications")
    await notification_dispatcher.drain()


# Create FastAPI instance
app = FastAPI(
    title="Cooperativa de Catadores",
    description="Administração de associações e catadores",
    version="1.0.0",
    debug=settings.DEBUG,
    lifespan=lifespan,
)

# Middlewares
from app.shared.middleware import (
    AsyncExceptionMiddleware,
    AsyncRequestLoggingMiddleware,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(AsyncRequestLoggingMiddleware)
app.add_middleware(AsyncExceptionMiddleware)

# Routers
from app.adapters.inbound.api.v1.router import api_router as api_v1_router

app.include_router(api_v1_router, prefix="/api/v1")


@app.get("/", include_in_schema=False)
async def redirect_to_docs():
    return RedirectResponse(url="/docs")


@app.get("/health", tags=["Health"], summary="Health check")
async def health():
    return {"status": "ok", "environment": settings.ENVIRONMENT}
