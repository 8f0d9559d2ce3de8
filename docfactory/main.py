"""DocFactory Template API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly; bulk routes before per-template routes
    - Global error handlers map DocFactoryError to {"error": message} responses
    - CORS configured from settings (not hardcoded)
    - Storage and logging initialized on startup via lifespan context manager
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from docfactory.api.error_handlers import register_error_handlers
from docfactory.api.routes import health, template_bulk, template_versions, templates
from docfactory.config import get_settings
from docfactory.infrastructure.observability import setup_logging
from docfactory.infrastructure.storage import init_storage

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_storage()
    logger.info(f"{settings.app_name} started")
    yield
    logger.info(f"{settings.app_name} shutting down")


settings = get_settings()
app = FastAPI(title=settings.app_name, version="1.0.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(template_bulk.router)
app.include_router(template_versions.router)
app.include_router(templates.router)

register_error_handlers(app)
