"""Task Gate API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery — ExMA anti-pattern)
    - Global error handlers map TaskGateError / Exception → {"error": ...} JSON
    - The request gate and its Notion client are built on startup, closed on shutdown

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - No CORSMiddleware: the gate sets CORS headers itself so serverless and ASGI
      deployments answer identically
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from taskgate.api.error_handlers import register_error_handlers
from taskgate.api.routes import health, tasks
from taskgate.config import get_settings
from taskgate.infrastructure.observability import setup_logging
from taskgate.services.request_gate import build_request_gate

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    gate, store = build_request_gate(settings)
    app.state.gate = gate
    logger.info("Task Gate API started")
    yield
    await store.aclose()
    logger.info("Task Gate API shutting down")


app = FastAPI(title="Task Gate API", version="1.0.0", lifespan=lifespan)

# Routes — explicit registration
app.include_router(health.router)
app.include_router(tasks.router)

register_error_handlers(app)
