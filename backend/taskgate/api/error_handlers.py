"""Error Handlers — global exception handlers for the Task Gate API.

Invariants:
    - TaskGateError → {"error": <public message>} with its http_status
    - Exception (catch-all) → 500 {"error": "Internal Server Error"}, never leaks details
    - Both carry Access-Control-Allow-Origin: *

Design Decisions:
    - Two-layer handler: domain (TaskGateError), catch-all (Exception)
    - The request gate already converts its own failures; these handlers cover
      whatever fails around it (e.g. reading the request body)
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from taskgate.core.envelope import CORS_ORIGIN_HEADERS
from taskgate.core.errors import InternalError, TaskGateError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_taskgate_error_handler(app)
    _register_generic_error_handler(app)


def _register_taskgate_error_handler(app: FastAPI) -> None:

    @app.exception_handler(TaskGateError)
    async def taskgate_error_handler(request: Request, exc: TaskGateError):
        logger.error(
            f"TaskGateError: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        return JSONResponse(
            status_code=exc.http_status,
            content=exc.to_response(),
            headers=CORS_ORIGIN_HEADERS,
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=InternalError().to_response(),
            headers=CORS_ORIGIN_HEADERS,
        )
