"""Serverless Entrypoint — function-platform handler wrapping the request gate.

Event shape (Netlify / API Gateway proxy):
    {"httpMethod": "POST", "headers": {...}, "body": "...", "isBase64Encoded": false}

Invariants:
    - Settings, credential table and Notion client are built once per process
      (first invocation) and reused by warm invocations
    - One event loop per process: the shared httpx client stays bound to it
    - The returned dict always has statusCode, headers and body
    - Base64 bodies are decoded by the gate after authentication, never here

Design Decisions:
    - Sync handler(event, context) running the async gate: platforms call plain functions
    - Lazy construction over import-time construction: no global import side effects
"""

import asyncio
import logging
from typing import Any

from taskgate.config import get_settings
from taskgate.core.envelope import TaskRequest, TaskResponse, error_response
from taskgate.infrastructure.observability import setup_logging
from taskgate.services.request_gate import RequestGate, build_request_gate

logger = logging.getLogger(__name__)

_gate: RequestGate | None = None
_loop: asyncio.AbstractEventLoop | None = None


def get_gate() -> RequestGate:
    global _gate
    if _gate is None:
        settings = get_settings()
        setup_logging(settings.log_level, settings.log_format)
        _gate, _ = build_request_gate(settings)
        logger.info("Task gate initialized")
    return _gate


def _get_loop() -> asyncio.AbstractEventLoop:
    global _loop
    if _loop is None or _loop.is_closed():
        _loop = asyncio.new_event_loop()
    return _loop


def event_to_request(event: dict[str, Any]) -> TaskRequest:
    """Translate a platform event into a TaskRequest. The body stays encoded."""
    return TaskRequest(
        method=event.get("httpMethod") or "",
        headers=event.get("headers") or {},
        body=event.get("body"),
        is_base64_encoded=bool(event.get("isBase64Encoded")),
    )


def response_to_dict(response: TaskResponse) -> dict[str, Any]:
    return {
        "statusCode": response.status_code,
        "headers": response.headers,
        "body": response.body,
    }


async def handle_event(event: dict[str, Any], gate: RequestGate) -> dict[str, Any]:
    return response_to_dict(await gate.handle(event_to_request(event)))


def handler(event: dict[str, Any], context: Any = None) -> dict[str, Any]:
    """Platform entrypoint."""
    try:
        gate = get_gate()
    except Exception as e:
        logger.error(f"Task gate failed to initialize: {e}", exc_info=True)
        return response_to_dict(error_response(500, "Internal Server Error"))
    return _get_loop().run_until_complete(handle_event(event, gate))
