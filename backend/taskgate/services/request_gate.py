"""Request Gate — the single entry point every inbound request passes through.

Invariants:
    - OPTIONS short-circuits with 204 before authentication
    - Authentication runs before method dispatch (unknown methods from
      anonymous callers get 401, not 405)
    - Every path returns a TaskResponse carrying Access-Control-Allow-Origin: *
    - No exception escapes handle(); unexpected ones become a generic 500
      and are logged with traceback

Design Decisions:
    - Client errors raised as TaskGateError subclasses and converted in one place
      (ADR: uniform error shape, mirrors the ASGI global handlers)
    - Body parsed into a typed request before routing: malformed JSON is a 400,
      not an unhandled 500
"""

import logging
from typing import Mapping

import httpx

from taskgate.config import Settings, load_credential_table
from taskgate.core.authenticate import verify_basic_auth
from taskgate.core.domain_types import METHOD_OPERATIONS, HttpMethod, TaskOperation
from taskgate.core.envelope import (
    TaskRequest, TaskResponse, decode_body, error_response, preflight_response,
)
from taskgate.core.errors import (
    InternalError, MethodNotAllowedError, TaskGateError, UnauthorizedError,
)
from taskgate.infrastructure.notion_client import NotionTaskStore
from taskgate.schemas.task import parse_task_body
from taskgate.services.task_router import TaskRouter

logger = logging.getLogger(__name__)


class RequestGate:
    """Preflight, authentication, body parsing and dispatch for the task endpoint."""

    def __init__(self, credentials: Mapping[str, str], router: TaskRouter):
        self._credentials = credentials
        self._router = router

    async def handle(self, request: TaskRequest) -> TaskResponse:
        try:
            return await self._handle(request)
        except TaskGateError as e:
            logger.warning(
                f"{e.code}: {getattr(e, 'reason', e.message)}",
                extra={"method": request.method, "error_code": e.code},
            )
            return error_response(e.http_status, e.message)
        except Exception as e:
            logger.error(
                f"Unhandled exception handling {request.method}: {e}",
                exc_info=True,
                extra={"method": request.method},
            )
            internal = InternalError()
            return error_response(internal.http_status, internal.message)

    async def _handle(self, request: TaskRequest) -> TaskResponse:
        method = HttpMethod.parse(request.method)
        if method is HttpMethod.OPTIONS:
            return preflight_response()

        if not verify_basic_auth(request.header("authorization"), self._credentials):
            raise UnauthorizedError()

        operation = METHOD_OPERATIONS.get(method) if method else None
        if operation is None:
            raise MethodNotAllowedError(request.method)

        body = None
        if operation is not TaskOperation.LIST:
            body = parse_task_body(operation, decode_body(request))

        response = await self._router.dispatch(operation, body)
        logger.info(
            f"{request.method} → {response.status_code}",
            extra={
                "method": request.method,
                "operation": operation.value,
                "status_code": response.status_code,
            },
        )
        return response


def build_request_gate(
    settings: Settings, transport: httpx.AsyncBaseTransport | None = None,
) -> tuple[RequestGate, NotionTaskStore]:
    """Wire settings → credential table + Notion store → gate. Once per process."""
    store = NotionTaskStore.from_settings(settings, transport=transport)
    gate = RequestGate(load_credential_table(settings), TaskRouter(store))
    return gate, store
