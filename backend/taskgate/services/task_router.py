"""Task Router — maps the four task operations onto the store and normalizes responses.

Invariants:
    - Each operation makes exactly one store call
    - Ok(payload) → operation's success status with the payload unchanged
    - Err(error) → 500 with the operation-specific message; cause logged, never surfaced
    - Never raises for store failures (they arrive as Err values)

Design Decisions:
    - Explicit method per operation over a generic dispatcher keyed by name:
      every mapping visible (ADR: ExMA no convention-over-config)
    - Pattern matching on Ok/Err replaces per-operation try/except
"""

import logging

from taskgate.core.domain_types import TaskOperation
from taskgate.core.envelope import TaskResponse, error_response, json_response
from taskgate.core.errors import RemoteStoreError
from taskgate.core.repository_protocols import StorePayload, TaskStore
from taskgate.core.result import Err, Ok, Result
from taskgate.schemas.task import (
    ArchiveTaskRequest, CreateTaskRequest, TaskRequestBody, UpdateTaskRequest,
)

logger = logging.getLogger(__name__)


class TaskRouter:
    """Routes typed task requests to the store. One method per operation."""

    def __init__(self, store: TaskStore):
        self._store = store

    async def list_tasks(self) -> TaskResponse:
        result = await self._store.query_tasks()
        return _to_response(TaskOperation.LIST, result)

    async def create_task(self, request: CreateTaskRequest) -> TaskResponse:
        result = await self._store.create_task(request.title)
        return _to_response(TaskOperation.CREATE, result)

    async def archive_task(self, request: ArchiveTaskRequest) -> TaskResponse:
        result = await self._store.archive_task(request.id)
        return _to_response(TaskOperation.ARCHIVE, result)

    async def update_task(self, request: UpdateTaskRequest) -> TaskResponse:
        result = await self._store.update_task(request.id, request.title)
        return _to_response(TaskOperation.UPDATE, result)

    async def dispatch(
        self, operation: TaskOperation, request: TaskRequestBody | None,
    ) -> TaskResponse:
        """Route by operation. Body type must match the operation."""
        match operation, request:
            case TaskOperation.LIST, None:
                return await self.list_tasks()
            case TaskOperation.CREATE, CreateTaskRequest():
                return await self.create_task(request)
            case TaskOperation.ARCHIVE, ArchiveTaskRequest():
                return await self.archive_task(request)
            case TaskOperation.UPDATE, UpdateTaskRequest():
                return await self.update_task(request)
        raise TypeError(
            f"{type(request).__name__} does not fit operation {operation.value}",
        )


def _to_response(
    operation: TaskOperation, result: Result[StorePayload, RemoteStoreError],
) -> TaskResponse:
    match result:
        case Ok(payload):
            return json_response(operation.success_status, payload)
        case Err(error):
            logger.error(
                f"{operation.error_message}: {error}",
                extra={
                    "operation": operation.value,
                    "error_code": error.code,
                    "remote_status": error.remote_status,
                },
            )
            return error_response(error.http_status, error.message)
    raise TypeError(f"Unexpected store result: {result!r}")
