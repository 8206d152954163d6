"""Task Schemas — typed request bodies for the mutating task operations.

Invariants:
    - Each mutating operation has exactly one request model, tagged with its TaskOperation
    - Invalid JSON, non-object documents and wrongly typed fields raise BadRequestError
    - Missing title/id are accepted as None and forwarded as-is (permissive)
    - Unknown fields are ignored

Design Decisions:
    - model_validate_json over json.loads + model_validate: one pass, one error type
    - Optional fields instead of required: keeps the endpoint's historical permissive
      contract; the store rejects what it cannot use
"""

from typing import ClassVar

from pydantic import BaseModel, ValidationError

from taskgate.core.domain_types import TaskOperation
from taskgate.core.errors import BadRequestError


class CreateTaskRequest(BaseModel):
    """POST body — a new task's title."""
    operation: ClassVar[TaskOperation] = TaskOperation.CREATE
    title: str | None = None


class UpdateTaskRequest(BaseModel):
    """PUT body — rename an existing task."""
    operation: ClassVar[TaskOperation] = TaskOperation.UPDATE
    id: str | None = None
    title: str | None = None


class ArchiveTaskRequest(BaseModel):
    """DELETE body — soft-delete an existing task."""
    operation: ClassVar[TaskOperation] = TaskOperation.ARCHIVE
    id: str | None = None


TaskRequestBody = CreateTaskRequest | UpdateTaskRequest | ArchiveTaskRequest

_MODELS: dict[TaskOperation, type[TaskRequestBody]] = {
    TaskOperation.CREATE: CreateTaskRequest,
    TaskOperation.UPDATE: UpdateTaskRequest,
    TaskOperation.ARCHIVE: ArchiveTaskRequest,
}


def parse_task_body(operation: TaskOperation, body: str | None) -> TaskRequestBody:
    """Parse a raw body for a mutating operation. Empty body means {}."""
    model = _MODELS.get(operation)
    if model is None:
        raise ValueError(f"{operation.value} takes no request body")
    try:
        return model.model_validate_json(body or "{}")
    except ValidationError as e:
        raise BadRequestError(
            "; ".join(
                f"{'.'.join(str(loc) for loc in err['loc']) or 'body'}: {err['msg']}"
                for err in e.errors()
            ),
        )
