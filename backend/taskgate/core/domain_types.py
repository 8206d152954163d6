"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - TaskId wraps the store's opaque page id — never parsed or generated locally
    - Every supported HTTP method and task operation is an Enum member — no raw string matching
    - Each TaskOperation owns its public failure message

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON and log extras without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

TaskId = NewType("TaskId", str)


# ─── Enums ───────────────────────────────────────────────────────

class HttpMethod(str, Enum):
    """Methods the endpoint understands. Anything else is 405."""
    OPTIONS = "OPTIONS"
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"

    @classmethod
    def parse(cls, raw: str | None) -> "HttpMethod | None":
        """Exact, case-sensitive match — 'get' is not GET."""
        try:
            return cls(raw)
        except ValueError:
            return None


class TaskOperation(str, Enum):
    """The four task operations exposed by the endpoint."""
    LIST = "list"
    CREATE = "create"
    UPDATE = "update"
    ARCHIVE = "archive"

    @property
    def error_message(self) -> str:
        return _ERROR_MESSAGES[self]

    @property
    def success_status(self) -> int:
        return 201 if self is TaskOperation.CREATE else 200


_ERROR_MESSAGES: dict[TaskOperation, str] = {
    TaskOperation.LIST: "Error fetching tasks",
    TaskOperation.CREATE: "Error adding task",
    TaskOperation.UPDATE: "Error updating task",
    TaskOperation.ARCHIVE: "Error removing task",
}

METHOD_OPERATIONS: dict[HttpMethod, TaskOperation] = {
    HttpMethod.GET: TaskOperation.LIST,
    HttpMethod.POST: TaskOperation.CREATE,
    HttpMethod.PUT: TaskOperation.UPDATE,
    HttpMethod.DELETE: TaskOperation.ARCHIVE,
}
