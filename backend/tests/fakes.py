"""Test doubles — FakeTaskStore and a Basic-auth header builder.

Invariants:
    - FakeTaskStore records every call so tests can assert exactly-one-call properties
    - Default results are Ok payloads; fail() switches one operation to Err
"""

import base64

from taskgate.core.domain_types import TaskOperation
from taskgate.core.errors import RemoteStoreError
from taskgate.core.result import Err, Ok


def basic_auth(username: str, password: str) -> str:
    token = base64.b64encode(f"{username}:{password}".encode()).decode()
    return f"Basic {token}"


class FakeTaskStore:
    """TaskStore double. `results` maps operation → Ok/Err."""

    def __init__(self):
        self.calls: list[tuple] = []
        self.results: dict[TaskOperation, object] = {}

    def fail(self, operation: TaskOperation, reason: str = "boom", status: int | None = 502):
        self.results[operation] = Err(RemoteStoreError(operation, reason, status))

    def _result(self, operation: TaskOperation):
        return self.results.get(
            operation, Ok({"object": "page", "operation": operation.value}),
        )

    async def query_tasks(self):
        self.calls.append(("query",))
        return self.results.get(
            TaskOperation.LIST, Ok({"object": "list", "results": []}),
        )

    async def create_task(self, title):
        self.calls.append(("create", title))
        return self._result(TaskOperation.CREATE)

    async def archive_task(self, task_id):
        self.calls.append(("archive", task_id))
        return self._result(TaskOperation.ARCHIVE)

    async def update_task(self, task_id, title):
        self.calls.append(("update", task_id, title))
        return self._result(TaskOperation.UPDATE)
