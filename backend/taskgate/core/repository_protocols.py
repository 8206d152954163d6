"""Boundary Protocols — contract between the task router and the remote store.

Invariants:
    - The router never imports the HTTP client — it only sees TaskStore
    - Every TaskStore method returns a Result; expected failures are never raised

Design Decisions:
    - Protocol over ABC: structural subtyping, tests pass plain fakes (ADR: ExMA anti-pattern)
    - Payloads are the store's raw JSON (dict), forwarded to the client unchanged
"""

from typing import Any, Protocol

from taskgate.core.errors import RemoteStoreError
from taskgate.core.result import Result

StorePayload = dict[str, Any]


class TaskStore(Protocol):
    """Contract for the remote task store — implemented by infrastructure."""
    async def query_tasks(self) -> Result[StorePayload, RemoteStoreError]: ...
    async def create_task(
        self, title: str | None,
    ) -> Result[StorePayload, RemoteStoreError]: ...
    async def archive_task(
        self, task_id: str | None,
    ) -> Result[StorePayload, RemoteStoreError]: ...
    async def update_task(
        self, task_id: str | None, title: str | None,
    ) -> Result[StorePayload, RemoteStoreError]: ...
