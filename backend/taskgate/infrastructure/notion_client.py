"""Notion Task Store — httpx client translating task operations into Notion API calls.

Invariants:
    - Every call carries Bearer token, JSON content type, and the Notion-Version header
    - Exactly one outbound request per operation; nothing is retried
    - Non-2xx status, timeout, transport failure, or non-JSON body → Err(RemoteStoreError)
    - Successful payloads are returned untouched

Design Decisions:
    - One AsyncClient per store instance: warm serverless invocations reuse the connection
    - Result values instead of raised exceptions: the router matches on Ok/Err
      (ADR: explicit error union at the IO boundary)
    - Token never logged; only operation, status and reason
"""

import logging
from typing import Any

import httpx

from taskgate.config import Settings
from taskgate.core.domain_types import TaskOperation
from taskgate.core.errors import RemoteStoreError
from taskgate.core.repository_protocols import StorePayload
from taskgate.core.result import Err, Ok, Result

logger = logging.getLogger(__name__)


def title_property(title: str | None) -> dict[str, Any]:
    """Notion title property payload for a task title."""
    return {"title": {"title": [{"text": {"content": title}}]}}


class NotionTaskStore:
    """Task store backed by a Notion database."""

    def __init__(
        self,
        base_url: str,
        database_id: str,
        token: str,
        notion_version: str = "2022-06-28",
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.database_id = database_id
        self.client = httpx.AsyncClient(
            headers={
                "Authorization": f"Bearer {token}",
                "Content-Type": "application/json",
                "Notion-Version": notion_version,
            },
            timeout=timeout_seconds,
            transport=transport,
        )

    @classmethod
    def from_settings(
        cls, settings: Settings, transport: httpx.AsyncBaseTransport | None = None,
    ) -> "NotionTaskStore":
        missing = settings.missing_remote_settings()
        if missing:
            logger.warning(
                f"Remote store not fully configured, calls will fail: {', '.join(missing)}",
            )
        return cls(
            base_url=settings.notion_api_base_url,
            database_id=settings.notion_database_id,
            token=settings.notion_token,
            notion_version=settings.notion_version,
            timeout_seconds=settings.notion_timeout_seconds,
            transport=transport,
        )

    async def query_tasks(self) -> Result[StorePayload, RemoteStoreError]:
        """Full, unfiltered database query (store's default page size and order)."""
        return await self._send(
            TaskOperation.LIST, "POST",
            f"{self.base_url}/databases/{self.database_id}/query", {},
        )

    async def create_task(
        self, title: str | None,
    ) -> Result[StorePayload, RemoteStoreError]:
        return await self._send(
            TaskOperation.CREATE, "POST", f"{self.base_url}/pages",
            {
                "parent": {"database_id": self.database_id},
                "properties": title_property(title),
            },
        )

    async def archive_task(
        self, task_id: str | None,
    ) -> Result[StorePayload, RemoteStoreError]:
        """Soft delete — the page stays in the store with archived=true."""
        return await self._send(
            TaskOperation.ARCHIVE, "PATCH", f"{self.base_url}/pages/{task_id}",
            {"archived": True},
        )

    async def update_task(
        self, task_id: str | None, title: str | None,
    ) -> Result[StorePayload, RemoteStoreError]:
        """Replace only the title property."""
        return await self._send(
            TaskOperation.UPDATE, "PATCH", f"{self.base_url}/pages/{task_id}",
            {"properties": title_property(title)},
        )

    async def aclose(self) -> None:
        await self.client.aclose()

    async def _send(
        self,
        operation: TaskOperation,
        method: str,
        url: str,
        payload: dict[str, Any],
    ) -> Result[StorePayload, RemoteStoreError]:
        try:
            response = await self.client.request(method, url, json=payload)
        except httpx.TimeoutException as e:
            return self._fail(operation, f"timeout: {e!r}")
        except httpx.HTTPError as e:
            # Unset base URL lands here as UnsupportedProtocol (no scheme)
            return self._fail(operation, f"transport error: {e!r}")
        except httpx.InvalidURL as e:
            return self._fail(operation, f"invalid request URL: {e}")

        if response.is_error:
            return self._fail(
                operation, _describe_error_body(response), response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            return self._fail(
                operation, f"non-JSON response: {e}", response.status_code,
            )

        logger.info(
            "Remote store call succeeded",
            extra={
                "operation": operation.value,
                "remote_status": response.status_code,
            },
        )
        return Ok(data)

    def _fail(
        self,
        operation: TaskOperation,
        reason: str,
        remote_status: int | None = None,
    ) -> Err[RemoteStoreError]:
        return Err(RemoteStoreError(operation, reason, remote_status))


def _describe_error_body(response: httpx.Response) -> str:
    """Notion error bodies look like {"code": ..., "message": ...}."""
    try:
        body = response.json()
    except ValueError:
        return response.text[:200] or response.reason_phrase
    if isinstance(body, dict) and body.get("message"):
        return f"{body.get('code', 'error')}: {body['message']}"
    return response.reason_phrase
