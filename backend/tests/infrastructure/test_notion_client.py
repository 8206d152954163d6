"""Notion Task Store — request shapes and error mapping against httpx.MockTransport.

Invariants:
    - Each operation sends exactly one request with the expected method, URL and JSON body
    - Bearer token, content type and Notion-Version headers on every call
    - 4xx/5xx, transport errors, timeouts and non-JSON bodies → Err(RemoteStoreError)

Design Decisions:
    - MockTransport over a live sandbox: no network, full control over failures
"""

import json

import httpx
import pytest

from taskgate.config import Settings
from taskgate.core.domain_types import TaskOperation
from taskgate.core.errors import RemoteStoreError
from taskgate.core.result import Err, Ok
from taskgate.infrastructure.notion_client import NotionTaskStore, title_property

BASE = "https://notion.test/v1"


class Recorder:
    """MockTransport handler that records requests and replays one response."""

    def __init__(self, response: httpx.Response | Exception | None = None):
        self.requests: list[httpx.Request] = []
        self.response = response or httpx.Response(200, json={"object": "page", "id": "p1"})

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if isinstance(self.response, Exception):
            raise self.response
        return self.response

    @property
    def only(self) -> httpx.Request:
        assert len(self.requests) == 1
        return self.requests[0]


def _store(recorder: Recorder, base_url: str = BASE) -> NotionTaskStore:
    return NotionTaskStore(
        base_url=base_url, database_id="db123", token="tok",
        transport=httpx.MockTransport(recorder),
    )


def _json(request: httpx.Request) -> dict:
    return json.loads(request.content)


# ─── request shapes ──────────────────────────────────────────────

async def test_query_posts_empty_filter_to_database_query():
    rec = Recorder(httpx.Response(200, json={"object": "list", "results": []}))
    result = await _store(rec).query_tasks()

    assert result == Ok({"object": "list", "results": []})
    assert rec.only.method == "POST"
    assert str(rec.only.url) == f"{BASE}/databases/db123/query"
    assert _json(rec.only) == {}


async def test_create_posts_page_with_parent_and_title():
    rec = Recorder(httpx.Response(200, json={"id": "new-page"}))
    result = await _store(rec).create_task("Buy milk")

    assert result == Ok({"id": "new-page"})
    assert rec.only.method == "POST"
    assert str(rec.only.url) == f"{BASE}/pages"
    assert _json(rec.only) == {
        "parent": {"database_id": "db123"},
        "properties": {
            "title": {"title": [{"text": {"content": "Buy milk"}}]},
        },
    }


async def test_archive_patches_archived_flag():
    rec = Recorder()
    await _store(rec).archive_task("page123")

    assert rec.only.method == "PATCH"
    assert str(rec.only.url) == f"{BASE}/pages/page123"
    assert _json(rec.only) == {"archived": True}


async def test_update_patches_only_title_property():
    rec = Recorder()
    await _store(rec).update_task("page123", "Renamed")

    assert rec.only.method == "PATCH"
    assert str(rec.only.url) == f"{BASE}/pages/page123"
    assert _json(rec.only) == {"properties": title_property("Renamed")}


async def test_missing_title_forwarded_as_null():
    rec = Recorder()
    await _store(rec).create_task(None)
    assert _json(rec.only)["properties"]["title"]["title"][0]["text"]["content"] is None


async def test_every_call_carries_auth_and_version_headers():
    rec = Recorder()
    store = _store(rec)
    await store.query_tasks()
    await store.create_task("t")
    await store.archive_task("p")
    await store.update_task("p", "t")

    assert len(rec.requests) == 4
    for request in rec.requests:
        assert request.headers["Authorization"] == "Bearer tok"
        assert request.headers["Content-Type"] == "application/json"
        assert request.headers["Notion-Version"] == "2022-06-28"


# ─── error mapping ───────────────────────────────────────────────

async def test_error_status_maps_to_err_with_notion_message():
    rec = Recorder(httpx.Response(
        404, json={"object": "error", "code": "object_not_found", "message": "Could not find page"},
    ))
    result = await _store(rec).archive_task("missing")

    assert isinstance(result, Err)
    error = result.error
    assert isinstance(error, RemoteStoreError)
    assert error.operation is TaskOperation.ARCHIVE
    assert error.remote_status == 404
    assert "object_not_found" in error.reason
    assert error.message == "Error removing task"


async def test_server_error_with_text_body():
    rec = Recorder(httpx.Response(502, text="Bad gateway"))
    result = await _store(rec).query_tasks()

    assert isinstance(result, Err)
    assert result.error.remote_status == 502
    assert result.error.message == "Error fetching tasks"


@pytest.mark.parametrize("exc", [
    httpx.ConnectError("refused"),
    httpx.ReadTimeout("slow"),
])
async def test_transport_failures_map_to_err(exc):
    result = await _store(Recorder(exc)).create_task("x")

    assert isinstance(result, Err)
    assert result.error.remote_status is None
    assert result.error.message == "Error adding task"


async def test_non_json_success_body_maps_to_err():
    rec = Recorder(httpx.Response(200, text="<html>"))
    result = await _store(rec).update_task("p", "t")

    assert isinstance(result, Err)
    assert result.error.remote_status == 200
    assert result.error.message == "Error updating task"


async def test_unset_base_url_fails_without_raising():
    # Default transport: the scheme check happens before any connection attempt
    store = NotionTaskStore(base_url="", database_id="", token="")
    result = await store.query_tasks()
    await store.aclose()

    assert isinstance(result, Err)
    assert result.error.message == "Error fetching tasks"


def test_from_settings_uses_configured_values():
    settings = Settings(
        _env_file=None,
        notion_api_base_url="https://api.notion.com/v1/",
        notion_database_id="db",
        notion_token="tok",
        notion_version="2025-01-01",
    )
    store = NotionTaskStore.from_settings(settings)
    assert store.base_url == "https://api.notion.com/v1"
    assert store.database_id == "db"
    assert store.client.headers["Notion-Version"] == "2025-01-01"
