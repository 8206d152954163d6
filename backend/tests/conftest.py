"""Root conftest — shared test configuration and fixtures.

Invariants:
    - Tests never reach a real Notion workspace (fake base URL, fake token)
    - Every gate fixture is backed by FakeTaskStore (tests/fakes.py)
"""

import os

import pytest

from taskgate.services.request_gate import RequestGate
from taskgate.services.task_router import TaskRouter
from tests.fakes import FakeTaskStore, basic_auth

# Ensure tests don't accidentally use real credentials
os.environ.setdefault("NOTION_API_BASE_URL", "https://notion.test/v1")
os.environ.setdefault("NOTION_DATABASE_ID", "db-test")
os.environ.setdefault("NOTION_TOKEN", "secret-test-token")


@pytest.fixture
def credentials():
    return {"alice": "secret"}


@pytest.fixture
def alice_auth():
    return basic_auth("alice", "secret")


@pytest.fixture
def fake_store():
    return FakeTaskStore()


@pytest.fixture
def gate(credentials, fake_store):
    return RequestGate(credentials, TaskRouter(fake_store))
