"""Configuration — settings parsing and credential table loading.

Tests cover:
    - Base URL trailing slash stripped
    - Missing remote settings reported by name
    - Credential table merges file and inline mapping (inline wins) and is read-only
    - Missing / malformed credential files raise ConfigurationError
"""

import json

import pytest

from taskgate.config import Settings, load_credential_table
from taskgate.core.errors import ConfigurationError


def _settings(**kwargs) -> Settings:
    defaults = {
        "notion_api_base_url": "https://api.notion.com/v1/",
        "notion_database_id": "db",
        "notion_token": "tok",
    }
    return Settings(_env_file=None, **{**defaults, **kwargs})


def test_base_url_trailing_slash_stripped():
    assert _settings().notion_api_base_url == "https://api.notion.com/v1"


def test_default_notion_version():
    assert _settings().notion_version == "2022-06-28"


def test_missing_remote_settings_listed():
    s = _settings(notion_api_base_url="", notion_token="")
    assert s.missing_remote_settings() == ["notion_api_base_url", "notion_token"]


def test_inline_users_from_environment(monkeypatch):
    monkeypatch.setenv("TASKGATE_USERS", '{"alice": "secret"}')
    table = load_credential_table(Settings(_env_file=None))
    assert dict(table) == {"alice": "secret"}


def test_file_and_inline_merge_inline_wins(tmp_path):
    path = tmp_path / "users.json"
    path.write_text(json.dumps({"alice": "from-file", "bob": "hunter2"}))
    table = load_credential_table(_settings(
        taskgate_users_file=str(path), taskgate_users={"alice": "inline"},
    ))
    assert dict(table) == {"alice": "inline", "bob": "hunter2"}


def test_credential_table_is_read_only():
    table = load_credential_table(_settings(taskgate_users={"alice": "secret"}))
    with pytest.raises(TypeError):
        table["mallory"] = "x"  # type: ignore[index]


def test_missing_credential_file_raises(tmp_path):
    with pytest.raises(ConfigurationError):
        load_credential_table(_settings(taskgate_users_file=str(tmp_path / "nope.json")))


@pytest.mark.parametrize("content", ["{broken", "[]", '{"alice": 1}'])
def test_malformed_credential_file_raises(tmp_path, content):
    path = tmp_path / "users.json"
    path.write_text(content)
    with pytest.raises(ConfigurationError):
        load_credential_table(_settings(taskgate_users_file=str(path)))
