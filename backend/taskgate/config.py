"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables or a configured file (never hardcoded)
    - get_settings() is cached (lru_cache) — single instance per process
    - The credential table is built once from settings and never mutated afterwards

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support (ADR: developer UX)
    - Empty-string defaults for the remote store: a misconfigured deploy still answers
      every request with a well-formed envelope instead of crashing at import time
    - Credentials injected as a mapping (inline JSON or file path), no runtime require/import
"""

import json
import logging
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from taskgate.core.errors import ConfigurationError

logger = logging.getLogger(__name__)

CredentialTable = Mapping[str, str]


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Remote document store (Notion)
    notion_api_base_url: str = ""
    notion_database_id: str = ""
    notion_token: str = ""
    notion_version: str = "2022-06-28"
    notion_timeout_seconds: float = 10.0

    @field_validator("notion_api_base_url", mode="before")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Endpoints are joined with '/', so 'https://x/v1/' and 'https://x/v1' behave the same."""
        if isinstance(v, str):
            return v.rstrip("/")
        return v

    # Basic-auth credential table
    taskgate_users: dict[str, str] = {}
    taskgate_users_file: str | None = None

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    def missing_remote_settings(self) -> list[str]:
        """Names of remote-store settings left empty."""
        return [
            name for name in (
                "notion_api_base_url", "notion_database_id", "notion_token",
            )
            if not getattr(self, name)
        ]


@lru_cache
def get_settings() -> Settings:
    return Settings()


def load_credential_table(settings: Settings) -> CredentialTable:
    """Build the read-only username → password table.

    The file (if configured) is read first; inline TASKGATE_USERS entries win.
    """
    users: dict[str, str] = {}
    if settings.taskgate_users_file:
        users.update(_read_credential_file(Path(settings.taskgate_users_file)))
    users.update(settings.taskgate_users)
    if not users:
        logger.warning("Credential table is empty — every request will be rejected")
    return MappingProxyType(users)


def _read_credential_file(path: Path) -> dict[str, str]:
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise ConfigurationError(f"Credential file not found: {path}")
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Credential file unreadable: {path} ({e})")
    if not isinstance(raw, dict) or not all(
        isinstance(k, str) and isinstance(v, str) for k, v in raw.items()
    ):
        raise ConfigurationError(
            f"Credential file must map usernames to password strings: {path}",
        )
    return raw
