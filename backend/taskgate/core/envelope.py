"""Request/Response Envelopes — platform-neutral HTTP shapes for the request gate.

Invariants:
    - Header lookup on TaskRequest is case-insensitive
    - Every TaskResponse built here carries Access-Control-Allow-Origin: *
    - Response bodies are already JSON-encoded text (or "" for 204)
    - Request bodies stay raw (bytes, text or base64 text) until decode_body()
      runs after authentication; undecodable bodies are a BadRequestError

Design Decisions:
    - Plain dataclasses instead of a framework Request/Response: the same gate serves
      serverless event dicts and the ASGI app (ADR: impureim sandwich, pure core)
"""

import base64
import json
from dataclasses import dataclass, field
from typing import Any, Mapping

from taskgate.core.errors import BadRequestError

CORS_ORIGIN_HEADERS: dict[str, str] = {"Access-Control-Allow-Origin": "*"}

PREFLIGHT_HEADERS: dict[str, str] = {
    **CORS_ORIGIN_HEADERS,
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Authorization, Content-Type",
}


@dataclass(frozen=True)
class TaskRequest:
    """Inbound request as the gate sees it."""
    method: str
    headers: Mapping[str, str] = field(default_factory=dict)
    body: str | bytes | None = None
    is_base64_encoded: bool = False

    def header(self, name: str, default: str = "") -> str:
        wanted = name.lower()
        for key, value in self.headers.items():
            if key.lower() == wanted:
                return value if value is not None else default
        return default


@dataclass(frozen=True)
class TaskResponse:
    """Outbound response envelope."""
    status_code: int
    headers: dict[str, str]
    body: str

    def json(self) -> Any:
        return json.loads(self.body) if self.body else None


def json_response(status_code: int, payload: Any) -> TaskResponse:
    return TaskResponse(
        status_code=status_code,
        headers={**CORS_ORIGIN_HEADERS, "Content-Type": "application/json"},
        body=json.dumps(payload),
    )


def error_response(status_code: int, message: str) -> TaskResponse:
    return json_response(status_code, {"error": message})


def preflight_response() -> TaskResponse:
    return TaskResponse(status_code=204, headers=dict(PREFLIGHT_HEADERS), body="")


def decode_body(request: TaskRequest) -> str | None:
    """Raw request body as text. Strict UTF-8; base64 first when flagged."""
    body = request.body
    if not body:
        return None
    try:
        if request.is_base64_encoded:
            body = base64.b64decode(body)
        if isinstance(body, bytes):
            body = body.decode("utf-8")
    except ValueError as e:
        # binascii.Error, UnicodeDecodeError, non-ASCII base64 text
        raise BadRequestError(f"undecodable body: {e}")
    return body
