"""Error Hierarchy — typed, categorized exceptions for all Task Gate failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client errors (400-level) are returned as-is; upstream/internal errors are 500
    - to_response() produces the {"error": <message>} envelope body
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with TaskGateError base: request gate and ASGI handler catch all
      (ADR: uniform error shape)
    - RemoteStoreError keeps the diagnostic reason separate from the public message:
      the reason goes to logs, the message goes to the client
"""

from enum import Enum

from taskgate.core.domain_types import TaskOperation


class ErrorSeverity(str, Enum):
    """Error severity for observability."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    AUTHENTICATION = "authentication"
    VALIDATION = "validation"
    ROUTING = "routing"
    EXTERNAL_API = "external_api"
    CONFIGURATION = "configuration"
    INTERNAL = "internal"


class TaskGateError(Exception):
    """Base exception for all Task Gate errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to the public error body."""
        return {"error": self.message}


# ─── Client Errors (400-level) ──────────────────────────────────

class BadRequestError(TaskGateError):
    """Request body is not valid JSON or does not fit the operation's shape."""
    def __init__(self, reason: str):
        super().__init__(
            "Bad Request", "BAD_REQUEST", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, 400,
        )
        self.reason = reason


class UnauthorizedError(TaskGateError):
    """Missing or invalid Basic credentials."""
    def __init__(self):
        super().__init__(
            "Unauthorized", "UNAUTHORIZED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, 401,
        )


class MethodNotAllowedError(TaskGateError):
    """HTTP method outside GET/POST/PUT/DELETE/OPTIONS."""
    def __init__(self, method: str):
        super().__init__(
            "Method Not Allowed", "METHOD_NOT_ALLOWED", ErrorCategory.ROUTING,
            ErrorSeverity.WARNING, 405,
        )
        self.method = method


# ─── Infrastructure Errors (500-level) ──────────────────────────

class RemoteStoreError(TaskGateError):
    """Remote document store call failed (status, transport, or payload)."""
    def __init__(
        self,
        operation: TaskOperation,
        reason: str,
        remote_status: int | None = None,
    ):
        super().__init__(
            operation.error_message, "REMOTE_STORE_ERROR",
            ErrorCategory.EXTERNAL_API, ErrorSeverity.ERROR, 500,
        )
        self.operation = operation
        self.reason = reason
        self.remote_status = remote_status

    def __str__(self) -> str:
        status = f" (HTTP {self.remote_status})" if self.remote_status else ""
        return f"{self.operation.value} failed{status}: {self.reason}"


class ConfigurationError(TaskGateError):
    """Process configuration is unusable (e.g. unreadable credential file)."""
    def __init__(self, message: str):
        super().__init__(
            message, "CONFIGURATION_ERROR", ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL, 500,
        )


class InternalError(TaskGateError):
    """Catch-all for failures escaping every other boundary."""
    def __init__(self):
        super().__init__(
            "Internal Server Error", "INTERNAL_ERROR", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, 500,
        )
