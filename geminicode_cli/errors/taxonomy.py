"""Error taxonomy and classification for geminicode CLI."""

from dataclasses import dataclass
from enum import Enum


class InvocationError(ValueError):
    """Base class for invocation validation failures."""


class InvalidRequest(InvocationError):
    """The invocation request itself is malformed (e.g. empty task)."""


class InvalidPath(InvocationError):
    """An include path is empty or cannot be rendered safely."""

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class ErrorCategory(Enum):
    """Classification of errors for recovery strategies."""

    INVALID_REQUEST = "invalid_request"  # Empty task, unknown persona/model
    INVALID_PATH = "invalid_path"  # Malformed include path
    COMMAND_NOT_FOUND = "command_not_found"  # gemini-cli not installed
    TIMEOUT = "timeout"  # Invocation exceeded its time budget
    PERMISSION_DENIED = "permission_denied"  # Permission issues
    NETWORK_ERROR = "network_error"  # API/network failures
    AUTH_ERROR = "auth_error"  # Missing or rejected credentials
    QUOTA_EXCEEDED = "quota_exceeded"  # Rate limits / quota
    TOOL_ERROR = "tool_error"  # Non-zero exit from the tool
    SYSTEM_ERROR = "system_error"  # Internal errors


@dataclass
class RecoverableError:
    """A classified error with recovery hints.

    Attributes:
        category: The error category for recovery strategy selection
        original_error: The original exception that was raised
        context: Additional context about the error (command, paths, etc.)
        recovery_suggestion: Human-readable suggestion for fixing the error
        user_message: User-friendly error message
        retry_allowed: Whether automatic retry is allowed
    """

    category: ErrorCategory
    original_error: Exception
    context: dict
    recovery_suggestion: str
    user_message: str
    retry_allowed: bool = True
