"""Error handling and recovery strategies for geminicode CLI."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from geminicode_cli.errors.taxonomy import (
    ErrorCategory,
    InvalidPath,
    InvalidRequest,
    RecoverableError,
)

if TYPE_CHECKING:
    from geminicode_cli.executor import ExecutionResult

# Shells report a missing executable with exit status 127
COMMAND_NOT_FOUND_EXIT_CODE = 127


@dataclass
class RecoveryResult:
    """Result of error recovery attempt.

    Attributes:
        success: Whether recovery was successful (or a retry may proceed)
        message: Human-readable message about the recovery attempt
        suggestion: Optional suggestion for user action
        new_state: Optional new state to merge into context
    """

    success: bool
    message: str
    suggestion: str | None = None
    new_state: dict | None = None


class ErrorRecoveryStrategy(Protocol):
    """Protocol for error recovery strategies."""

    def can_handle(self, error: RecoverableError) -> bool:
        """Check if this strategy can handle the error.

        Args:
            error: The recoverable error to check

        Returns:
            True if this strategy can handle the error
        """
        ...

    async def recover(self, error: RecoverableError) -> RecoveryResult:
        """Attempt to recover from the error.

        Args:
            error: The recoverable error to recover from

        Returns:
            Result of the recovery attempt
        """
        ...


class ValidationErrorRecovery:
    """Surface validation failures unchanged; they are never retried."""

    def can_handle(self, error: RecoverableError) -> bool:
        return error.category in (ErrorCategory.INVALID_REQUEST, ErrorCategory.INVALID_PATH)

    async def recover(self, error: RecoverableError) -> RecoveryResult:
        return RecoveryResult(
            success=False,
            message=error.user_message,
            suggestion=error.recovery_suggestion,
        )


class CommandNotFoundRecovery:
    """Suggest installing gemini-cli or pointing at an existing binary."""

    def can_handle(self, error: RecoverableError) -> bool:
        """Check if this is a command not found error."""
        return error.category == ErrorCategory.COMMAND_NOT_FOUND

    async def recover(self, error: RecoverableError) -> RecoveryResult:
        """Suggest installation or configuration of the tool binary.

        Args:
            error: The command not found error

        Returns:
            Recovery result with installation suggestion
        """
        program = error.context.get("program", "gemini-cli")
        suggestion = (
            f"'{program}' is not installed or not on PATH.\n"
            "Install it with: npm install -g @google/gemini-cli\n"
            "Or point geminicode at an existing binary:\n"
            "  geminicode config set cli_bin /path/to/gemini\n"
            "  (or export GEMINI_CLI_BIN=/path/to/gemini)"
        )
        return RecoveryResult(
            success=False,
            message=f"Command not found: {program}",
            suggestion=suggestion,
        )


class NetworkErrorRecovery:
    """Recover from network errors with exponential backoff retry."""

    max_retries = 3

    def can_handle(self, error: RecoverableError) -> bool:
        """Check if this is a network error."""
        return error.category == ErrorCategory.NETWORK_ERROR

    async def recover(self, error: RecoverableError) -> RecoveryResult:
        """Implement exponential backoff retry.

        Args:
            error: The network error

        Returns:
            Recovery result indicating retry status
        """
        retry_count = error.context.get("retry_count", 0)

        if retry_count >= self.max_retries:
            return RecoveryResult(
                success=False,
                message=f"Network error after {self.max_retries} retries: {error.original_error}",
                suggestion="Please check your internet connection and try again.",
            )

        # Exponential backoff: 1s, 2s, 4s
        wait_time = 2**retry_count
        await asyncio.sleep(wait_time)

        return RecoveryResult(
            success=True,
            message=(
                f"Network error, retrying in {wait_time}s... "
                f"(attempt {retry_count + 1}/{self.max_retries})"
            ),
            new_state={"retry_count": retry_count + 1},
        )


class TimeoutRecovery:
    """Suggest a longer timeout or a narrower task."""

    def can_handle(self, error: RecoverableError) -> bool:
        return error.category == ErrorCategory.TIMEOUT

    async def recover(self, error: RecoverableError) -> RecoveryResult:
        timeout = error.context.get("timeout")
        limit = f" after {timeout:g}s" if isinstance(timeout, (int, float)) else ""
        return RecoveryResult(
            success=False,
            message=f"Invocation timed out{limit}.",
            suggestion=(
                "Increase the limit with --timeout (or `geminicode config set timeout N`), "
                "or narrow the task and the attached files/directories."
            ),
        )


class QuotaAuthRecovery:
    """Suggest credentials or a cheaper model for auth and quota failures."""

    def can_handle(self, error: RecoverableError) -> bool:
        return error.category in (ErrorCategory.AUTH_ERROR, ErrorCategory.QUOTA_EXCEEDED)

    async def recover(self, error: RecoverableError) -> RecoveryResult:
        if error.category == ErrorCategory.AUTH_ERROR:
            return RecoveryResult(
                success=False,
                message="The AI CLI rejected the credentials.",
                suggestion="Set GEMINI_API_KEY (or GOOGLE_API_KEY) in your environment or .env file.",
            )
        return RecoveryResult(
            success=False,
            message="Model quota or rate limit exceeded.",
            suggestion="Wait and retry, or switch model with --model gemini-2.5-flash.",
        )


class PermissionDeniedRecovery:
    """Recover from permission errors."""

    def can_handle(self, error: RecoverableError) -> bool:
        """Check if this is a permission error."""
        return error.category == ErrorCategory.PERMISSION_DENIED

    async def recover(self, error: RecoverableError) -> RecoveryResult:
        program = error.context.get("program", "")
        return RecoveryResult(
            success=False,
            message=f"Permission denied: {program or error.original_error}",
            suggestion="Check that the binary is executable and the working directory is readable.",
        )


class ErrorHandler:
    """Central error handler with recovery strategies.

    Classifies validation errors raised while building an invocation and
    failures reported by the subprocess executor, then picks a recovery
    strategy for them.
    """

    def __init__(self):
        """Initialize error handler with all recovery strategies."""
        self.strategies: list[ErrorRecoveryStrategy] = [
            ValidationErrorRecovery(),
            CommandNotFoundRecovery(),
            NetworkErrorRecovery(),
            TimeoutRecovery(),
            QuotaAuthRecovery(),
            PermissionDeniedRecovery(),
        ]

    def classify_error(self, error: Exception, context: dict | None = None) -> RecoverableError:
        """Classify an error into a category.

        Args:
            error: The exception to classify
            context: Optional additional context about the error

        Returns:
            RecoverableError with classification and recovery info
        """
        context = context or {}

        if isinstance(error, InvalidPath):
            if error.path is not None:
                context.setdefault("path", error.path)
            return RecoverableError(
                category=ErrorCategory.INVALID_PATH,
                original_error=error,
                context=context,
                recovery_suggestion="Remove empty entries, quotes and commas from include paths",
                user_message=f"Invalid path: {error}",
                retry_allowed=False,
            )

        if isinstance(error, InvalidRequest):
            return RecoverableError(
                category=ErrorCategory.INVALID_REQUEST,
                original_error=error,
                context=context,
                recovery_suggestion="Provide a non-empty task description and a known persona/model",
                user_message=f"Invalid request: {error}",
                retry_allowed=False,
            )

        if isinstance(error, TimeoutError):
            return RecoverableError(
                category=ErrorCategory.TIMEOUT,
                original_error=error,
                context=context,
                recovery_suggestion="Increase the timeout or narrow the task",
                user_message="The AI CLI did not finish in time.",
                retry_allowed=False,
            )

        error_str = str(error).lower()

        if isinstance(error, FileNotFoundError) or any(
            x in error_str for x in ["command not found", "not recognized"]
        ):
            return RecoverableError(
                category=ErrorCategory.COMMAND_NOT_FOUND,
                original_error=error,
                context=context,
                recovery_suggestion="Install gemini-cli or set GEMINI_CLI_BIN",
                user_message=f"Command not found: {context.get('program', 'unknown')}",
                retry_allowed=False,
            )

        if isinstance(error, PermissionError) or "permission denied" in error_str:
            return RecoverableError(
                category=ErrorCategory.PERMISSION_DENIED,
                original_error=error,
                context=context,
                recovery_suggestion="Check file permissions with `ls -la`",
                user_message="Permission denied while running the AI CLI.",
                retry_allowed=False,
            )

        if any(x in error_str for x in ["api key", "unauthenticated", "401", "403"]):
            return RecoverableError(
                category=ErrorCategory.AUTH_ERROR,
                original_error=error,
                context=context,
                recovery_suggestion="Configure GEMINI_API_KEY",
                user_message="Authentication with the model service failed.",
                retry_allowed=False,
            )

        if any(x in error_str for x in ["quota", "rate limit", "resource_exhausted", "429"]):
            return RecoverableError(
                category=ErrorCategory.QUOTA_EXCEEDED,
                original_error=error,
                context=context,
                recovery_suggestion="Wait or switch to a lighter model",
                user_message="Model quota exceeded.",
                retry_allowed=False,
            )

        if any(x in error_str for x in ["timeout", "connection", "network", "unreachable"]):
            return RecoverableError(
                category=ErrorCategory.NETWORK_ERROR,
                original_error=error,
                context=context,
                recovery_suggestion="Retry with exponential backoff",
                user_message="Network error occurred. Retrying...",
            )

        return RecoverableError(
            category=ErrorCategory.TOOL_ERROR,
            original_error=error,
            context=context,
            recovery_suggestion="Check the tool output above and adjust the task",
            user_message=f"Tool error: {error}",
            retry_allowed=False,
        )

    def classify_result(
        self, result: ExecutionResult, context: dict | None = None
    ) -> RecoverableError | None:
        """Classify a finished invocation.

        Args:
            result: Result returned by the subprocess executor
            context: Optional additional context (program, timeout, ...)

        Returns:
            RecoverableError for failed results, None for successful ones
        """
        if result.success:
            return None

        context = {"command": result.command, "exit_code": result.exit_code, **(context or {})}

        if result.timed_out:
            return self.classify_error(TimeoutError(result.stderr or "timed out"), context)

        if result.exit_code == COMMAND_NOT_FOUND_EXIT_CODE:
            classified = self.classify_error(
                FileNotFoundError(result.stderr.strip() or "command not found"), context
            )
            return classified

        message = result.stderr.strip() or f"exited with status {result.exit_code}"
        return self.classify_error(RuntimeError(message), context)

    async def handle(self, error: Exception, context: dict | None = None) -> RecoveryResult:
        """Handle error with appropriate recovery strategy.

        Args:
            error: The exception to handle
            context: Optional additional context about the error

        Returns:
            Result of the recovery attempt
        """
        return await self.recover(self.classify_error(error, context))

    async def recover(self, classified: RecoverableError) -> RecoveryResult:
        """Run the first strategy that accepts an already classified error."""
        for strategy in self.strategies:
            if strategy.can_handle(classified):
                return await strategy.recover(classified)

        # No strategy matched - surface to user
        return RecoveryResult(
            success=False,
            message=classified.user_message,
            suggestion=classified.recovery_suggestion,
        )
