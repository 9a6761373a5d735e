"""Error handling and recovery system for geminicode CLI."""

from geminicode_cli.errors.handlers import ErrorHandler, RecoveryResult
from geminicode_cli.errors.taxonomy import (
    ErrorCategory,
    InvalidPath,
    InvalidRequest,
    InvocationError,
    RecoverableError,
)

__all__ = [
    "ErrorHandler",
    "RecoveryResult",
    "ErrorCategory",
    "RecoverableError",
    "InvocationError",
    "InvalidRequest",
    "InvalidPath",
]
