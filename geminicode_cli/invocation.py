"""Command-line rendering for the external AI CLI tool.

An ``InvocationRequest`` describes one call of ``gemini-cli``: the task
prompt plus optional modifiers (model override, attached files and
directories, search grounding). ``build_command`` turns it into a single
shell command string; ``build_argv`` produces the same invocation as an
argument vector for callers that spawn without a shell.

Both renderers are pure: the same request always yields the same output.
The prompt is always the task description verbatim (grounding is
written into the task by the persona layer). Segment order is fixed:
program, ``--model``, ``--include-files``,
``--include-directories``, then the ``-p`` prompt.
"""

from __future__ import annotations

import re
import shlex
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum

from geminicode_cli.errors import InvalidPath, InvalidRequest

DEFAULT_PROGRAM = "gemini-cli"

PATH_SEPARATOR = ","

# Characters that cannot appear in an include path
_FORBIDDEN_PATH_CHARS = ('"', "'", "`", PATH_SEPARATOR)

# Characters escaped inside a POSIX double-quoted string
_DOUBLE_QUOTE_SPECIALS = re.compile(r'([\\"$`])')


class GeminiModel(str, Enum):
    """Models accepted by ``--model``."""

    PRO = "gemini-2.5-pro"
    FLASH = "gemini-2.5-flash"
    FLASH_LITE = "gemini-2.5-flash-lite"

    @classmethod
    def parse(cls, value: GeminiModel | str | None) -> GeminiModel | None:
        """Coerce a model name into a GeminiModel.

        Args:
            value: Enum member, model name string, or None

        Returns:
            The matching GeminiModel, or None when no override was given

        Raises:
            InvalidRequest: If the name is not a known model
        """
        if value is None or isinstance(value, cls):
            return value
        name = str(value).strip()
        if not name:
            return None
        try:
            return cls(name)
        except ValueError:
            known = ", ".join(m.value for m in cls)
            raise InvalidRequest(f"Unknown model {name!r}. Known models: {known}") from None


def _as_paths(value: Sequence[str] | str | None) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    return tuple(value)


@dataclass(frozen=True)
class InvocationRequest:
    """One invocation of the external AI CLI.

    Attributes:
        task_description: Prompt passed with ``-p``; must be non-empty
        model: Optional model override
        include_files: File paths attached with ``--include-files``
        include_directories: Directory paths attached with ``--include-directories``
        ground_with_search: Whether the prompt asks for web-search grounding;
            it does not change the rendered command
    """

    task_description: str
    model: GeminiModel | None = None
    include_files: tuple[str, ...] = field(default_factory=tuple)
    include_directories: tuple[str, ...] = field(default_factory=tuple)
    ground_with_search: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "model", GeminiModel.parse(self.model))
        object.__setattr__(self, "include_files", _as_paths(self.include_files))
        object.__setattr__(self, "include_directories", _as_paths(self.include_directories))


def _validate_paths(paths: tuple[str, ...], flag: str) -> None:
    for path in paths:
        if not isinstance(path, str) or not path.strip():
            raise InvalidPath(f"{flag} contains an empty path", path=path)
        for char in _FORBIDDEN_PATH_CHARS:
            if char in path:
                raise InvalidPath(f"{flag} path {path!r} contains {char!r}", path=path)


def validate_request(request: InvocationRequest, program: str = DEFAULT_PROGRAM) -> None:
    """Check a request can be rendered.

    Raises:
        InvalidRequest: If the task description or program name is empty
        InvalidPath: If an include path is empty or holds a quote or comma
    """
    if not program or not program.strip():
        raise InvalidRequest("Program name must not be empty")
    if not isinstance(request.task_description, str) or not request.task_description.strip():
        raise InvalidRequest("Task description must not be empty")
    _validate_paths(request.include_files, "--include-files")
    _validate_paths(request.include_directories, "--include-directories")


def quote_prompt(text: str) -> str:
    """Wrap text in double quotes, escaping backslash, quote, dollar and backtick."""
    return '"' + _DOUBLE_QUOTE_SPECIALS.sub(r"\\\1", text) + '"'


def _flag_segments(request: InvocationRequest) -> list[tuple[str, str]]:
    segments: list[tuple[str, str]] = []
    if request.model is not None:
        segments.append(("--model", request.model.value))
    if request.include_files:
        segments.append(("--include-files", PATH_SEPARATOR.join(request.include_files)))
    if request.include_directories:
        segments.append(
            ("--include-directories", PATH_SEPARATOR.join(request.include_directories))
        )
    return segments


def build_command(request: InvocationRequest, program: str = DEFAULT_PROGRAM) -> str:
    """Render a request into a single shell command string.

    Args:
        request: The invocation to render
        program: Executable name or path of the AI CLI

    Returns:
        Command string such as
        ``gemini-cli --include-files src/form.ts -p "Add input validation"``

    Raises:
        InvalidRequest: If the task description is empty
        InvalidPath: If any include path is malformed
    """
    validate_request(request, program)

    parts = [shlex.quote(program.strip())]
    for flag, value in _flag_segments(request):
        parts.extend([flag, shlex.quote(value)])
    parts.extend(["-p", quote_prompt(request.task_description)])
    return " ".join(parts)


def build_argv(request: InvocationRequest, program: str = DEFAULT_PROGRAM) -> list[str]:
    """Render a request into an argument vector (no shell quoting).

    Same validation and segment order as build_command.
    """
    validate_request(request, program)

    argv = [program.strip()]
    for flag, value in _flag_segments(request):
        argv.extend([flag, value])
    argv.extend(["-p", request.task_description])
    return argv
