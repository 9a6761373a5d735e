"""Subprocess execution for rendered AI CLI invocations.

Runs a command string through the shell and captures stdout, stderr and
the exit code separately. The executor never interprets the tool's
output.
"""

from __future__ import annotations

import asyncio
import os
import time
from dataclasses import dataclass
from pathlib import Path


@dataclass
class ExecutionResult:
    """Result of running one command.

    Attributes:
        command: The command string that was executed
        stdout: Captured standard output
        stderr: Captured standard error
        exit_code: Process exit code (-1 when killed on timeout)
        duration_seconds: Wall-clock execution time
        timed_out: Whether the process was killed for exceeding the timeout
    """

    command: str
    stdout: str
    stderr: str
    exit_code: int
    duration_seconds: float | None = None
    timed_out: bool = False

    @property
    def success(self) -> bool:
        """True when the process exited with status 0 before the timeout."""
        return self.exit_code == 0 and not self.timed_out


async def run_command(
    command: str,
    *,
    working_dir: str | Path = ".",
    timeout: float = 300.0,
    env: dict[str, str] | None = None,
) -> ExecutionResult:
    """Execute a command string and capture its output.

    Args:
        command: Shell command to execute
        working_dir: Working directory for the process
        timeout: Maximum execution time in seconds
        env: Environment variables (merged with current env)

    Returns:
        ExecutionResult with captured output

    Raises:
        RuntimeError: If the process cannot be started
    """
    process_env = os.environ.copy()
    if env:
        process_env.update(env)

    start_time = time.time()
    try:
        process = await asyncio.create_subprocess_shell(
            command,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            cwd=str(working_dir),
            env=process_env,
        )
    except OSError as e:
        raise RuntimeError(f"Failed to start process: {e}") from e

    try:
        stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=timeout)
    except asyncio.TimeoutError:
        process.kill()
        await process.wait()
        return ExecutionResult(
            command=command,
            stdout="",
            stderr=f"Command timed out after {timeout:g} seconds.",
            exit_code=-1,
            duration_seconds=time.time() - start_time,
            timed_out=True,
        )

    return ExecutionResult(
        command=command,
        stdout=stdout.decode("utf-8", errors="replace"),
        stderr=stderr.decode("utf-8", errors="replace"),
        exit_code=process.returncode if process.returncode is not None else -1,
        duration_seconds=time.time() - start_time,
    )


def run_command_sync(
    command: str,
    *,
    working_dir: str | Path = ".",
    timeout: float = 300.0,
    env: dict[str, str] | None = None,
) -> ExecutionResult:
    """Blocking wrapper around run_command for the CLI."""
    return asyncio.run(run_command(command, working_dir=working_dir, timeout=timeout, env=env))
