"""Version-control helpers used by the reviewer persona."""

import subprocess
from collections.abc import Sequence
from pathlib import Path


class VcsError(RuntimeError):
    """git is unavailable or returned an error."""


def find_project_root(start_path: Path | None = None) -> Path | None:
    """Find the project root by looking for .git directory.

    Walks up the directory tree from start_path (or cwd) looking for a .git
    directory, which indicates the project root.

    Args:
        start_path: Directory to start searching from. Defaults to current working directory.

    Returns:
        Path to the project root if found, None otherwise.
    """
    current = Path(start_path or Path.cwd()).resolve()

    for parent in [current, *list(current.parents)]:
        if (parent / ".git").exists():
            return parent

    return None


def get_diff(
    working_dir: str | Path = ".",
    *,
    staged: bool = False,
    base: str | None = None,
    paths: Sequence[str] = (),
    timeout: float = 30.0,
) -> str:
    """Return the output of ``git diff``.

    Args:
        working_dir: Repository directory to run git in
        staged: Diff the index instead of the working tree (``--cached``)
        base: Optional revision to diff against
        paths: Optional pathspecs limiting the diff
        timeout: Maximum time to wait for git

    Returns:
        The diff text (empty when there are no changes)

    Raises:
        VcsError: If working_dir is not a directory, or git is missing,
            times out or exits non-zero
    """
    if not Path(working_dir).is_dir():
        raise VcsError(f"Working directory not found: {working_dir}")

    args = ["git", "diff", "--no-color"]
    if staged:
        args.append("--cached")
    if base:
        args.append(base)
    if paths:
        args.append("--")
        args.extend(paths)

    try:
        result = subprocess.run(
            args,
            cwd=str(working_dir),
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except FileNotFoundError as e:
        raise VcsError("git is not installed or not on PATH") from e
    except subprocess.TimeoutExpired as e:
        raise VcsError(f"git diff timed out after {timeout:g}s") from e

    if result.returncode != 0:
        message = result.stderr.strip() or f"git diff exited with status {result.returncode}"
        raise VcsError(message)

    return result.stdout
