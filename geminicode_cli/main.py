"""Main entry point for geminicode.

This module provides the command-line interface:
- run: select a persona, render the gemini-cli invocation, confirm and execute it
- personas: list the built-in personas
- config: view or edit saved configuration
- doctor: validate the environment

Key Functions:
- parse_args(): Parse command-line arguments
- cli_main(): Main entry point for the CLI
- execute_run(): Build and run one invocation
"""

import argparse
import asyncio
import sys
from pathlib import Path

from rich.markup import escape

from geminicode_cli.config import (
    CONFIG_KEYS,
    COLORS,
    GeminiCodeConfig,
    Settings,
    __version__,
    console,
    resolve_model,
    resolve_program,
    resolve_timeout,
)
from geminicode_cli.errors import ErrorHandler, InvocationError
from geminicode_cli.executor import run_command_sync
from geminicode_cli.invocation import PATH_SEPARATOR, build_command
from geminicode_cli.personas import build_request, get_persona, list_personas
from geminicode_cli.ui import render_command, render_error, render_personas, render_result, show_help
from geminicode_cli.vcs import VcsError, get_diff

# Exit status for requests rejected before execution
EXIT_INVALID_REQUEST = 2


def _split_paths(values: list[str] | None) -> list[str]:
    """Flatten repeated/comma-separated path options, keeping order."""
    paths: list[str] = []
    for value in values or []:
        paths.extend(part.strip() for part in value.split(PATH_SEPARATOR))
    return paths


def _positive_float(value: str) -> float:
    """argparse type for strictly positive second counts."""
    try:
        seconds = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}") from None
    if not seconds > 0:
        raise argparse.ArgumentTypeError(f"must be greater than 0, got {value}")
    return seconds


def parse_args(argv: list[str] | None = None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="geminicode",
        description="geminicode - persona-driven launcher for gemini-cli",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Run command
    run_parser = subparsers.add_parser("run", help="Run a persona against the AI CLI")
    run_parser.add_argument(
        "persona",
        choices=[p.name for p in list_personas()],
        help="Persona to apply",
    )
    run_parser.add_argument("task", nargs="+", help="Task description")
    run_parser.add_argument("--model", help="Model override (e.g. gemini-2.5-flash)")
    run_parser.add_argument(
        "--include-files",
        action="append",
        metavar="PATHS",
        help="Files to attach (repeatable, comma-separated)",
    )
    run_parser.add_argument(
        "--include-directories",
        action="append",
        metavar="PATHS",
        help="Directories to attach (repeatable, comma-separated)",
    )
    run_parser.add_argument(
        "--search",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Ground the answer with web search (default: persona setting)",
    )
    run_parser.add_argument(
        "--diff",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Attach the git diff as context (default: persona setting)",
    )
    run_parser.add_argument(
        "--staged", action="store_true", help="Use the staged diff (implies --diff)"
    )
    run_parser.add_argument("--base", help="Diff against this revision (implies --diff)")
    run_parser.add_argument(
        "--dry-run", action="store_true", help="Print the command without running it"
    )
    run_parser.add_argument(
        "--auto-approve",
        action="store_true",
        help="Run the command without a confirmation prompt",
    )
    run_parser.add_argument(
        "--timeout", type=_positive_float, help="Invocation timeout in seconds (> 0)"
    )
    run_parser.add_argument(
        "--cwd", default=".", help="Working directory for git and the AI CLI (default: .)"
    )

    # Personas command
    subparsers.add_parser("personas", help="List available personas")

    # Config command - view/edit configuration
    config_parser = subparsers.add_parser("config", help="View or edit configuration")
    config_parser.add_argument(
        "config_command",
        nargs="?",
        choices=["show", "set", "get", "unset"],
        default="show",
        help="Config operation to perform",
    )
    config_parser.add_argument("key", nargs="?", help="Configuration key to get/set")
    config_parser.add_argument("value", nargs="?", help="Value to set (for 'set' command)")

    # Doctor command - validate setup
    subparsers.add_parser("doctor", help="Validate configuration and tools")

    # Help command
    subparsers.add_parser("help", help="Show help information")

    parser.add_argument(
        "--version",
        action="version",
        version=f"{__version__} (geminicode)",
        help="Show the version number and exit",
    )
    parser.add_argument(
        "-h", "--help", action="help", help="Show this help message and exit"
    )

    return parser.parse_args(argv)


def _confirm(prompt_text: str = "Run this command? [y/N]: ") -> bool:
    from prompt_toolkit import prompt

    try:
        answer = prompt(prompt_text)
    except EOFError:
        # Ctrl+D declines
        return False
    return answer.strip().lower() in ("y", "yes")


def _load_diff(args, persona, working_dir: Path) -> tuple[str | None, bool]:
    """Fetch the diff requested for this run.

    Returns:
        (diff_text, ok). ok is False when an explicitly requested diff failed.
    """
    explicit = bool(args.diff or args.staged or args.base)
    wanted = explicit or (args.diff is None and persona.wants_diff)
    if not wanted:
        return None, True

    try:
        diff = get_diff(working_dir, staged=args.staged, base=args.base)
    except VcsError as e:
        if explicit:
            console.print(f"[bold red]Error:[/bold red] Could not read git diff: {escape(str(e))}")
            return None, False
        console.print(f"[yellow]Warning: no diff attached ({escape(str(e))})[/yellow]")
        return None, True

    if not diff.strip():
        console.print("[dim]No changes found in git diff.[/dim]")
        return None, True
    return diff, True


def execute_run(args) -> int:
    """Build, confirm and execute one invocation.

    Returns:
        Process exit code for the CLI
    """
    working_dir = Path(args.cwd)
    if not working_dir.is_dir():
        console.print(
            f"[bold red]Error:[/bold red] Working directory not found: {escape(str(working_dir))}"
        )
        return EXIT_INVALID_REQUEST

    settings = Settings.from_environment(start_path=working_dir)
    config = GeminiCodeConfig()
    handler = ErrorHandler()

    try:
        persona = get_persona(args.persona)
        diff, ok = _load_diff(args, persona, working_dir)
        if not ok:
            return 1

        request = build_request(
            persona,
            " ".join(args.task),
            model=resolve_model(args.model, config, settings),
            include_files=_split_paths(args.include_files),
            include_directories=_split_paths(args.include_directories),
            ground_with_search=args.search,
            context=diff,
        )
        program = resolve_program(config, settings)
        command = build_command(request, program)
    except InvocationError as e:
        render_error(handler.classify_error(e))
        return EXIT_INVALID_REQUEST

    if args.dry_run:
        console.print(command, markup=False, emoji=False, highlight=False, soft_wrap=True)
        return 0

    render_command(command)

    auto_approve = args.auto_approve or bool(config.get("auto_approve", False))
    if not auto_approve and not _confirm():
        console.print("[dim]Cancelled.[/dim]")
        return 1

    timeout = resolve_timeout(args.timeout, config, settings)
    error_context: dict = {"program": program, "timeout": timeout}

    while True:
        with console.status(f"[{COLORS['primary']}]Running {persona.name}...", spinner="dots"):
            try:
                result = run_command_sync(command, working_dir=working_dir, timeout=timeout)
            except RuntimeError as e:
                classified = handler.classify_error(e, dict(error_context))
                result = None

        if result is None:
            render_error(classified)
            return 1

        render_result(result)
        classified = handler.classify_result(result, dict(error_context))
        if classified is None:
            return 0

        recovery = asyncio.run(handler.recover(classified))
        if recovery.success and classified.retry_allowed and recovery.new_state:
            console.print(recovery.message, style=COLORS["dim"])
            error_context.update(recovery.new_state)
            continue

        render_error(classified, recovery)
        return result.exit_code if result.exit_code > 0 else 1


def _execute_config_command(args) -> int:
    """Handle `geminicode config`."""
    config = GeminiCodeConfig()

    if args.config_command == "show":
        values = config.get_all()
        console.print()
        console.print(f"[bold]Configuration[/bold] [dim]({config.config_path})[/dim]")
        for key, description in CONFIG_KEYS.items():
            value = values.get(key)
            shown = value if value is not None else "[dim]not set[/dim]"
            console.print(f"  {key:<14} {shown}  [dim]{description}[/dim]")
        console.print()
        return 0

    if not args.key:
        console.print(f"[red]A key is required for 'config {args.config_command}'.[/red]")
        return 1

    if args.config_command == "get":
        value = config.get(args.key)
        if value is None:
            console.print(f"[dim]{args.key} is not set[/dim]")
            return 1
        console.print(str(value), markup=False)
        return 0

    if args.config_command == "unset":
        if config.delete(args.key):
            console.print(f"[green]✓ Removed {args.key}[/green]")
        else:
            console.print(f"[dim]{args.key} was not set[/dim]")
        return 0

    if args.value is None:
        console.print("[red]A value is required for 'config set'.[/red]")
        return 1
    try:
        config.set(args.key, args.value)
    except ValueError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        return 1
    console.print(f"[green]✓ {args.key} = {config.get(args.key)}[/green]")
    return 0


def cli_main(argv: list[str] | None = None) -> None:
    """Entry point for console script."""
    try:
        args = parse_args(argv)

        if args.command == "run":
            sys.exit(execute_run(args))
        elif args.command == "personas":
            render_personas(list_personas())
        elif args.command == "config":
            sys.exit(_execute_config_command(args))
        elif args.command == "doctor":
            from geminicode_cli.doctor import run_doctor

            sys.exit(run_doctor())
        else:
            show_help()
    except KeyboardInterrupt:
        # Clean exit on Ctrl+C - suppress ugly traceback
        console.print("\n\n[yellow]Interrupted[/yellow]")
        sys.exit(0)


if __name__ == "__main__":
    cli_main()
