"""UI rendering and display utilities for the CLI."""

from rich import box
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .config import COLORS, GEMINICODE_ASCII, console
from .errors import RecoverableError, RecoveryResult
from .executor import ExecutionResult
from .personas import Persona

MAX_COMMAND_PREVIEW = 600


def truncate_value(value: str, max_length: int = MAX_COMMAND_PREVIEW) -> str:
    """Truncate a string value if it exceeds max_length."""
    if len(value) > max_length:
        return value[:max_length] + "..."
    return value


def render_command(command: str, *, full: bool = False) -> None:
    """Show the rendered invocation in a panel."""
    text = command if full else truncate_value(command)
    console.print(
        Panel(
            escape(text),
            title="[bold]Invocation[/bold]",
            border_style=COLORS["tool"],
            box=box.ROUNDED,
            padding=(0, 1),
        )
    )


def render_result(result: ExecutionResult) -> None:
    """Print the tool's output followed by a one-line status."""
    if result.stdout:
        console.print(escape(result.stdout.rstrip("\n")))
    if result.stderr.strip():
        console.print(escape(result.stderr.rstrip("\n")), style=COLORS["dim"])

    duration = f" in {result.duration_seconds:.1f}s" if result.duration_seconds is not None else ""
    if result.success:
        console.print(f"[green]✓ Completed{duration}[/green]")
    elif result.timed_out:
        console.print(f"[red]✗ Timed out{duration}[/red]")
    else:
        console.print(f"[red]✗ Exited with status {result.exit_code}{duration}[/red]")


def render_error(error: RecoverableError, recovery: RecoveryResult | None = None) -> None:
    """Print a classified error and its suggestion."""
    message = recovery.message if recovery else error.user_message
    suggestion = (recovery.suggestion if recovery else None) or error.recovery_suggestion
    console.print(f"[bold red]Error:[/bold red] {escape(message)}")
    if suggestion:
        console.print(escape(suggestion), style=COLORS["dim"])


def render_personas(personas: list[Persona]) -> None:
    """Render the persona table."""
    table = Table(box=box.SIMPLE, show_header=True, padding=(0, 2))
    table.add_column("Persona", style=f"bold {COLORS['primary']}")
    table.add_column("Model")
    table.add_column("Search")
    table.add_column("Diff")
    table.add_column("Description", style="dim")

    for persona in personas:
        table.add_row(
            persona.name,
            persona.default_model.value if persona.default_model else "-",
            "yes" if persona.ground_with_search else "no",
            "yes" if persona.wants_diff else "no",
            persona.description,
        )

    console.print()
    console.print(table)


def show_help() -> None:
    """Show help information."""
    console.print()
    console.print(GEMINICODE_ASCII, style=f"bold {COLORS['primary']}")
    console.print()

    console.print("[bold]Usage:[/bold]", style=COLORS["primary"])
    console.print("  geminicode run PERSONA TASK [OPTIONS]    Run a persona against gemini-cli")
    console.print("  geminicode personas                      List available personas")
    console.print(escape("  geminicode config [show|get|set|unset]   View or edit saved configuration"))
    console.print("  geminicode doctor                        Validate the environment")
    console.print("  geminicode help                          Show this help message")
    console.print()

    console.print("[bold]Run Options:[/bold]", style=COLORS["primary"])
    console.print("  --model NAME                  Model override (e.g. gemini-2.5-flash)")
    console.print("  --include-files A,B           Attach files (repeatable or comma-separated)")
    console.print("  --include-directories D       Attach directories")
    console.print("  --search / --no-search        Force web-search grounding on or off")
    console.print("  --diff, --staged, --base REF  Attach a git diff (reviewer does this by default)")
    console.print("  --dry-run                     Print the command without running it")
    console.print("  --auto-approve                Run without the confirmation prompt")
    console.print("  --timeout SECONDS             Invocation timeout")
    console.print()

    console.print("[bold]Examples:[/bold]", style=COLORS["primary"])
    console.print(
        '  geminicode run executor "Add input validation" --include-files src/form.ts',
        style=COLORS["dim"],
    )
    console.print('  geminicode run reviewer "Review my change" --staged', style=COLORS["dim"])
    console.print(
        '  geminicode run answerer "Where is auth handled?" --include-directories src',
        style=COLORS["dim"],
    )
    console.print(
        '  geminicode run researcher "Current best practices for asyncio timeouts"',
        style=COLORS["dim"],
    )
    console.print()

    console.print("[bold]Environment:[/bold]", style=COLORS["primary"])
    console.print("  GEMINI_CLI_BIN       AI CLI executable (default: gemini-cli)", style=COLORS["dim"])
    console.print("  GEMINI_MODEL         Default model override", style=COLORS["dim"])
    console.print("  GEMINICODE_TIMEOUT   Invocation timeout in seconds", style=COLORS["dim"])
    console.print("  GEMINI_API_KEY       Passed through to gemini-cli", style=COLORS["dim"])
    console.print()
