"""Setup validation command for geminicode.

Validates the AI CLI binary, git, saved configuration and credentials.
"""

import json
import shutil

from rich.panel import Panel
from rich.table import Table

from geminicode_cli.config import GeminiCodeConfig, Settings, console, resolve_program
from geminicode_cli.errors import InvalidRequest
from geminicode_cli.invocation import GeminiModel


def collect_checks(
    settings: Settings, config_dir=None
) -> tuple[list[tuple[str, str, str]], bool]:
    """Run all checks.

    Returns:
        (results, all_passed) where each result is (status, check, details)
    """
    all_passed = True
    results: list[tuple[str, str, str]] = []

    config = GeminiCodeConfig(config_dir)

    # Check 1: Configuration file
    if config.config_path.exists():
        try:
            json.loads(config.config_path.read_text(encoding="utf-8"))
            results.append(("✓", "Configuration file valid", str(config.config_path)))
        except (json.JSONDecodeError, OSError) as e:
            results.append(("✗", f"Config file invalid: {e}", str(config.config_path)))
            all_passed = False
    else:
        results.append(("ℹ", "No saved configuration (defaults in use)", str(config.config_path)))

    # Check 2: AI CLI binary
    program = resolve_program(config, settings)
    program_path = shutil.which(program)
    if program_path:
        results.append(("✓", f"{program} found", program_path))
    else:
        results.append(("✗", f"{program} not found on PATH", "npm install -g @google/gemini-cli"))
        all_passed = False

    # Check 3: git (needed by the reviewer persona)
    git_path = shutil.which("git")
    if git_path:
        results.append(("✓", "git found", git_path))
    else:
        results.append(("⚠", "git not found", "Required for reviewer --diff"))

    # Check 4: Model override
    model_name = config.get("model") or settings.default_model
    if model_name:
        try:
            GeminiModel.parse(model_name)
            results.append(("✓", f"Model override valid ({model_name})", ""))
        except InvalidRequest as e:
            results.append(("✗", str(e), ""))
            all_passed = False

    # Check 5: Credentials (gemini-cli may also use a logged-in account)
    if settings.has_api_key:
        results.append(("✓", "Gemini API key set", ""))
    else:
        results.append(("⚠", "No GEMINI_API_KEY found", "gemini-cli may use its own login"))

    return results, all_passed


def run_doctor() -> int:
    """Run comprehensive setup validation.

    Returns:
        Exit code: 0 if all checks passed, 1 if any failures
    """
    console.print()
    console.print(Panel.fit("[bold]geminicode Setup Validation[/bold]", border_style="cyan"))
    console.print()

    results, all_passed = collect_checks(Settings.from_environment())

    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Status", style="bold", width=3)
    table.add_column("Check")
    table.add_column("Details", style="dim")

    for status, check, details in results:
        status_style = {
            "✓": "green",
            "✗": "red",
            "⚠": "yellow",
            "ℹ": "blue",
        }.get(status, "white")

        table.add_row(
            f"[{status_style}]{status}[/{status_style}]",
            check,
            str(details) if details else "",
        )

    console.print(table)
    console.print()

    if all_passed:
        console.print("[bold green]Everything looks good![/bold green]")
    else:
        console.print(
            "[bold yellow]Some checks failed. Please review the issues above.[/bold yellow]"
        )

    console.print()
    return 0 if all_passed else 1
