"""geminicode - persona-driven launcher for gemini-cli."""

from geminicode_cli.main import cli_main

__all__ = ["cli_main"]
