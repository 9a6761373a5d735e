"""Configuration, constants, and console for the CLI."""

import json
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import dotenv
from rich.console import Console

from geminicode_cli.invocation import DEFAULT_PROGRAM, GeminiModel
from geminicode_cli.vcs import find_project_root

dotenv.load_dotenv()

__version__ = "0.1.0"

# Color scheme
COLORS = {
    "primary": "#4285f4",
    "dim": "#6b7280",
    "user": "#ffffff",
    "agent": "#4285f4",
    "tool": "#fbbf24",
    "error": "#ef4444",
}

GEMINICODE_ASCII = r"""
   __ _  ___ _ __ ___ (_)_ __ (_) ___ ___   __| | ___
  / _` |/ _ \ '_ ` _ \| | '_ \| |/ __/ _ \ / _` |/ _ \
 | (_| |  __/ | | | | | | | | | | (_| (_) | (_| |  __/
  \__, |\___|_| |_| |_|_|_| |_|_|\___\___/ \__,_|\___|
  |___/
"""

DEFAULT_TIMEOUT = 300.0

# Keys accepted by `geminicode config set`
CONFIG_KEYS = {
    "cli_bin": "Path or name of the AI CLI executable",
    "model": "Default model override (" + ", ".join(m.value for m in GeminiModel) + ")",
    "timeout": "Invocation timeout in seconds",
    "auto_approve": "Run commands without confirmation (true/false)",
}

HOME_DIR = Path.home() / ".geminicode"

# Rich console instance
# Force UTF-8 encoding on Windows
if sys.platform == "win32":
    import io

    console = Console(
        highlight=False, file=io.TextIOWrapper(sys.stdout.buffer, encoding="utf-8")
    )
else:
    console = Console(highlight=False)


def _parse_timeout(raw: str | None) -> float:
    if raw is None or not raw.strip():
        return DEFAULT_TIMEOUT
    try:
        value = float(raw)
    except ValueError:
        console.print(
            f"[yellow]Warning: GEMINICODE_TIMEOUT={raw!r} is not a number, "
            f"using {DEFAULT_TIMEOUT:g}s[/yellow]"
        )
        return DEFAULT_TIMEOUT
    return value if value > 0 else DEFAULT_TIMEOUT


@dataclass
class Settings:
    """Settings and environment detection for geminicode.

    Attributes:
        gemini_cli_bin: Executable used for invocations (GEMINI_CLI_BIN)
        default_model: Model override from GEMINI_MODEL, if any
        timeout: Invocation timeout in seconds (GEMINICODE_TIMEOUT)
        gemini_api_key: GEMINI_API_KEY or GOOGLE_API_KEY if available
        project_root: Current project root directory (if in a git project)
    """

    gemini_cli_bin: str
    default_model: str | None
    timeout: float
    gemini_api_key: str | None
    project_root: Path | None

    @classmethod
    def from_environment(cls, *, start_path: Path | None = None) -> "Settings":
        """Create settings by detecting the current environment.

        Args:
            start_path: Directory to start project detection from (defaults to cwd)

        Returns:
            Settings instance with detected configuration
        """
        return cls(
            gemini_cli_bin=os.environ.get("GEMINI_CLI_BIN") or DEFAULT_PROGRAM,
            default_model=os.environ.get("GEMINI_MODEL") or None,
            timeout=_parse_timeout(os.environ.get("GEMINICODE_TIMEOUT")),
            gemini_api_key=os.environ.get("GEMINI_API_KEY") or os.environ.get("GOOGLE_API_KEY"),
            project_root=find_project_root(start_path),
        )

    @property
    def has_api_key(self) -> bool:
        """Check if a Gemini API key is configured."""
        return self.gemini_api_key is not None

    @property
    def has_project(self) -> bool:
        """Check if currently in a git project."""
        return self.project_root is not None

    @property
    def version(self) -> str:
        return __version__


class GeminiCodeConfig:
    """Manages persistent configuration stored in ~/.geminicode/config.json."""

    def __init__(self, config_dir: Path | None = None):
        self.config_dir = config_dir or HOME_DIR
        self.config_path = self.config_dir / "config.json"
        self._config: dict[str, Any] = {}
        self._load()

    def _load(self) -> None:
        """Load configuration from disk."""
        if self.config_path.exists():
            try:
                with open(self.config_path, encoding="utf-8") as f:
                    loaded = json.load(f)
                self._config = loaded if isinstance(loaded, dict) else {}
            except (json.JSONDecodeError, OSError) as e:
                # If config is corrupted, start fresh
                console.print(f"[yellow]Warning: Could not load config: {e}[/yellow]")
                self._config = {}
        else:
            self._config = {}

    def _save(self) -> None:
        """Save configuration to disk."""
        self.config_dir.mkdir(parents=True, exist_ok=True)
        with open(self.config_path, "w", encoding="utf-8") as f:
            json.dump(self._config, f, indent=2)

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value."""
        return self._config.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value.

        Args:
            key: One of CONFIG_KEYS
            value: Raw value; converted to the key's type

        Raises:
            ValueError: If the key is unknown or the value cannot be converted
        """
        self._config[key] = coerce_config_value(key, value)
        self._save()

    def delete(self, key: str) -> bool:
        """Delete a configuration value.

        Returns:
            True if the key existed
        """
        if key in self._config:
            del self._config[key]
            self._save()
            return True
        return False

    def get_all(self) -> dict[str, Any]:
        """Get a copy of all configuration values."""
        return self._config.copy()


def coerce_config_value(key: str, value: Any) -> Any:
    """Convert a raw config value (usually a CLI string) to its stored type."""
    if key not in CONFIG_KEYS:
        msg = f"Unknown config key {key!r}. Valid keys: {', '.join(CONFIG_KEYS)}"
        raise ValueError(msg)

    if key == "timeout":
        timeout = float(value)
        if timeout <= 0:
            raise ValueError("timeout must be positive")
        return timeout
    if key == "auto_approve":
        if isinstance(value, bool):
            return value
        normalized = str(value).strip().lower()
        if normalized in ("1", "true", "yes", "on"):
            return True
        if normalized in ("0", "false", "no", "off"):
            return False
        raise ValueError(f"auto_approve must be true or false, got {value!r}")
    if key == "model":
        model = GeminiModel.parse(value)
        return model.value if model else None
    text = str(value).strip()
    if not text:
        raise ValueError(f"{key} must not be empty")
    return text


def resolve_program(config: GeminiCodeConfig, settings: "Settings") -> str:
    """CLI executable: saved config, then environment, then default."""
    return config.get("cli_bin") or settings.gemini_cli_bin


def resolve_model(
    flag: str | None,
    config: GeminiCodeConfig,
    settings: "Settings",
) -> GeminiModel | None:
    """Model override: flag, then saved config, then GEMINI_MODEL.

    Returns None when nothing is set so the persona default applies.
    """
    return GeminiModel.parse(flag or config.get("model") or settings.default_model)


def resolve_timeout(flag: float | None, config: GeminiCodeConfig, settings: "Settings") -> float:
    """Timeout: flag, then saved config, then GEMINICODE_TIMEOUT/default."""
    if flag is not None:
        return float(flag)
    saved = config.get("timeout")
    if saved is not None:
        return float(saved)
    return settings.timeout
