"""Tests for config module: environment settings, saved config and resolution."""

import json
from pathlib import Path

import pytest

from geminicode_cli.config import (
    DEFAULT_TIMEOUT,
    GeminiCodeConfig,
    Settings,
    coerce_config_value,
    resolve_model,
    resolve_program,
    resolve_timeout,
)
from geminicode_cli.invocation import GeminiModel

ENV_VARS = ["GEMINI_CLI_BIN", "GEMINI_MODEL", "GEMINICODE_TIMEOUT", "GEMINI_API_KEY", "GOOGLE_API_KEY"]


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def _settings(**overrides) -> Settings:
    values = {
        "gemini_cli_bin": "gemini-cli",
        "default_model": None,
        "timeout": DEFAULT_TIMEOUT,
        "gemini_api_key": None,
        "project_root": None,
    }
    values.update(overrides)
    return Settings(**values)


class TestSettings:
    """Tests for Settings.from_environment."""

    def test_defaults(self, clean_env, tmp_path: Path) -> None:
        settings = Settings.from_environment(start_path=tmp_path)
        assert settings.gemini_cli_bin == "gemini-cli"
        assert settings.default_model is None
        assert settings.timeout == DEFAULT_TIMEOUT
        assert settings.has_api_key is False

    def test_environment_values(self, clean_env, tmp_path: Path) -> None:
        clean_env.setenv("GEMINI_CLI_BIN", "/opt/bin/gemini")
        clean_env.setenv("GEMINI_MODEL", "gemini-2.5-flash")
        clean_env.setenv("GEMINICODE_TIMEOUT", "45")
        clean_env.setenv("GEMINI_API_KEY", "secret")

        settings = Settings.from_environment(start_path=tmp_path)
        assert settings.gemini_cli_bin == "/opt/bin/gemini"
        assert settings.default_model == "gemini-2.5-flash"
        assert settings.timeout == 45.0
        assert settings.has_api_key is True

    def test_google_api_key_fallback(self, clean_env, tmp_path: Path) -> None:
        clean_env.setenv("GOOGLE_API_KEY", "g-secret")
        assert Settings.from_environment(start_path=tmp_path).gemini_api_key == "g-secret"

    @pytest.mark.parametrize("raw", ["abc", "-5", "0", ""])
    def test_bad_timeout_uses_default(self, clean_env, tmp_path: Path, raw: str) -> None:
        clean_env.setenv("GEMINICODE_TIMEOUT", raw)
        assert Settings.from_environment(start_path=tmp_path).timeout == DEFAULT_TIMEOUT

    def test_project_detection(self, clean_env, tmp_path: Path) -> None:
        (tmp_path / ".git").mkdir()
        settings = Settings.from_environment(start_path=tmp_path)
        assert settings.has_project is True
        assert settings.project_root == tmp_path.resolve()


class TestGeminiCodeConfig:
    """Tests for the persistent JSON config."""

    def test_missing_file_is_empty(self, tmp_path: Path) -> None:
        config = GeminiCodeConfig(tmp_path / "cfg")
        assert config.get_all() == {}
        assert not config.config_path.exists()

    def test_set_persists(self, tmp_path: Path) -> None:
        GeminiCodeConfig(tmp_path).set("timeout", "30")

        reloaded = GeminiCodeConfig(tmp_path)
        assert reloaded.get("timeout") == 30.0
        assert json.loads((tmp_path / "config.json").read_text()) == {"timeout": 30.0}

    def test_delete(self, tmp_path: Path) -> None:
        config = GeminiCodeConfig(tmp_path)
        config.set("cli_bin", "gemini")
        assert config.delete("cli_bin") is True
        assert config.delete("cli_bin") is False
        assert GeminiCodeConfig(tmp_path).get("cli_bin") is None

    def test_corrupted_file_starts_fresh(self, tmp_path: Path) -> None:
        (tmp_path / "config.json").write_text("{not json")
        assert GeminiCodeConfig(tmp_path).get_all() == {}

    def test_unknown_key_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="Unknown config key"):
            GeminiCodeConfig(tmp_path).set("color", "blue")


class TestCoerceConfigValue:
    """Tests for config value conversion."""

    @pytest.mark.parametrize(("raw", "expected"), [("yes", True), ("1", True), ("off", False), (False, False)])
    def test_auto_approve(self, raw, expected: bool) -> None:
        assert coerce_config_value("auto_approve", raw) is expected

    def test_auto_approve_invalid(self) -> None:
        with pytest.raises(ValueError):
            coerce_config_value("auto_approve", "maybe")

    def test_model(self) -> None:
        assert coerce_config_value("model", "gemini-2.5-pro") == "gemini-2.5-pro"
        with pytest.raises(ValueError):
            coerce_config_value("model", "gpt-4")

    def test_timeout_must_be_positive(self) -> None:
        with pytest.raises(ValueError):
            coerce_config_value("timeout", "-1")

    def test_cli_bin_must_not_be_empty(self) -> None:
        with pytest.raises(ValueError):
            coerce_config_value("cli_bin", "  ")


class TestResolution:
    """Flag > saved config > environment."""

    def test_program(self, tmp_path: Path) -> None:
        config = GeminiCodeConfig(tmp_path)
        settings = _settings(gemini_cli_bin="env-gemini")
        assert resolve_program(config, settings) == "env-gemini"

        config.set("cli_bin", "saved-gemini")
        assert resolve_program(config, settings) == "saved-gemini"

    def test_model(self, tmp_path: Path) -> None:
        config = GeminiCodeConfig(tmp_path)
        assert resolve_model(None, config, _settings()) is None
        assert resolve_model(None, config, _settings(default_model="gemini-2.5-flash")) is GeminiModel.FLASH

        config.set("model", "gemini-2.5-flash-lite")
        assert resolve_model(None, config, _settings(default_model="gemini-2.5-flash")) is GeminiModel.FLASH_LITE
        assert resolve_model("gemini-2.5-pro", config, _settings()) is GeminiModel.PRO

    def test_timeout(self, tmp_path: Path) -> None:
        config = GeminiCodeConfig(tmp_path)
        assert resolve_timeout(None, config, _settings(timeout=12.0)) == 12.0

        config.set("timeout", 60)
        assert resolve_timeout(None, config, _settings(timeout=12.0)) == 60.0
        assert resolve_timeout(5, config, _settings()) == 5.0
