"""Tests for setup validation."""

import json
from pathlib import Path

import pytest

from geminicode_cli.config import Settings
from geminicode_cli.doctor import collect_checks, run_doctor


def _settings(**overrides) -> Settings:
    values = {
        "gemini_cli_bin": "gemini-cli",
        "default_model": None,
        "timeout": 300.0,
        "gemini_api_key": None,
        "project_root": None,
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def all_tools(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("geminicode_cli.doctor.shutil.which", lambda name: f"/usr/bin/{name}")


class TestCollectChecks:
    """Tests for collect_checks."""

    def test_all_pass(self, all_tools, tmp_path: Path) -> None:
        results, ok = collect_checks(_settings(gemini_api_key="k"), config_dir=tmp_path)
        assert ok is True
        checks = [check for _, check, _ in results]
        assert "gemini-cli found" in checks
        assert "git found" in checks
        assert "Gemini API key set" in checks

    def test_missing_api_key_is_only_a_warning(self, all_tools, tmp_path: Path) -> None:
        results, ok = collect_checks(_settings(), config_dir=tmp_path)
        assert ok is True
        assert ("⚠", "No GEMINI_API_KEY found", "gemini-cli may use its own login") in results

    def test_missing_binary(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setattr(
            "geminicode_cli.doctor.shutil.which",
            lambda name: "/usr/bin/git" if name == "git" else None,
        )
        results, ok = collect_checks(_settings(), config_dir=tmp_path)
        assert ok is False
        assert any(status == "✗" and "not found on PATH" in check for status, check, _ in results)

    def test_saved_cli_bin_is_checked(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        (tmp_path / "config.json").write_text(json.dumps({"cli_bin": "my-gemini"}))
        seen = []

        def which(name):
            seen.append(name)
            return f"/usr/bin/{name}"

        monkeypatch.setattr("geminicode_cli.doctor.shutil.which", which)
        collect_checks(_settings(), config_dir=tmp_path)
        assert "my-gemini" in seen

    def test_invalid_model(self, all_tools, tmp_path: Path) -> None:
        _, ok = collect_checks(_settings(default_model="gpt-4"), config_dir=tmp_path)
        assert ok is False

    def test_corrupt_config(self, all_tools, tmp_path: Path) -> None:
        (tmp_path / "config.json").write_text("{broken")
        _, ok = collect_checks(_settings(), config_dir=tmp_path)
        assert ok is False


def test_run_doctor_exit_code(monkeypatch: pytest.MonkeyPatch, tmp_path: Path, all_tools) -> None:
    monkeypatch.setattr("geminicode_cli.config.HOME_DIR", tmp_path)
    monkeypatch.delenv("GEMINI_MODEL", raising=False)
    assert run_doctor() == 0
