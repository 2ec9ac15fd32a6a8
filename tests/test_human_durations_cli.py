from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from human_durations.cli import app
from human_durations.config import ENV_ASCII, ENV_LENIENT, ENV_LOG_LEVEL, ENV_OUTPUT_UNIT


runner = CliRunner()


@pytest.fixture(autouse=True)
def _isolated(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    # No stray .env from the working tree; env vars set by --env-file are undone.
    monkeypatch.chdir(tmp_path)
    for name in (ENV_LENIENT, ENV_ASCII, ENV_OUTPUT_UNIT, ENV_LOG_LEVEL):
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


def test_parse_single() -> None:
    result = runner.invoke(app, ["parse", "1h30m"])
    assert result.exit_code == 0, result.output
    assert result.output.strip() == "5400000"


def test_parse_output_unit() -> None:
    result = runner.invoke(app, ["parse", "--unit", "s", "90m"])
    assert result.exit_code == 0, result.output
    assert result.output.strip() == "5400"

    result = runner.invoke(app, ["parse", "-u", "s", "1500ms"])
    assert result.output.strip() == "1.5"


def test_parse_negative_needs_separator() -> None:
    result = runner.invoke(app, ["parse", "--", "-2m3.4s"])
    assert result.exit_code == 0, result.output
    assert result.output.strip() == "-123400"


def test_parse_many_prints_table() -> None:
    result = runner.invoke(app, ["parse", "90m", "36h"])
    assert result.exit_code == 0, result.output
    assert "1h30m" in result.output
    assert "1d12h" in result.output


def test_parse_unknown_unit_is_bad_parameter() -> None:
    result = runner.invoke(app, ["parse", "1person"])
    assert result.exit_code == 2
    assert "person" in result.output


def test_parse_lenient_flag_and_env(monkeypatch: pytest.MonkeyPatch) -> None:
    result = runner.invoke(app, ["parse", "--lenient", "1h1person"])
    assert result.exit_code == 0, result.output
    assert result.output.strip() == "3600000"

    monkeypatch.setenv(ENV_LENIENT, "true")
    result = runner.invoke(app, ["parse", "1h1person"])
    assert result.exit_code == 0, result.output

    result = runner.invoke(app, ["parse", "--strict", "1h1person"])
    assert result.exit_code == 2


def test_parse_bad_env_setting(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(ENV_OUTPUT_UNIT, "fortnight")
    result = runner.invoke(app, ["parse", "1s"])
    assert result.exit_code == 2


def test_format() -> None:
    result = runner.invoke(app, ["format", "5400000"])
    assert result.exit_code == 0, result.output
    assert result.output.strip() == "1h30m"

    result = runner.invoke(app, ["format", "--unit", "h", "1.5"])
    assert result.output.strip() == "1h30m"

    result = runner.invoke(app, ["format", "--", "-1"])
    assert result.output.strip() == "-1ms"

    result = runner.invoke(app, ["format", "0"])
    assert result.output.strip() == "0"


def test_format_ascii(monkeypatch: pytest.MonkeyPatch) -> None:
    result = runner.invoke(app, ["format", "--ascii", "0.003"])
    assert result.output.strip() == "3us"

    monkeypatch.setenv(ENV_ASCII, "1")
    result = runner.invoke(app, ["format", "0.003"])
    assert result.output.strip() == "3us"


def test_format_unknown_unit() -> None:
    result = runner.invoke(app, ["format", "--unit", "y", "1"])
    assert result.exit_code == 2


def test_normalize() -> None:
    result = runner.invoke(app, ["normalize", "90m", "36h", "1000ms"])
    assert result.exit_code == 0, result.output
    assert result.output.split() == ["1h30m", "1d12h", "1s"]


def test_check_exit_codes() -> None:
    result = runner.invoke(app, ["check", "10w5d39h9m14.425s"])
    assert result.exit_code == 0
    assert "OK" in result.output

    result = runner.invoke(app, ["check", "1h,30m"])
    assert result.exit_code == 1
    assert "INVALID" in result.output

    result = runner.invoke(app, ["check", "--quiet", "1h,30m"])
    assert result.exit_code == 1
    assert result.output == ""


def test_tokens_table() -> None:
    result = runner.invoke(app, ["tokens", "1h,30m"])
    assert result.exit_code == 0, result.output
    assert "number" in result.output
    assert "unit" in result.output
    assert "Warning" in result.output


def test_default_env_file_is_loaded(tmp_path: Path) -> None:
    (tmp_path / ".env").write_text(f"{ENV_OUTPUT_UNIT}=s\n", encoding="utf-8")
    result = runner.invoke(app, ["parse", "1m"])
    assert result.exit_code == 0, result.output
    assert result.output.strip() == "60"


def test_explicit_env_file(tmp_path: Path) -> None:
    env_path = tmp_path / "settings.env"
    env_path.write_text(f"{ENV_OUTPUT_UNIT}=m\n", encoding="utf-8")
    result = runner.invoke(app, ["--env-file", str(env_path), "parse", "2h"])
    assert result.exit_code == 0, result.output
    assert result.output.strip() == "120"


def test_verbose_logs_tokens() -> None:
    result = runner.invoke(app, ["--verbose", "parse", "1h"])
    assert result.exit_code == 0, result.output
    assert "tokens for '1h'" in result.output
    assert "3600000" in result.output
