from __future__ import annotations

import io
import logging
from collections.abc import Generator
from pathlib import Path

import pytest

from timeadjust.cli import EXIT_INVALID, EXIT_OK, main


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None, None, None]:
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    package_logger = logging.getLogger("timeadjust")
    package_level = package_logger.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    package_logger.setLevel(package_level)


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    return tmp_path / "config.toml"


def run(*argv: str) -> tuple[int, str, str]:
    out = io.StringIO()
    err = io.StringIO()
    code = main(list(argv), stdout=out, stderr=err)
    return code, out.getvalue(), err.getvalue()


def test_adjusts_from_explicit_moment(config_path: Path) -> None:
    code, out, _ = run("--config", str(config_path), "--from", "2021-01-01T00:00:00Z", "+1d -1h")
    assert code == EXIT_OK
    assert out == "2021-01-01T23:00:00Z\n"


def test_negative_expression_after_separator(config_path: Path) -> None:
    code, out, _ = run("--config", str(config_path), "--from", "2021-01-01T00:00:00Z", "--", "-1s1m1h1d")
    assert code == EXIT_OK
    assert out == "2020-12-30T22:58:59Z\n"


def test_bare_decrement_without_separator(config_path: Path) -> None:
    code, out, _ = run("--config", str(config_path), "-2m", "--from", "2021-01-01T00:00:00Z")
    assert code == EXIT_OK
    assert out == "2020-12-31T23:58:00Z\n"


def test_unknown_option_still_rejected(config_path: Path) -> None:
    with pytest.raises(SystemExit) as exc:
        run("--config", str(config_path), "--bogus", "+1d")
    assert exc.value.code == EXIT_INVALID


def test_invalid_expression_reports_issues(config_path: Path) -> None:
    code, out, err = run("--config", str(config_path), "--", "-30d1h2y")
    assert code == EXIT_INVALID
    assert out == ""
    assert "unit 'h' must come before 'd'" in err


def test_explain_lists_adjustments(config_path: Path) -> None:
    code, out, _ = run("--config", str(config_path), "--explain", "--", "-1h30d2y @5d")
    assert code == EXIT_OK
    assert out.splitlines() == [
        "-1h30d2y\tdecrement\thours=1, days=30, years=2",
        "@5d\tset\tday=5",
    ]


def test_preset_from_config(config_path: Path) -> None:
    code, out, _ = run(
        "--config", str(config_path), "--from", "2021-01-01T10:20:30Z", "--preset", "tomorrow"
    )
    assert code == EXIT_OK
    assert out == "2021-01-02T00:00:00Z\n"


def test_unknown_preset(config_path: Path) -> None:
    code, _, err = run("--config", str(config_path), "--preset", "missing")
    assert code == EXIT_INVALID
    assert "Preset 'missing' not found" in err


def test_missing_expression(config_path: Path) -> None:
    code, _, err = run("--config", str(config_path))
    assert code == EXIT_INVALID
    assert "an expression or --preset is required" in err


def test_custom_format(config_path: Path) -> None:
    code, out, _ = run(
        "--config", str(config_path), "--from", "2021-02-02T00:00:00", "--format", "%Y-%m-%d %H:%M", "@4h12d"
    )
    assert code == EXIT_OK
    assert out == "2021-02-12 04:00\n"


def test_bad_base_moment(config_path: Path) -> None:
    code, _, err = run("--config", str(config_path), "--from", "last tuesday", "+1d")
    assert code == EXIT_INVALID
    assert "Unsupported moment format" in err


def test_configured_output_format(config_path: Path) -> None:
    config_path.write_text('[display]\noutput_format = "%d/%m/%Y"\n', encoding="utf-8")
    code, out, _ = run("--config", str(config_path), "--from", "2021-01-31T00:00:00", "+1M")
    assert code == EXIT_OK
    assert out == "28/02/2021\n"
