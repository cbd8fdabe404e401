"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator
from datetime import datetime

import pytest
import structlog

from timeadjust.applier import adjust
from timeadjust.logging import configure_logging
from timeadjust.parser import parse


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


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True)
        assert logging.getLogger("timeadjust").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False)
        assert logging.getLogger("timeadjust").level == logging.WARNING

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        structlog.get_logger("timeadjust.test").warning("json test", answer=42)
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "timeadjust.test"
        assert "timestamp" in parsed

    def test_rejected_token_is_logged(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        assert parse("+1d %2h") is None
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["level"] == "debug"
        assert parsed["logger"] == "timeadjust.parser"
        assert "'%2h'" in parsed["event"]

    def test_lenient_adjust_is_logged(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        moment = datetime(2021, 1, 1)
        assert adjust(moment, "nonsense") is moment
        lines = [json.loads(line) for line in capfd.readouterr().err.strip().splitlines()]
        assert [line["logger"] for line in lines] == ["timeadjust.parser", "timeadjust.applier"]

    def test_quiet_by_default(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=False, log_json=True)
        parse("%")
        assert capfd.readouterr().err == ""
