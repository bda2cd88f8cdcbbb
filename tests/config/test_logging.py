"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator
from pathlib import Path

import pytest
import structlog

from digraphkit.config.logging import configure_from_settings, configure_logging
from digraphkit.config.models import LoggingConfig
from digraphkit.config.settings import DigraphSettings
from tests.conftest import build_graph


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    pkg = logging.getLogger("digraphkit")
    pkg_level = pkg.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    pkg.setLevel(pkg_level)


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger("digraphkit").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False, log_json=False)
        assert logging.getLogger("digraphkit").level == logging.WARNING

    def test_human_mode_output(self) -> None:
        configure_logging(verbose=True, log_json=False)
        log = structlog.get_logger("digraphkit.test")
        log.warning("hello world", key="val")

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        log = structlog.get_logger("digraphkit.test")
        log.warning("json test", answer=42)
        captured = capfd.readouterr()
        parsed = json.loads(captured.err.strip())
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "digraphkit.test"
        assert "timestamp" in parsed

    def test_graph_mutations_logged_at_debug(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        build_graph([1])
        captured = capfd.readouterr()
        parsed = json.loads(captured.err.strip())
        assert parsed["event"] == "Added vertex 1"
        assert parsed["level"] == "debug"
        assert parsed["logger"] == "digraphkit.core.digraph"

    def test_mutations_silent_when_not_verbose(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=False, log_json=True)
        build_graph([1, 2], [(1, 2, 1.0)])
        assert capfd.readouterr().err == ""

    def test_third_party_debug_is_suppressed(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("networkx").debug("backend noise")
        assert capfd.readouterr().err == ""

    def test_idempotent_calls(self) -> None:
        """Multiple configure_logging calls don't stack handlers."""
        configure_logging(verbose=True, log_json=False)
        configure_logging(verbose=True, log_json=True)
        assert len(logging.getLogger().handlers) == 1

    def test_configure_from_settings(self) -> None:
        configure_from_settings(LoggingConfig(verbose=True))
        assert logging.getLogger("digraphkit").level == logging.DEBUG

    def test_configure_from_loaded_toml(self, tmp_path: Path) -> None:
        config = tmp_path / "digraphkit.toml"
        config.write_text("[logging]\nverbose = true\n", encoding="utf-8")
        settings = DigraphSettings.load(config_path=config)
        configure_from_settings(settings.logging)
        assert logging.getLogger("digraphkit").level == logging.DEBUG
