"""
Tests for observability — logging setup and the build event channel.
"""

import logging

import pytest

from docbundle.core.observability.logging_config import resolve_level, setup_logging
from docbundle.core.services.events import BuildEvent, Reporter


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestResolveLevel:
    def test_flags_win(self, monkeypatch):
        monkeypatch.setenv("DOCBUNDLE_LOG_LEVEL", "ERROR")
        assert resolve_level(debug=True) == "DEBUG"
        assert resolve_level(verbose=True) == "INFO"
        assert resolve_level(quiet=True) == "ERROR"

    def test_env_fallback(self, monkeypatch):
        monkeypatch.setenv("DOCBUNDLE_LOG_LEVEL", "INFO")
        assert resolve_level() == "INFO"

    def test_default_warning(self, monkeypatch):
        monkeypatch.delenv("DOCBUNDLE_LOG_LEVEL", raising=False)
        assert resolve_level() == "WARNING"


class TestSetupLogging:
    def test_console_level(self):
        setup_logging("INFO")
        root = logging.getLogger()
        assert root.level == logging.INFO
        assert len(root.handlers) == 1

    def test_unknown_level_falls_back(self):
        setup_logging("NOPE")
        assert logging.getLogger().level == logging.WARNING

    def test_file_handler(self, tmp_path):
        log_file = tmp_path / "docbundle.log"
        setup_logging("WARNING", log_file=str(log_file), log_file_level="DEBUG")
        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 2

        logging.getLogger("docbundle.test").debug("hello file")
        for handler in root.handlers:
            handler.flush()
        assert "hello file" in log_file.read_text()


class TestReporter:
    def test_keeps_order_and_levels(self):
        reporter = Reporter()
        reporter.info("one")
        reporter.warning("two")
        reporter.info("three")
        assert [e.message for e in reporter.events] == ["one", "two", "three"]
        assert reporter.messages == ["one", "three"]
        assert reporter.warnings == ["two"]

    def test_forwards_to_callback(self):
        seen: list[BuildEvent] = []
        reporter = Reporter(on_event=seen.append)
        reporter.warning("careful")
        assert seen == [BuildEvent("warning", "careful")]

    def test_to_dict(self):
        assert BuildEvent("info", "x").to_dict() == {"level": "info", "message": "x"}
