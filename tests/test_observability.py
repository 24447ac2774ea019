"""
Tests for logging setup.
"""

import logging

from oz_action.adapters.ci.workflow import WorkflowCommandHandler
from oz_action.core.observability.logging_config import _parse_level, setup_logging


class TestSetupLogging:
    def test_console_handler(self):
        setup_logging(level="WARNING")
        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0], logging.StreamHandler)
        assert root.level == logging.WARNING

    def test_workflow_commands(self):
        setup_logging(level="DEBUG", workflow_commands=True)
        root = logging.getLogger()
        assert isinstance(root.handlers[0], WorkflowCommandHandler)
        assert root.level == logging.DEBUG

    def test_file_handler(self, tmp_path):
        log_file = tmp_path / "oz-action.log"
        setup_logging(level="WARNING", log_file=str(log_file), log_file_level="DEBUG")
        root = logging.getLogger()
        assert len(root.handlers) == 2
        assert root.level == logging.DEBUG

        logging.getLogger("oz_action.test").debug("to the file only")
        for handler in root.handlers:
            handler.flush()
        assert "to the file only" in log_file.read_text()

    def test_quiets_third_party(self):
        setup_logging(level="INFO")
        assert logging.getLogger("urllib3").level == logging.WARNING


class TestParseLevel:
    def test_names(self):
        assert _parse_level("debug") == logging.DEBUG
        assert _parse_level("ERROR") == logging.ERROR

    def test_fallback(self):
        assert _parse_level(None) == logging.INFO
        assert _parse_level("loud") == logging.INFO
