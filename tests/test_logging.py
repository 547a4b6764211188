"""Tests for logging setup."""

import pytest

from query_workbench.core.exceptions import ConfigError
from query_workbench.core.logging import get_logger, setup_logging


@pytest.mark.unit
class TestSetupLogging:
    def test_log_to_stderr(self, capsys):
        setup_logging(verbose=True)
        get_logger("tabs").info("tab added")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "tab added" in captured.err
        assert "tabs" in captured.err

    def test_default_level_hides_info(self, capsys):
        setup_logging()
        get_logger().info("quiet")
        get_logger().warning("loud")

        err = capsys.readouterr().err
        assert "quiet" not in err
        assert "loud" in err

    def test_level_from_environment(self, capsys, monkeypatch):
        monkeypatch.setenv("QUERY_WORKBENCH_LOG_LEVEL", "info")
        setup_logging()
        get_logger().info("visible")
        assert "visible" in capsys.readouterr().err

    def test_explicit_level_wins_over_environment(self, capsys, monkeypatch):
        monkeypatch.setenv("QUERY_WORKBENCH_LOG_LEVEL", "debug")
        setup_logging(level="error")
        get_logger().warning("hidden")
        assert "hidden" not in capsys.readouterr().err

    def test_unknown_level_is_config_error(self):
        with pytest.raises(ConfigError, match="Unknown log level 'chatty'"):
            setup_logging(level="chatty")
