"""Tests for P69 debug logging."""

from unittest.mock import patch
from p69.lib import log


def test_log_written_when_not_quiet():
    with (
        patch.object(log, "app_logger") as mock_logger,
        patch("p69.config.settings.appsettings.beQuiet", False),
    ):
        log.LOG("Missing token: color.base")
    mock_logger.opt.return_value.debug.assert_called_once_with(
        "Missing token: color.base"
    )


def test_log_silenced_by_beQuiet():
    with (
        patch.object(log, "app_logger") as mock_logger,
        patch("p69.config.settings.appsettings.beQuiet", True),
    ):
        log.LOG("Missing token: color.base")
    mock_logger.opt.assert_not_called()
