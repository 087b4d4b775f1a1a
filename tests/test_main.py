"""
Entry Point Tests
=================
The canceller must never fail the pipeline that invoked it.
"""
from unittest.mock import AsyncMock, patch

import main
from run_canceller.core.config import Settings
from run_canceller.core.errors import ConfigError
from run_canceller.models.run_identity import RunIdentity


SETTINGS = Settings(
    repository="octo/widgets",
    token="fake",
    identity=RunIdentity(branch="main", commit_sha="abc", run_number=1),
)


def test_exit_zero_on_success():
    with patch("main.setup_logging"), \
         patch("main.load_settings", return_value=SETTINGS), \
         patch("main.cancel_stale_runs", new_callable=AsyncMock, return_value=[]) as mock_cancel:
        assert main.main() == 0

    mock_cancel.assert_awaited_once_with(SETTINGS)


def test_exit_zero_on_missing_configuration():
    with patch("main.setup_logging"), \
         patch("main.load_settings", side_effect=ConfigError("GITHUB_REPOSITORY is not set")), \
         patch("main.cancel_stale_runs", new_callable=AsyncMock) as mock_cancel:
        assert main.main() == 0

    mock_cancel.assert_not_awaited()


def test_exit_zero_on_unexpected_failure():
    with patch("main.setup_logging"), \
         patch("main.load_settings", return_value=SETTINGS), \
         patch("main.cancel_stale_runs", new_callable=AsyncMock, side_effect=RuntimeError("boom")):
        assert main.main() == 0


def test_invalid_log_level_falls_back_to_info():
    with patch("main.setup_logging") as mock_setup, \
         patch("main.LOG_LEVEL", "LOUD"), \
         patch("main.load_settings", side_effect=ConfigError("unset")):
        main.main()

    mock_setup.assert_called_once_with(level=20)
