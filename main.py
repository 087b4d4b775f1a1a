"""
Stale Run Canceller entry point.

Reads the current run's identity from the environment and cancels older,
still-running workflow runs on the same branch. Never fails the calling
pipeline: every path exits with status 0.
"""
import asyncio
import logging
import sys

from run_canceller.agents.run_canceller import cancel_stale_runs
from run_canceller.core.config import LOG_LEVEL, load_settings
from run_canceller.core.errors import ConfigError
from run_canceller.utils.logging_config import setup_logging

logger = logging.getLogger("main")


def main() -> int:
    level = logging.getLevelName(LOG_LEVEL)
    if not isinstance(level, int):
        level = logging.INFO
    setup_logging(level=level)

    try:
        settings = load_settings()
    except ConfigError as e:
        logger.error("Nothing to do: %s", e)
        return 0

    try:
        asyncio.run(cancel_stale_runs(settings))
    except Exception as e:
        # The pipeline that invoked us must never fail because of the canceller
        logger.exception("Run canceller failed: %s", e)
    return 0


if __name__ == "__main__":
    sys.exit(main())
