#!/usr/bin/env python3
"""
Daily working location check.

Reads today's working location from Google Calendar, then sets the Slack
status for home days or reminds the user when no location is declared.
Meant to be run once a day from cron, e.g.:

    0 8 * * * cd /path/to/repo && python src/scripts/check_work_location.py

Usage:
    python src/scripts/check_work_location.py [--log-level DEBUG]
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import load_settings
from core.errors import WorkLocationError
from core.logging_config import configure_logging
from services.status_check import run_status_check

logger = logging.getLogger("check_work_location")


async def main() -> int:
    """Main entry point. Returns the process exit code."""
    try:
        settings = load_settings()
        result = await run_status_check(settings)
    except WorkLocationError as e:
        logger.error("Status check failed: %s", e)
        return 1
    except Exception:
        logger.exception("Unexpected error in status check")
        return 1

    logger.info(
        "Done: location=%s action=%s status_updated=%s reminder_sent=%s",
        result.location.value,
        result.action.value,
        result.status_updated,
        result.reminder_sent,
    )
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Sync Slack status with today's working location")
    parser.add_argument("--log-level", help="Override LOG_LEVEL (e.g. DEBUG)")
    args = parser.parse_args()

    configure_logging(args.log_level)
    sys.exit(asyncio.run(main()))
