import argparse
import asyncio
import logging
import sys
from datetime import date
from typing import Any

from deskcheck.config import load_settings
from deskcheck.exceptions import ConfigurationError
from deskcheck.logging_config import setup_logging
from deskcheck.services.desk_check_service import DeskCheckService

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="deskcheck",
        description="Check WeWork desk availability and post a summary to Slack.",
    )
    parser.add_argument(
        "--date",
        dest="dates",
        action="append",
        type=date.fromisoformat,
        metavar="YYYY-MM-DD",
        help="Date to check (repeatable). Defaults to the next configured weekdays.",
    )
    parser.add_argument("--headed", action="store_true", help="Show the browser window")
    parser.add_argument("--no-logout", action="store_true", help="Stay signed in after the run")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging(args.verbose)

    overrides: dict[str, Any] = {}
    if args.headed:
        overrides["headless"] = False
    if args.no_logout:
        overrides["logout_after_completion"] = False

    try:
        settings = load_settings(**overrides)
        asyncio.run(DeskCheckService(settings).run(args.dates))
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        return EXIT_FAILURE
    except Exception:
        logger.exception("Availability check failed")
        return EXIT_FAILURE

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
