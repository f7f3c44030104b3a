#!/usr/bin/env python3
"""
Page Health CLI - Live validation of the target web page.

Usage:
    python -m page_healthcheck.interface.watch [--config config.json] [-v]

Environment:
    TARGET_URL: Overrides the target URL

Exit codes:
    0: HTTP 200 and all content checks passed
    1: Content errors, non-200 status, or fatal error (DNS failure, timeout)
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

from page_healthcheck.health import load_config, report, run_health_check
from page_healthcheck.health.config import TARGET_URL_ENV


def setup_logging(verbose: bool = False) -> None:
    """
    Setup logging configuration.

    Args:
        verbose: If True, enable DEBUG level logging
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point.

    Returns:
        Exit code: 0 (passed), 1 (failed), 130 (interrupted)
    """
    parser = argparse.ArgumentParser(
        description="Validate status, response time and content of a web page",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Exit codes:
  0  - HTTP 200 and all content checks passed
  1  - Content errors, non-200 status, or fatal error

Environment:
  {TARGET_URL_ENV}  - Overrides the target URL

Examples:
  page-healthcheck
  {TARGET_URL_ENV}=https://example.com/ page-healthcheck
  page-healthcheck --config healthcheck.json -v
        """,
    )

    parser.add_argument(
        "--config",
        default=None,
        help="Path to JSON config file (default: built-in configuration)",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging (DEBUG level)",
    )

    args = parser.parse_args(argv)

    setup_logging(verbose=args.verbose)

    logger = logging.getLogger(__name__)

    try:
        config = load_config(args.config, target_url=os.environ.get(TARGET_URL_ENV))
        logger.info("Starting health check for %s", config.url)
        exit_code = run_health_check(config)
        logger.info("Health check completed with exit code: %d", exit_code)
        return exit_code
    except KeyboardInterrupt:
        logger.error("Health check interrupted by user")
        return 130
    except Exception as e:
        logger.error("Health check failed: %s", e, exc_info=True)
        report.print_error(e, report.ConsoleWriter(stderr=True))
        return 1


if __name__ == "__main__":
    sys.exit(main())
