#!/usr/bin/env python3
"""
Local Validation CLI - Validate a saved HTML snapshot offline.

Usage:
    python -m page_healthcheck.interface.validate_local [--fixture page.html]

Exit codes:
    0: Snapshot matches expected structure
    1: Content errors or fatal error (missing fixture, invalid pattern)
"""

import argparse
import logging
import sys
from typing import List, Optional

from page_healthcheck.health import load_config, report, run_local_check
from page_healthcheck.interface.watch import setup_logging


def main(argv: Optional[List[str]] = None) -> int:
    """
    Offline CLI entry point.

    Returns:
        Exit code: 0 (passed), 1 (failed), 130 (interrupted)
    """
    parser = argparse.ArgumentParser(
        description="Validate a saved HTML snapshot against the live check's expectations",
    )

    parser.add_argument(
        "--fixture",
        default=None,
        help="HTML file to validate (default: bundled example-response.html)",
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
        config = load_config(args.config)
        return run_local_check(config, fixture_path=args.fixture)
    except KeyboardInterrupt:
        logger.error("Local validation interrupted by user")
        return 130
    except Exception as e:
        logger.error("Local validation failed: %s", e, exc_info=True)
        report.print_error(e, report.ConsoleWriter(stderr=True))
        return 1


if __name__ == "__main__":
    sys.exit(main())
