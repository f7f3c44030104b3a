"""
Health runner - Orchestrates a health check run.

This module coordinates fetching, validating and reporting for the live
check, and validating and reporting for the offline fixture check.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from page_healthcheck.health import checks, report
from page_healthcheck.health.config import HealthConfig
from page_healthcheck.health.errors import FixtureNotFoundError, HealthCheckError

logger = logging.getLogger(__name__)

DEFAULT_FIXTURE = Path(__file__).parent / "fixtures" / "example-response.html"


def run_health_check(
    config: HealthConfig,
    writer: Optional[report.ReportWriter] = None,
    error_writer: Optional[report.ReportWriter] = None,
) -> int:
    """
    Run the live check for the configured URL and return exit code.

    Args:
        config: Configuration for this run
        writer: Destination for the report (defaults to stdout)
        error_writer: Destination for fatal errors (defaults to stderr)

    Returns:
        Exit code: 0 (all checks passed), 1 (content error, non-200 status
        or fatal error)
    """
    writer = writer or report.ConsoleWriter()
    error_writer = error_writer or report.ConsoleWriter(stderr=True)

    writer.write_line("[dim]Starting webpage validation...[/dim]")

    try:
        response = checks.fetch(config.url, config.timeout_ms)
        validation = checks.validate_content(
            response.html, config.required_headings, config.required_elements
        )
    except HealthCheckError as e:
        logger.error("Health check failed for %s: %s", config.url, e)
        report.print_error(e, error_writer)
        return 1

    return report.print_results(response, validation, config, writer)


def load_fixture(fixture_path: Union[str, Path]) -> str:
    """
    Read a saved HTML snapshot.

    Args:
        fixture_path: Path to the HTML file

    Returns:
        File content as text

    Raises:
        FixtureNotFoundError: If the file does not exist
    """
    path = Path(fixture_path)
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise FixtureNotFoundError(str(path)) from e


def run_local_check(
    config: HealthConfig,
    fixture_path: Optional[Union[str, Path]] = None,
    writer: Optional[report.ReportWriter] = None,
    error_writer: Optional[report.ReportWriter] = None,
) -> int:
    """
    Validate a saved HTML snapshot with the live check's expectations.

    Args:
        config: Configuration supplying required headings and elements
        fixture_path: HTML file to validate (defaults to the bundled snapshot)
        writer: Destination for the report (defaults to stdout)
        error_writer: Destination for fatal errors (defaults to stderr)

    Returns:
        Exit code: 0 if the snapshot matches, 1 otherwise
    """
    writer = writer or report.ConsoleWriter()
    error_writer = error_writer or report.ConsoleWriter(stderr=True)
    path = Path(fixture_path) if fixture_path is not None else DEFAULT_FIXTURE

    writer.write_line("[dim]Testing validation against local example file...[/dim]")
    writer.write_line()

    try:
        html = load_fixture(path)
        validation = checks.validate_content(
            html, config.required_headings, config.required_elements
        )
    except HealthCheckError as e:
        logger.error("Local check failed for %s: %s", path, e)
        report.print_error(e, error_writer)
        return 1

    return report.print_local_results(validation, str(path), writer)
