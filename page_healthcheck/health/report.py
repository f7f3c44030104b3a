"""
Health report - Terminal output for health check results.

This module formats fetch and validation results through an injected
writer and derives the process exit code from them.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional, Protocol

from rich.console import Console  # type: ignore
from rich.markup import escape  # type: ignore
from rich.text import Text  # type: ignore

from page_healthcheck.health import checks
from page_healthcheck.health.checks import HttpResponse, ValidationResult
from page_healthcheck.health.config import HealthConfig

logger = logging.getLogger(__name__)

RULE = "=" * 70

PASS = "[green]✓[/green]"
FAIL = "[red]✗[/red]"
WARN = "[yellow]⚠[/yellow]"


class ReportWriter(Protocol):
    """Anything that can receive report lines containing rich markup."""

    def write_line(self, line: str = "") -> None:
        ...


class ConsoleWriter:
    """Writes report lines to a terminal with colors."""

    def __init__(self, console: Optional[Console] = None, stderr: bool = False):
        self.console = console or Console(stderr=stderr, highlight=False)

    def write_line(self, line: str = "") -> None:
        self.console.print(line)


class BufferWriter:
    """Collects report lines as plain text."""

    def __init__(self):
        self.lines: List[str] = []

    def write_line(self, line: str = "") -> None:
        self.lines.append(Text.from_markup(line).plain)

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


def exit_code_for(response: HttpResponse, validation: ValidationResult) -> int:
    """
    Derive the exit code of a live check.

    Returns:
        1 if content errors were found or status is not 200, else 0.
        Slow responses never fail the check on their own.
    """
    has_errors = bool(validation.errors) or not checks.check_status(
        response.status_code
    )
    return 1 if has_errors else 0


def print_results(
    response: HttpResponse,
    validation: ValidationResult,
    config: HealthConfig,
    writer: ReportWriter,
    now: Optional[datetime] = None,
) -> int:
    """
    Print the live check report.

    Args:
        response: Fetch result
        validation: Validation result for the response body
        config: Configuration the check ran with
        writer: Destination for report lines
        now: Report timestamp (defaults to current UTC time)

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    timestamp = (
        (now or datetime.now(timezone.utc))
        .isoformat(timespec="milliseconds")
        .replace("+00:00", "Z")
    )

    writer.write_line()
    writer.write_line(RULE)
    writer.write_line("[blue]Webpage Validation Report[/blue]")
    writer.write_line(RULE)
    writer.write_line(f"[dim]URL: {escape(config.url)}[/dim]")
    writer.write_line(f"[dim]Timestamp: {timestamp}[/dim]")
    writer.write_line()

    # Status
    writer.write_line("[blue]► HTTP Status[/blue]")
    icon = PASS if checks.check_status(response.status_code) else FAIL
    writer.write_line(
        f"  {icon} Status: {response.status_code} {escape(response.status_message)}"
    )

    # Timing
    writer.write_line()
    writer.write_line("[blue]► Response Time[/blue]")
    fast = checks.check_response_time(
        response.response_time_ms, config.max_response_time_ms
    )
    if fast:
        writer.write_line(f"  {PASS} Response time: {response.response_time_ms}ms")
    else:
        writer.write_line(
            f"  {WARN} Response time: {response.response_time_ms}ms "
            f"(threshold: {config.max_response_time_ms}ms)"
        )

    # Content
    writer.write_line()
    writer.write_line("[blue]► Content Validation[/blue]")
    writer.write_line("  Headings:")
    _write_headings(validation, writer, indent="    ")
    writer.write_line("  Elements:")
    _write_elements(validation, writer, indent="    ")

    # Summary
    writer.write_line()
    writer.write_line("[blue]► Summary[/blue]")
    exit_code = exit_code_for(response, validation)

    if exit_code:
        writer.write_line(
            f"  [red]✗ FAILED[/red] - {len(validation.errors)} error(s) found"
        )
        _write_errors(validation.errors, writer)
    else:
        writer.write_line("  [green]✓ PASSED[/green] - All validations successful")

    if not fast:
        writer.write_line(
            "  [yellow]⚠ WARNING[/yellow] - Slow response time detected"
        )
    for warning in validation.warnings:
        writer.write_line(f"  [yellow]⚠ WARNING[/yellow] - {escape(warning)}")

    writer.write_line(RULE)
    writer.write_line()

    logger.debug("Report printed with exit code %d", exit_code)
    return exit_code


def print_local_results(
    validation: ValidationResult, fixture_path: str, writer: ReportWriter
) -> int:
    """
    Print the offline fixture report (no HTTP sections).

    Returns:
        Exit code (0 for success, 1 if validation errors were found)
    """
    writer.write_line(RULE)
    writer.write_line("[blue]Local Example Validation Results[/blue]")
    writer.write_line(RULE)
    writer.write_line(f"[dim]File: {escape(str(fixture_path))}[/dim]")
    writer.write_line()

    writer.write_line("[blue]► Required Headings[/blue]")
    _write_headings(validation, writer, indent="  ")

    writer.write_line()
    writer.write_line("[blue]► Required Elements[/blue]")
    _write_elements(validation, writer, indent="  ")

    writer.write_line()
    writer.write_line("[blue]► Test Result[/blue]")
    if validation.valid:
        writer.write_line(
            "  [green]✓ PASSED[/green] - Example HTML matches expected structure"
        )
    else:
        writer.write_line(
            f"  [red]✗ FAILED[/red] - {len(validation.errors)} error(s):"
        )
        _write_errors(validation.errors, writer)

    writer.write_line(RULE)
    writer.write_line()

    return 0 if validation.valid else 1


def print_error(error: BaseException, writer: ReportWriter) -> None:
    """Print a fatal error line."""
    writer.write_line()
    writer.write_line(f"[red]✗ ERROR:[/red] {escape(str(error))}")
    writer.write_line()


def _write_headings(
    validation: ValidationResult, writer: ReportWriter, indent: str
) -> None:
    for heading, found in validation.headings.items():
        if found:
            writer.write_line(f'{indent}{PASS} "{escape(heading)}"')
        else:
            writer.write_line(
                f'{indent}{FAIL} "{escape(heading)}" [red](MISSING)[/red]'
            )


def _write_elements(
    validation: ValidationResult, writer: ReportWriter, indent: str
) -> None:
    for element, count in validation.elements.items():
        if count > 0:
            writer.write_line(
                f"{indent}{PASS} Found {count} instance(s) of {escape(element)}"
            )
        else:
            writer.write_line(
                f"{indent}{FAIL} Missing required element: {escape(element)}"
            )


def _write_errors(errors: List[str], writer: ReportWriter) -> None:
    for error in errors:
        writer.write_line(f"    [red]•[/red] {escape(error)}")
