"""
Health module - One-shot validation of a web page.

This module fetches a page, checks its markup against required headings
and element patterns, and reports the result with an exit code.
"""

from page_healthcheck.health.config import HealthConfig, load_config
from page_healthcheck.health.runner import run_health_check, run_local_check

__all__ = ["HealthConfig", "load_config", "run_health_check", "run_local_check"]
