"""
Health configuration - Target page and content expectations.

This module builds the immutable configuration for a health check run,
either from built-in defaults or from a JSON file.
"""

import json
import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from page_healthcheck.health.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_URL = "https://playwright.dev/"

# Environment variable overriding the target URL (read by the CLI only)
TARGET_URL_ENV = "TARGET_URL"

DEFAULT_TIMEOUT_MS = 10000
DEFAULT_MAX_RESPONSE_TIME_MS = 3000
DEFAULT_REQUIRED_HEADINGS: Tuple[str, ...] = (
    "Chosen by companies and open source projects",
)
DEFAULT_REQUIRED_ELEMENTS: Tuple[str, ...] = (
    "class=getStarted_Sjon",
    'class="navbar__item navbar__link"',
)


# Configuration file structure
# {
#   "url": str,
#   "timeout_ms": Optional[int],
#   "max_response_time_ms": Optional[int],
#   "required_headings": Optional[List[str]],
#   "required_elements": Optional[List[str]]  # regex sources
# }


@dataclass(frozen=True)
class HealthConfig:
    """Configuration for one health check run."""

    url: str = DEFAULT_URL
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    max_response_time_ms: int = DEFAULT_MAX_RESPONSE_TIME_MS
    required_headings: Tuple[str, ...] = DEFAULT_REQUIRED_HEADINGS
    required_elements: Tuple[str, ...] = DEFAULT_REQUIRED_ELEMENTS


def default_config(target_url: Optional[str] = None) -> HealthConfig:
    """
    Build the built-in configuration.

    Args:
        target_url: Overrides the default URL when given

    Returns:
        HealthConfig for the default target
    """
    if target_url:
        return HealthConfig(url=target_url)
    return HealthConfig()


def load_config(
    config_path: Optional[str] = None, target_url: Optional[str] = None
) -> HealthConfig:
    """
    Load health check configuration.

    Args:
        config_path: Path to a JSON config file. If None, built-in defaults
                     are used.
        target_url: Overrides the URL from either source when given

    Returns:
        Validated HealthConfig

    Raises:
        FileNotFoundError: If config_path does not exist
        ConfigError: If the file is not valid JSON or fields are invalid
    """
    if config_path is None:
        config = default_config()
        source = "defaults"
    else:
        config_file = Path(config_path)
        if not config_file.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        try:
            with open(config_file, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in config file: {e}") from e

        config = _validate_config(data)
        source = str(config_file)

    if target_url:
        config = replace(config, url=target_url)

    logger.info(
        "Loaded health config from %s: %s (%d headings, %d elements)",
        source,
        config.url,
        len(config.required_headings),
        len(config.required_elements),
    )

    return config


def _validate_config(data: Any) -> HealthConfig:
    """
    Validate raw configuration data.

    Args:
        data: Parsed JSON content

    Returns:
        HealthConfig with defaults applied for missing optional fields

    Raises:
        ConfigError: If config is invalid
    """
    if not isinstance(data, dict):
        raise ConfigError("Config must be a JSON object")

    # Required fields
    if "url" not in data:
        raise ConfigError("Missing required field 'url'")
    if not isinstance(data["url"], str) or not data["url"]:
        raise ConfigError("Field 'url' must be a non-empty string")

    unknown = set(data) - {
        "url",
        "timeout_ms",
        "max_response_time_ms",
        "required_headings",
        "required_elements",
    }
    if unknown:
        raise ConfigError(f"Unknown config fields: {sorted(unknown)}")

    # Optional fields with defaults
    validated: Dict[str, Any] = {
        "url": data["url"],
        "timeout_ms": data.get("timeout_ms", DEFAULT_TIMEOUT_MS),
        "max_response_time_ms": data.get(
            "max_response_time_ms", DEFAULT_MAX_RESPONSE_TIME_MS
        ),
        "required_headings": data.get(
            "required_headings", list(DEFAULT_REQUIRED_HEADINGS)
        ),
        "required_elements": data.get(
            "required_elements", list(DEFAULT_REQUIRED_ELEMENTS)
        ),
    }

    # Type validation
    for name in ("timeout_ms", "max_response_time_ms"):
        value = validated[name]
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise ConfigError(f"Field '{name}' must be a positive int")
    for name in ("required_headings", "required_elements"):
        value = validated[name]
        if not isinstance(value, list) or not all(
            isinstance(item, str) for item in value
        ):
            raise ConfigError(f"Field '{name}' must be a list of strings")

    return HealthConfig(
        url=validated["url"],
        timeout_ms=validated["timeout_ms"],
        max_response_time_ms=validated["max_response_time_ms"],
        required_headings=tuple(validated["required_headings"]),
        required_elements=tuple(validated["required_elements"]),
    )
