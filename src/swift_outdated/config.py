"""Configuration management using lib_layered_config.

Purpose
-------
Provides a centralized configuration loader that merges defaults, application
configs, host configs, user configs, .env files, and environment variables
following a deterministic precedence order.

Contents
--------
* :func:`get_config` – loads configuration with lib_layered_config
* :func:`get_default_config_path` – returns path to bundled default config
* :func:`get_outdated_settings` – returns settings for the outdated check

Configuration identifiers (vendor, app, slug) are imported from
:mod:`swift_outdated.__init__conf__` as LAYEREDCONF_* constants.

System Role
-----------
Acts as the configuration adapter layer, bridging lib_layered_config with the
application's runtime needs while keeping domain logic decoupled from
configuration mechanics.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any

from lib_layered_config import Config, read_config

from . import __init__conf__
from .tags import BACKEND_GIT, DEFAULT_CONCURRENCY, DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)

# Environment variable prefix for native (short) env vars
_ENV_PREFIX = "SWIFT_OUTDATED_"


def get_default_config_path() -> Path:
    """Return the path to the bundled default configuration file.

    Returns:
        Absolute path to defaultconfig.toml.

    Example:
        >>> path = get_default_config_path()
        >>> path.name
        'defaultconfig.toml'
        >>> path.exists()
        True
    """
    return Path(__file__).parent / "defaultconfig.toml"


@lru_cache(maxsize=1)
def get_config(*, start_dir: str | None = None) -> Config:
    """Load layered configuration with application defaults.

    Loads configuration from multiple sources in precedence order:
    defaults → app → host → user → dotenv → env

    Args:
        start_dir: Optional directory that seeds .env discovery. Defaults to
            current working directory when None.

    Returns:
        Immutable configuration object with provenance tracking.

    Note:
        This function is cached (maxsize=1).
    """
    return read_config(
        vendor=__init__conf__.LAYEREDCONF_VENDOR,
        app=__init__conf__.LAYEREDCONF_APP,
        slug=__init__conf__.LAYEREDCONF_SLUG,
        default_file=get_default_config_path(),
        start_dir=start_dir,
    )


@dataclass(frozen=True, slots=True)
class OutdatedSettings:
    """Immutable settings for the outdated check.

    Attributes:
        timeout: Seconds to wait for one repository's tag listing.
        concurrency: Maximum number of simultaneous tag listings.
        backend: Tag listing backend, "git" or "http".
        ignore: Package identities excluded from the check.
    """

    timeout: float
    concurrency: int
    backend: str
    ignore: tuple[str, ...]


def _env_override(name: str, value: Any, convert: type) -> Any:
    raw = os.environ.get(f"{_ENV_PREFIX}{name}")
    if not raw:
        return value
    try:
        return convert(raw)
    except ValueError:
        logger.warning("Ignoring invalid %s%s=%r", _ENV_PREFIX, name, raw)
        return value


def get_outdated_settings() -> OutdatedSettings:
    """Get check settings from configuration with environment variable overrides.

    Settings are resolved in the following precedence order (highest wins):
    1. Native environment variables (SWIFT_OUTDATED_TIMEOUT, etc.)
    2. lib_layered_config environment variables
    3. User config file (~/.config/swift-outdated/config.toml)
    4. Host config file
    5. Application config file
    6. Default config (bundled defaultconfig.toml)

    Returns:
        OutdatedSettings with resolved values.
    """
    config = get_config()
    section = config.get("outdated", default={})

    timeout = _env_override("TIMEOUT", section.get("timeout", DEFAULT_TIMEOUT), float)
    concurrency = _env_override("CONCURRENCY", section.get("concurrency", DEFAULT_CONCURRENCY), int)
    backend = _env_override("BACKEND", section.get("backend", BACKEND_GIT), str)
    ignore = section.get("ignore", [])

    return OutdatedSettings(
        timeout=float(timeout),
        concurrency=int(concurrency),
        backend=str(backend),
        ignore=tuple(str(name) for name in ignore),
    )


__all__ = [
    "OutdatedSettings",
    "get_config",
    "get_default_config_path",
    "get_outdated_settings",
]
