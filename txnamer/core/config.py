"""Configuration for the transaction namer.

Configuration precedence (highest to lowest):
1. ``TransactionNamer.initialize`` parameters
2. Environment variables (TXNAMER_PACKAGE_PREFIX, TXNAMER_AGENT, TXNAMER_ENABLED)
3. YAML configuration (.txnamer/config.yaml at the project root)
4. Built-in defaults
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

logger = logging.getLogger(__name__)

CONFIG_DIR_NAME = ".txnamer"
CONFIG_FILE_NAME = "config.yaml"
PROJECT_ROOT_MARKERS = ("pyproject.toml", "setup.py", "setup.cfg", ".git")

DEFAULT_AGENT = "opentelemetry"
DEFAULT_COMPONENT_PARAMETER = "component"
DEFAULT_IGNORED_VIEW_PREFIXES = (
    "django.views.static.",
    "django.contrib.staticfiles.",
)


@dataclass
class NamerConfig:
    """Effective configuration after precedence has been applied."""

    package_prefix: str = ""
    agent: str = DEFAULT_AGENT
    component_parameter: str = DEFAULT_COMPONENT_PARAMETER
    ignored_view_prefixes: tuple[str, ...] = DEFAULT_IGNORED_VIEW_PREFIXES
    enabled: bool = True


@dataclass
class NamingConfig:
    package_prefix: Optional[str] = None


@dataclass
class AgentConfig:
    name: Optional[str] = None


@dataclass
class InstrumentationConfig:
    enabled: Optional[bool] = None
    component_parameter: Optional[str] = None
    ignored_view_prefixes: Optional[list[str]] = None


@dataclass
class NamerFileConfig:
    """Contents of .txnamer/config.yaml; sections missing from the file are None."""

    naming: Optional[NamingConfig] = None
    agent: Optional[AgentConfig] = None
    instrumentation: Optional[InstrumentationConfig] = None
    raw: dict[str, Any] = field(default_factory=dict, repr=False)


def find_project_root(start: Path | None = None) -> Path | None:
    """Walk up from ``start`` (default: cwd) to the first directory holding a project marker."""
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        if any((directory / marker).exists() for marker in PROJECT_ROOT_MARKERS):
            return directory
    return None


def _section(data: dict[str, Any], key: str) -> dict[str, Any] | None:
    value = data.get(key)
    if isinstance(value, dict):
        return value
    if value is not None:
        logger.warning(f"Ignoring config section '{key}': expected a mapping, got {type(value).__name__}")
    return None


def _typed(section: dict[str, Any], section_name: str, key: str, expected: type) -> Any:
    value = section.get(key)
    if value is None or isinstance(value, expected):
        return value
    logger.warning(
        f"Ignoring config value '{section_name}.{key}': expected {expected.__name__}, got {type(value).__name__}"
    )
    return None


def _string_list(section: dict[str, Any], section_name: str, key: str) -> list[str] | None:
    values = _typed(section, section_name, key, list)
    if values is None:
        return None
    strings = [value for value in values if isinstance(value, str)]
    if len(strings) != len(values):
        logger.warning(f"Ignoring {len(values) - len(strings)} non-string entries in '{section_name}.{key}'")
    return strings


def parse_namer_config(data: dict[str, Any]) -> NamerFileConfig:
    config = NamerFileConfig(raw=data)

    naming = _section(data, "naming")
    if naming is not None:
        config.naming = NamingConfig(package_prefix=_typed(naming, "naming", "package_prefix", str))

    agent = _section(data, "agent")
    if agent is not None:
        config.agent = AgentConfig(name=_typed(agent, "agent", "name", str))

    instrumentation = _section(data, "instrumentation")
    if instrumentation is not None:
        config.instrumentation = InstrumentationConfig(
            enabled=_typed(instrumentation, "instrumentation", "enabled", bool),
            component_parameter=_typed(instrumentation, "instrumentation", "component_parameter", str),
            ignored_view_prefixes=_string_list(instrumentation, "instrumentation", "ignored_view_prefixes"),
        )

    return config


def load_namer_config(project_root: Path | None = None) -> NamerFileConfig | None:
    """Load .txnamer/config.yaml from the project root.

    Returns:
        The parsed file config, or None if there is no config file or it cannot be parsed
    """
    root = project_root or find_project_root()
    if root is None:
        logger.debug("No project root found, skipping config file")
        return None

    config_path = root / CONFIG_DIR_NAME / CONFIG_FILE_NAME
    if not config_path.is_file():
        logger.debug(f"No config file at {config_path}")
        return None

    try:
        data = yaml.safe_load(config_path.read_text())
    except (OSError, yaml.YAMLError) as e:
        logger.error(f"Failed to read config file {config_path}: {e}")
        return None

    if data is None:
        return NamerFileConfig()
    if not isinstance(data, dict):
        logger.error(f"Config file {config_path} must contain a mapping at the top level")
        return None

    logger.debug(f"Loaded config from {config_path}")
    return parse_namer_config(data)
