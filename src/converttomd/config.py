"""Configuration helpers for converttomd."""
from __future__ import annotations

import argparse
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

import yaml

from .errors import ConfigError
from .logging_config import get_logger

VERSION = "1.0.0"
PROGRAM_NAME = "converttomd-jira"
DEFAULT_CONFIG_FILE = "converttomd.yaml"

LOGGER = get_logger(__name__)

# Keys that may be supplied through the YAML file or the environment.
KNOWN_CONFIG_KEYS: set[str] = {"details", "force", "output", "verbose", "log_level"}

# Keys interpreted strictly as booleans; ``details`` has its own lenient parser.
BOOLEAN_KEYS = {"force", "verbose"}

ENV_PREFIX = "CONVERTTOMD_"

_DETAILS_ENABLED = {"on", "enabled", "1", "true", "yes"}
_DETAILS_DISABLED = {"off", "disabled", "0", "false", "no"}


@dataclass(frozen=True)
class ConverterConfig:
    """Immutable settings for one converter run."""

    input_files: Tuple[Path, ...] = ()
    output: Optional[Path] = None
    include_details: bool = True
    verbose: bool = False
    force: bool = False
    log_level: Optional[str] = None

    @property
    def effective_log_level(self) -> str:
        if self.log_level:
            return self.log_level
        return "INFO" if self.verbose else "WARNING"


def parse_details_flag(value: Any) -> bool:
    """Interpret the ``--details`` switch; unknown values keep details enabled."""

    if isinstance(value, bool):
        return value
    lowered = str(value).strip().lower()
    if lowered in _DETAILS_ENABLED:
        return True
    if lowered in _DETAILS_DISABLED:
        return False
    LOGGER.warning("Unrecognised details value; details stay enabled", extra={"details": value})
    return True


def _coerce_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    truthy = {"1", "true", "yes", "on", "y", "t"}
    falsy = {"0", "false", "no", "off", "n", "f"}
    lowered = str(value).strip().lower()
    if lowered in truthy:
        return True
    if lowered in falsy:
        return False
    raise ConfigError(f"Unable to interpret boolean value from '{value}'.")


def load_yaml_defaults(path: str | Path | None) -> dict:
    """Load YAML configuration defaults from ``path``.

    A missing file (or ``None``) yields an empty dictionary.
    """

    if not path:
        return {}

    yaml_path = Path(path)
    if not yaml_path.exists():
        return {}

    try:
        with yaml_path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in configuration file '{yaml_path}': {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(
            f"Expected top-level mapping in configuration file '{yaml_path}',"
            f" but received {type(data).__name__}."
        )

    return data


def load_env_overrides(keys: Iterable[str], env: Mapping[str, str] | None = None) -> dict:
    """Return ``CONVERTTOMD_<KEY>`` environment overrides for ``keys``."""

    source = os.environ if env is None else env
    overrides: Dict[str, Any] = {}
    for key in keys:
        env_key = f"{ENV_PREFIX}{key.upper()}"
        if env_key in source:
            overrides[key] = source[env_key]
    return overrides


def merge_configs(*dicts: Dict[str, Any]) -> dict:
    """Merge dictionaries honoring precedence from left to right."""

    merged: Dict[str, Any] = {}
    for cfg in reversed(dicts):
        if not cfg:
            continue
        merged.update(cfg)
    return merged


def _extract_cli_overrides(cli_args: argparse.Namespace) -> Dict[str, Any]:
    data: Dict[str, Any] = {}
    for key in KNOWN_CONFIG_KEYS:
        value = getattr(cli_args, key, None)
        if value is not None:
            data[key] = value
    return data


def _resolve_config_path(cli_args: argparse.Namespace) -> Path | None:
    explicit = getattr(cli_args, "config", None)
    if explicit:
        config_path = Path(explicit)
        if not config_path.exists():
            raise ConfigError(f"Configuration file '{config_path}' was not found.")
        return config_path
    default_path = Path(DEFAULT_CONFIG_FILE)
    if default_path.exists():
        return default_path
    return None


def build_config(
    cli_args: argparse.Namespace, env: Mapping[str, str] | None = None
) -> ConverterConfig:
    """Build the run configuration from CLI flags, environment and YAML."""

    if not isinstance(cli_args, argparse.Namespace):
        raise TypeError("cli_args must be an argparse.Namespace instance")

    yaml_defaults = load_yaml_defaults(_resolve_config_path(cli_args))
    unknown = sorted(str(key) for key in yaml_defaults if key not in KNOWN_CONFIG_KEYS)
    if unknown:
        raise ConfigError("Unknown configuration keys: " + ", ".join(unknown))

    merged = merge_configs(
        _extract_cli_overrides(cli_args),
        load_env_overrides(KNOWN_CONFIG_KEYS, env),
        yaml_defaults,
    )

    for key in BOOLEAN_KEYS:
        merged[key] = _coerce_bool(merged.get(key, False))

    output = merged.get("output")
    return ConverterConfig(
        input_files=tuple(Path(name) for name in getattr(cli_args, "files", None) or ()),
        output=Path(output) if output else None,
        include_details=parse_details_flag(merged.get("details", "enabled")),
        verbose=merged["verbose"],
        force=merged["force"],
        log_level=merged.get("log_level") or None,
    )


__all__ = [
    "BOOLEAN_KEYS",
    "ConverterConfig",
    "DEFAULT_CONFIG_FILE",
    "KNOWN_CONFIG_KEYS",
    "PROGRAM_NAME",
    "VERSION",
    "build_config",
    "load_env_overrides",
    "load_yaml_defaults",
    "merge_configs",
    "parse_details_flag",
]
