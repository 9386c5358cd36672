"""Configuration loading from CLI args, env vars, and optional YAML file."""

import codecs
import os
import logging
from dataclasses import dataclass

import yaml

from logscan.parser import DEFAULT_STATUSES

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ("text", "json")


class ConfigError(Exception):
    """Raised when the scan cannot be configured."""


@dataclass(frozen=True)
class Config:
    root_folder: str
    log_type: str = "access"
    search_for: tuple[str, ...] = ()
    forwarded_from: str = ""
    accepted_statuses: tuple[str, ...] = DEFAULT_STATUSES
    by_date: bool = True
    strict_dates: bool = False
    max_workers: int | None = None
    encoding: str = "utf-8"
    output_format: str = "text"


def parse_search_terms(raw) -> tuple[str, ...]:
    """Split a comma-separated string (or pass through a YAML list) into terms.

    Empty items are kept; the aggregator ignores them.
    """
    if raw is None:
        return ()
    if isinstance(raw, str):
        return tuple(raw.split(","))
    return tuple(str(item) for item in raw)


def _parse_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("true", "1", "yes")


def load_yaml_config(path: str | None) -> dict:
    """Load scan options from a YAML file. Returns empty dict if no path."""
    if not path:
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.warning("Config file %s not found, using defaults", path)
        return {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    logger.info("Loaded YAML config from %s", path)
    return data


def _pick(cli_value, env_name: str, yaml_data: dict, key: str, default):
    """CLI flag wins, then environment, then YAML, then the default."""
    if cli_value is not None:
        return cli_value
    env_value = os.environ.get(env_name)
    if env_value is not None:
        return env_value
    if yaml_data.get(key) is not None:
        return yaml_data[key]
    return default


def load_config(cli_args, yaml_data: dict) -> Config:
    """Build Config from CLI args, env vars, and parsed YAML data."""
    root_folder = _pick(getattr(cli_args, "root_folder", None),
                        "LOGSCAN_ROOT_FOLDER", yaml_data, "root_folder", None)
    if not root_folder:
        raise ConfigError("root folder is required (--root-folder or LOGSCAN_ROOT_FOLDER)")

    log_type = _pick(getattr(cli_args, "log_type", None),
                     "LOGSCAN_LOG_TYPE", yaml_data, "log_type", Config.log_type)
    search_for = parse_search_terms(_pick(getattr(cli_args, "search_for", None),
                                          "LOGSCAN_SEARCH_FOR", yaml_data, "search_for", ""))
    forwarded_from = _pick(getattr(cli_args, "forwarded_from", None),
                           "LOGSCAN_FORWARDED_FROM", yaml_data, "forwarded_from", "")

    statuses = getattr(cli_args, "status", None) or yaml_data.get("statuses") or DEFAULT_STATUSES
    accepted_statuses = tuple(str(s) for s in statuses)

    by_date = yaml_data.get("by_date", True)
    if getattr(cli_args, "no_dates", False):
        by_date = False
    strict_dates = getattr(cli_args, "strict_dates", False) or yaml_data.get("strict_dates", False)

    raw_workers = _pick(getattr(cli_args, "max_workers", None),
                        "LOGSCAN_MAX_WORKERS", yaml_data, "max_workers", None)
    max_workers = None
    if raw_workers is not None:
        try:
            max_workers = int(raw_workers)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"max_workers must be an integer, got {raw_workers!r}") from e
        if max_workers < 1:
            raise ConfigError(f"max_workers must be positive, got {max_workers}")

    output_format = getattr(cli_args, "output", None) or yaml_data.get("output", "text")
    if output_format not in OUTPUT_FORMATS:
        raise ConfigError(f"unknown output format {output_format!r}")

    encoding = str(getattr(cli_args, "encoding", None) or yaml_data.get("encoding", "utf-8"))
    try:
        codecs.lookup(encoding)
    except LookupError as e:
        raise ConfigError(f"unknown encoding {encoding!r}") from e

    return Config(
        root_folder=str(root_folder),
        log_type=str(log_type),
        search_for=search_for,
        forwarded_from=str(forwarded_from),
        accepted_statuses=accepted_statuses,
        by_date=_parse_bool(by_date),
        strict_dates=_parse_bool(strict_dates),
        max_workers=max_workers,
        encoding=encoding,
        output_format=output_format,
    )
