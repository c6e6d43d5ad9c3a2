"""Configuration module — frozen dataclass loaded from env vars and an optional YAML file."""

import logging
import os
from dataclasses import dataclass, fields

import yaml

logger = logging.getLogger(__name__)


def _parse_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("true", "1", "yes")


@dataclass(frozen=True)
class Config:
    max_record_size: int = 1024 * 1024  # 1 MB
    read_buffer_size: int = 1024 * 1024  # 1 MB
    write_buffer_size: int = 64 * 1024  # 64 KB
    exact_reads: bool = True
    log_level: str = "INFO"

    def __post_init__(self):
        for name in ("max_record_size", "read_buffer_size", "write_buffer_size"):
            value = getattr(self, name)
            if value <= 0:
                raise ValueError(f"{name} must be positive, got {value}")


ENV_VARS = {
    "max_record_size": "RECIO_MAX_RECORD_SIZE",
    "read_buffer_size": "RECIO_READ_BUFFER_SIZE",
    "write_buffer_size": "RECIO_WRITE_BUFFER_SIZE",
    "exact_reads": "RECIO_EXACT_READS",
    "log_level": "RECIO_LOG_LEVEL",
}


def load_yaml_config(path: str | None) -> dict:
    """Load settings from a YAML file. Returns empty dict if no path or file missing."""
    if not path:
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        logger.info("Loaded YAML config from %s", path)
    except FileNotFoundError:
        logger.warning("Config file %s not found, using defaults", path)
        return {}
    known = {f.name for f in fields(Config)}
    unknown = sorted(set(data) - known)
    if unknown:
        logger.warning("Ignoring unknown config keys: %s", ", ".join(unknown))
    return {k: v for k, v in data.items() if k in known}


def _coerce(name: str, value):
    if name == "exact_reads":
        return _parse_bool(value)
    if name == "log_level":
        return str(value).upper()
    return int(value)


def load_config(path: str | None = None) -> Config:
    """Build Config from defaults, then YAML (RECIO_CONFIG_FILE or path), then env vars."""
    values = load_yaml_config(path or os.environ.get("RECIO_CONFIG_FILE"))
    for name, env_var in ENV_VARS.items():
        raw = os.environ.get(env_var)
        if raw is not None:
            values[name] = raw
    return Config(**{name: _coerce(name, value) for name, value in values.items()})
