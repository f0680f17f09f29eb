from __future__ import annotations

import math
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml
from dotenv import dotenv_values

from .volumes import parse_volume_root


DEFAULT_DIRECTORIES = ("./temp", "./logs", "./cache")
DEFAULT_PATTERNS = (".tmp", ".log", ".cache")
DEFAULT_DAYS_OLD = 7.0
DEFAULT_CHECK_INTERVAL_SECONDS = 3600
DEFAULT_API_PORT = 9110
DEFAULT_LOG_LEVEL = "INFO"

ENV_CONFIG_PATH = "SWEEP_CONFIG_PATH"
ENV_DIRECTORIES = "SWEEP_DIRECTORIES"
ENV_PATTERNS = "SWEEP_PATTERNS"
ENV_DAYS_OLD = "SWEEP_DAYS_OLD"
ENV_DRY_RUN = "SWEEP_DRY_RUN"
ENV_CHECK_INTERVAL_SECONDS = "SWEEP_CHECK_INTERVAL_SECONDS"
ENV_API_PORT = "SWEEP_API_PORT"
ENV_LOG_LEVEL = "SWEEP_LOG_LEVEL"

_CONFIG_FILE_KEYS = {"directories", "patterns", "days_old", "dry_run"}
_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class SweepConfig:
    directories: tuple[str, ...] = DEFAULT_DIRECTORIES
    patterns: tuple[str, ...] = DEFAULT_PATTERNS
    days_old: float = DEFAULT_DAYS_OLD
    dry_run: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "directories", _validate_entries("directories", self.directories))
        for root in self.directories:
            parse_volume_root(root)
        object.__setattr__(self, "patterns", _validate_entries("patterns", self.patterns))
        object.__setattr__(self, "days_old", _parse_days_old(self.days_old))
        object.__setattr__(self, "dry_run", _parse_bool("dry_run", self.dry_run))

    def to_dict(self) -> dict[str, Any]:
        out = asdict(self)
        out["directories"] = list(self.directories)
        out["patterns"] = list(self.patterns)
        return out


@dataclass(frozen=True)
class ServiceSettings:
    check_interval_seconds: int = DEFAULT_CHECK_INTERVAL_SECONDS
    api_port: int = DEFAULT_API_PORT
    log_level: str = DEFAULT_LOG_LEVEL


def _validate_entries(name: str, values: Any) -> tuple[str, ...]:
    if isinstance(values, str) or not isinstance(values, (list, tuple)):
        raise ValueError(f"{name} must be a list of strings")
    out: list[str] = []
    for value in values:
        text = str(value).strip()
        if not text:
            raise ValueError(f"{name} must not contain blank entries")
        out.append(text)
    if not out:
        raise ValueError(f"{name} must not be empty")
    return tuple(out)


def _parse_days_old(value: Any) -> float:
    if isinstance(value, bool):
        raise ValueError("days_old must be a number")
    try:
        days = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"days_old must be a number, got '{value}'") from None
    if not math.isfinite(days):
        raise ValueError("days_old must be a finite number")
    if days < 0:
        raise ValueError("days_old must be >= 0")
    return days


def _parse_bool(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    normalized = str(value).strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ValueError(f"Invalid boolean for {name}: '{value}'")


def _split_list(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def _read_env(env: Mapping[str, str] | None) -> dict[str, str]:
    if env is not None:
        return dict(env)
    merged = {key: value for key, value in dotenv_values(".env").items() if value is not None}
    merged.update(os.environ)
    return merged


def _read_config_file(config_path: str) -> dict[str, Any]:
    path = Path(config_path)
    with path.open("r", encoding="utf-8") as handle:
        try:
            data = yaml.safe_load(handle)
        except yaml.YAMLError as exc:
            raise ValueError(f"Config file {config_path} is not valid YAML: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping")

    unknown = set(data.keys()) - _CONFIG_FILE_KEYS
    if unknown:
        raise ValueError(f"Unknown config keys in {config_path}: {sorted(map(str, unknown))}")
    return data


def load_config(config_path: str | None = None, *, env: Mapping[str, str] | None = None) -> SweepConfig:
    """Build a SweepConfig from defaults, an optional YAML file and the environment.

    Environment variables win over the file, the file wins over defaults. When
    ``env`` is omitted the process environment is used, layered over ``.env``.
    """
    values = _read_env(env)
    settings: dict[str, Any] = {}

    path = config_path or values.get(ENV_CONFIG_PATH)
    if path:
        settings.update(_read_config_file(str(path)))

    if values.get(ENV_DIRECTORIES):
        settings["directories"] = _split_list(values[ENV_DIRECTORIES])
    if values.get(ENV_PATTERNS):
        settings["patterns"] = _split_list(values[ENV_PATTERNS])
    if values.get(ENV_DAYS_OLD):
        settings["days_old"] = values[ENV_DAYS_OLD]
    if values.get(ENV_DRY_RUN) is not None:
        settings["dry_run"] = values[ENV_DRY_RUN]

    return SweepConfig(**settings)


def _parse_int(name: str, value: Any) -> int:
    try:
        return int(str(value).strip())
    except ValueError:
        raise ValueError(f"{name} must be an integer, got '{value}'") from None


def load_log_level(env: Mapping[str, str] | None = None) -> str:
    values = _read_env(env)
    return str(values.get(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL)).upper()


def load_service_settings(env: Mapping[str, str] | None = None) -> ServiceSettings:
    values = _read_env(env)
    interval = _parse_int(
        "check_interval_seconds",
        values.get(ENV_CHECK_INTERVAL_SECONDS, DEFAULT_CHECK_INTERVAL_SECONDS),
    )
    if interval <= 0:
        raise ValueError("check_interval_seconds must be greater than 0")
    return ServiceSettings(
        check_interval_seconds=interval,
        api_port=_parse_int("api_port", values.get(ENV_API_PORT, DEFAULT_API_PORT)),
        log_level=load_log_level(values),
    )
