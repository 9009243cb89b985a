from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml

from .errors import ConfigError
from .models import LogicalType

DEFAULT_DATE_PATTERN = "yyyy-MM-dd"
DEFAULT_TIME_PATTERN = "HH:mm:ss"
DEFAULT_TIMESTAMP_PATTERN = "yyyy-MM-dd HH:mm:ss.SSS"


@dataclass
class ConnectionConfig:
    host: str
    http_path: str
    catalog: str


@dataclass
class OAuthConfig:
    client_id: str
    client_secret: str
    token_url: str
    scope: str | None = None


@dataclass
class PatternConfig:
    date: str = DEFAULT_DATE_PATTERN
    time: str = DEFAULT_TIME_PATTERN
    timestamp: str = DEFAULT_TIMESTAMP_PATTERN

    def by_logical_type(self) -> dict[LogicalType, str]:
        return {
            LogicalType.LOGICAL_DATE: self.date,
            LogicalType.LOGICAL_TIME: self.time,
            LogicalType.LOGICAL_TIMESTAMP: self.timestamp,
        }


@dataclass
class AnnotationConfig:
    directory: str | None = None
    enabled: bool = True


@dataclass
class LimitsConfig:
    max_concurrent_fetches: int = 5


@dataclass
class ObservabilityConfig:
    log_level: str = "info"


@dataclass
class AppConfig:
    connection: ConnectionConfig
    oauth: OAuthConfig
    patterns: PatternConfig
    annotations: AnnotationConfig
    limits: LimitsConfig
    observability: ObservabilityConfig


def _resolve_env(value: Any, env: Mapping[str, str]) -> Any:
    if isinstance(value, str):
        if value.startswith("${") and value.endswith("}"):
            key = value[2:-1]
            if key not in env:
                raise ConfigError(f"Environment variable {key} is required but not set")
            return env[key]
        return value
    if isinstance(value, list):
        return [_resolve_env(v, env) for v in value]
    if isinstance(value, dict):
        return {k: _resolve_env(v, env) for k, v in value.items()}
    return value


def _required(section: Mapping[str, Any], key: str, section_name: str) -> str:
    value = section.get(key)
    if not value:
        raise ConfigError(f"{section_name}.{key} is required")
    return str(value)


_TRUE_VALUES = {"true", "yes", "on", "1"}
_FALSE_VALUES = {"false", "no", "off", "0"}


def _flag(value: Any, field_name: str) -> bool:
    if isinstance(value, bool):
        return value
    normalized = str(value).strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ConfigError(f"{field_name} must be a boolean, got {value!r}")


def _pattern(raw: Mapping[str, Any], key: str, default: str) -> str:
    value = raw.get(key, default)
    if not isinstance(value, str) or not value.strip():
        raise ConfigError(f"patterns.{key} must be a non-empty string")
    return value


def load_config(path: str | Path, env: Mapping[str, str] | None = None) -> AppConfig:
    env = env if env is not None else os.environ
    raw = yaml.safe_load(Path(path).read_text()) or {}
    resolved = _resolve_env(raw, env)

    try:
        connection_raw = resolved["connection"]
        oauth_raw = resolved["auth"]["oauth"]
    except (KeyError, TypeError) as exc:
        raise ConfigError(f"Missing config section: {exc.args[0]}") from exc
    patterns_raw = resolved.get("patterns") or {}
    annotations_raw = resolved.get("annotations") or {}
    limits_raw = resolved.get("limits") or {}
    observability_raw = resolved.get("observability") or {}

    connection = ConnectionConfig(
        host=_required(connection_raw, "host", "connection"),
        http_path=_required(connection_raw, "http_path", "connection"),
        catalog=_required(connection_raw, "catalog", "connection"),
    )

    oauth = OAuthConfig(
        client_id=_required(oauth_raw, "client_id", "auth.oauth"),
        client_secret=_required(oauth_raw, "client_secret", "auth.oauth"),
        token_url=_required(oauth_raw, "token_url", "auth.oauth"),
        scope=oauth_raw.get("scope"),
    )

    patterns = PatternConfig(
        date=_pattern(patterns_raw, "date", DEFAULT_DATE_PATTERN),
        time=_pattern(patterns_raw, "time", DEFAULT_TIME_PATTERN),
        timestamp=_pattern(patterns_raw, "timestamp", DEFAULT_TIMESTAMP_PATTERN),
    )

    directory = annotations_raw.get("directory")
    annotations = AnnotationConfig(
        directory=str(directory) if directory else None,
        enabled=_flag(annotations_raw.get("enabled", True), "annotations.enabled"),
    )

    max_fetches = limits_raw.get("max_concurrent_fetches", 5)
    if not isinstance(max_fetches, int) or max_fetches <= 0:
        raise ConfigError("max_concurrent_fetches must be greater than 0")
    limits = LimitsConfig(max_concurrent_fetches=max_fetches)

    observability = ObservabilityConfig(
        log_level=str(observability_raw.get("log_level", "info")),
    )

    return AppConfig(
        connection=connection,
        oauth=oauth,
        patterns=patterns,
        annotations=annotations,
        limits=limits,
        observability=observability,
    )
