"""Configuration loading for codeanalysis (.codeanalysis.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

CONFIG_FILENAME = ".codeanalysis.yml"

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8080
DEFAULT_WORKERS = 4
DEFAULT_MAX_BODY_SIZE = 4 * 1024 * 1024


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass(frozen=True)
class ServerConfig:
    """Process-lifetime settings for the HTTP service."""

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    workers: int = DEFAULT_WORKERS
    max_body_size: int = DEFAULT_MAX_BODY_SIZE

    def with_overrides(
        self,
        *,
        host: Optional[str] = None,
        port: Optional[int] = None,
        workers: Optional[int] = None,
    ) -> "ServerConfig":
        """Return a copy where every non-None argument replaces the stored value."""
        changes: Dict[str, Any] = {}
        if host is not None:
            changes["host"] = host
        if port is not None:
            changes["port"] = port
        if workers is not None:
            changes["workers"] = workers
        return replace(self, **changes) if changes else self


@dataclass(frozen=True)
class LoggingConfig:
    """Log verbosity and optional file sink."""

    verbose: bool = False
    file: Optional[Path] = None


@dataclass(frozen=True)
class CodeAnalysisConfig:
    """Represents the settings defined in .codeanalysis.yml."""

    root: Path
    server: ServerConfig = field(default_factory=ServerConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(config_path: Path) -> CodeAnalysisConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return CodeAnalysisConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    server_data = _as_dict(data.get("server"))
    defaults = ServerConfig()
    server = ServerConfig(
        host=_as_str(server_data.get("host")) or defaults.host,
        port=_as_positive_int(server_data.get("port"), "server.port") or defaults.port,
        workers=_as_positive_int(server_data.get("workers"), "server.workers")
        or defaults.workers,
        max_body_size=_as_positive_int(
            server_data.get("max_body_size"), "server.max_body_size"
        )
        or defaults.max_body_size,
    )

    logging_data = _as_dict(data.get("logging"))
    log_file = _as_str(logging_data.get("file"))
    logging_config = LoggingConfig(
        verbose=_as_bool(logging_data.get("verbose")) or False,
        file=root / log_file if log_file else None,
    )

    return CodeAnalysisConfig(root=root, server=server, logging=logging_config)


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    return str(value) if isinstance(value, (str, int, float)) else None


def _as_positive_int(value: Any, key: str) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, bool):
        raise ConfigError(f"{key} must be a positive integer")
    if isinstance(value, str):
        try:
            value = int(value)
        except ValueError as exc:
            raise ConfigError(f"{key} must be a positive integer") from exc
    if not isinstance(value, int) or value <= 0:
        raise ConfigError(f"{key} must be a positive integer")
    return value


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None
