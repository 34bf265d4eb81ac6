"""Configuration utilities for the conformance server.

This module loads application configuration with the following rules:
- Primary source: `conformance_config.json` at the project root.
- Overrides: environment variables, then optional text files under `config/`.
- Validation: Pydantic models enforce required fields and value constraints.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError as PydanticValidationError, field_validator


CONFIG_DIR = Path("config")
ROOT_CONFIG = Path("conformance_config.json")
logger = logging.getLogger(__name__)

SERVICE_MODES = ("conformance", "memory")


def _read_config_file(rel_path: str) -> Optional[str]:
    path = CONFIG_DIR / rel_path
    try:
        if path.exists():
            return path.read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError) as e:
        # Recoverable: log and ignore unreadable override
        logger.warning("Failed to read override %s: %s", path, e)
        return None
    return None


def _env(key: str, default: Optional[str] = None) -> Optional[str]:
    return os.environ.get(key, default)


class ServerConfig(BaseModel):
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=4117, gt=0, lt=65536)
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def log_level_must_be_known(cls, v: str) -> str:
        level = str(v).strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError("server.log_level must be a standard logging level name")
        return level


class ServiceConfig(BaseModel):
    mode: str
    tests_path: Optional[str] = None
    max_batch_size: int = Field(default=10, gt=0)

    @field_validator("mode")
    @classmethod
    def mode_must_be_allowed(cls, v: str) -> str:
        if v not in SERVICE_MODES:
            raise ValueError(f"service.mode must be one of {sorted(SERVICE_MODES)}")
        return v


class AppConfig(BaseModel):
    server: ServerConfig
    service: ServiceConfig
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])


def _read_json_file(path: Path) -> dict:
    try:
        if path.exists():
            return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:  # pragma: no cover - defensive
        logger.error("Failed to read JSON config %s: %s", path, e)
    return {}


def load_config() -> AppConfig:
    """Load configuration with validation.

    Precedence (highest first):
    1) Environment variables
    2) Text files in `config/` (optional)
    3) conformance_config.json at project root (primary base)
    4) Safe defaults for development
    """

    base = _read_json_file(ROOT_CONFIG)

    def _base(path: str, default: Optional[str] = None) -> Optional[str]:
        cur: object = base
        for key in path.split("."):
            if not isinstance(cur, dict) or key not in cur:
                return default
            cur = cur[key]
        if isinstance(cur, list):
            return ",".join(str(item) for item in cur)
        return str(cur) if cur is not None else default

    # Server
    host = _env("CONFORMANCE_HOST") or _read_config_file("server.host") or _base("server.host", "127.0.0.1")
    port_text = _env("CONFORMANCE_PORT") or _read_config_file("server.port") or _base("server.port", "4117")
    log_level = _env("CONFORMANCE_LOG_LEVEL") or _read_config_file("server.log_level") or _base("server.log_level", "INFO")

    # Service
    tests_path = _env("CONFORMANCE_TESTS_PATH") or _read_config_file("service.tests_path") or _base("service.tests_path")
    default_mode = "conformance" if tests_path else "memory"
    mode = (_env("CONFORMANCE_SERVICE_MODE") or _read_config_file("service.mode") or _base("service.mode", default_mode)).strip()
    max_batch_text = _env("CONFORMANCE_MAX_BATCH_SIZE") or _read_config_file("service.max_batch_size") or _base("service.max_batch_size", "10")

    # CORS
    origins_text = _env("CONFORMANCE_CORS_ORIGINS") or _read_config_file("cors.origins") or _base("cors_origins", "*")
    origins = [o.strip() for o in str(origins_text).split(",") if o.strip()]

    try:
        cfg = AppConfig(
            server=ServerConfig(host=host, port=int(str(port_text).strip()), log_level=log_level),
            service=ServiceConfig(
                mode=mode,
                tests_path=tests_path,
                max_batch_size=int(str(max_batch_text).strip()),
            ),
            cors_origins=origins or ["*"],
        )
        return cfg
    except PydanticValidationError as e:
        logger.error("Invalid application configuration: %s", e)
        raise


__all__ = [
    "AppConfig",
    "ServerConfig",
    "ServiceConfig",
    "SERVICE_MODES",
    "load_config",
]
