# SPDX-License-Identifier: MIT
"""
Service configuration loading.
"""
from __future__ import annotations

import copy
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from slc.core.exceptions import ConfigError

logger = logging.getLogger(__name__)

CONFIG_NAMES = (".slc.yml", ".slc.yaml")
STORE_BACKENDS = ("memory", "postgres")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def get_default_config() -> Dict[str, Any]:
    """
    Get the default service configuration.

    Returns:
        Dictionary with default settings
    """
    return {
        "version": 1,
        "server": {"host": "0.0.0.0", "port": 8080},
        "store": {
            "backend": "memory",
            "dsn": "",
            "min_size": 1,
            "max_size": 4,
            "connect_timeout": 5,
        },
        "identity": {"header": "X-User-ID", "cookie": "slc_uid"},
        "cors": {"allow_origins": ["*"]},
        "logging": {"level": "INFO"},
    }


def load_config(
    config_path: Optional[str] = None,
    search_dir: str = ".",
    environ: Optional[Dict[str, str]] = None,
) -> Dict[str, Any]:
    """
    Load configuration following the search order.

    1. Explicit *config_path* (must exist)
    2. ``.slc.yml`` / ``.slc.yaml`` in *search_dir*
    3. Built-in defaults

    Environment overrides are applied on top of whichever was found.

    Args:
        config_path: Explicit config path from the --config CLI flag
        search_dir: Directory searched for a default config file
        environ: Environment mapping, defaults to ``os.environ``

    Returns:
        Validated configuration dictionary

    Raises:
        ConfigError: If the file is missing, malformed or has invalid sections
    """
    environ = os.environ if environ is None else environ

    if config_path:
        path = Path(config_path).resolve()
        if not path.exists():
            raise ConfigError(
                f"Specified config file not found: {path}", config_path=str(path)
            )
        config = _load_yaml_config(path)
        logger.info("Loaded config: %s", path)
    else:
        config = None
        for name in CONFIG_NAMES:
            candidate = Path(search_dir).resolve() / name
            if candidate.exists():
                config = _load_yaml_config(candidate)
                logger.info("Loaded config: %s", candidate)
                break
        if config is None:
            logger.debug("Using default config")
            config = get_default_config()

    config = apply_env_overrides(config, environ)
    validate_config(config)
    return config


def _load_yaml_config(path: Path) -> Dict[str, Any]:
    """Load a YAML file and merge it over the defaults."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse config file: {e}", config_path=str(path))
    except OSError as e:
        raise ConfigError(f"Failed to read config file: {e}", config_path=str(path))

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError("Config must be a mapping", config_path=str(path))

    try:
        return _merge_defaults(raw)
    except ConfigError as e:
        e.config_path = str(path)
        raise


def _merge_defaults(raw: Dict[str, Any]) -> Dict[str, Any]:
    config = get_default_config()
    for key, value in raw.items():
        if key in config and isinstance(config[key], dict):
            if not isinstance(value, dict):
                raise ConfigError(f"{key} section must be a mapping", section=key)
            config[key].update(value)
        else:
            config[key] = value
    return config


def apply_env_overrides(config: Dict[str, Any], environ: Dict[str, str]) -> Dict[str, Any]:
    """Apply PORT, DATABASE_URL, USER_ID_HEADER, ANON_COOKIE_NAME and SLC_LOG_LEVEL."""
    config = copy.deepcopy(config)

    if environ.get("PORT"):
        try:
            config["server"]["port"] = int(environ["PORT"])
        except ValueError:
            raise ConfigError(f"PORT must be an integer: {environ['PORT']!r}", section="server")

    if environ.get("DATABASE_URL"):
        config["store"]["dsn"] = environ["DATABASE_URL"]
        config["store"]["backend"] = "postgres"

    if environ.get("USER_ID_HEADER"):
        config["identity"]["header"] = environ["USER_ID_HEADER"]
    if environ.get("ANON_COOKIE_NAME"):
        config["identity"]["cookie"] = environ["ANON_COOKIE_NAME"]
    if environ.get("SLC_LOG_LEVEL"):
        config["logging"]["level"] = environ["SLC_LOG_LEVEL"].upper()

    return config


def validate_config(config: Dict[str, Any]) -> None:
    """Validate configuration structure."""
    version = config.get("version")
    if not isinstance(version, int) or version != 1:
        raise ConfigError("Config version must be 1", section="version")

    server = config["server"]
    port = server.get("port")
    if not isinstance(port, int) or not 0 < port < 65536:
        raise ConfigError(f"invalid port: {port!r}", section="server")

    store = config["store"]
    if store.get("backend") not in STORE_BACKENDS:
        raise ConfigError(
            f"store backend must be one of: {'|'.join(STORE_BACKENDS)}", section="store"
        )
    if store["backend"] == "postgres" and not store.get("dsn"):
        raise ConfigError("postgres backend requires a dsn", section="store")
    for key in ("min_size", "max_size", "connect_timeout"):
        if not isinstance(store.get(key), int) or store[key] < 1:
            raise ConfigError(f"store.{key} must be a positive integer", section="store")
    if store["min_size"] > store["max_size"]:
        raise ConfigError("store.min_size exceeds store.max_size", section="store")

    identity = config["identity"]
    for key in ("header", "cookie"):
        if not isinstance(identity.get(key), str) or not identity[key].strip():
            raise ConfigError(f"identity.{key} must be a non-empty string", section="identity")

    origins = config["cors"].get("allow_origins")
    if not isinstance(origins, list) or not all(isinstance(o, str) for o in origins):
        raise ConfigError("cors.allow_origins must be a list of strings", section="cors")

    level = str(config["logging"].get("level", "")).upper()
    if level not in LOG_LEVELS:
        raise ConfigError(f"unknown log level: {level!r}", section="logging")
