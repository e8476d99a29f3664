"""Config loader utilities."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .config_settings import Config
from .error_codes import ErrorCode
from .exceptions import ConfigurationError
from .utils.logging import get_logger

CONFIG_ENV_VAR = "VOCAB_NOTES_CONFIG"


def _candidate_paths(config_path: Path | None) -> list[Path]:
    if config_path:
        return [config_path.expanduser()]
    candidates: list[Path] = []
    env_path = os.getenv(CONFIG_ENV_VAR)
    if env_path:
        candidates.append(Path(env_path).expanduser())
    candidates.append(Path.cwd() / "config.yaml")
    return candidates


def load_config(config_path: Path | None = None, *, strict_config: bool = True) -> Config:
    """Load configuration from config.yaml, environment and .env.

    Args:
        config_path: Explicit config file; must exist when given
        strict_config: Raise on validation problems instead of logging a warning
    """
    logger = get_logger(__name__)

    candidates = _candidate_paths(config_path)
    resolved: Path | None = next((p for p in candidates if p.exists()), None)

    if config_path and resolved is None:
        msg = f"Config file not found: {config_path}"
        raise ConfigurationError(
            msg,
            suggestion="Check the --config path",
            error_code=ErrorCode.CFG_INVALID.value,
        )
    if resolved is None:
        logger.debug("config_file_not_found", searched_paths=[str(p) for p in candidates])

    yaml_data: dict[str, Any] = {}
    if resolved:
        try:
            with open(resolved, encoding="utf-8") as f:
                yaml_data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.error(
                "config_yaml_load_error",
                config_path=str(resolved),
                error=str(e),
                error_type=type(e).__name__,
            )
            msg = f"Failed to parse config file: {resolved}"
            raise ConfigurationError(
                msg,
                suggestion=f"Check YAML syntax (indentation, colons, quotes). Original error: {e}",
                error_code=ErrorCode.CFG_INVALID.value,
            ) from e
        if not isinstance(yaml_data, dict):
            msg = f"Config file must contain a mapping: {resolved}"
            raise ConfigurationError(msg, error_code=ErrorCode.CFG_INVALID.value)
        logger.debug("config_yaml_loaded", config_path=str(resolved), keys_count=len(yaml_data))

    try:
        config = Config(**yaml_data)
    except ValidationError as e:
        logger.error("config_validation_error", error=str(e), config_path=str(resolved))
        msg = "Invalid configuration"
        raise ConfigurationError(
            msg,
            suggestion=str(e),
            error_code=ErrorCode.CFG_INVALID.value,
        ) from e

    try:
        config.validate_config()
    except ConfigurationError as e:
        if strict_config:
            logger.error("config_validation_failed", error=e.message)
            raise
        logger.warning("config_warning", error=e.message)

    logger.debug("config_loaded", vault_path=str(config.vault_path))
    return config

