#!/usr/bin/env python3
"""
Configuration loader for Task Graph

Loads presentation settings from a YAML or JSON file, substituting
environment variables and validating the contents before they are applied
over the built-in defaults. Also writes the effective configuration back out.
"""

import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from ..config import Config
from ..errors import TaskGraphError
from .config_validator import ConfigurationValidator

logger = logging.getLogger(__name__)

YAML_EXTENSIONS = ('.yaml', '.yml')
JSON_EXTENSIONS = ('.json',)


class ConfigError(TaskGraphError):
    """Raised when a configuration file cannot be loaded or written."""
    pass


def substitute_env_vars(value: Any) -> Any:
    """
    Recursively substitute environment variables in configuration values.

    Supports ${VAR_NAME} syntax.
    """
    if isinstance(value, str):
        # Find all ${VAR_NAME} patterns
        pattern = r'\$\{([^}]+)\}'
        matches = re.findall(pattern, value)

        for var_name in matches:
            env_value = os.getenv(var_name)
            if env_value is None:
                logger.warning(f"Environment variable {var_name} not set")
                env_value = ""

            value = value.replace(f"${{{var_name}}}", env_value)

        return value

    elif isinstance(value, dict):
        return {k: substitute_env_vars(v) for k, v in value.items()}

    elif isinstance(value, list):
        return [substitute_env_vars(item) for item in value]

    else:
        return value


def load_config(config_path: Optional[str] = None) -> Config:
    """
    Load configuration, overlaying a config file onto the defaults.

    Args:
        config_path: Path to a YAML or JSON config file; None for defaults only

    Returns:
        The effective Config
    """
    if config_path is None:
        return Config()

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            raw = f.read()
    except OSError as e:
        logger.error(f"Configuration file could not be read: {config_path}")
        raise ConfigError(f"failed to read config file: {config_path}") from e

    data = _parse_config(raw, config_path)
    if data is None:
        data = {}

    data = substitute_env_vars(data)

    validator = ConfigurationValidator()
    is_valid, issues = validator.validate_config(data)

    for issue in issues:
        if 'must be' in issue or 'Missing required' in issue:
            logger.error(f"Config validation error: {issue}")
        else:
            logger.warning(f"Config validation warning: {issue}")

    if not is_valid:
        raise ConfigError(f"invalid config file: {config_path}")

    config = Config.from_dict(data)
    logger.info(f"Configuration loaded from {config_path}")
    return config


def _parse_config(raw: str, config_path: str) -> Any:
    """Parse config text as YAML or JSON according to the file extension."""
    ext = Path(config_path).suffix.lower()

    try:
        if ext in YAML_EXTENSIONS:
            return yaml.safe_load(raw)

        if ext in JSON_EXTENSIONS:
            return json.loads(raw)

        # Unknown extension: YAML first, then JSON
        try:
            return yaml.safe_load(raw)
        except yaml.YAMLError:
            logger.debug(f"{config_path} is not YAML, trying JSON")
            return json.loads(raw)

    except (yaml.YAMLError, ValueError) as e:
        logger.error(f"Error parsing configuration {config_path}: {e}")
        raise ConfigError(f"failed to parse config file: {config_path}") from e


def export_config(config: Config, config_path: str):
    """Write config to config_path as JSON (.json) or YAML (anything else)."""
    data: Dict[str, Any] = config.to_dict()

    if Path(config_path).suffix.lower() in JSON_EXTENSIONS:
        text = json.dumps(data, indent=2) + "\n"
    else:
        text = yaml.safe_dump(data, default_flow_style=False, sort_keys=False)

    try:
        with open(config_path, 'w', encoding='utf-8') as f:
            f.write(text)
    except OSError as e:
        raise ConfigError(f"failed to write config file: {config_path}") from e

    logger.info(f"Configuration exported to {config_path}")
