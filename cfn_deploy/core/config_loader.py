"""Project configuration file loading"""

import logging
import os
from pathlib import Path
from typing import Dict, Optional, Any, Union

import yaml

from ..api.exceptions import ConfigError
from ..constants import CONFIG_DEPLOY_SECTION, PROJECT_CONFIG_FILE

logger = logging.getLogger(__name__)

# Keys accepted in the deploy section, mapped to deploy command option names
DEPLOY_OPTION_KEYS = {
    "stackname": "stackname",
    "stack_name": "stackname",
    "main": "main_template",
    "main_template": "main_template",
    "region": "region",
    "bucket": "bucket",
    "bucketfolder": "bucketfolder",
    "bucket_folder": "bucketfolder",
    "params": "params",
    "parameters": "params",
    "tags": "tags",
    "events": "events",
    "timeout": "timeout",
}


def find_config_file(start: Optional[Path] = None) -> Optional[Path]:
    """Look for the project config file in a directory

    Args:
        start: Directory to look in (defaults to the working directory)

    Returns:
        Path to the config file or None
    """
    candidate = (start or Path.cwd()) / PROJECT_CONFIG_FILE
    return candidate if candidate.is_file() else None


def load_config(config_path: Union[str, Path]) -> Dict[str, Any]:
    """Load a YAML config file, expanding environment variables

    Args:
        config_path: Path to the config file

    Returns:
        Parsed configuration mapping

    Raises:
        ConfigError: If the file cannot be read or is not a mapping
    """
    config_path = Path(config_path)

    try:
        with open(config_path, 'r') as f:
            content = f.read()
    except OSError as e:
        raise ConfigError(f"Unable to read configuration file {config_path}: {e}")

    # Simple environment variable expansion
    content = os.path.expandvars(content)

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}")

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration file {config_path} must contain a mapping")

    logger.debug(f"Loaded configuration from {config_path}")
    return data


def _format_mapping(value: Any, key: str) -> str:
    """Render a params/tags mapping back into key=value form"""
    if isinstance(value, dict):
        return ",".join(f"{k}={v}" for k, v in value.items())
    if isinstance(value, str):
        return value
    raise ConfigError(f"'{key}' must be a mapping or a key=value string")


def deploy_defaults(config: Dict[str, Any]) -> Dict[str, Any]:
    """Translate the deploy section into deploy command defaults

    Args:
        config: Parsed configuration

    Returns:
        Mapping suitable for a click default_map
    """
    section = config.get(CONFIG_DEPLOY_SECTION) or {}
    if not isinstance(section, dict):
        raise ConfigError(f"'{CONFIG_DEPLOY_SECTION}' section must be a mapping")

    defaults: Dict[str, Any] = {}
    for key, value in section.items():
        option = DEPLOY_OPTION_KEYS.get(key)
        if option is None:
            raise ConfigError(f"Unknown deploy setting: {key}")

        if option in ("params", "tags"):
            value = _format_mapping(value, key)

        defaults[option] = value

    return defaults
