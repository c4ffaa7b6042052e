"""
Configuration loader for YAML-based game configurations.
"""

import logging
import os
import yaml
from dataclasses import replace
from pathlib import Path
from typing import Optional

from .game_config import GameConfig, default_config

logger = logging.getLogger(__name__)

# Environment variables set by the confidential execution host
ENV_OVERRIDES = {
    "IEXEC_IN": "iexec_in",
    "IEXEC_OUT": "iexec_out",
}


def load_config_from_yaml(config_path: str) -> GameConfig:
    """
    Load game configuration from a YAML file.

    Args:
        config_path: Path to the YAML configuration file

    Returns:
        GameConfig instance with values from YAML file

    Raises:
        FileNotFoundError: If the config file doesn't exist
        yaml.YAMLError: If the YAML file is invalid
    """
    config_file = Path(config_path)

    if not config_file.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_file, 'r') as f:
        config_dict = yaml.safe_load(f)

    if config_dict is None:
        return replace(default_config)

    # Create config from dict, using defaults for missing values
    config = GameConfig()

    for key, value in config_dict.items():
        if hasattr(config, key):
            setattr(config, key, value)
        else:
            # Warn about unknown keys but don't fail
            logger.warning("Unknown config key '%s' in YAML file", key)

    return config


def apply_env_overrides(config: GameConfig) -> GameConfig:
    """Return a copy of config with host-provided environment variables applied."""
    overrides = {
        field_name: os.environ[env_name]
        for env_name, field_name in ENV_OVERRIDES.items()
        if os.environ.get(env_name)
    }
    return replace(config, **overrides)


def load_config(config_path: Optional[str] = None) -> GameConfig:
    """
    Load configuration from YAML file or return default.

    Args:
        config_path: Optional path to YAML config file. If None, returns a copy of the default config.

    Returns:
        GameConfig instance with environment overrides applied
    """
    if config_path is None:
        config = replace(default_config)
    else:
        config = load_config_from_yaml(config_path)

    return apply_env_overrides(config)
