"""
Configuration persistence between sessions.

Stores the six control parameters as a flat YAML record. Loading never fails:
a missing or unreadable file yields the defaults and every broken field in a
readable file falls back to its own default.
"""
import logging
from pathlib import Path
from typing import Union

import yaml

from ..signals.config import StrategyConfig, DEFAULT_CONFIG, config_from_dict


logger = logging.getLogger(__name__)


class ConfigStore:
    """
    Loads and saves the strategy configuration.

    Responsibilities:
    - Read the stored record (YAML, or JSON which parses as YAML)
    - Repair missing or invalid fields per field
    - Write the configuration returned by the latest cycle
    """

    def __init__(self, config_file: Union[str, Path]):
        """
        Initialize config store.

        Args:
            config_file: Path to the YAML file holding the configuration
        """
        self.config_file = Path(config_file)

    def load(self) -> StrategyConfig:
        """Load the stored configuration, falling back to defaults."""
        if not self.config_file.exists():
            logger.info(f"Config file {self.config_file} does not exist, using defaults")
            return DEFAULT_CONFIG

        try:
            with open(self.config_file, 'r') as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Failed to load config from {self.config_file}: {e}")
            return DEFAULT_CONFIG

        if not isinstance(data, dict):
            logger.error(f"Config file {self.config_file} does not hold a mapping, using defaults")
            return DEFAULT_CONFIG

        config = config_from_dict(data)
        logger.info(f"Loaded config from {self.config_file}: {config}")
        return config

    def save(self, config: StrategyConfig) -> None:
        """Write the configuration as a flat record."""
        self.config_file.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_file, 'w') as f:
            yaml.safe_dump(config.to_dict(), f, default_flow_style=False, sort_keys=False)
        logger.debug(f"Saved config to {self.config_file}")
