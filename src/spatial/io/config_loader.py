"""
YAML configuration loader with validation.
"""

from __future__ import annotations
import logging
from pathlib import Path
from typing import Any, Dict
import yaml

from ..config.schemas import SpatialConfig

logger = logging.getLogger(__name__)


class ConfigLoader:
    """Load and save SpatialConfig documents as YAML."""

    @staticmethod
    def load(filepath: str | Path) -> SpatialConfig:
        """
        Load and validate a configuration file.

        Args:
            filepath: Path to YAML file

        Returns:
            Validated config (pydantic.ValidationError on bad content)
        """
        filepath = Path(filepath)

        if not filepath.exists():
            raise FileNotFoundError(f"Config file not found: {filepath}")

        with open(filepath, 'r') as f:
            raw_config = yaml.safe_load(f) or {}

        config = ConfigLoader.from_dict(raw_config)
        logger.info("Loaded config from %s", filepath)
        return config

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> SpatialConfig:
        """Validate a plain dict into a SpatialConfig."""
        return SpatialConfig(**data)

    @staticmethod
    def save(config: SpatialConfig, filepath: str | Path) -> Path:
        """
        Write config to YAML.

        Args:
            config: Config to write
            filepath: Destination path (parent directories are created)

        Returns:
            Path written
        """
        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        with open(filepath, 'w') as f:
            yaml.safe_dump(config.model_dump(), f, default_flow_style=False, sort_keys=False)

        logger.info("Saved config to %s", filepath)
        return filepath


def load_config(filepath: str | Path) -> SpatialConfig:
    """Shortcut for ConfigLoader.load()."""
    return ConfigLoader.load(filepath)
