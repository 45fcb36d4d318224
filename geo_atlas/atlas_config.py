"""
atlas_config.py - Application configuration loaded from YAML.

Defaults ship in atlas_config.yaml beside this module; a deployment points
at its own file with AtlasConfig.from_yaml(path).

Module: geo_atlas.atlas_config
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from datetime import date
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent / "atlas_config.yaml"


@dataclass
class AtlasConfig:
    """
    Settings for the geocoder, uploads, narrative building and logging.

    Attributes:
        geocoder_user_agent (str): User agent sent to the geocoding service.
        geocoder_domain (str): Geocoding service host.
        geocoder_timeout (float): Geocoding request timeout in seconds.
        geocoder_sleep_interval (float): Minimum seconds between geocoding requests.
        max_upload_bytes (int): Largest accepted upload.
        narrative_default_date (str): ISO date used to sort events without a usable date.
        log_level (str): Root log level.
        log_file (Optional[str]): Optional log file path.
    """
    geocoder_user_agent: str = 'geo_atlas'
    geocoder_domain: str = 'nominatim.openstreetmap.org'
    geocoder_timeout: float = 10
    geocoder_sleep_interval: float = 1
    max_upload_bytes: int = 50 * 1024 * 1024
    narrative_default_date: str = '1900-01-01'
    log_level: str = 'INFO'
    log_file: Optional[str] = None

    def __post_init__(self):
        # fail on load rather than on the first story request
        self.default_sort_date

    @property
    def default_sort_date(self) -> date:
        try:
            return date.fromisoformat(str(self.narrative_default_date))
        except ValueError as e:
            raise ConfigError(f"narrative_default_date is not an ISO date: {self.narrative_default_date}") from e

    @classmethod
    def from_dict(cls, settings: Dict[str, Any]) -> 'AtlasConfig':
        """
        Build a config from a flat settings dict. Unknown keys are ignored with a warning.
        """
        known = {f.name for f in fields(cls)}
        values = {}
        for key, value in (settings or {}).items():
            if key in known:
                values[key] = value
            else:
                logger.warning(f"Ignoring unknown config key: {key}")
        return cls(**values)

    @classmethod
    def from_yaml(cls, path: Optional[Path] = None) -> 'AtlasConfig':
        """
        Load a config from a YAML file (the shipped defaults when path is None).

        Raises:
            ConfigError: If the file cannot be read or is not a YAML mapping.
        """
        yaml_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
        try:
            with open(yaml_path, 'r', encoding='utf-8') as f:
                settings = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Failed to load config from {yaml_path}: {e}") from e
        if not isinstance(settings, dict):
            raise ConfigError(f"Config file {yaml_path} must contain a mapping")
        logger.debug(f"Loaded config from {yaml_path}")
        return cls.from_dict(settings)
