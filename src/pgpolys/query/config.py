"""
Loader settings.

Reads YAML from the PGPOLYS_CONFIG env var (default config/pgpolys.yml).
A missing file means built-in defaults.

Supports ${ENV_VAR} interpolation in YAML string values so that
deployment-specific values can be injected via environment variables.
"""

import logging
import os
import re

import yaml
from pydantic import BaseModel

logger = logging.getLogger(__name__)

_settings = None

_ENV_RE = re.compile(r"\$\{(\w+)\}")


class LoaderSettings(BaseModel):
    """Defaults applied when the caller leaves a parameter unset."""

    geometry_column: str = "geom"
    row_id_expression: str = "row_number() over()"
    crs_authority: str = "EPSG"


def _resolve_env_vars(value):
    """Replace ${VAR} placeholders with environment variable values."""
    if isinstance(value, str):
        return _ENV_RE.sub(
            lambda m: os.environ.get(m.group(1), m.group(0)), value
        )
    return value


def load_settings(config_path: str) -> LoaderSettings:
    """Parse a settings file. The ``loader`` key holds the values."""
    with open(config_path) as f:
        config = yaml.safe_load(f) or {}
    values = {k: _resolve_env_vars(v) for k, v in (config.get("loader") or {}).items()}
    return LoaderSettings(**values)


def get_settings() -> LoaderSettings:
    """Singleton settings instance."""
    global _settings
    if _settings is None:
        config_path = os.environ.get("PGPOLYS_CONFIG", "config/pgpolys.yml")
        if os.path.exists(config_path):
            _settings = load_settings(config_path)
        else:
            logger.debug("No settings file at %s, using defaults", config_path)
            _settings = LoaderSettings()
    return _settings


def set_settings(settings: LoaderSettings):
    """Override the settings instance (used for testing)."""
    global _settings
    _settings = settings


def reset_settings():
    """Reset the singleton settings (used for testing)."""
    global _settings
    _settings = None
