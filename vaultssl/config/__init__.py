"""Configuration loading."""

from vaultssl.config.exceptions import (
    ConfigError,
    ConfigNotFoundError,
    ConfigParseError,
    ConfigValidationError,
)
from vaultssl.config.loader import ConfigLoader
from vaultssl.config.settings import VaultSettings, load_bundle_specs

__all__ = [
    "ConfigError",
    "ConfigNotFoundError",
    "ConfigParseError",
    "ConfigValidationError",
    "ConfigLoader",
    "VaultSettings",
    "load_bundle_specs",
]
