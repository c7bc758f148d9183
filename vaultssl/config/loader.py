"""Configuration loader - loads and merges config files."""

import logging
import os
from pathlib import Path
from typing import Optional

import yaml

from vaultssl.config.exceptions import ConfigNotFoundError, ConfigParseError
from vaultssl.config.merger import deep_merge
from vaultssl.secrets import SecretResolver

logger = logging.getLogger(__name__)

CONFIG_DIR_ENV = "VAULT_SSL_CONFIG_DIR"
BASE_CONFIG = "application.yaml"


def default_config_dir() -> Path:
    """$VAULT_SSL_CONFIG_DIR, or ./config."""
    return Path(os.environ.get(CONFIG_DIR_ENV, Path.cwd() / "config"))


class ConfigLoader:
    """
    Loads and merges configuration from multiple sources.

    Load order (later wins):
        1. application.yaml (vault connection and bundle definitions)
        2. environments/{env}.yaml (optional environment overrides)
        3. Resolve ${secret:KEY} patterns from environment variables
           (named env_prefix + KEY)

    Bundle slot values such as "vault:secret/data/ssl/svc" are not touched
    here; the bundle engine resolves them.

    Usage:
        loader = ConfigLoader()
        config = loader.load(environment="prod")
    """

    def __init__(
        self,
        config_dir: Optional[Path] = None,
        env_prefix: str = "",
    ):
        self.config_dir = Path(config_dir) if config_dir else default_config_dir()
        self.secret_resolver = SecretResolver(env_prefix=env_prefix)

    def _load_yaml(self, path: Path) -> dict:
        """Load and parse a YAML file."""
        if not path.exists():
            raise ConfigNotFoundError(f"Config file not found: {path}")

        try:
            with open(path) as f:
                content = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigParseError(f"Invalid YAML in {path}: {e}")

        if not isinstance(content, dict):
            raise ConfigParseError(f"Top level of {path} must be a mapping")

        logger.debug(f"Loaded config: {path}")
        return content

    def _load_if_exists(self, path: Path) -> dict:
        """Load YAML file if it exists, otherwise return empty dict."""
        if path.exists():
            return self._load_yaml(path)
        return {}

    def load(self, environment: Optional[str] = None) -> dict:
        """
        Load complete configuration.

        Args:
            environment: Optional environment (e.g., "prod", "staging")

        Returns:
            Merged and resolved configuration dict
        """
        base_path = self.config_dir / BASE_CONFIG
        config = self._load_yaml(base_path)
        logger.info(f"Loaded base config: {base_path}")

        if environment:
            env_path = self.config_dir / "environments" / f"{environment}.yaml"
            env_config = self._load_if_exists(env_path)
            if env_config:
                config = deep_merge(config, env_config)
                logger.info(f"Merged environment config: {env_path}")

        config = self.secret_resolver.resolve_config(config)
        logger.info("Resolved secrets in config")

        return config

    def health_check(self) -> bool:
        """Check if the config directory and its base file exist."""
        return (self.config_dir / BASE_CONFIG).exists()
