"""Placeholder resolver - fills ${secret:KEY} patterns in config from the environment."""

import logging
import os
import re
from collections.abc import Mapping
from typing import Any, Optional

from vaultssl.secrets.exceptions import SecretNotFoundError

logger = logging.getLogger(__name__)

SECRET_PATTERN = re.compile(r"\$\{secret:([^}]+)\}")


class SecretResolver:
    """
    Fills ${secret:KEY} placeholders in configuration values from
    environment variables, typically the Vault token or namespace.

    Bundle slot references such as "vault:secret/data/ssl/svc" are left
    alone; the bundle engine reads those from the secret store.

    Usage:
        resolver = SecretResolver(env_prefix="APP_")
        config = resolver.resolve_config({"vault": {"token": "${secret:VAULT_TOKEN}"}})
        # token comes from $APP_VAULT_TOKEN
    """

    def __init__(self, env_prefix: str = "", environ: Optional[Mapping[str, str]] = None):
        self.env_prefix = env_prefix
        self.environ = os.environ if environ is None else environ

    def lookup(self, key: str, where: str = "") -> str:
        """
        Value of one placeholder key.

        Raises:
            SecretNotFoundError: If the environment variable is unset
        """
        env_key = f"{self.env_prefix}{key.strip()}"
        value = self.environ.get(env_key)
        if value is None:
            location = f" (at '{where}')" if where else ""
            raise SecretNotFoundError(
                f"Placeholder '${{secret:{key}}}'{location} is unset. "
                f"Set environment variable: {env_key}"
            )

        logger.debug(f"Resolved placeholder '{key}' from env var '{env_key}'")
        return value

    def resolve_value(self, value: Any, where: str = "") -> Any:
        """Replace every placeholder in a string; other values pass through."""
        if not isinstance(value, str):
            return value
        return SECRET_PATTERN.sub(lambda m: self.lookup(m.group(1), where), value)

    def resolve_config(self, config: Any, where: str = "") -> Any:
        """Return a copy of the config structure with all placeholders filled."""
        if isinstance(config, dict):
            return {
                k: self.resolve_config(v, f"{where}.{k}" if where else str(k))
                for k, v in config.items()
            }
        if isinstance(config, list):
            return [self.resolve_config(v, f"{where}[{i}]") for i, v in enumerate(config)]
        return self.resolve_value(config, where)

