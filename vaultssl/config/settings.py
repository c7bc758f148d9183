"""Typed views over the loaded configuration: Vault settings and bundle specs."""

import os
from dataclasses import dataclass
from typing import Any, Optional

from vaultssl.bundles.models import DEFAULT_PREFIX, BundleSpec, KeystoreSpec, TruststoreSpec
from vaultssl.config.exceptions import ConfigValidationError
from vaultssl.store import SecretStore, create_store

PRIVATE_KEY_KEYS = ("private-key", "private_key")


@dataclass(frozen=True)
class VaultSettings:
    """
    Connection settings for the secret store, from the "vault" section.

    Example:
        vault:
          url: https://vault.internal:8200
          token: ${secret:VAULT_TOKEN}
          prefix: "vault:"
    """

    url: str = "http://localhost:8200"
    token: Optional[str] = None
    namespace: Optional[str] = None
    verify: Any = True
    timeout: int = 30
    prefix: str = DEFAULT_PREFIX
    store: str = "vault"
    file: Optional[str] = None

    @classmethod
    def from_config(cls, config: dict) -> "VaultSettings":
        section = config.get("vault") or {}
        if not isinstance(section, dict):
            raise ConfigValidationError("'vault' must be a mapping")

        prefix = section.get("prefix")
        timeout = section.get("timeout", 30)
        if not isinstance(timeout, int) or isinstance(timeout, bool) or timeout <= 0:
            raise ConfigValidationError(f"'vault.timeout' must be a positive integer, got {timeout!r}")

        return cls(
            url=section.get("url") or os.environ.get("VAULT_ADDR", "http://localhost:8200"),
            token=section.get("token") or os.environ.get("VAULT_TOKEN"),
            namespace=section.get("namespace") or os.environ.get("VAULT_NAMESPACE"),
            verify=section.get("verify", True),
            timeout=timeout,
            prefix=prefix if isinstance(prefix, str) and prefix.strip() else DEFAULT_PREFIX,
            store=section.get("store", "vault"),
            file=section.get("file"),
        )

    def create_store(self) -> SecretStore:
        """Build the configured secret store."""
        if self.store == "file":
            return create_store("file", path=self.file)
        return create_store(
            self.store,
            url=self.url,
            token=self.token,
            namespace=self.namespace,
            verify=self.verify,
            timeout=self.timeout,
        )


def _slot_value(section: dict, keys: tuple[str, ...], where: str) -> Optional[str]:
    for key in keys:
        if key in section and section[key] is not None:
            value = section[key]
            if not isinstance(value, str):
                raise ConfigValidationError(
                    f"'{where}.{key}' must be a string, got {type(value).__name__}"
                )
            return value
    return None


def _slot_section(bundle: dict, name: str, where: str) -> Optional[dict]:
    section = bundle.get(name)
    if section is None:
        return None
    if not isinstance(section, dict):
        raise ConfigValidationError(f"'{where}.{name}' must be a mapping")
    return section


def load_bundle_specs(config: dict) -> dict[str, BundleSpec]:
    """
    Read PEM bundle definitions from ssl.bundle.pem, keeping file order.

    Raises:
        ConfigValidationError: If a section is not a mapping or a slot value
            is not a string
    """
    ssl = config.get("ssl") or {}
    if not isinstance(ssl, dict):
        raise ConfigValidationError("'ssl' must be a mapping")
    bundle_section = _slot_section(ssl, "bundle", "ssl") or {}
    pem = _slot_section(bundle_section, "pem", "ssl.bundle") or {}

    specs = {}
    for name, bundle in pem.items():
        where = f"ssl.bundle.pem.{name}"
        if not isinstance(bundle, dict):
            raise ConfigValidationError(f"'{where}' must be a mapping")

        keystore = _slot_section(bundle, "keystore", where)
        truststore = _slot_section(bundle, "truststore", where)

        specs[str(name)] = BundleSpec(
            name=str(name),
            keystore=KeystoreSpec(
                certificate=_slot_value(keystore, ("certificate",), f"{where}.keystore"),
                private_key=_slot_value(keystore, PRIVATE_KEY_KEYS, f"{where}.keystore"),
            )
            if keystore is not None
            else None,
            truststore=TruststoreSpec(
                certificate=_slot_value(truststore, ("certificate",), f"{where}.truststore"),
            )
            if truststore is not None
            else None,
        )

    return specs
