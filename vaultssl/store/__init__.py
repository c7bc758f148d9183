"""Secret stores - document reads by path."""

# Import stores to trigger registration
from vaultssl.store import file_store, vault_store  # noqa: F401
from vaultssl.store.base import SecretStore
from vaultssl.store.file_store import FileSecretStore
from vaultssl.store.vault_store import VaultSecretStore
from vaultssl.secrets.exceptions import SecretBackendError
from vaultssl.store.registry import get_store


def create_store(kind: str = "vault", **config) -> SecretStore:
    """
    Create a secret store using the registry.

    Raises:
        SecretBackendError: If the store is unknown or misconfigured
    """
    try:
        store_cls = get_store(kind)
        return store_cls(**config)
    except KeyError as e:
        raise SecretBackendError(str(e))
    except TypeError as e:
        raise SecretBackendError(f"Store '{kind}' config error: {e}")


__all__ = [
    "SecretStore",
    "FileSecretStore",
    "VaultSecretStore",
    "create_store",
]
