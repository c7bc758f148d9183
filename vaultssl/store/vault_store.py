"""HashiCorp Vault secret store backed by hvac."""

import logging
from typing import Any, Optional

import hvac
from hvac.exceptions import Forbidden, InvalidPath, Unauthorized, VaultDown, VaultError

from vaultssl.monitoring import Metrics, track_time
from vaultssl.secrets.exceptions import SecretBackendError
from vaultssl.store.registry import register_store
from vaultssl.store.base import SecretStore
from vaultssl.utils.decorators import retry

logger = logging.getLogger(__name__)


@register_store("vault")
class VaultSecretStore(SecretStore):
    """
    Reads secret documents from Vault with generic logical reads.

    Paths are full API paths below /v1/, so a KV v2 secret is addressed as
    "secret/data/ssl-certs/my-service" and a KV v1 secret as
    "kv/ssl-certs/my-service". Secret values are never logged.

    Usage:
        store = VaultSecretStore(url="https://vault:8200", token="s.abc")
        document = store.read("secret/data/ssl-certs/my-service")
    """

    name = "vault"

    def __init__(
        self,
        url: str,
        token: Optional[str] = None,
        namespace: Optional[str] = None,
        verify: bool | str = True,
        timeout: int = 30,
        client: Optional[hvac.Client] = None,
    ):
        """
        Args:
            url: Vault server URL
            token: Vault token (hvac falls back to VAULT_TOKEN when None)
            namespace: Vault Enterprise namespace
            verify: TLS verification flag or CA bundle path
            timeout: Request timeout in seconds
            client: Preconfigured hvac client, used instead of building one
        """
        self.url = url
        self._client = client or hvac.Client(
            url=url,
            token=token or None,
            namespace=namespace or None,
            verify=verify,
            timeout=timeout,
        )
        logger.info(f"Initialized Vault secret store: {url}")

    @retry(max_attempts=3, delay=0.5, exceptions=(VaultDown, OSError))
    def _read_raw(self, path: str) -> Any:
        return self._client.read(path)

    def read(self, path: str) -> Optional[dict[str, Any]]:
        """
        Read the secret at a path.

        Returns:
            The response's data member, or None if the path holds nothing

        Raises:
            SecretBackendError: On permission, connectivity or server errors
        """
        logger.debug(f"Reading Vault path: {path}")
        with track_time() as t:
            try:
                response = self._read_raw(path)
            except InvalidPath:
                response = None
            except (Forbidden, Unauthorized) as e:
                Metrics.store_read(self.name, "error")
                raise SecretBackendError(
                    f"Permission denied reading Vault path '{path}': {e}"
                ) from e
            except (VaultError, OSError) as e:
                Metrics.store_read(self.name, "error")
                raise SecretBackendError(
                    f"Failed to read Vault path '{path}': {e}"
                ) from e

        if not isinstance(response, dict) or response.get("data") is None:
            Metrics.store_read(self.name, "not_found", latency=t["duration"])
            logger.debug(f"No data at Vault path: {path}")
            return None

        Metrics.store_read(self.name, "success", latency=t["duration"])
        return response["data"]

    def health_check(self) -> bool:
        """Check that Vault answers and the token is accepted."""
        try:
            return bool(self._client.is_authenticated())
        except (VaultError, OSError) as e:
            logger.warning(f"Vault health check failed: {e}")
            return False
