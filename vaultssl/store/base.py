"""Abstract base class for secret stores."""

from abc import ABC, abstractmethod
from typing import Any, Optional


class SecretStore(ABC):
    """
    A secret store returns whole documents (field maps) by path.

    The returned document is the raw payload at the path. For a KV v2 mount
    it is the envelope {"data": {...}, "metadata": {...}}; for KV v1 it is
    the field map itself. Normalization is the bundle engine's job.
    """

    name = "store"

    @abstractmethod
    def read(self, path: str) -> Optional[dict[str, Any]]:
        """
        Read the document stored at a path.

        Returns:
            The raw document, or None when nothing is stored at the path

        Raises:
            SecretBackendError: If the store cannot be read (permission
                denied, unreachable server)
        """
        pass

    @abstractmethod
    def health_check(self) -> bool:
        """
        Check if the store is reachable.

        Returns:
            True if healthy, False otherwise
        """
        pass
