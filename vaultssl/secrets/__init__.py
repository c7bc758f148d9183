"""${secret:KEY} placeholders and the secret errors shared with the stores."""

from vaultssl.secrets.resolver import SecretResolver
from vaultssl.secrets.exceptions import SecretNotFoundError, SecretBackendError

__all__ = [
    "SecretResolver",
    "SecretNotFoundError",
    "SecretBackendError",
]
