"""Exceptions raised while resolving SSL bundles."""

from typing import Optional

# Re-exported so callers can catch store failures from one place
from vaultssl.secrets.exceptions import SecretBackendError, SecretNotFoundError


class BundleError(Exception):
    """Base exception for bundle errors."""

    pass


class InvalidReferenceError(BundleError, ValueError):
    """Raised when a secret reference expression is malformed."""

    pass


class UnresolvedFieldError(BundleError):
    """Raised when a required bundle field cannot be read from its secret."""

    def __init__(self, slot: str, path: str, field: str, reason: str):
        self.slot = slot
        self.path = path
        self.field = field
        self.reason = reason
        super().__init__(
            f"Could not resolve {slot} from field '{field}' at path '{path}': {reason}"
        )


class BundleResolutionError(BundleError):
    """Raised when one bundle cannot be resolved. Wraps the underlying cause."""

    def __init__(self, bundle_name: str, cause: Optional[Exception] = None):
        self.bundle_name = bundle_name
        self.cause = cause
        message = f"Failed to load SSL bundle '{bundle_name}' from Vault"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


class BundleRegistrationError(BundleError):
    """Raised after a registration pass in which one or more bundles failed."""

    def __init__(self, failures: list[BundleResolutionError]):
        self.failures = list(failures)
        names = ", ".join(f"'{f.bundle_name}'" for f in self.failures)
        details = "; ".join(str(f) for f in self.failures)
        super().__init__(
            f"{len(self.failures)} SSL bundle(s) failed to load ({names}): {details}"
        )


class NoSuchBundleError(BundleError, KeyError):
    """Raised when a bundle name is not registered."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"SSL bundle name '{name}' cannot be found")

    def __str__(self) -> str:
        return self.args[0]


__all__ = [
    "BundleError",
    "InvalidReferenceError",
    "UnresolvedFieldError",
    "BundleResolutionError",
    "BundleRegistrationError",
    "NoSuchBundleError",
    "SecretBackendError",
    "SecretNotFoundError",
]
