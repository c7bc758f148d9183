"""SSL bundle resolution from Vault secrets."""

from vaultssl.bundles.diagnostics import DiagnosticsSink, LoggingDiagnostics
from vaultssl.bundles.documents import DocumentFetcher, normalize_document
from vaultssl.bundles.engine import BundleResolver, RegistrationResult
from vaultssl.bundles.exceptions import (
    BundleError,
    BundleRegistrationError,
    BundleResolutionError,
    InvalidReferenceError,
    NoSuchBundleError,
    UnresolvedFieldError,
)
from vaultssl.bundles.models import (
    BundleSpec,
    FieldLookup,
    KeystoreSpec,
    SecretReference,
    SslBundle,
    TruststoreSpec,
)
from vaultssl.bundles.paths import is_reference, parse_reference
from vaultssl.bundles.registry import BundleRegistrar, BundleRegistry

__all__ = [
    "DiagnosticsSink",
    "LoggingDiagnostics",
    "DocumentFetcher",
    "normalize_document",
    "BundleResolver",
    "RegistrationResult",
    "BundleError",
    "BundleRegistrationError",
    "BundleResolutionError",
    "InvalidReferenceError",
    "NoSuchBundleError",
    "UnresolvedFieldError",
    "BundleSpec",
    "FieldLookup",
    "KeystoreSpec",
    "SecretReference",
    "SslBundle",
    "TruststoreSpec",
    "is_reference",
    "parse_reference",
    "BundleRegistrar",
    "BundleRegistry",
]
