"""Fetching, normalizing and reading secret documents."""

from collections.abc import Mapping
from typing import Any, Optional

from vaultssl.bundles.diagnostics import DiagnosticsSink, LoggingDiagnostics
from vaultssl.bundles.models import FieldLookup
from vaultssl.monitoring import Metrics
from vaultssl.secrets.exceptions import SecretNotFoundError
from vaultssl.store.base import SecretStore

# Per-bundle cache: secret path -> normalized document
DocumentCache = dict[str, dict[str, Any]]

KV2_DATA_KEY = "data"


def normalize_document(raw: Mapping) -> dict[str, Any]:
    """
    Strip the storage engine envelope from a raw document.

    KV v2 nests the fields under "data" (next to "metadata"); KV v1 returns
    the fields directly. A "data" key that is not a mapping is an ordinary
    field of a KV v1 secret.
    """
    nested = raw.get(KV2_DATA_KEY)
    if isinstance(nested, Mapping):
        return dict(nested)
    return dict(raw)


class DocumentFetcher:
    """
    Reads secret documents through a store.

    Usage:
        fetcher = DocumentFetcher(store)
        cache = {}
        document = fetcher.fetch_cached("secret/data/ssl/svc", cache)
        lookup = fetcher.extract_field(document, "certificate")
    """

    def __init__(self, store: SecretStore, diagnostics: Optional[DiagnosticsSink] = None):
        self.store = store
        self.diagnostics = diagnostics or LoggingDiagnostics()

    def fetch_document(self, path: str) -> dict[str, Any]:
        """
        Read and normalize the document at a path.

        Raises:
            SecretNotFoundError: If the store has nothing, or an empty
                document, at the path
            SecretBackendError: If the store itself fails
        """
        self.diagnostics.debug(f"Reading certificate data from Vault path: {path}")
        raw = self.store.read(path)
        if raw is None:
            raise SecretNotFoundError(f"No data found at Vault path: {path}")
        if not raw:
            raise SecretNotFoundError(f"Empty response data from Vault path: {path}")

        if isinstance(raw.get(KV2_DATA_KEY), Mapping):
            self.diagnostics.debug(f"Detected KV v2 secret engine format for path: {path}")
        else:
            self.diagnostics.debug(f"Using KV v1 secret engine format for path: {path}")
        return normalize_document(raw)

    def fetch_cached(self, path: str, cache: DocumentCache) -> dict[str, Any]:
        """Return the cached document for path, reading it on first use."""
        if path in cache:
            self.diagnostics.debug(f"Using cached data for Vault path: {path}")
            Metrics.cache_hit()
            return cache[path]

        document = self.fetch_document(path)
        cache[path] = document
        return document

    def extract_field(
        self,
        document: Mapping,
        field_name: str,
        bundle_name: str = "",
        description: str = "",
    ) -> FieldLookup:
        """
        Look up a string field. Absent and non-string values are reported
        to the diagnostics sink and returned as missing.
        """
        label = f"'{field_name}' ({description})" if description else f"'{field_name}'"
        where = f" for bundle '{bundle_name}'" if bundle_name else ""

        if field_name not in document or document[field_name] is None:
            detail = f"{label} not found in Vault data{where}"
            self.diagnostics.warn(f"Field {detail}")
            return FieldLookup.missing(f"field {detail}")

        value = document[field_name]
        if not isinstance(value, str):
            detail = f"{label} is not a string in Vault data{where}: {type(value).__name__}"
            self.diagnostics.warn(f"Field {detail}")
            return FieldLookup.missing(f"field {detail}")

        return FieldLookup.found(value)
