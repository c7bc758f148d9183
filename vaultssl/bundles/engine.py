"""Bundle resolution engine - replaces Vault references in bundles with PEM text."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Optional, Union

from vaultssl.bundles.diagnostics import DiagnosticsSink, LoggingDiagnostics
from vaultssl.bundles.documents import DocumentCache, DocumentFetcher
from vaultssl.bundles.exceptions import (
    BundleResolutionError,
    InvalidReferenceError,
    UnresolvedFieldError,
)
from vaultssl.bundles.models import (
    CA_CERTIFICATE_FIELD,
    CERTIFICATE_FIELD,
    DEFAULT_PREFIX,
    PRIVATE_KEY_FIELD,
    BundleSpec,
    KeystoreSpec,
    SecretReference,
    SslBundle,
    TruststoreSpec,
)
from vaultssl.bundles.paths import is_reference, parse_reference
from vaultssl.monitoring import Metrics, track_time
from vaultssl.store.base import SecretStore


@dataclass
class RegistrationResult:
    """Outcome of resolving a collection of bundles."""

    resolved: dict[str, BundleSpec] = field(default_factory=dict)
    failures: list[BundleResolutionError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


class BundleResolver:
    """
    Resolves the keystore and truststore slots of PEM bundles from Vault.

    Slots holding literal PEM text pass through untouched. Slots holding a
    reference ("vault:<path>[:<field>]") are read from the secret store and
    replaced by the field value. Each bundle gets its own document cache,
    so a path referenced by several slots of one bundle is read once.

    Required fields (keystore certificate and private key) that cannot be
    resolved fail the bundle. An unresolvable truststore is dropped.

    Usage:
        resolver = BundleResolver(store)
        resolved = resolver.resolve_bundle(spec)
        result = resolver.resolve_all(specs)
    """

    def __init__(
        self,
        store: SecretStore,
        prefix: str = DEFAULT_PREFIX,
        diagnostics: Optional[DiagnosticsSink] = None,
    ):
        self.prefix = prefix if prefix and prefix.strip() else DEFAULT_PREFIX
        self.diagnostics = diagnostics or LoggingDiagnostics()
        self.fetcher = DocumentFetcher(store, self.diagnostics)

    def is_reference(self, value: Optional[str]) -> bool:
        return is_reference(value, self.prefix)

    def resolve_keystore(
        self, bundle_name: str, keystore: KeystoreSpec, cache: DocumentCache
    ) -> KeystoreSpec:
        """
        Resolve a keystore slot.

        Without an explicit private-key reference the key is read from the
        certificate's path, field "private-key". A literal certificate means
        the slot is not read at all, so a private-key reference next to it
        fails the bundle.

        Raises:
            InvalidReferenceError, SecretNotFoundError, SecretBackendError,
            UnresolvedFieldError
        """
        if not self.is_reference(keystore.certificate):
            if self.is_reference(keystore.private_key):
                key_ref = parse_reference(
                    keystore.private_key, PRIVATE_KEY_FIELD, self.prefix
                )
                raise UnresolvedFieldError(
                    "keystore private key",
                    key_ref.path,
                    key_ref.field,
                    "keystore certificate is not a Vault reference, so the slot is not read",
                )
            return keystore

        self.diagnostics.debug(
            f"Loading keystore certificates for bundle '{bundle_name}' from Vault"
        )
        cert_ref = parse_reference(keystore.certificate, CERTIFICATE_FIELD, self.prefix)
        if self.is_reference(keystore.private_key):
            key_ref = parse_reference(keystore.private_key, PRIVATE_KEY_FIELD, self.prefix)
        else:
            key_ref = SecretReference(path=cert_ref.path, field=PRIVATE_KEY_FIELD)

        cert_data = self.fetcher.fetch_cached(cert_ref.path, cache)
        certificate = self.fetcher.extract_field(
            cert_data, cert_ref.field, bundle_name, "certificate"
        )
        if not certificate.is_found:
            raise UnresolvedFieldError(
                "keystore certificate", cert_ref.path, cert_ref.field, certificate.reason
            )

        key_data = self.fetcher.fetch_cached(key_ref.path, cache)
        private_key = self.fetcher.extract_field(
            key_data, key_ref.field, bundle_name, "private key"
        )
        if private_key.is_found:
            private_key_value = private_key.value
        elif keystore.private_key and not self.is_reference(keystore.private_key):
            self.diagnostics.debug(
                f"Keeping configured private key for bundle '{bundle_name}'"
            )
            private_key_value = keystore.private_key
        else:
            raise UnresolvedFieldError(
                "keystore private key", key_ref.path, key_ref.field, private_key.reason
            )

        return KeystoreSpec(certificate=certificate.value, private_key=private_key_value)

    def resolve_truststore(
        self, bundle_name: str, truststore: TruststoreSpec, cache: DocumentCache
    ) -> Optional[TruststoreSpec]:
        """
        Resolve a truststore slot.

        When the default "ca-certificate" field is missing, the document's
        "certificate" field is used instead. Returns None if neither yields
        a value.

        Raises:
            InvalidReferenceError, SecretNotFoundError, SecretBackendError
        """
        if not self.is_reference(truststore.certificate):
            return truststore

        self.diagnostics.debug(
            f"Loading truststore certificate for bundle '{bundle_name}' from Vault"
        )
        ref = parse_reference(truststore.certificate, CA_CERTIFICATE_FIELD, self.prefix)
        data = self.fetcher.fetch_cached(ref.path, cache)

        ca_certificate = self.fetcher.extract_field(
            data, ref.field, bundle_name, "CA certificate"
        )
        if not ca_certificate.is_found and ref.field == CA_CERTIFICATE_FIELD:
            ca_certificate = self.fetcher.extract_field(
                data, CERTIFICATE_FIELD, bundle_name, "certificate (fallback for CA)"
            )

        if not ca_certificate.is_found:
            self.diagnostics.error(
                f"Dropping truststore for bundle '{bundle_name}': no CA certificate "
                f"at Vault path '{ref.path}'"
            )
            return None

        return TruststoreSpec(certificate=ca_certificate.value)

    def resolve_bundle(self, spec: BundleSpec) -> BundleSpec:
        """
        Resolve one bundle, keystore first, with a fresh document cache.

        Raises:
            BundleResolutionError: Wrapping whatever stopped the bundle
        """
        self.diagnostics.debug(f"Processing SSL bundle: {spec.name}")
        cache: DocumentCache = {}

        with track_time() as t:
            try:
                keystore = spec.keystore
                if keystore is not None:
                    keystore = self.resolve_keystore(spec.name, keystore, cache)

                truststore = spec.truststore
                if truststore is not None:
                    truststore = self.resolve_truststore(spec.name, truststore, cache)
            except Exception as e:
                Metrics.bundle_resolved(success=False)
                self.diagnostics.error(
                    f"Failed to process SSL bundle '{spec.name}' from Vault: {e}", e
                )
                raise BundleResolutionError(spec.name, e) from e

        Metrics.bundle_resolved(success=True, latency=t["duration"])
        return spec.with_slots(keystore=keystore, truststore=truststore)

    def resolve_all(
        self, bundles: Union[Mapping[str, BundleSpec], Iterable[BundleSpec]]
    ) -> RegistrationResult:
        """
        Resolve every bundle in order. A failing bundle is recorded and the
        remaining bundles are still attempted.
        """
        specs = bundles.values() if isinstance(bundles, Mapping) else bundles
        result = RegistrationResult()

        for spec in specs:
            try:
                result.resolved[spec.name] = self.resolve_bundle(spec)
            except BundleResolutionError as e:
                result.failures.append(e)

        return result

    def load_bundle(self, name: str) -> SslBundle:
        """
        Build a bundle straight from one secret, for names like
        "vault:secret/data/ssl/svc". The secret must hold "certificate"
        and "private-key"; "ca-certificate" is optional.

        Raises:
            BundleResolutionError: If the secret cannot be read or lacks a
                required field
        """
        try:
            if not self.is_reference(name):
                raise InvalidReferenceError(
                    f"Path does not start with vault prefix '{self.prefix}': {name!r}"
                )
            path = name[len(self.prefix):]
            if not path.strip():
                raise InvalidReferenceError(f"Empty vault path after prefix: {name!r}")

            self.diagnostics.debug(f"Loading SSL bundle from Vault path: {path}")
            data = self.fetcher.fetch_document(path)

            certificate = self.fetcher.extract_field(data, CERTIFICATE_FIELD, name, "certificate")
            if not certificate.is_found:
                raise UnresolvedFieldError(
                    "certificate", path, CERTIFICATE_FIELD, certificate.reason
                )
            private_key = self.fetcher.extract_field(data, PRIVATE_KEY_FIELD, name, "private key")
            if not private_key.is_found:
                raise UnresolvedFieldError(
                    "private key", path, PRIVATE_KEY_FIELD, private_key.reason
                )
            ca_value = data.get(CA_CERTIFICATE_FIELD)
        except Exception as e:
            self.diagnostics.error(f"Failed to load SSL bundle from Vault: {name}", e)
            raise BundleResolutionError(name, e) from e

        return SslBundle(
            name=name,
            certificate=certificate.value,
            private_key=private_key.value,
            ca_certificate=ca_value if isinstance(ca_value, str) else None,
        )
