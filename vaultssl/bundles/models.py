"""Data model for PEM bundle definitions and resolved bundles."""

from dataclasses import dataclass, field, replace
from typing import Any, Optional

CERTIFICATE_FIELD = "certificate"
PRIVATE_KEY_FIELD = "private-key"
CA_CERTIFICATE_FIELD = "ca-certificate"

DEFAULT_PREFIX = "vault:"


@dataclass(frozen=True)
class SecretReference:
    """A parsed reference: the secret path and the field to read from it."""

    path: str
    field: str


@dataclass(frozen=True)
class FieldLookup:
    """
    Outcome of looking up one field in a secret document.

    Either found (value is the string) or missing (reason says why).
    """

    value: Optional[str] = None
    reason: Optional[str] = None

    @classmethod
    def found(cls, value: str) -> "FieldLookup":
        return cls(value=value)

    @classmethod
    def missing(cls, reason: str) -> "FieldLookup":
        return cls(reason=reason)

    @property
    def is_found(self) -> bool:
        return self.value is not None


@dataclass(frozen=True)
class KeystoreSpec:
    """Keystore slot: certificate chain and private key, literal or reference."""

    certificate: Optional[str] = None
    private_key: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            CERTIFICATE_FIELD: self.certificate,
            PRIVATE_KEY_FIELD: self.private_key,
        }


@dataclass(frozen=True)
class TruststoreSpec:
    """Truststore slot: CA certificate, literal or reference."""

    certificate: Optional[str] = None

    def to_dict(self) -> dict:
        return {CERTIFICATE_FIELD: self.certificate}


@dataclass(frozen=True)
class BundleSpec:
    """
    A named PEM bundle with at most one keystore and one truststore.

    Instances are immutable: resolution produces a new BundleSpec.
    """

    name: str
    keystore: Optional[KeystoreSpec] = None
    truststore: Optional[TruststoreSpec] = None

    def with_slots(self, **changes: Any) -> "BundleSpec":
        """Return a copy with keystore and/or truststore replaced."""
        return replace(self, **changes)

    def to_dict(self) -> dict:
        result = {}
        if self.keystore is not None:
            result["keystore"] = self.keystore.to_dict()
        if self.truststore is not None:
            result["truststore"] = self.truststore.to_dict()
        return result


@dataclass(frozen=True)
class SslBundle:
    """Fully resolved PEM material handed to the TLS layer."""

    name: str
    certificate: Optional[str] = None
    private_key: Optional[str] = field(default=None, repr=False)
    ca_certificate: Optional[str] = None

    @classmethod
    def from_spec(cls, spec: BundleSpec) -> "SslBundle":
        keystore = spec.keystore or KeystoreSpec()
        truststore = spec.truststore or TruststoreSpec()
        return cls(
            name=spec.name,
            certificate=keystore.certificate,
            private_key=keystore.private_key,
            ca_certificate=truststore.certificate,
        )
