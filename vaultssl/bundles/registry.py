"""Bundle registry and the registrar that fills it from configuration."""

from collections.abc import Mapping
from typing import Optional

from vaultssl.bundles.engine import BundleResolver, RegistrationResult
from vaultssl.bundles.exceptions import BundleRegistrationError, NoSuchBundleError
from vaultssl.bundles.models import BundleSpec, SslBundle
from vaultssl.utils.decorators import log_time
from vaultssl.utils.logging import get_logger

logger = get_logger(__name__)


class BundleRegistry:
    """
    Holds resolved SSL bundles by name.

    With a resolver attached, names that are references themselves
    ("vault:secret/data/ssl/svc") are loaded from Vault on first lookup.
    The loaded bundle is registered under that name, so later lookups are
    served from the registry and do not re-read Vault. Register the name
    again to pick up a rotated secret.

    Usage:
        registry = BundleRegistry(resolver)
        registry.register_bundle("svc", bundle)
        bundle = registry.get_bundle("svc")
    """

    def __init__(self, resolver: Optional[BundleResolver] = None):
        self.resolver = resolver
        self._bundles: dict[str, SslBundle] = {}

    def register_bundle(self, name: str, bundle: SslBundle) -> None:
        if name in self._bundles:
            logger.warning(f"Replacing registered SSL bundle '{name}'")
        self._bundles[name] = bundle
        logger.debug(f"Registered SSL bundle '{name}'")

    def get_bundle(self, name: str) -> SslBundle:
        """
        Look up a bundle. A "vault:" name is loaded once, on the first
        lookup that misses.

        Raises:
            NoSuchBundleError: If the name is unknown
            BundleResolutionError: If an on-demand Vault load fails
        """
        if name not in self._bundles and self.resolver and self.resolver.is_reference(name):
            self.register_bundle(name, self.resolver.load_bundle(name))

        if name not in self._bundles:
            raise NoSuchBundleError(name)
        return self._bundles[name]

    def names(self) -> list[str]:
        return list(self._bundles)

    def __contains__(self, name: str) -> bool:
        return name in self._bundles

    def __len__(self) -> int:
        return len(self._bundles)


class BundleRegistrar:
    """
    Runs one registration pass: resolves every configured bundle and
    registers the ones that succeed.

    Every bundle is attempted. If any failed, a BundleRegistrationError
    listing all failures is raised after the successful bundles have been
    registered.
    """

    def __init__(self, bundles: Mapping[str, BundleSpec], resolver: BundleResolver):
        self.bundles = bundles
        self.resolver = resolver

    def resolve(self) -> RegistrationResult:
        """Resolve all bundles without raising for failed ones."""
        if not self.bundles:
            logger.debug("No PEM bundles configured, skipping Vault SSL bundle registration")
            return RegistrationResult()
        return self.resolver.resolve_all(self.bundles)

    @log_time
    def register_bundles(self, registry: BundleRegistry) -> RegistrationResult:
        """
        Raises:
            BundleRegistrationError: If one or more bundles failed
        """
        result = self.resolve()

        for name, spec in result.resolved.items():
            registry.register_bundle(name, SslBundle.from_spec(spec))

        logger.info(
            f"Registered {len(result.resolved)} SSL bundle(s), "
            f"{len(result.failures)} failed"
        )
        if result.failures:
            raise BundleRegistrationError(result.failures)
        return result
