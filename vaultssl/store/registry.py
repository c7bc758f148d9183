"""Secret store registry with decorator pattern."""

STORES = {}


def register_store(name: str):
    """
    Decorator to register a secret store class under a config name.

    Usage:
        @register_store("vault")
        class VaultSecretStore(SecretStore):
            ...
    """

    def decorator(cls):
        STORES[name] = cls
        return cls

    return decorator


def get_store(name: str):
    """
    Get secret store class by name.

    Args:
        name: Store identifier as used in "vault.store" (vault, file)

    Returns:
        Store class (not instance)

    Raises:
        KeyError: If store not registered
    """
    if name not in STORES:
        available = ", ".join(sorted(STORES)) or "none"
        raise KeyError(f"Unknown store: '{name}'. Available: {available}")
    return STORES[name]
