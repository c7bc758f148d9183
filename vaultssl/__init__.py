"""Resolve PEM SSL bundles from HashiCorp Vault secrets."""

__version__ = "1.0.0"
