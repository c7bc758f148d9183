"""Shared fixtures for unit tests."""

from typing import Optional

import pytest

from vaultssl.bundles.diagnostics import DiagnosticsSink
from vaultssl.store.base import SecretStore


class InMemorySecretStore(SecretStore):
    """Secret store over a dict of path -> raw document, counting reads."""

    name = "memory"

    def __init__(self, documents: Optional[dict] = None):
        self.documents = documents or {}
        self.reads: list[str] = []

    def read(self, path):
        self.reads.append(path)
        return self.documents.get(path)

    def health_check(self) -> bool:
        return True


class CollectingDiagnostics(DiagnosticsSink):
    """Diagnostics sink that keeps every message for assertions."""

    def __init__(self):
        self.debugs: list[str] = []
        self.warnings: list[str] = []
        self.errors: list[str] = []

    def debug(self, message):
        self.debugs.append(message)

    def warn(self, message):
        self.warnings.append(message)

    def error(self, message, exc=None):
        self.errors.append(message)


@pytest.fixture
def store():
    return InMemorySecretStore()


@pytest.fixture
def diagnostics():
    return CollectingDiagnostics()
