"""Tests for secret document fetching, caching and field extraction."""

import pytest

from vaultssl.bundles.documents import DocumentFetcher, normalize_document
from vaultssl.secrets.exceptions import SecretBackendError, SecretNotFoundError


class TestNormalizeDocument:
    """Tests for KV v1 / KV v2 normalization."""

    def test_kv2_shape_unwraps_data(self):
        """Should use the nested data map of a KV v2 response."""
        raw = {"data": {"certificate": "X"}, "metadata": {"version": 3}}

        assert normalize_document(raw) == {"certificate": "X"}

    def test_kv1_shape_used_as_is(self):
        """Should use a flat KV v1 response directly."""
        assert normalize_document({"certificate": "X"}) == {"certificate": "X"}

    def test_both_shapes_yield_same_field(self):
        """Should extract the same field from either shape."""
        v2 = normalize_document({"data": {"certificate": "X"}})
        v1 = normalize_document({"certificate": "X"})

        assert v1["certificate"] == v2["certificate"] == "X"

    def test_non_mapping_data_field_is_kv1(self):
        """Should treat a string 'data' field as an ordinary KV v1 field."""
        raw = {"data": "opaque", "certificate": "X"}

        assert normalize_document(raw) == raw


class TestFetchDocument:
    """Tests for DocumentFetcher.fetch_document."""

    def test_fetch_normalizes(self, store, diagnostics):
        """Should read and normalize the document."""
        # Arrange
        store.documents = {"secret/data/ssl/svc": {"data": {"certificate": "CERT"}}}
        fetcher = DocumentFetcher(store, diagnostics)

        # Act
        document = fetcher.fetch_document("secret/data/ssl/svc")

        # Assert
        assert document == {"certificate": "CERT"}
        assert any("KV v2" in m for m in diagnostics.debugs)

    def test_missing_document_raises(self, store, diagnostics):
        """Should raise SecretNotFoundError naming the path."""
        fetcher = DocumentFetcher(store, diagnostics)

        with pytest.raises(SecretNotFoundError) as exc_info:
            fetcher.fetch_document("secret/data/missing")

        assert "secret/data/missing" in str(exc_info.value)

    def test_empty_document_raises(self, store, diagnostics):
        """Should treat an empty document as not found."""
        store.documents = {"kv/empty": {}}
        fetcher = DocumentFetcher(store, diagnostics)

        with pytest.raises(SecretNotFoundError) as exc_info:
            fetcher.fetch_document("kv/empty")

        assert "Empty response" in str(exc_info.value)

    def test_store_errors_propagate(self, diagnostics):
        """Should let store failures through unchanged."""

        class BrokenStore:
            def read(self, path):
                raise SecretBackendError(f"Permission denied reading Vault path '{path}'")

        fetcher = DocumentFetcher(BrokenStore(), diagnostics)

        with pytest.raises(SecretBackendError):
            fetcher.fetch_document("secret/data/locked")


class TestFetchCached:
    """Tests for DocumentFetcher.fetch_cached."""

    def test_second_fetch_served_from_cache(self, store, diagnostics):
        """Should read each path once per cache."""
        # Arrange
        store.documents = {"kv/ssl/svc": {"certificate": "CERT"}}
        fetcher = DocumentFetcher(store, diagnostics)
        cache = {}

        # Act
        first = fetcher.fetch_cached("kv/ssl/svc", cache)
        second = fetcher.fetch_cached("kv/ssl/svc", cache)

        # Assert
        assert first is second
        assert store.reads == ["kv/ssl/svc"]
        assert "kv/ssl/svc" in cache

    def test_fresh_cache_reads_again(self, store, diagnostics):
        """Should not share documents between caches."""
        store.documents = {"kv/ssl/svc": {"certificate": "CERT"}}
        fetcher = DocumentFetcher(store, diagnostics)

        fetcher.fetch_cached("kv/ssl/svc", {})
        fetcher.fetch_cached("kv/ssl/svc", {})

        assert store.reads == ["kv/ssl/svc", "kv/ssl/svc"]

    def test_failed_fetch_is_not_cached(self, store, diagnostics):
        """Should leave the cache untouched when the read fails."""
        fetcher = DocumentFetcher(store, diagnostics)
        cache = {}

        with pytest.raises(SecretNotFoundError):
            fetcher.fetch_cached("kv/missing", cache)

        assert cache == {}


class TestExtractField:
    """Tests for DocumentFetcher.extract_field."""

    def test_string_field_found(self, store, diagnostics):
        """Should return found for a string value."""
        fetcher = DocumentFetcher(store, diagnostics)

        lookup = fetcher.extract_field({"certificate": "CERT"}, "certificate")

        assert lookup.is_found
        assert lookup.value == "CERT"
        assert diagnostics.warnings == []

    def test_absent_field_is_missing(self, store, diagnostics):
        """Should report absence as missing and warn."""
        fetcher = DocumentFetcher(store, diagnostics)

        lookup = fetcher.extract_field({"other": "x"}, "private-key", "svc", "private key")

        assert not lookup.is_found
        assert "not found" in lookup.reason
        assert len(diagnostics.warnings) == 1
        assert "'private-key'" in diagnostics.warnings[0]
        assert "'svc'" in diagnostics.warnings[0]

    def test_non_string_field_is_missing(self, store, diagnostics):
        """Should treat a type mismatch like absence, never raise."""
        fetcher = DocumentFetcher(store, diagnostics)

        lookup = fetcher.extract_field({"certificate": {"pem": "X"}}, "certificate")

        assert not lookup.is_found
        assert "not a string" in lookup.reason
        assert "dict" in diagnostics.warnings[0]
