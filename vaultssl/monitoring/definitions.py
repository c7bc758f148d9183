"""Prometheus metric definitions."""

from prometheus_client import Counter, Histogram

# ============================================================
# SECRET STORE METRICS
# ============================================================

STORE_READS = Counter(
    "vault_ssl_store_reads_total", "Secret store reads", ["store", "status"]
)

STORE_READ_LATENCY = Histogram(
    "vault_ssl_store_read_latency_seconds",
    "Time to read one secret document",
    ["store"],
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)

# ============================================================
# BUNDLE RESOLUTION METRICS
# ============================================================

DOCUMENT_CACHE_HITS = Counter(
    "vault_ssl_document_cache_hits_total",
    "Secret documents served from the per-bundle cache",
)

BUNDLE_RESOLUTIONS = Counter(
    "vault_ssl_bundle_resolutions_total", "Bundles resolved", ["status"]
)

BUNDLE_RESOLUTION_DURATION = Histogram(
    "vault_ssl_bundle_resolution_seconds",
    "Time to resolve one bundle",
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)
