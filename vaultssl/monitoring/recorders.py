"""Metrics recorder - stateless functions to record metrics."""

import time
from contextlib import contextmanager
from typing import Generator

from vaultssl.monitoring.definitions import (
    STORE_READS,
    STORE_READ_LATENCY,
    DOCUMENT_CACHE_HITS,
    BUNDLE_RESOLUTIONS,
    BUNDLE_RESOLUTION_DURATION,
)


@contextmanager
def track_time() -> Generator[dict, None, None]:
    """
    Context manager to track execution time.

    Usage:
        with track_time() as t:
            do_work()
        print(t["duration"])  # seconds
    """
    result = {"duration": 0.0}
    start = time.perf_counter()
    try:
        yield result
    finally:
        result["duration"] = time.perf_counter() - start


class Metrics:
    """
    Stateless metrics recorder.

    Usage:
        from vaultssl.monitoring import Metrics, track_time

        with track_time() as t:
            document = store.read(path)
        Metrics.store_read("vault", "success", latency=t["duration"])
    """

    @staticmethod
    def store_read(store: str, status: str, latency: float = None) -> None:
        """Record one secret store read (success, not_found, error)."""
        STORE_READS.labels(store=store, status=status).inc()
        if latency:
            STORE_READ_LATENCY.labels(store=store).observe(latency)

    @staticmethod
    def cache_hit() -> None:
        """Record a document served from the per-bundle cache."""
        DOCUMENT_CACHE_HITS.inc()

    @staticmethod
    def bundle_resolved(success: bool = True, latency: float = None) -> None:
        """Record the outcome of one bundle resolution."""
        status = "success" if success else "error"
        BUNDLE_RESOLUTIONS.labels(status=status).inc()
        if latency:
            BUNDLE_RESOLUTION_DURATION.observe(latency)
