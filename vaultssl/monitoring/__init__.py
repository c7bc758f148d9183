"""Monitoring module - Prometheus metrics for bundle resolution."""

from vaultssl.monitoring.recorders import Metrics, track_time

__all__ = [
    "Metrics",
    "track_time",
]
