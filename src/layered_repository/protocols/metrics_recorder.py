"""Metrics recorder protocol."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class MetricsRecorder(Protocol):
    """Sink for repository call measurements.

    Implementations can include:
    - Prometheus client (default)
    - StatsD
    - Test doubles that keep values in memory
    """

    def record_latency(self, operation: str, seconds: float) -> None:
        """Record how long one call took."""
        ...

    def increment_counter(self, operation: str, outcome: str) -> None:
        """Count one call, labelled with its outcome ("success" or "error")."""
        ...

    def record_gauge(self, name: str, value: float) -> None:
        """Set a point-in-time value such as a result-set size."""
        ...
