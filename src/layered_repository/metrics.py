"""Prometheus metrics for repository calls.

Metrics are registered on an injected CollectorRegistry (a fresh one by
default) rather than the process-wide default registry, so several
pipelines and test cases can coexist in one process.
"""

from prometheus_client import CollectorRegistry, Counter, Gauge, Histogram, generate_latest

LATENCY_BUCKETS = (
    0.005,
    0.01,
    0.025,
    0.05,
    0.1,
    0.25,
    0.5,
    1.0,
    2.5,
    5.0,
    10.0,
    30.0,
)


class PrometheusMetricsRecorder:
    """prometheus_client implementation of the MetricsRecorder protocol.

    Exported series (with the default namespace):
        product_repository_call_duration_seconds{operation}
        product_repository_calls_total{operation, outcome}
        product_repository_gauge{name}
    """

    def __init__(
        self,
        registry: CollectorRegistry | None = None,
        namespace: str = "product_repository",
    ) -> None:
        self._registry = registry or CollectorRegistry()

        self._latency = Histogram(
            "call_duration_seconds",
            "Repository call duration in seconds",
            ["operation"],
            namespace=namespace,
            registry=self._registry,
            buckets=LATENCY_BUCKETS,
        )
        self._calls = Counter(
            "calls",
            "Total repository calls",
            ["operation", "outcome"],
            namespace=namespace,
            registry=self._registry,
        )
        self._gauge = Gauge(
            "gauge",
            "Point-in-time repository values",
            ["name"],
            namespace=namespace,
            registry=self._registry,
        )

    def record_latency(self, operation: str, seconds: float) -> None:
        self._latency.labels(operation=operation).observe(seconds)

    def increment_counter(self, operation: str, outcome: str) -> None:
        self._calls.labels(operation=operation, outcome=outcome).inc()

    def record_gauge(self, name: str, value: float) -> None:
        self._gauge.labels(name=name).set(value)

    def render(self) -> bytes:
        """Render the registry in the Prometheus text exposition format."""
        return generate_latest(self._registry)

    @property
    def registry(self) -> CollectorRegistry:
        """Get the underlying registry."""
        return self._registry
