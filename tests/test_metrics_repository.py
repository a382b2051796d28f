"""
Tests for the metrics decorator and the Prometheus recorder.
"""

import asyncio

import pytest
from doubles import RecordingRepository
from prometheus_client import CollectorRegistry

from layered_repository.decorators import MetricsProductRepository
from layered_repository.exceptions import TransportError
from layered_repository.metrics import PrometheusMetricsRecorder
from layered_repository.protocols import MetricsRecorder


@pytest.fixture
def recorder():
    return PrometheusMetricsRecorder(CollectorRegistry())


def calls(recorder, operation, outcome):
    return recorder.registry.get_sample_value(
        "product_repository_calls_total", {"operation": operation, "outcome": outcome}
    )


def observations(recorder, operation):
    return recorder.registry.get_sample_value(
        "product_repository_call_duration_seconds_count", {"operation": operation}
    )


def test_recorder_satisfies_protocol(recorder):
    assert isinstance(recorder, MetricsRecorder)


@pytest.mark.asyncio
async def test_success_is_counted_and_timed(recorder, widget):
    repo = MetricsProductRepository(RecordingRepository([widget]), recorder)

    assert await repo.get_one("P1") == widget
    await repo.get_one("P1")

    assert calls(recorder, "get_one", "success") == 2
    assert observations(recorder, "get_one") == 2
    assert calls(recorder, "get_one", "error") is None


@pytest.mark.asyncio
async def test_error_is_counted_and_propagated(recorder, remote, widget):
    error = TransportError("boom")
    remote.fail_always("create", error)
    repo = MetricsProductRepository(remote, recorder)

    with pytest.raises(TransportError) as exc_info:
        await repo.create(widget)

    assert exc_info.value is error
    assert calls(recorder, "create", "error") == 1
    assert observations(recorder, "create") == 1


@pytest.mark.asyncio
async def test_cancellation_is_counted_separately(recorder, remote):
    remote.fail_always("delete", asyncio.CancelledError())
    repo = MetricsProductRepository(remote, recorder)

    with pytest.raises(asyncio.CancelledError):
        await repo.delete("P1")

    assert calls(recorder, "delete", "cancelled") == 1


@pytest.mark.asyncio
async def test_get_all_sets_result_size_gauge(recorder, widget, gadget):
    repo = MetricsProductRepository(RecordingRepository([widget, gadget]), recorder)

    await repo.get_all()

    value = recorder.registry.get_sample_value(
        "product_repository_gauge", {"name": "get_all_result_size"}
    )
    assert value == 2.0


def test_render_exposes_series(recorder):
    recorder.increment_counter("update", "success")
    recorder.record_latency("update", 0.02)

    text = recorder.render().decode()

    assert 'product_repository_calls_total{operation="update",outcome="success"} 1.0' in text
    assert "product_repository_call_duration_seconds_bucket" in text


def test_separate_recorders_do_not_collide():
    """Each recorder owns its registry, so several can coexist."""
    first = PrometheusMetricsRecorder()
    second = PrometheusMetricsRecorder()

    first.increment_counter("get_one", "success")

    assert calls(first, "get_one", "success") == 1
    assert calls(second, "get_one", "success") is None


def test_custom_namespace():
    recorder = PrometheusMetricsRecorder(namespace="catalog")
    recorder.record_gauge("cache_size", 5)

    assert recorder.registry.get_sample_value("catalog_gauge", {"name": "cache_size"}) == 5.0
