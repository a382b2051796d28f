"""
End-to-end tests of the composed pipeline and the settings-driven factory.
"""

import json
from dataclasses import replace

import httpx
import pytest
from doubles import BASE_URL, RecordingRepository
from prometheus_client import CollectorRegistry
from tenacity import wait_none

from layered_repository.clients import HttpxAPIClient
from layered_repository.config import Settings
from layered_repository.connectivity import HttpConnectivityMonitor, StaticConnectivity
from layered_repository.decorators import (
    CachingProductRepository,
    RetryingProductRepository,
    ValidatingProductRepository,
)
from layered_repository.exceptions import NotFoundError, TransportError, ValidationError
from layered_repository.metrics import PrometheusMetricsRecorder
from layered_repository.pipeline import RepositoryFactory, build_pipeline
from layered_repository.repositories import (
    InMemoryProductStore,
    LocalProductRepository,
    RemoteProductRepository,
)


class FakeCatalog:
    """In-process catalog service for httpx.MockTransport."""

    def __init__(self) -> None:
        self.products: dict[str, dict] = {}
        self.failures: list[int] = []
        self.requests: list[tuple[str, str]] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append((request.method, request.url.path))
        if self.failures:
            return httpx.Response(self.failures.pop(0))

        parts = request.url.path.strip("/").split("/")
        if parts == ["products"]:
            if request.method == "GET":
                return httpx.Response(200, json=list(self.products.values()))
            body = json.loads(request.content)
            if body["id"] in self.products:
                return httpx.Response(409)
            self.products[body["id"]] = body
            return httpx.Response(201, json=body)

        product_id = parts[1]
        if product_id not in self.products:
            return httpx.Response(404)
        if request.method == "GET":
            return httpx.Response(200, json=self.products[product_id])
        if request.method == "PUT":
            self.products[product_id] = json.loads(request.content)
            return httpx.Response(204)
        del self.products[product_id]
        return httpx.Response(204)


@pytest.fixture
def catalog():
    return FakeCatalog()


@pytest.fixture
def api_client(catalog, make_api_client):
    return make_api_client(catalog)


class TestScenarios:
    @pytest.mark.asyncio
    async def test_create_survives_two_transport_failures(self, widget):
        """Validating -> Retrying -> Caching -> remote failing twice: success on the third call."""
        remote = RecordingRepository()
        remote.fail_next("create", TransportError("timeout"), TransportError("timeout"))
        cache = CachingProductRepository(remote)
        repo = ValidatingProductRepository(
            RetryingProductRepository(cache, max_attempts=3, wait=wait_none())
        )

        await repo.create(widget)

        assert remote.calls["create"] == 3
        assert "P1" in cache
        assert await repo.get_one("P1") == widget
        assert remote.calls["get_one"] == 0

    @pytest.mark.asyncio
    async def test_missing_product_is_not_cached(self, api_client):
        """Caching(remote) on a 404: NotFoundError and an empty cache."""
        cache = CachingProductRepository(RemoteProductRepository(api_client))

        with pytest.raises(NotFoundError):
            await cache.get_one("missing")

        assert len(cache) == 0


class TestBuildPipeline:
    @pytest.fixture
    def local(self):
        return LocalProductRepository(InMemoryProductStore())

    @pytest.fixture
    def connectivity(self):
        return StaticConnectivity()

    @pytest.fixture
    def metrics(self):
        return PrometheusMetricsRecorder(CollectorRegistry())

    @pytest.fixture
    def pipeline(self, api_client, local, connectivity, metrics):
        return build_pipeline(
            RemoteProductRepository(api_client),
            local,
            connectivity,
            max_attempts=3,
            wait=wait_none(),
            metrics=metrics,
        )

    @pytest.mark.asyncio
    async def test_online_crud(self, pipeline, catalog, local, widget):
        await pipeline.create(widget)
        assert catalog.products["P1"]["name"] == "Widget"
        assert await local.get_one("P1") == widget

        renamed = replace(widget, name="Widget v2")
        await pipeline.update(renamed)
        assert await pipeline.get_one("P1") == renamed
        assert catalog.requests.count(("GET", "/products/P1")) == 0

        await pipeline.delete("P1")
        assert catalog.products == {}
        with pytest.raises(NotFoundError):
            await pipeline.get_one("P1")

    @pytest.mark.asyncio
    async def test_transient_failures_are_retried(self, pipeline, catalog, widget):
        """With nothing to fall back on locally, the read is retried."""
        catalog.products["P1"] = {"id": "P1", "name": "Widget", "price": 9.99}
        catalog.failures = [503, 502]

        assert await pipeline.get_one("P1") == widget
        assert catalog.requests.count(("GET", "/products/P1")) == 3

    @pytest.mark.asyncio
    async def test_invalid_input_makes_no_request(self, pipeline, catalog, widget):
        with pytest.raises(ValidationError):
            await pipeline.create(replace(widget, price=-1))

        assert catalog.requests == []

    @pytest.mark.asyncio
    async def test_offline_reads_and_writes_go_local(
        self, pipeline, catalog, local, connectivity, widget, gadget
    ):
        catalog.products["P1"] = {"id": "P1", "name": "Widget", "price": 9.99}
        await pipeline.get_all()

        connectivity.set_connected(False)
        await pipeline.create(gadget)
        assert await pipeline.get_all() == [widget, gadget]
        assert "P2" not in catalog.products
        assert await local.get_one("P2") == gadget

    @pytest.mark.asyncio
    async def test_outage_falls_back_to_local_copy(self, pipeline, catalog, local, widget):
        await local.save(widget)
        catalog.failures = [500, 500, 500]

        assert await pipeline.get_one("P1") == widget

    @pytest.mark.asyncio
    async def test_metrics_wrap_the_stack(self, pipeline, metrics, widget):
        with pytest.raises(NotFoundError):
            await pipeline.get_one("P1")
        await pipeline.create(widget)

        registry = metrics.registry
        labels = {"operation": "get_one", "outcome": "error"}
        assert registry.get_sample_value("product_repository_calls_total", labels) == 1
        labels = {"operation": "create", "outcome": "success"}
        assert registry.get_sample_value("product_repository_calls_total", labels) == 1

    @pytest.mark.asyncio
    async def test_metrics_layer_is_optional(self, api_client, local, connectivity, widget):
        pipeline = build_pipeline(RemoteProductRepository(api_client), local, connectivity)

        await pipeline.create(widget)

        assert await pipeline.get_one("P1") == widget


class TestRepositoryFactory:
    @pytest.fixture
    def settings(self):
        return Settings(
            api_base_url_override=BASE_URL,
            retry_max_attempts=2,
            retry_wait_min=0,
            retry_wait_max=0,
            local_store_backend="memory",
            connectivity_probe_url=None,
        )

    @pytest.fixture
    def factory(self, settings, api_client):
        return RepositoryFactory(settings, api_client=api_client, store=InMemoryProductStore())

    @pytest.mark.asyncio
    async def test_product_repository_uses_settings(self, factory, catalog):
        repo = factory.make_product_repository()
        catalog.failures = [503, 503]

        with pytest.raises(TransportError):
            await repo.get_one("P1")

        assert catalog.requests.count(("GET", "/products/P1")) == 2

    @pytest.mark.asyncio
    async def test_leaves_share_the_local_store(self, factory, widget):
        repo = factory.make_product_repository()
        await repo.create(widget)

        assert await factory.make_local_repository().get_one("P1") == widget
        assert await factory.make_remote_repository().get_one("P1") == widget

    @pytest.mark.asyncio
    async def test_sync_service(self, factory, catalog, widget):
        catalog.products["P1"] = {"id": "P1", "name": "Widget", "price": 9.99}

        report = await factory.make_sync_service().sync()

        assert report.pulled == ["P1"]
        assert await factory.make_local_repository().get_one("P1") == widget

    @pytest.mark.asyncio
    async def test_defaults_from_settings(self, settings):
        factory = RepositoryFactory(settings)

        assert factory.connectivity.is_connected
        assert isinstance(factory.metrics, PrometheusMetricsRecorder)
        assert isinstance(factory.make_local_repository().store, InMemoryProductStore)

        await factory.aclose()

    @pytest.mark.asyncio
    async def test_probe_url_enables_http_monitor(self, settings):
        settings = replace(settings, connectivity_probe_url=f"{BASE_URL}/health")
        factory = RepositoryFactory(settings)

        assert isinstance(factory.connectivity, HttpConnectivityMonitor)

        await factory.aclose()

    @pytest.mark.asyncio
    async def test_aclose_closes_http_client(self, settings):
        client = HttpxAPIClient(base_url=BASE_URL)
        inner = client.client
        factory = RepositoryFactory(settings, api_client=client)

        await factory.aclose()

        assert inner.is_closed
