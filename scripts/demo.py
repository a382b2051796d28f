#!/usr/bin/env python3
"""
Demo script for the layered product repository.

Runs the full decorator pipeline against an in-process catalog service
(httpx.MockTransport), so no network or Redis is required.
"""

import asyncio
import json

import httpx
from tenacity import wait_none

from layered_repository import (
    HttpxAPIClient,
    InMemoryProductStore,
    LocalProductRepository,
    NotFoundError,
    ProductEntity,
    PrometheusMetricsRecorder,
    RemoteProductRepository,
    StaticConnectivity,
    SyncService,
    ValidationError,
    build_pipeline,
    configure_logging,
)

BASE_URL = "https://catalog.demo"


class DemoCatalog:
    """Tiny catalog service answering httpx requests from a dict."""

    def __init__(self) -> None:
        self.products: dict[str, dict] = {}
        self.outages = 0
        self.request_count = 0

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.request_count += 1
        if self.outages:
            self.outages -= 1
            return httpx.Response(503)

        parts = request.url.path.strip("/").split("/")
        if len(parts) == 1:
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
        else:
            del self.products[product_id]
        return httpx.Response(204)


def print_section(title: str) -> None:
    """Print a section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


async def demo_online(repository, catalog: DemoCatalog) -> None:
    """Demonstrate CRUD through the full pipeline while online."""
    print_section("Online CRUD")

    products = [
        ProductEntity(id="P1", name="Widget", price=9.99),
        ProductEntity(id="P2", name="Gadget", price=24.50),
        ProductEntity(id="P3", name="Gizmo", price=3.75),
    ]

    print("\n📝 Creating products...")
    for product in products:
        await repository.create(product)
        print(f"  ✓ Created: {product.id} {product.name} ({product.price:.2f})")

    before = catalog.request_count
    product = await repository.get_one("P1")
    print(f"\n🔍 get_one('P1') -> {product.name}, served from cache: {catalog.request_count == before}")

    await repository.delete("P3")
    try:
        await repository.get_one("P3")
    except NotFoundError as e:
        print(f"  ✓ After delete: {e}")


async def demo_validation(repository) -> None:
    """Demonstrate fail-fast validation."""
    print_section("Validation")

    invalid = [
        ProductEntity(id=" ", name="Blank id", price=1.0),
        ProductEntity(id="P9", name="", price=1.0),
        ProductEntity(id="P9", name="Negative", price=-5.0),
    ]
    for product in invalid:
        try:
            await repository.create(product)
        except ValidationError as e:
            print(f"  ✗ Rejected ({e.reason.value}): {e}")


async def demo_resilience(repository, catalog: DemoCatalog, connectivity: StaticConnectivity) -> None:
    """Demonstrate retries, fallback and offline mode."""
    print_section("Retries and Offline Mode")

    catalog.outages = 2
    await repository.update(ProductEntity(id="P2", name="Gadget Pro", price=29.0))
    print("\n🔁 Update succeeded after 2 simulated 503 responses")

    catalog.outages = 10
    products = await repository.get_all()
    print(f"🌧  Catalog down, read served from local copy: {[p.id for p in products]}")
    catalog.outages = 0

    connectivity.set_connected(False)
    await repository.create(ProductEntity(id="P4", name="Offline Thing", price=1.5))
    print("📴 Offline: created P4 locally")
    print(f"   Catalog has: {sorted(catalog.products)}")
    connectivity.set_connected(True)


async def demo_sync(remote, local, catalog: DemoCatalog) -> None:
    """Demonstrate reconciling local and remote state."""
    print_section("Sync")

    catalog.products["P5"] = {"id": "P5", "name": "Remote Only", "price": 12.0}
    report = await SyncService(remote=remote, local=local).sync()
    print(f"\n🔄 Pushed: {report.pushed}  Pulled: {report.pulled}")
    print(f"   Local has: {sorted(p.id for p in await local.get_all())}")


async def main() -> None:
    """Run all demos."""
    configure_logging("WARNING")

    print("\n🚀 Layered Repository Demo")
    print("=" * 70)
    print("Metrics -> Logging -> Validating -> Retrying -> Offline -> Caching -> Remote")

    catalog = DemoCatalog()
    http = httpx.AsyncClient(transport=httpx.MockTransport(catalog), base_url=BASE_URL)
    api_client = HttpxAPIClient(base_url=BASE_URL, client=http)
    remote = RemoteProductRepository(api_client)
    local = LocalProductRepository(InMemoryProductStore())
    connectivity = StaticConnectivity()
    metrics = PrometheusMetricsRecorder()

    repository = build_pipeline(
        remote,
        local,
        connectivity,
        max_attempts=3,
        wait=wait_none(),
        metrics=metrics,
    )

    try:
        await demo_online(repository, catalog)
        await demo_validation(repository)
        await demo_resilience(repository, catalog, connectivity)
        await demo_sync(remote, local, catalog)

        print_section("Metrics")
        for line in metrics.render().decode().splitlines():
            if line.startswith("product_repository_calls_total"):
                print(f"  {line}")

        print("\n" + "=" * 70)
        print("✅ Demo completed successfully!")
        print("=" * 70)
    finally:
        await api_client.close()


if __name__ == "__main__":
    asyncio.run(main())
