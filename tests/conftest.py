"""Shared fixtures."""

import httpx
import pytest
from doubles import BASE_URL, RecordingRepository

from layered_repository.clients import HttpxAPIClient
from layered_repository.entities import ProductEntity


@pytest.fixture
def widget():
    """A valid product."""
    return ProductEntity(id="P1", name="Widget", price=9.99)


@pytest.fixture
def gadget():
    """A second valid product."""
    return ProductEntity(id="P2", name="Gadget", price=24.5)


@pytest.fixture
def remote():
    """Recording stand-in for the remote leaf."""
    return RecordingRepository()


@pytest.fixture
def local():
    """Recording stand-in for the local leaf."""
    return RecordingRepository()


@pytest.fixture
def make_api_client():
    """Build an HttpxAPIClient whose requests are answered by a handler function."""

    def _make(handler) -> HttpxAPIClient:
        transport = httpx.MockTransport(handler)
        return HttpxAPIClient(
            base_url=BASE_URL,
            client=httpx.AsyncClient(transport=transport, base_url=BASE_URL),
        )

    return _make
