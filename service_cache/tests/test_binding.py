"""
Unit tests for cached fetch methods on models.
"""

from typing import Any, Dict, List

import pytest
from pydantic import BaseModel

from service_cache.app.binding.model import CachedFetchMixin, install_cache
from service_cache.app.caching.gateway import CacheGateway, CacheGatewayConfig
from service_cache.app.caching.results import ModelResult
from shared.errors import ConfigurationError
from shared.test_helpers import InMemoryStore


class CarRecord(BaseModel):
    id: int
    name: str


class Car(CachedFetchMixin):
    """Minimal data-access model recording how it was fetched."""

    calls: List[Dict[str, Any]] = []

    def __init__(self, **attributes):
        self.attributes = attributes

    async def fetch(self, **options):
        type(self).calls.append({"method": "fetch", "attributes": self.attributes, "options": options})
        return ModelResult(CarRecord(id=self.attributes.get("id", 1), name="Car"))

    async def fetch_all(self, **options):
        type(self).calls.append({"method": "fetch_all", "attributes": self.attributes, "options": options})
        return ModelResult([CarRecord(id=1, name="Car"), CarRecord(id=2, name="Truck")])

    async def fetch_page(self, page: int = 1, page_size: int = 10, **options):
        type(self).calls.append({"method": "fetch_page", "attributes": self.attributes, "options": options})
        return ModelResult([CarRecord(id=page, name=f"Page {page} of {page_size}")])


class TestCachedFetchMixin:
    """Test cases for the model binding layer."""

    @pytest.fixture
    def store(self):
        return InMemoryStore()

    @pytest.fixture(autouse=True)
    def car_model(self, store):
        Car.calls = []
        install_cache(Car, CacheGateway(CacheGatewayConfig(instance=store)))
        yield Car
        Car.cache_gateway = None

    @pytest.mark.asyncio
    async def test_fetch_cache_on_instance(self, store):
        first = await Car(id=5).fetch_cache({"serial": "car_5", "with_related": ["engine"]})
        second = await Car(id=5).fetch_cache({"serial": "car_5", "with_related": ["engine"]})

        assert first.materialize() == {"id": 5, "name": "Car"}
        assert second.materialize() == first.materialize()
        assert Car.calls == [
            {"method": "fetch", "attributes": {"id": 5}, "options": {"with_related": ["engine"]}}
        ]
        assert "car_5" in store.entries

    @pytest.mark.asyncio
    async def test_fetch_all_cache_on_class_forges_instance(self):
        result = await Car.fetch_all_cache({"serial": "cars_all", "expired": 600})

        assert [item["name"] for item in result.materialize()] == ["Car", "Truck"]
        assert Car.calls == [{"method": "fetch_all", "attributes": {}, "options": {}}]

    @pytest.mark.asyncio
    async def test_fetch_page_cache_forwards_page_options(self, store):
        result = await Car.fetch_page_cache({"serial": "cars_page_2", "page": 2, "page_size": 25})

        assert result.materialize() == [{"id": 2, "name": "Page 2 of 25"}]
        assert store.set_calls[0][0] == "cars_page_2"
        assert store.set_calls[0][2] == 3600

    @pytest.mark.asyncio
    async def test_no_serial_fetches_live(self, store):
        result = await Car(id=3).fetch_cache({"require": True})

        assert isinstance(result, ModelResult)
        assert result.materialize() == {"id": 3, "name": "Car"}
        assert Car.calls[0]["options"] == {"require": True}
        assert not store.touched

    @pytest.mark.asyncio
    async def test_no_options(self):
        result = await Car.fetch_cache()

        assert result.materialize() == {"id": 1, "name": "Car"}

    @pytest.mark.asyncio
    async def test_unknown_method_rejected(self):
        with pytest.raises(ValueError, match="Cannot cache 'save'"):
            await Car().retrieve_cache({"serial": "k"}, "save")

    @pytest.mark.asyncio
    async def test_missing_gateway(self):
        Car.cache_gateway = None

        with pytest.raises(ConfigurationError, match="No cache gateway installed on Car"):
            await Car.fetch_cache({"serial": "car_fetch"})

    @pytest.mark.asyncio
    async def test_unimplemented_fetch(self):
        class Plane(CachedFetchMixin):
            pass

        install_cache(Plane, Car.cache_gateway)

        with pytest.raises(NotImplementedError, match="Plane does not implement fetch_all"):
            await Plane.fetch_all_cache({"serial": "planes"})

    def test_method_names(self):
        assert Car.fetch_cache.__name__ == "fetch_cache"
        assert Car(id=1).fetch_page_cache.__name__ == "fetch_page_cache"

    def test_install_cache_requires_mixin(self, store):
        gateway = CacheGateway(CacheGatewayConfig(instance=store))

        with pytest.raises(TypeError):
            install_cache(CarRecord, gateway)

    def test_install_cache_returns_model(self, store):
        gateway = CacheGateway(CacheGatewayConfig(instance=store))

        assert install_cache(Car, gateway) is Car
        assert Car.cache_gateway is gateway
