"""
Cached fetch methods for data-access model classes.

A model class mixes in ``CachedFetchMixin``, implements any of the coroutine
methods ``fetch``, ``fetch_all`` and ``fetch_page`` (each returning a
``ResultWrapper``), and gets a gateway bound with ``install_cache``::

    class Car(CachedFetchMixin):
        async def fetch(self, **options):
            ...

    install_cache(Car, gateway)

    result = await Car(params).fetch_cache({"serial": "car_fetch", "with_related": ["engine"]})
    result = await Car.fetch_all_cache({"serial": "cars_all", "expired": 600})

Called on the class, a cached fetch first builds an instance with
``forge()``. The reserved ``serial``, ``expired`` and ``ttl`` options are
removed before the remaining options reach the fetch as keyword arguments.
"""

from typing import Any, ClassVar, Dict, Mapping, Optional, Type, TypeVar

from shared.errors import ConfigurationError
from ..caching.gateway import CacheGateway
from ..caching.results import ResultWrapper


FETCH_METHODS = ("fetch", "fetch_all", "fetch_page")

ModelT = TypeVar("ModelT", bound=Type["CachedFetchMixin"])


class _CachedFetch:
    """Descriptor that works from an instance or from the class itself."""

    def __init__(self, method: str):
        self.method = method
        self.name = f"{method}_cache"

    def __set_name__(self, owner, name):
        self.name = name

    def __get__(self, instance, owner):
        method = self.method

        async def cached_fetch(options: Optional[Mapping[str, Any]] = None) -> ResultWrapper:
            target = instance if instance is not None else owner.forge()
            return await target.retrieve_cache(options, method)

        cached_fetch.__name__ = self.name
        cached_fetch.__qualname__ = f"{owner.__name__}.{self.name}"
        return cached_fetch


class CachedFetchMixin:
    """Adds ``fetch_cache``, ``fetch_all_cache`` and ``fetch_page_cache``."""

    cache_gateway: ClassVar[Optional[CacheGateway]] = None

    fetch_cache = _CachedFetch("fetch")
    fetch_all_cache = _CachedFetch("fetch_all")
    fetch_page_cache = _CachedFetch("fetch_page")

    @classmethod
    def forge(cls, **attributes):
        """Build an instance for class-level cached fetches."""
        return cls(**attributes)

    async def retrieve_cache(self, options: Optional[Mapping[str, Any]], method: str) -> ResultWrapper:
        """Run ``method`` through the installed cache gateway."""
        if method not in FETCH_METHODS:
            raise ValueError(f"Cannot cache {method!r}, expected one of {', '.join(FETCH_METHODS)}")

        gateway = type(self).cache_gateway
        if gateway is None:
            raise ConfigurationError(
                f"No cache gateway installed on {type(self).__name__}",
                {"model": type(self).__name__}
            )

        bound_fetch = getattr(self, method, None)
        if bound_fetch is None:
            raise NotImplementedError(f"{type(self).__name__} does not implement {method}()")

        async def fetch(passthrough: Dict[str, Any]) -> ResultWrapper:
            return await bound_fetch(**passthrough)

        return await gateway.retrieve(options, fetch)


def install_cache(model_cls: ModelT, gateway: CacheGateway) -> ModelT:
    """Bind ``gateway`` to ``model_cls`` and its subclasses."""
    if not (isinstance(model_cls, type) and issubclass(model_cls, CachedFetchMixin)):
        raise TypeError(f"{model_cls!r} must subclass CachedFetchMixin")
    model_cls.cache_gateway = gateway
    return model_cls
