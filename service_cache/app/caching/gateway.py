"""
Read-through cache gateway.
"""

import json
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional

from shared.config import DEFAULT_TTL_SECONDS
from shared.errors import ConfigurationError, SerializationError, StoreReadError, StoreWriteError
from shared.logging import get_logger
from .options import is_valid_ttl, normalize_key, normalize_options, normalize_ttl
from .results import ResultWrapper, SnapshotResult
from .store import KeyValueStore, resolve_store


Fallback = Callable[[], Awaitable[ResultWrapper]]
Fetch = Callable[[Dict[str, Any]], Awaitable[ResultWrapper]]

_MISS = object()


@dataclass(frozen=True)
class CacheGatewayConfig:
    """Configuration injected into a gateway once, at setup."""

    instance: Any = None
    disabled: bool = False
    default_ttl: int = DEFAULT_TTL_SECONDS


class CacheGateway:
    """Cache-aside lookups in front of a fallback computation.

    A keyed call reads the store first. On a hit the stored JSON is returned
    as a ``SnapshotResult``. On a miss the fallback runs, its materialized
    data is written with the TTL, and a snapshot of that same data is
    returned. Store failures of any kind never reach the caller; fallback
    failures always do, and are never cached.

    Concurrent misses on the same key are not deduplicated: each runs the
    fallback and the last write wins.
    """

    def __init__(self, config: CacheGatewayConfig, *, metrics: Optional[Any] = None):
        self.logger = get_logger("cache.gateway")
        self.metrics = metrics

        if not is_valid_ttl(config.default_ttl):
            raise ConfigurationError(
                "Default TTL must be a positive integer number of seconds",
                {"default_ttl": repr(config.default_ttl)}
            )
        self.default_ttl = config.default_ttl
        self.disabled = config.disabled is True

        self.store: Optional[KeyValueStore] = None
        if self.disabled:
            self.logger.warning("The cache has been loaded but is disabled")
        else:
            self.store = resolve_store(config.instance)

    async def retrieve(self, options: Optional[Mapping[str, Any]], fetch: Fetch) -> ResultWrapper:
        """Normalize ``options`` and run ``fetch`` through the cache.

        ``fetch`` only ever receives the pass-through options.
        """
        normalized = normalize_options(options, self.default_ttl)

        async def compute_fallback() -> ResultWrapper:
            return await fetch(normalized.passthrough)

        return await self.retrieve_with_cache(normalized.key, normalized.ttl, compute_fallback)

    async def retrieve_with_cache(
        self,
        key: Optional[str],
        ttl: Optional[int],
        compute_fallback: Fallback,
    ) -> ResultWrapper:
        """Return the cached result for ``key`` or compute, store and return it."""
        key = normalize_key(key)
        if key is None or self.disabled:
            self._count("cache_bypass_total", reason="disabled" if self.disabled else "no_key")
            return await compute_fallback()

        ttl = normalize_ttl(ttl, self.default_ttl)

        try:
            cached = await self._read(key)
        except StoreReadError as exc:
            self.logger.warning("Cache read failed, computing fresh data", key=key, code=exc.code, error=str(exc))
            self._count("cache_errors_total", operation="read")
            cached = _MISS

        if cached is not _MISS:
            self.logger.debug("Cache hit", key=key)
            self._count("cache_hits_total")
            return SnapshotResult(cached)

        self.logger.debug("Cache miss", key=key)
        self._count("cache_misses_total")

        started = time.perf_counter()
        result = await compute_fallback()
        data = result.materialize()
        self._observe("cache_fallback_duration_seconds", time.perf_counter() - started)

        try:
            text = self._serialize(key, data)
        except SerializationError as exc:
            self.logger.warning("Computed data is not cacheable", key=key, code=exc.code, error=str(exc))
            self._count("cache_errors_total", operation="serialize")
            return result

        await self._write(key, text, ttl)

        # Same decoding a later hit goes through, so both shapes match.
        return SnapshotResult(json.loads(text))

    async def _read(self, key: str) -> Any:
        """Return the decoded entry for ``key`` or ``_MISS``."""
        try:
            raw = await self.store.get(key)
        except Exception as e:
            raise StoreReadError(key, str(e) or type(e).__name__) from e

        if raw is None:
            return _MISS

        try:
            if isinstance(raw, (bytes, bytearray)):
                raw = raw.decode("utf-8")
            return json.loads(raw)
        except (UnicodeDecodeError, ValueError, TypeError) as e:
            raise SerializationError(key, details={"error": str(e)}) from e

    def _serialize(self, key: str, data: Any) -> str:
        try:
            return json.dumps(data, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
        except (TypeError, ValueError) as e:
            raise SerializationError(key, "Computed data is not JSON serializable", {"error": str(e)}) from e

    async def _write(self, key: str, text: str, ttl: int) -> bool:
        """Best-effort store write; failures are logged, never raised."""
        try:
            await self.store.set(key, text, ex=ttl)
        except Exception as e:
            error = StoreWriteError(key, str(e) or type(e).__name__)
            self.logger.warning("Cache write failed", key=key, code=error.code, error=error.message)
            self._count("cache_errors_total", operation="write")
            return False

        self.logger.debug("Cached value", key=key, ttl=ttl)
        return True

    def _count(self, metric_name: str, **labels):
        if self.metrics is not None:
            self.metrics.increment_counter(metric_name, **labels)

    def _observe(self, metric_name: str, value: float, **labels):
        if self.metrics is not None:
            self.metrics.observe_histogram(metric_name, value, **labels)
