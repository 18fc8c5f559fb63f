"""
Read-through caching package.

Cache entries are only ever created on a miss and expire passively in the
store. There is no invalidation on writes and no deduplication of
concurrent misses.
"""

from .gateway import CacheGateway, CacheGatewayConfig
from .options import NormalizedOptions, normalize_options
from .results import ModelResult, ResultWrapper, SnapshotResult
from .store import KeyValueStore, RedisStore, create_redis_client, resolve_store

__all__ = [
    "CacheGateway",
    "CacheGatewayConfig",
    "KeyValueStore",
    "ModelResult",
    "NormalizedOptions",
    "RedisStore",
    "ResultWrapper",
    "SnapshotResult",
    "create_redis_client",
    "normalize_options",
    "resolve_store",
]
