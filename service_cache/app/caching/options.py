"""
Cache key policy and options normalization.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from shared.config import DEFAULT_TTL_SECONDS
from shared.errors import ConfigurationError
from shared.logging import get_logger


KEY_OPTION = "serial"
TTL_OPTIONS = ("ttl", "expired")  # first present wins
RESERVED_OPTIONS = frozenset((KEY_OPTION,) + TTL_OPTIONS)

logger = get_logger("cache.options")


@dataclass(frozen=True)
class NormalizedOptions:
    """Cache controls split from the options meant for the fetch."""

    key: Optional[str]
    ttl: int
    passthrough: Dict[str, Any] = field(default_factory=dict)

    @property
    def cacheable(self) -> bool:
        return self.key is not None


def is_valid_ttl(value: Any) -> bool:
    """Return True for a positive integer number of seconds."""
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def normalize_key(value: Any) -> Optional[str]:
    """Return a usable cache key, or None when caching should be skipped."""
    if value is None:
        return None
    if not isinstance(value, str):
        logger.warning("Ignoring non-string cache key", key_type=type(value).__name__)
        return None
    if not value.strip():
        return None
    return value


def normalize_ttl(value: Any, default_ttl: int = DEFAULT_TTL_SECONDS) -> int:
    """Return ``value`` if it is a valid TTL, otherwise ``default_ttl``."""
    if value is None:
        return default_ttl
    if is_valid_ttl(value):
        return value
    logger.warning("Invalid cache TTL, using default", ttl=repr(value), default_ttl=default_ttl)
    return default_ttl


def normalize_options(
    options: Optional[Mapping[str, Any]],
    default_ttl: int = DEFAULT_TTL_SECONDS,
) -> NormalizedOptions:
    """Split the reserved cache options from the pass-through fetch options.

    The caller's mapping is left untouched; ``passthrough`` is a new dict
    that never contains ``serial``, ``ttl`` or ``expired``.

    A missing, empty or blank ``serial`` means the call is not cached. When
    both ``ttl`` and ``expired`` are given, ``ttl`` wins. TTLs that are not
    positive integers fall back to ``default_ttl``.
    """
    if not is_valid_ttl(default_ttl):
        raise ConfigurationError(
            "Default TTL must be a positive integer number of seconds",
            {"default_ttl": repr(default_ttl)}
        )

    options = options or {}

    raw_ttl = None
    for name in TTL_OPTIONS:
        if name in options:
            raw_ttl = options[name]
            break

    return NormalizedOptions(
        key=normalize_key(options.get(KEY_OPTION)),
        ttl=normalize_ttl(raw_ttl, default_ttl),
        passthrough={
            name: value for name, value in options.items()
            if name not in RESERVED_OPTIONS
        },
    )
