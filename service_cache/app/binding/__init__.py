"""
Binding of the cache gateway onto data-access models.
"""

from .model import FETCH_METHODS, CachedFetchMixin, install_cache

__all__ = ["FETCH_METHODS", "CachedFetchMixin", "install_cache"]
