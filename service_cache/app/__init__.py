"""
Read-through cache service package.

Callers tag a read with a unique cache key; the gateway answers from the
key-value store when it can and falls through to the data source otherwise,
storing the fresh result with a TTL.

Structure:
- app.main: Settings-driven gateway bootstrap for host applications.
- app.caching: Options normalizer, gateway, result wrappers and store adapters.
- app.binding: Cached fetch methods for data-access model classes.
"""
