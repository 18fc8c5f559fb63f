"""
Shared utilities for the read-through cache layer.

This package aggregates common building blocks consumed by the cache service:

- config: Settings via pydantic-settings
- logging: Structured logging with request correlation
- metrics: Prometheus metrics helpers
- errors: Canonical error types and responses

Do not import from service_* packages into shared/.
"""
