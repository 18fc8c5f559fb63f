"""
Cache gateway bootstrap for host applications.
"""

from typing import Any, Optional

from prometheus_client import CollectorRegistry

from shared.config import CacheSettings, get_settings
from shared.logging import configure_logging, get_logger
from shared.metrics import MetricsCollector, get_metrics_collector
from .caching.gateway import CacheGateway, CacheGatewayConfig
from .caching.store import create_redis_client


def create_gateway(
    settings: Optional[CacheSettings] = None,
    client: Any = None,
    *,
    metrics: Optional[Any] = None,
    registry: Optional[CollectorRegistry] = None,
) -> CacheGateway:
    """Build a ``CacheGateway`` from settings.

    ``client`` is the host's key-value store client. When it is omitted and
    caching is enabled, a Redis client is created from ``settings.redis_url``;
    the host owns it from then on and is responsible for closing it.
    """
    settings = settings or get_settings()
    configure_logging(settings.service_name, settings.log_level)
    logger = get_logger(f"{settings.service_name}.bootstrap")

    if client is None and not settings.disabled:
        client = create_redis_client(settings)

    if metrics is None and settings.enable_metrics:
        metrics = get_metrics_collector(settings.service_name, registry)

    if isinstance(metrics, MetricsCollector) and settings.metrics_port is not None:
        metrics.start_metrics_server(settings.metrics_port)
        logger.info("Metrics server started", port=settings.metrics_port)

    gateway = CacheGateway(
        CacheGatewayConfig(
            instance=client,
            disabled=settings.disabled,
            default_ttl=settings.default_ttl,
        ),
        metrics=metrics,
    )

    logger.info(
        "Cache gateway ready",
        env=settings.env,
        disabled=gateway.disabled,
        default_ttl=gateway.default_ttl,
        metrics=metrics is not None,
    )
    return gateway
