"""
Shared metrics configuration for the read-through cache layer.
"""

from prometheus_client import Counter, Histogram, Info, CollectorRegistry, REGISTRY, start_http_server
from typing import Dict, Any, Optional
import time
import threading
from contextlib import contextmanager


class MetricsCollector:
    """Centralized Prometheus metrics collector for the cache layer."""

    def __init__(self, service_name: str = "cache", registry: Optional[CollectorRegistry] = None):
        self.service_name = service_name
        self.registry = registry
        self._metrics: Dict[str, Any] = {}
        self._lock = threading.Lock()
        self._setup_metrics()

    def _setup_metrics(self):
        """Set up cache metrics."""

        self._metrics["service_info"] = Info(
            "cache_service",
            "Cache service information",
            registry=self.registry
        )
        self._metrics["service_info"].info({
            "service": self.service_name,
            "version": "1.0.0"
        })

        self._metrics["cache_hits_total"] = Counter(
            "cache_hits_total",
            "Total cache hits",
            registry=self.registry
        )

        self._metrics["cache_misses_total"] = Counter(
            "cache_misses_total",
            "Total cache misses",
            registry=self.registry
        )

        self._metrics["cache_bypass_total"] = Counter(
            "cache_bypass_total",
            "Total calls that skipped the cache",
            ["reason"],
            registry=self.registry
        )

        self._metrics["cache_errors_total"] = Counter(
            "cache_errors_total",
            "Total non-fatal cache store errors",
            ["operation"],
            registry=self.registry
        )

        self._metrics["cache_fallback_duration_seconds"] = Histogram(
            "cache_fallback_duration_seconds",
            "Duration of fallback computations on a miss, in seconds",
            registry=self.registry
        )

    def get_metric(self, name: str):
        """Get a metric by name."""
        return self._metrics.get(name)

    def start_metrics_server(self, port: int = 9090):
        """Start the Prometheus metrics server."""
        start_http_server(port, registry=self.registry if self.registry is not None else REGISTRY)

    def _resolve(self, metric_name: str, labels: Dict[str, Any]):
        metric = self._metrics.get(metric_name)
        if metric is None:
            return None
        return metric.labels(**labels) if labels else metric

    @contextmanager
    def time_operation(self, operation_name: str, **labels):
        """Context manager to time an operation."""
        start_time = time.time()
        try:
            yield
        finally:
            self.observe_histogram(operation_name, time.time() - start_time, **labels)

    def increment_counter(self, metric_name: str, **labels):
        """Increment a counter metric."""
        with self._lock:
            metric = self._resolve(metric_name, labels)
            if metric is not None:
                metric.inc()

    def observe_histogram(self, metric_name: str, value: float, **labels):
        """Observe a histogram metric."""
        with self._lock:
            metric = self._resolve(metric_name, labels)
            if metric is not None:
                metric.observe(value)


def get_metrics_collector(service_name: str = "cache", registry: Optional[CollectorRegistry] = None) -> MetricsCollector:
    """Get a metrics collector for a service."""
    return MetricsCollector(service_name, registry)
