# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Unified metrics collector backed by a dict snapshot and Prometheus.

This module provides the UnifiedMetricsCollector class that serves as the
single source of truth for all metrics in the specimen kernel.

Features:
    1. Thread-safe counter/gauge/histogram operations
    2. Prometheus metric registration (optional per collector)
    3. Dict snapshot for JSON export and assertions in tests
    4. Label cardinality protection (max 1000 unique combinations per metric)
    5. Optional HTTP server for Prometheus scraping

Usage:
    >>> from specimen_kernel.observability.collector import get_metrics_collector
    >>> collector = get_metrics_collector()
    >>> collector.inc_counter('specimen_kernel_disposables_tracked_total',
    ...                       labels={'tracker': 'default'})
    >>> metrics = collector.get_metrics()

Thread Safety:
    All operations are thread-safe. Uses RLock for reentrant locking.
"""

from __future__ import annotations

import logging
import threading
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, ClassVar

from prometheus_client import (
    REGISTRY,
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
    start_http_server,
)

from .constants import (
    DISPOSABLES_RELEASED_TOTAL,
    DISPOSABLES_TRACKED_TOTAL,
    LATENCY_BUCKETS,
    RELEASE_DURATION_SECONDS,
    RELEASE_FAILURES_TOTAL,
    SPECIMENS_CREATED_TOTAL,
    TRACKED_DISPOSABLES,
)

logger = logging.getLogger(__name__)


@dataclass
class MetricDefinition:
    """
    Definition for a metric that can be instantiated.

    This dataclass defines the schema for metrics, including their type,
    description, labels, and histogram buckets.
    """

    name: str
    metric_type: str  # 'counter', 'gauge', 'histogram'
    description: str
    label_names: tuple[str, ...] = ()
    buckets: list[float] | None = None


METRIC_DEFINITIONS: dict[str, MetricDefinition] = {
    SPECIMENS_CREATED_TOTAL: MetricDefinition(
        SPECIMENS_CREATED_TOTAL,
        "counter",
        "Total specimens returned by decorated builders",
        ("tracker",),
    ),
    DISPOSABLES_TRACKED_TOTAL: MetricDefinition(
        DISPOSABLES_TRACKED_TOTAL,
        "counter",
        "Total disposable specimens tracked",
        ("tracker",),
    ),
    DISPOSABLES_RELEASED_TOTAL: MetricDefinition(
        DISPOSABLES_RELEASED_TOTAL,
        "counter",
        "Total tracked resources released",
        ("tracker",),
    ),
    RELEASE_FAILURES_TOTAL: MetricDefinition(
        RELEASE_FAILURES_TOTAL,
        "counter",
        "Total tracked resources that failed to release",
        ("tracker", "error_type"),
    ),
    TRACKED_DISPOSABLES: MetricDefinition(
        TRACKED_DISPOSABLES,
        "gauge",
        "Resources currently awaiting release",
        ("tracker",),
    ),
    RELEASE_DURATION_SECONDS: MetricDefinition(
        RELEASE_DURATION_SECONDS,
        "histogram",
        "Duration of bulk release calls",
        ("tracker",),
        buckets=LATENCY_BUCKETS,
    ),
}


class UnifiedMetricsCollector:
    """
    Metrics collector keeping a dict snapshot mirrored into Prometheus.

    Thread Safety:
        All operations use RLock for thread-safe access. The lock is reentrant
        to allow nested calls from callbacks.

    Cardinality Protection:
        To prevent unbounded memory growth, a maximum of MAX_LABEL_COMBINATIONS
        unique label combinations are tracked per metric.

    Example:
        >>> collector = UnifiedMetricsCollector(registry=CollectorRegistry())
        >>> collector.inc_counter('specimen_kernel_disposables_tracked_total',
        ...                       labels={'tracker': 'default'})
        >>> collector.get_metrics()["counters"]
        {'specimen_kernel_disposables_tracked_total': {'tracker=default': 1}}
    """

    MAX_LABEL_COMBINATIONS: ClassVar[int] = 1000

    def __init__(
        self,
        enable_prometheus: bool = True,
        registry: CollectorRegistry | None = None,
    ) -> None:
        """
        Initialize the metrics collector.

        Args:
            enable_prometheus: Whether to mirror metrics into Prometheus
            registry: Optional Prometheus CollectorRegistry (use a fresh one
                in tests to avoid duplicate registration)
        """
        self._enable_prometheus = enable_prometheus
        self._registry = registry if registry is not None else REGISTRY

        self._counters: dict[str, dict[str, int]] = defaultdict(
            lambda: defaultdict(int)
        )
        self._gauges: dict[str, dict[str, float]] = defaultdict(
            lambda: defaultdict(float)
        )
        self._histograms: dict[str, dict[str, list[float]]] = defaultdict(
            lambda: defaultdict(list)
        )

        self._lock = threading.RLock()

        # Prometheus metric instances (lazy initialized)
        self._prom_counters: dict[str, Counter | None] = {}
        self._prom_gauges: dict[str, Gauge | None] = {}
        self._prom_histograms: dict[str, Histogram | None] = {}

        self._label_combinations: dict[str, set[str]] = defaultdict(set)

        self._server_running = False

        logger.debug(
            "UnifiedMetricsCollector initialized (prometheus=%s)",
            "enabled" if self._enable_prometheus else "disabled",
        )

    def _labels_to_key(self, labels: dict[str, str] | None) -> str:
        """Convert labels dict to a stable string key."""
        if not labels:
            return ""
        return ",".join(f"{k}={v}" for k, v in sorted(labels.items()))

    def _check_cardinality(self, name: str, label_key: str) -> bool:
        """
        Check if adding this label combination would exceed cardinality limit.

        Returns:
            True if the label combination is allowed, False otherwise
        """
        if label_key in self._label_combinations[name]:
            return True
        if len(self._label_combinations[name]) >= self.MAX_LABEL_COMBINATIONS:
            logger.warning(
                "Cardinality limit (%d) reached for metric %s. "
                "Dropping label combination: %s",
                self.MAX_LABEL_COMBINATIONS,
                name,
                label_key,
            )
            return False
        self._label_combinations[name].add(label_key)
        return True

    def _get_or_create_prom_metric(
        self,
        name: str,
        metric_type: str,
        cache: dict[str, Any],
        labels: dict[str, str] | None,
    ) -> Any | None:
        """Get or create a Prometheus metric of the given type."""
        if not self._enable_prometheus:
            return None

        with self._lock:
            if name in cache:
                return cache[name]

            defn = METRIC_DEFINITIONS.get(name)
            if defn is not None and defn.metric_type == metric_type:
                description = defn.description
                label_names = list(defn.label_names)
                buckets = defn.buckets or LATENCY_BUCKETS
            else:
                # Dynamic metric (not pre-defined); labels fixed by first use
                description = f"Dynamic {metric_type}: {name}"
                label_names = sorted(labels) if labels else []
                buckets = LATENCY_BUCKETS

            try:
                if metric_type == "counter":
                    metric: Any = Counter(
                        name, description, label_names, registry=self._registry
                    )
                elif metric_type == "gauge":
                    metric = Gauge(
                        name, description, label_names, registry=self._registry
                    )
                else:
                    metric = Histogram(
                        name,
                        description,
                        label_names,
                        buckets=buckets,
                        registry=self._registry,
                    )
            except ValueError as e:
                # Raised by prometheus_client on duplicate registration
                logger.warning(
                    "Failed to create Prometheus %s %s: %s", metric_type, name, e
                )
                metric = None

            cache[name] = metric
            return metric

    def _apply(
        self, metric: Any | None, labels: dict[str, str] | None, op: str, *args: Any
    ) -> None:
        if metric is None:
            return
        try:
            target = metric.labels(**labels) if labels else metric
            getattr(target, op)(*args)
        except ValueError as e:
            # Label names mismatch the metric definition
            logger.debug("Prometheus %s failed for %s: %s", op, metric, e)

    # === Counter Operations ===

    def inc_counter(
        self,
        name: str,
        value: int = 1,
        labels: dict[str, str] | None = None,
    ) -> None:
        """
        Increment a counter metric.

        Raises:
            ValueError: If value is negative
        """
        if value < 0:
            raise ValueError("Counter increment must be non-negative")

        label_key = self._labels_to_key(labels)

        with self._lock:
            if not self._check_cardinality(name, label_key):
                return
            self._counters[name][label_key] += value

        prom = self._get_or_create_prom_metric(
            name, "counter", self._prom_counters, labels
        )
        self._apply(prom, labels, "inc", value)

    # === Gauge Operations ===

    def set_gauge(
        self,
        name: str,
        value: float,
        labels: dict[str, str] | None = None,
    ) -> None:
        """Set a gauge metric to a specific value."""
        label_key = self._labels_to_key(labels)

        with self._lock:
            if not self._check_cardinality(name, label_key):
                return
            self._gauges[name][label_key] = value

        prom = self._get_or_create_prom_metric(name, "gauge", self._prom_gauges, labels)
        self._apply(prom, labels, "set", value)

    def inc_gauge(
        self,
        name: str,
        value: float = 1.0,
        labels: dict[str, str] | None = None,
    ) -> None:
        """Increment a gauge metric."""
        label_key = self._labels_to_key(labels)

        with self._lock:
            if not self._check_cardinality(name, label_key):
                return
            self._gauges[name][label_key] += value

        prom = self._get_or_create_prom_metric(name, "gauge", self._prom_gauges, labels)
        self._apply(prom, labels, "inc", value)

    def dec_gauge(
        self,
        name: str,
        value: float = 1.0,
        labels: dict[str, str] | None = None,
    ) -> None:
        """Decrement a gauge metric."""
        label_key = self._labels_to_key(labels)

        with self._lock:
            if not self._check_cardinality(name, label_key):
                return
            self._gauges[name][label_key] -= value

        prom = self._get_or_create_prom_metric(name, "gauge", self._prom_gauges, labels)
        self._apply(prom, labels, "dec", value)

    # === Histogram Operations ===

    def observe_histogram(
        self,
        name: str,
        value: float,
        labels: dict[str, str] | None = None,
    ) -> None:
        """Record an observation in a histogram."""
        label_key = self._labels_to_key(labels)

        with self._lock:
            if not self._check_cardinality(name, label_key):
                return
            observations = self._histograms[name][label_key]
            observations.append(value)
            # Keep only recent observations to prevent memory growth
            if len(observations) > 10000:
                self._histograms[name][label_key] = observations[-5000:]

        prom = self._get_or_create_prom_metric(
            name, "histogram", self._prom_histograms, labels
        )
        self._apply(prom, labels, "observe", value)

    # === Snapshot Operations ===

    def get_metrics(self) -> dict[str, Any]:
        """
        Get a snapshot of all metrics.

        Returns a dict suitable for JSON serialization with structure:
        {
            "counters": {"metric_name": {"label_key": value, ...}, ...},
            "gauges": {"metric_name": {"label_key": value, ...}, ...},
            "histograms": {"metric_name": {"label_key": {...}, ...}, ...}
        }
        """
        with self._lock:
            counters = {
                name: dict(label_values)
                for name, label_values in self._counters.items()
            }
            gauges = {
                name: dict(label_values) for name, label_values in self._gauges.items()
            }

            histograms: dict[str, dict[str, dict[str, Any]]] = {}
            for name, label_values in self._histograms.items():
                histograms[name] = {}
                for label_key, observations in label_values.items():
                    if observations:
                        histograms[name][label_key] = {
                            "count": len(observations),
                            "sum": sum(observations),
                            "avg": sum(observations) / len(observations),
                            "min": min(observations),
                            "max": max(observations),
                        }

        return {
            "counters": counters,
            "gauges": gauges,
            "histograms": histograms,
        }

    # === Lifecycle ===

    def reset(self) -> None:
        """Reset all metrics to zero."""
        with self._lock:
            self._counters.clear()
            self._gauges.clear()
            self._histograms.clear()
            self._label_combinations.clear()

        logger.debug("Metrics collector reset")

    # === Prometheus HTTP Server ===

    def start_http_server(self, host: str = "127.0.0.1", port: int = 9090) -> bool:
        """
        Start the Prometheus HTTP server for metrics scraping.

        Args:
            host: Host to bind to (default: 127.0.0.1 for localhost only)
            port: Port to bind to

        Returns:
            True if server started successfully, False otherwise
        """
        if self._server_running:
            logger.warning("Prometheus server already running")
            return True

        try:
            # start_http_server runs in a daemon thread
            start_http_server(port, addr=host, registry=self._registry)
        except OSError as e:
            logger.error("Failed to start Prometheus server: %s", e)
            return False

        self._server_running = True
        logger.info("Prometheus metrics server started on %s:%d", host, port)
        return True

    @property
    def prometheus_enabled(self) -> bool:
        """Check if Prometheus metrics are enabled."""
        return self._enable_prometheus

    @property
    def server_running(self) -> bool:
        """Check if the Prometheus HTTP server is running."""
        return self._server_running


# =============================================================================
# Singleton Pattern
# =============================================================================

_global_collector: UnifiedMetricsCollector | None = None
_collector_lock = threading.Lock()


def get_metrics_collector(
    enable_prometheus: bool = True,
) -> UnifiedMetricsCollector:
    """
    Get or create the global metrics collector singleton.

    Args:
        enable_prometheus: Whether to enable Prometheus metrics
            (only used on first call)

    Returns:
        The UnifiedMetricsCollector singleton
    """
    global _global_collector

    if _global_collector is None:
        with _collector_lock:
            if _global_collector is None:
                _global_collector = UnifiedMetricsCollector(
                    enable_prometheus=enable_prometheus
                )

    return _global_collector


def reset_metrics_collector() -> None:
    """
    Reset the global metrics collector singleton (mainly for testing).

    Prometheus metrics already registered in the default registry stay
    registered; a new singleton logs a warning and keeps only its dict
    snapshot for those names.
    """
    global _global_collector
    with _collector_lock:
        if _global_collector:
            _global_collector.reset()
        _global_collector = None


__all__ = [
    "METRIC_DEFINITIONS",
    "MetricDefinition",
    "UnifiedMetricsCollector",
    "get_metrics_collector",
    "reset_metrics_collector",
]
