# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Observability and metrics for the specimen kernel.

Classes:
    UnifiedMetricsCollector: Metrics collector with dict snapshot and Prometheus.

Protocols:
    MetricsCollectorProtocol: Protocol for metrics collection backends.

Functions:
    get_metrics_collector: Get the global metrics collector singleton.
    reset_metrics_collector: Reset the global metrics collector singleton.

Constants:
    All metric name constants from constants module.
"""

from .collector import (
    METRIC_DEFINITIONS,
    MetricDefinition,
    UnifiedMetricsCollector,
    get_metrics_collector,
    reset_metrics_collector,
)
from .constants import (
    DISPOSABLES_RELEASED_TOTAL,
    DISPOSABLES_TRACKED_TOTAL,
    LATENCY_BUCKETS,
    METRIC_PREFIX,
    RELEASE_DURATION_SECONDS,
    RELEASE_FAILURES_TOTAL,
    SPECIMENS_CREATED_TOTAL,
    TRACKED_DISPOSABLES,
)
from .protocols import MetricsCollectorProtocol

__all__ = [
    "DISPOSABLES_RELEASED_TOTAL",
    "DISPOSABLES_TRACKED_TOTAL",
    "LATENCY_BUCKETS",
    "METRIC_DEFINITIONS",
    "METRIC_PREFIX",
    "RELEASE_DURATION_SECONDS",
    "RELEASE_FAILURES_TOTAL",
    "SPECIMENS_CREATED_TOTAL",
    "TRACKED_DISPOSABLES",
    "MetricDefinition",
    "MetricsCollectorProtocol",
    "UnifiedMetricsCollector",
    "get_metrics_collector",
    "reset_metrics_collector",
]
