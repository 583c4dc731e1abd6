# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Metric name constants following Prometheus naming conventions.

All metric names use the `specimen_kernel_` prefix for Prometheus
compatibility.

Naming Conventions:
    - Counter metrics end with `_total`
    - Histogram metrics for time end with `_seconds`
    - Gauges use present-tense descriptive names

Label Best Practices:
    Every tracker metric carries a single `tracker` label whose value comes
    from TrackerConfig.tracker_name. NEVER label by request or specimen;
    both are unbounded.

Usage:
    >>> from specimen_kernel.observability.constants import (
    ...     DISPOSABLES_TRACKED_TOTAL, METRIC_PREFIX
    ... )
    >>> print(DISPOSABLES_TRACKED_TOTAL)
    'specimen_kernel_disposables_tracked_total'
"""


# =============================================================================
# Global Prefix
# =============================================================================

METRIC_PREFIX = "specimen_kernel"
"""Prefix for all Prometheus metrics in this library."""


# =============================================================================
# Creation Metrics (kernel/tracker.py)
# =============================================================================

SPECIMENS_CREATED_TOTAL = f"{METRIC_PREFIX}_specimens_created_total"
"""Total create() calls that returned from the decorated builder."""

DISPOSABLES_TRACKED_TOTAL = f"{METRIC_PREFIX}_disposables_tracked_total"
"""Total disposable specimens added to a tracked collection."""


# =============================================================================
# Release Metrics (kernel/tracker.py)
# =============================================================================

DISPOSABLES_RELEASED_TOTAL = f"{METRIC_PREFIX}_disposables_released_total"
"""Total tracked resources whose close() completed."""

RELEASE_FAILURES_TOTAL = f"{METRIC_PREFIX}_release_failures_total"
"""Total tracked resources whose close() raised."""

RELEASE_DURATION_SECONDS = f"{METRIC_PREFIX}_release_duration_seconds"
"""Duration of bulk release calls (histogram)."""


# =============================================================================
# Gauges
# =============================================================================

TRACKED_DISPOSABLES = f"{METRIC_PREFIX}_tracked_disposables"
"""Number of resources currently awaiting release."""


# =============================================================================
# Histogram Buckets
# =============================================================================

LATENCY_BUCKETS: list[float] = [
    0.0005,
    0.001,
    0.005,
    0.01,
    0.05,
    0.1,
    0.5,
    1.0,
    5.0,
]
"""Default latency buckets for release duration histograms (in seconds)."""


__all__ = [
    "DISPOSABLES_RELEASED_TOTAL",
    "DISPOSABLES_TRACKED_TOTAL",
    "LATENCY_BUCKETS",
    "METRIC_PREFIX",
    "RELEASE_DURATION_SECONDS",
    "RELEASE_FAILURES_TOTAL",
    "SPECIMENS_CREATED_TOTAL",
    "TRACKED_DISPOSABLES",
]
