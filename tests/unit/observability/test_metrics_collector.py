"""
Unit tests for the observability collector module.

Tests cover:
- UnifiedMetricsCollector: dict snapshot and Prometheus mirroring
- Singleton pattern: get_metrics_collector, reset_metrics_collector
- Counter, Gauge, and Histogram operations
- Label cardinality protection
"""

from __future__ import annotations

from unittest.mock import patch

import pytest
from prometheus_client import CollectorRegistry

from specimen_kernel.observability import (
    DISPOSABLES_TRACKED_TOTAL,
    METRIC_DEFINITIONS,
    RELEASE_DURATION_SECONDS,
    TRACKED_DISPOSABLES,
    MetricsCollectorProtocol,
    UnifiedMetricsCollector,
    get_metrics_collector,
    reset_metrics_collector,
)

LABELS = {"tracker": "t1"}


@pytest.fixture
def registry() -> CollectorRegistry:
    return CollectorRegistry()


@pytest.fixture
def collector(registry: CollectorRegistry) -> UnifiedMetricsCollector:
    return UnifiedMetricsCollector(registry=registry)


class TestMetricDefinitions:
    def test_predefined_metrics_exist(self) -> None:
        assert "specimen_kernel_disposables_tracked_total" in METRIC_DEFINITIONS
        assert "specimen_kernel_tracked_disposables" in METRIC_DEFINITIONS
        assert "specimen_kernel_release_duration_seconds" in METRIC_DEFINITIONS

    def test_every_definition_is_labelled_by_tracker(self) -> None:
        for defn in METRIC_DEFINITIONS.values():
            assert "tracker" in defn.label_names


class TestUnifiedMetricsCollector:
    def test_satisfies_protocol(self, collector: UnifiedMetricsCollector) -> None:
        assert isinstance(collector, MetricsCollectorProtocol)

    def test_counter_snapshot_and_prometheus(
        self, collector: UnifiedMetricsCollector, registry: CollectorRegistry
    ) -> None:
        collector.inc_counter(DISPOSABLES_TRACKED_TOTAL, labels=LABELS)
        collector.inc_counter(DISPOSABLES_TRACKED_TOTAL, 2, labels=LABELS)

        snapshot = collector.get_metrics()
        assert snapshot["counters"][DISPOSABLES_TRACKED_TOTAL] == {"tracker=t1": 3}
        assert registry.get_sample_value(DISPOSABLES_TRACKED_TOTAL, LABELS) == 3.0

    def test_negative_counter_increment_raises(
        self, collector: UnifiedMetricsCollector
    ) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            collector.inc_counter(DISPOSABLES_TRACKED_TOTAL, -1, labels=LABELS)

    def test_gauge_operations(
        self, collector: UnifiedMetricsCollector, registry: CollectorRegistry
    ) -> None:
        collector.set_gauge(TRACKED_DISPOSABLES, 5, labels=LABELS)
        collector.inc_gauge(TRACKED_DISPOSABLES, 2, labels=LABELS)
        collector.dec_gauge(TRACKED_DISPOSABLES, 3, labels=LABELS)

        assert collector.get_metrics()["gauges"][TRACKED_DISPOSABLES] == {
            "tracker=t1": 4
        }
        assert registry.get_sample_value(TRACKED_DISPOSABLES, LABELS) == 4.0

    def test_histogram_summary(
        self, collector: UnifiedMetricsCollector, registry: CollectorRegistry
    ) -> None:
        collector.observe_histogram(RELEASE_DURATION_SECONDS, 0.5, labels=LABELS)
        collector.observe_histogram(RELEASE_DURATION_SECONDS, 1.5, labels=LABELS)

        summary = collector.get_metrics()["histograms"][RELEASE_DURATION_SECONDS][
            "tracker=t1"
        ]
        assert summary == {"count": 2, "sum": 2.0, "avg": 1.0, "min": 0.5, "max": 1.5}
        assert (
            registry.get_sample_value(f"{RELEASE_DURATION_SECONDS}_count", LABELS)
            == 2.0
        )

    def test_dynamic_metric(
        self, collector: UnifiedMetricsCollector, registry: CollectorRegistry
    ) -> None:
        collector.inc_counter("custom_events_total")

        assert collector.get_metrics()["counters"]["custom_events_total"] == {"": 1}
        assert registry.get_sample_value("custom_events_total") == 1.0

    def test_prometheus_disabled(self, registry: CollectorRegistry) -> None:
        collector = UnifiedMetricsCollector(enable_prometheus=False, registry=registry)

        collector.inc_counter(DISPOSABLES_TRACKED_TOTAL, labels=LABELS)

        assert collector.prometheus_enabled is False
        assert registry.get_sample_value(DISPOSABLES_TRACKED_TOTAL, LABELS) is None
        assert collector.get_metrics()["counters"][DISPOSABLES_TRACKED_TOTAL]

    def test_duplicate_registration_keeps_dict_snapshot(
        self, registry: CollectorRegistry
    ) -> None:
        first = UnifiedMetricsCollector(registry=registry)
        second = UnifiedMetricsCollector(registry=registry)
        first.inc_counter(DISPOSABLES_TRACKED_TOTAL, labels=LABELS)

        second.inc_counter(DISPOSABLES_TRACKED_TOTAL, labels=LABELS)
        second.inc_counter(DISPOSABLES_TRACKED_TOTAL, labels=LABELS)

        assert second.get_metrics()["counters"][DISPOSABLES_TRACKED_TOTAL] == {
            "tracker=t1": 2
        }
        assert registry.get_sample_value(DISPOSABLES_TRACKED_TOTAL, LABELS) == 1.0

    def test_cardinality_limit(self, collector: UnifiedMetricsCollector) -> None:
        with patch.object(UnifiedMetricsCollector, "MAX_LABEL_COMBINATIONS", 2):
            for name in ("a", "b", "c"):
                collector.inc_counter(
                    DISPOSABLES_TRACKED_TOTAL, labels={"tracker": name}
                )

        assert set(collector.get_metrics()["counters"][DISPOSABLES_TRACKED_TOTAL]) == {
            "tracker=a",
            "tracker=b",
        }

    def test_reset(self, collector: UnifiedMetricsCollector) -> None:
        collector.inc_counter(DISPOSABLES_TRACKED_TOTAL, labels=LABELS)

        collector.reset()

        assert collector.get_metrics() == {
            "counters": {},
            "gauges": {},
            "histograms": {},
        }

    def test_start_http_server_failure(self, collector: UnifiedMetricsCollector) -> None:
        with patch(
            "specimen_kernel.observability.collector.start_http_server",
            side_effect=OSError("address in use"),
        ):
            assert collector.start_http_server(port=1) is False
        assert collector.server_running is False

    def test_start_http_server_once(self, collector: UnifiedMetricsCollector) -> None:
        with patch(
            "specimen_kernel.observability.collector.start_http_server"
        ) as start:
            assert collector.start_http_server(port=9999) is True
            assert collector.start_http_server(port=9999) is True

        start.assert_called_once()
        assert collector.server_running is True


class TestSingleton:
    def test_get_returns_same_instance(self) -> None:
        reset_metrics_collector()
        try:
            assert get_metrics_collector() is get_metrics_collector()
        finally:
            reset_metrics_collector()

    def test_reset_creates_new_instance(self) -> None:
        first = get_metrics_collector()
        reset_metrics_collector()
        try:
            assert get_metrics_collector() is not first
        finally:
            reset_metrics_collector()
