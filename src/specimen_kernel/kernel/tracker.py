# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""ResourceTracker: a builder decorator that releases disposable specimens in bulk."""

from __future__ import annotations

import logging
import threading
import time
from types import TracebackType
from typing import Any

from ..config import ReleasePolicy, TrackerConfig
from ..exceptions import ArgumentNullError, DisposalError
from ..observability import (
    DISPOSABLES_RELEASED_TOTAL,
    DISPOSABLES_TRACKED_TOTAL,
    RELEASE_DURATION_SECONDS,
    RELEASE_FAILURES_TOTAL,
    SPECIMENS_CREATED_TOTAL,
    TRACKED_DISPOSABLES,
    MetricsCollectorProtocol,
    get_metrics_collector,
)
from ..protocols import Disposable, SpecimenBuilder, SpecimenContext

logger = logging.getLogger(__name__)


def is_disposable(value: Any) -> bool:
    """Return True if ``value`` exposes the Disposable capability."""
    # Classes expose close() as an unbound function
    return (
        isinstance(value, Disposable)
        and not isinstance(value, type)
        and callable(getattr(value, "close", None))
    )


class ResourceTracker:
    """
    Decorates a SpecimenBuilder and tracks every disposable specimen it returns.

    Results of the decorated builder pass through unchanged. Results that
    expose ``close()`` are remembered, once per instance, until dispose()
    releases all of them in the order they were first seen.

    Storage: Dict[id(specimen), specimen]. Insertion order gives release
    order; identity keys make membership O(1) and ignore value equality.
    The dict holds strong references, so ids stay unique while tracked.

    A tracker is itself a SpecimenBuilder and a Disposable, so trackers can
    be nested and used as context managers:

    Example:
        >>> with ResourceTracker(builder) as tracker:
        ...     conn = tracker.create(Connection, context)
        ...     use(conn)
        >>> # conn.close() has been called

    Thread safety:
        The tracked collection is guarded by an RLock. dispose() drains the
        collection under the lock and calls close() outside it, so a
        resource's close() may safely call back into the tracker.
    """

    def __init__(
        self,
        builder: SpecimenBuilder,
        config: TrackerConfig | None = None,
        metrics: MetricsCollectorProtocol | None = None,
    ):
        """
        Initialize the ResourceTracker.

        Args:
            builder: The builder to decorate. The tracker never replaces or
                releases it.
            config: Tracker configuration (default: TrackerConfig())
            metrics: Collector to record into. Defaults to the global
                collector when metrics are enabled.

        Raises:
            ArgumentNullError: If builder is None
        """
        if builder is None:
            raise ArgumentNullError("builder")

        self._builder = builder
        self._config = config if config is not None else TrackerConfig()

        if not self._config.metrics_enabled:
            self._metrics: MetricsCollectorProtocol | None = None
        elif metrics is not None:
            self._metrics = metrics
        else:
            self._metrics = get_metrics_collector()
        self._labels = {"tracker": self._config.tracker_name}

        self._disposables: dict[int, Any] = {}
        self._lock = threading.RLock()

    @property
    def builder(self) -> SpecimenBuilder:
        """The decorated builder."""
        return self._builder

    @property
    def config(self) -> TrackerConfig:
        return self._config

    @property
    def disposables(self) -> tuple[Any, ...]:
        """Snapshot of the tracked resources, in the order they were tracked."""
        with self._lock:
            return tuple(self._disposables.values())

    @property
    def disposable_count(self) -> int:
        """Return the number of resources awaiting release."""
        return len(self._disposables)

    def is_tracked(self, value: Any) -> bool:
        """Return True if this exact instance is awaiting release."""
        with self._lock:
            return self._disposables.get(id(value)) is value

    def create(self, request: Any, context: SpecimenContext) -> Any:
        """
        Create a specimen through the decorated builder and track it if disposable.

        Args:
            request: Forwarded unchanged to the decorated builder
            context: Forwarded unchanged to the decorated builder

        Returns:
            Exactly what the decorated builder returned, NoSpecimen included
        """
        specimen = self._builder.create(request, context)
        self._inc(SPECIMENS_CREATED_TOTAL)

        if is_disposable(specimen):
            self._track(specimen)

        return specimen

    def _track(self, specimen: Any) -> None:
        with self._lock:
            key = id(specimen)
            if key in self._disposables:
                return
            self._disposables[key] = specimen
            count = len(self._disposables)

        logger.debug(
            "Tracking disposable specimen: type=%s, tracked=%d",
            type(specimen).__name__,
            count,
        )
        self._inc(DISPOSABLES_TRACKED_TOTAL)
        self._inc_tracked_gauge(1)

    def dispose(self) -> None:
        """
        Release every tracked resource and clear the tracked collection.

        Resources are released once each, in the order they were tracked.
        Calling this with nothing tracked, or repeatedly, is a no-op. The
        tracker remains usable; later create() calls track new resources.

        Raises:
            Exception: Under ReleasePolicy.FAIL_FAST, the first exception
                raised by a resource's close(), unchanged
            DisposalError: Under ReleasePolicy.BEST_EFFORT, if any
                resource's close() raised
        """
        with self._lock:
            pending = list(self._disposables.values())
            self._disposables.clear()

        if not pending:
            return
        self._inc_tracked_gauge(-len(pending))

        start = time.perf_counter()
        try:
            if self._config.release_policy is ReleasePolicy.BEST_EFFORT:
                self._release_best_effort(pending)
            else:
                self._release_fail_fast(pending)
        finally:
            self._observe(RELEASE_DURATION_SECONDS, time.perf_counter() - start)

    def close(self) -> None:
        """Alias for dispose(), making the tracker itself Disposable."""
        self.dispose()

    def _release_fail_fast(self, pending: list[Any]) -> None:
        for index, resource in enumerate(pending):
            try:
                resource.close()
            except BaseException as e:
                remaining = pending[index + 1 :]
                self._restore(remaining)
                self._inc(DISPOSABLES_RELEASED_TOTAL, index)
                self._record_failure(e)
                logger.debug(
                    "Release stopped after failure; %d resources still tracked",
                    len(remaining),
                )
                raise

        self._inc(DISPOSABLES_RELEASED_TOTAL, len(pending))
        logger.info("Released %d tracked resources", len(pending))

    def _release_best_effort(self, pending: list[Any]) -> None:
        errors: list[tuple[Any, BaseException]] = []
        for index, resource in enumerate(pending):
            try:
                resource.close()
            except Exception as e:
                errors.append((resource, e))
                self._record_failure(e)
                logger.warning(
                    "Failed to release %s: %s", type(resource).__name__, e
                )
            except BaseException as e:
                # Interrupts stop the release; unattempted resources stay tracked
                self._restore(pending[index + 1 :])
                self._inc(DISPOSABLES_RELEASED_TOTAL, index - len(errors))
                self._record_failure(e)
                raise

        released = len(pending) - len(errors)
        self._inc(DISPOSABLES_RELEASED_TOTAL, released)
        logger.info(
            "Released %d of %d tracked resources", released, len(pending)
        )

        if errors:
            raise DisposalError(errors)

    def _restore(self, remaining: list[Any]) -> None:
        """Put unattempted resources back, ahead of any tracked since the drain."""
        if not remaining:
            return
        with self._lock:
            merged = {id(resource): resource for resource in remaining}
            for key, resource in self._disposables.items():
                merged.setdefault(key, resource)
            added = len(merged) - len(self._disposables)
            self._disposables = merged
        self._inc_tracked_gauge(added)

    def _record_failure(self, error: BaseException) -> None:
        self._inc(RELEASE_FAILURES_TOTAL, error_type=type(error).__name__)

    # === Metrics ===

    def _inc(self, name: str, value: int = 1, **labels: str) -> None:
        if self._metrics is None or value == 0:
            return
        self._metrics.inc_counter(name, value, labels={**self._labels, **labels})

    def _inc_tracked_gauge(self, delta: int) -> None:
        # Deltas, not absolute values: trackers may share a label
        if self._metrics is None or delta == 0:
            return
        if delta > 0:
            self._metrics.inc_gauge(TRACKED_DISPOSABLES, delta, labels=self._labels)
        else:
            self._metrics.dec_gauge(TRACKED_DISPOSABLES, -delta, labels=self._labels)

    def _observe(self, name: str, value: float) -> None:
        if self._metrics is not None:
            self._metrics.observe_histogram(name, value, labels=self._labels)

    # === Context manager ===

    def __enter__(self) -> ResourceTracker:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.dispose()

    def __repr__(self) -> str:
        return (
            f"ResourceTracker(builder={self._builder!r}, "
            f"tracked={self.disposable_count})"
        )


__all__ = ["ResourceTracker", "is_disposable"]
