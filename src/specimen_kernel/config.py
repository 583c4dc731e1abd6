# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Configuration for the specimen kernel.

This module provides the configuration class for ResourceTracker,
including the release failure policy and metrics settings.
"""

from dataclasses import dataclass
from enum import Enum

from .exceptions import ConfigurationError


class ReleasePolicy(Enum):
    """
    Policy applied when a tracked resource fails to release.

    FAIL_FAST:
        - Stops at the first failing ``close()`` and re-raises its exception
        - Resources not yet attempted stay tracked for a later dispose()
        - Best for: tests and code that must notice leaks immediately

    BEST_EFFORT:
        - Attempts every release, then raises DisposalError with all failures
        - The tracked collection is always empty afterwards
        - Best for: shutdown paths where every resource must get a chance
    """

    FAIL_FAST = "fail_fast"
    BEST_EFFORT = "best_effort"


@dataclass
class TrackerConfig:
    """
    Configuration for a ResourceTracker.

    The defaults reproduce the plain tracker behavior: fail-fast release
    and metrics recorded into the global collector.
    """

    release_policy: ReleasePolicy = ReleasePolicy.FAIL_FAST
    """What to do when a tracked resource's close() raises."""

    metrics_enabled: bool = True
    """Record tracking and release metrics."""

    tracker_name: str = "default"
    """Value of the ``tracker`` label on every metric this tracker records.

    Keep it categorical (e.g. a fixture or suite name). Never use
    per-specimen identifiers here.
    """

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if isinstance(self.release_policy, str):
            try:
                self.release_policy = ReleasePolicy(self.release_policy)
            except ValueError:
                raise ConfigurationError(
                    f"Unknown release_policy: {self.release_policy!r}"
                ) from None
        if not isinstance(self.release_policy, ReleasePolicy):
            raise ConfigurationError("release_policy must be a ReleasePolicy")
        if not self.tracker_name:
            raise ConfigurationError("tracker_name must be non-empty")


__all__ = ["ReleasePolicy", "TrackerConfig"]
