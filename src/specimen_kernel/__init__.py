# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Specimen Kernel - Bulk release of disposable specimens.

This library decorates specimen builders (services that turn a request
into an object) so that every produced object holding a releasable
resource is remembered and can be closed in one call.

Key Features:
    - Transparent decoration: builder results and errors pass through unchanged
    - Identity-based tracking: each resource instance is tracked once
    - Bulk release in creation order, safe to repeat
    - Configurable release failure policy (fail-fast or best-effort)
    - Protocol-based interfaces for builders, contexts and disposables
    - Prometheus metrics for tracking and release activity

Quick Start:
    >>> from specimen_kernel import DelegatingSpecimenBuilder, ResourceTracker
    >>>
    >>> builder = DelegatingSpecimenBuilder(on_create=lambda r, c: open(r))
    >>> with ResourceTracker(builder) as tracker:
    ...     handle = tracker.create("data.txt", context)
    ...     handle.read()
    >>> handle.closed
    True

Main Exports:
    - ResourceTracker: The tracking builder decorator
    - TrackerConfig, ReleasePolicy: Configuration options
    - SpecimenBuilder, SpecimenContext, Disposable: Protocols
    - NoSpecimen: "No specimen produced" signal

Version: 1.0.0
"""

__version__ = "1.0.0"

from .config import ReleasePolicy, TrackerConfig
from .exceptions import (
    ArgumentError,
    ArgumentNullError,
    ConfigurationError,
    DisposalError,
    SpecimenKernelError,
)
from .kernel import (
    DelegatingSpecimenBuilder,
    DelegatingSpecimenContext,
    NoSpecimen,
    ResourceTracker,
    is_disposable,
)
from .protocols import (
    Disposable,
    SpecimenBuilder,
    SpecimenContext,
)

__all__ = [
    "ArgumentError",
    "ArgumentNullError",
    "ConfigurationError",
    # Kernel
    "DelegatingSpecimenBuilder",
    "DelegatingSpecimenContext",
    # Protocols
    "Disposable",
    "DisposalError",
    "NoSpecimen",
    # Configuration
    "ReleasePolicy",
    "ResourceTracker",
    "SpecimenBuilder",
    "SpecimenContext",
    # Exceptions
    "SpecimenKernelError",
    "TrackerConfig",
    "is_disposable",
]
