# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Specimen kernel building blocks.

Exports:
    ResourceTracker: Builder decorator that releases disposable specimens in bulk
    NoSpecimen: Signal returned when a builder cannot handle a request
    DelegatingSpecimenBuilder: Builder that forwards to a callable
    DelegatingSpecimenContext: Context that forwards to a callable
    is_disposable: Disposable capability check used by ResourceTracker
"""

from .delegating import DelegatingSpecimenBuilder, DelegatingSpecimenContext
from .no_specimen import NoSpecimen
from .tracker import ResourceTracker, is_disposable

__all__ = [
    "DelegatingSpecimenBuilder",
    "DelegatingSpecimenContext",
    "NoSpecimen",
    "ResourceTracker",
    "is_disposable",
]
