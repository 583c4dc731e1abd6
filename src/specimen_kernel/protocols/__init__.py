# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Protocol definitions for specimen kernel components.

This module provides Protocol classes that define the interfaces for
pluggable components in the specimen kernel.

Available protocols:
- SpecimenBuilder: Interface for services that create specimens from requests
- SpecimenContext: Interface for the resolution context passed during creation
- Disposable: Capability of values that hold a releasable resource
"""

from .builder import SpecimenBuilder
from .context import SpecimenContext
from .disposable import Disposable

__all__ = [
    "Disposable",
    "SpecimenBuilder",
    "SpecimenContext",
]
