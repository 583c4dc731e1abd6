# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Protocol for specimen resolution contexts."""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class SpecimenContext(Protocol):
    """
    Protocol for the context passed through specimen creation.

    Builders use it to resolve nested requests. Decorators such as
    ResourceTracker forward it untouched and never call into it.
    """

    def resolve(self, request: Any) -> Any:
        """Resolve a nested request into a specimen (or NoSpecimen)."""
        ...
