# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Delegating builder and context.

These adapt plain callables to the SpecimenBuilder and SpecimenContext
protocols. They are handy for composing builders inline and as test
doubles for code that decorates builders.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from ..protocols import SpecimenContext
from .no_specimen import NoSpecimen


class DelegatingSpecimenBuilder:
    """
    SpecimenBuilder that forwards ``create`` to a callable.

    Example:
        >>> builder = DelegatingSpecimenBuilder(on_create=lambda r, c: r * 2)
        >>> builder.create(21, DelegatingSpecimenContext())
        42
    """

    def __init__(
        self,
        on_create: Callable[[Any, SpecimenContext], Any] | None = None,
    ):
        """
        Args:
            on_create: Called with (request, context). When omitted, every
                request yields NoSpecimen(request).
        """
        self.on_create = on_create

    def create(self, request: Any, context: SpecimenContext) -> Any:
        if self.on_create is None:
            return NoSpecimen(request)
        return self.on_create(request, context)


class DelegatingSpecimenContext:
    """SpecimenContext that forwards ``resolve`` to a callable."""

    def __init__(self, on_resolve: Callable[[Any], Any] | None = None):
        self.on_resolve = on_resolve

    def resolve(self, request: Any) -> Any:
        if self.on_resolve is None:
            return NoSpecimen(request)
        return self.on_resolve(request)


__all__ = ["DelegatingSpecimenBuilder", "DelegatingSpecimenContext"]
