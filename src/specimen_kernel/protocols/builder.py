# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Protocol for specimen builders."""

from typing import Any, Protocol, runtime_checkable

from .context import SpecimenContext


@runtime_checkable
class SpecimenBuilder(Protocol):
    """
    Protocol for services that turn a request into a specimen.

    A builder that does not know how to handle a request returns a
    NoSpecimen signal rather than raising, so that builders can be
    chained and decorated freely.
    """

    def create(self, request: Any, context: SpecimenContext) -> Any:
        """
        Create a specimen for a request.

        Args:
            request: Description of what to produce (any value)
            context: Context the builder may use to resolve nested requests

        Returns:
            The produced specimen, or a NoSpecimen instance
        """
        ...
