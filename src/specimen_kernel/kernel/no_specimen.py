# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""NoSpecimen signal returned when a builder cannot handle a request."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class NoSpecimen:
    """
    Signals that a builder produced no specimen for a request.

    Builders return this instead of raising so that callers can try
    another builder. It carries the original request for diagnostics.
    Two signals are equal when their requests are equal.

    Attributes:
        request: The request that could not be satisfied (may be None)
    """

    request: Any = None

    def __repr__(self) -> str:
        return f"NoSpecimen(request={self.request!r})"


__all__ = ["NoSpecimen"]
