# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Protocol for values that hold a resource requiring explicit release."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class Disposable(Protocol):
    """
    Protocol for disposable resources.

    Any value with a no-argument ``close()`` method qualifies: files,
    sockets, HTTP sessions, database connections, and ResourceTracker
    itself. Detection is structural, via ``isinstance(value, Disposable)``.
    """

    def close(self) -> None:
        """Release the underlying resource."""
        ...
