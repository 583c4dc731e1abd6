# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Exception classes for the specimen kernel library.

This module defines the exception hierarchy used throughout the library.
All exceptions inherit from SpecimenKernelError, making it easy to catch
all library-related exceptions with a single except clause.

Failures raised by a decorated specimen builder are never wrapped in these
types; they reach the caller exactly as the builder raised them.
"""

from __future__ import annotations

from typing import Any


class SpecimenKernelError(Exception):
    """Base exception for all specimen kernel errors.

    Example:
        try:
            tracker.dispose()
        except SpecimenKernelError as e:
            logger.error(f"Specimen kernel error: {e}")
    """

    pass


class ArgumentError(SpecimenKernelError, ValueError):
    """Raised when an argument passed to a library component is invalid.

    Also a ValueError, so callers that already guard against bad values
    with ``except ValueError`` keep working.

    Attributes:
        param_name: Name of the offending parameter, if known.
    """

    def __init__(self, message: str, param_name: str | None = None):
        super().__init__(message)
        self.param_name = param_name


class ArgumentNullError(ArgumentError):
    """Raised when a required argument is None.

    Example:
        try:
            tracker = ResourceTracker(None)
        except ArgumentNullError as e:
            assert e.param_name == "builder"
    """

    def __init__(self, param_name: str):
        super().__init__(f"Argument cannot be None: {param_name}", param_name)


class ConfigurationError(SpecimenKernelError):
    """Raised when configuration is invalid.

    Common causes include:
    - A release policy that is not a ReleasePolicy member
    - An empty tracker_name

    Example:
        try:
            config = TrackerConfig(tracker_name="")
        except ConfigurationError as e:
            logger.error(f"Invalid configuration: {e}")
    """

    pass


class DisposalError(SpecimenKernelError):
    """Raised when one or more tracked resources failed to release.

    Only raised under the best-effort release policy, after every tracked
    resource has had its release attempted. Under the fail-fast policy the
    first failure propagates unchanged instead.

    Attributes:
        errors: (resource, exception) pairs in release order.

    Example:
        try:
            tracker.dispose()
        except DisposalError as e:
            for resource, error in e.errors:
                logger.warning(f"Could not release {resource!r}: {error}")
    """

    def __init__(self, errors: list[tuple[Any, BaseException]]):
        count = len(errors)
        noun = "resource" if count == 1 else "resources"
        super().__init__(f"Failed to release {count} tracked {noun}")
        self.errors = errors

    @property
    def exceptions(self) -> list[BaseException]:
        """Return just the exceptions, in release order."""
        return [error for _, error in self.errors]
