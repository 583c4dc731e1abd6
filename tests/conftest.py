"""Shared fixtures for the specimen kernel test suite."""

import pytest
from prometheus_client import CollectorRegistry

from specimen_kernel.kernel import DelegatingSpecimenBuilder, DelegatingSpecimenContext
from specimen_kernel.observability import UnifiedMetricsCollector


@pytest.fixture
def collector():
    """Metrics collector bound to a private Prometheus registry."""
    return UnifiedMetricsCollector(registry=CollectorRegistry())


@pytest.fixture
def dummy_builder():
    """Builder that yields NoSpecimen for every request."""
    return DelegatingSpecimenBuilder()


@pytest.fixture
def dummy_context():
    """Context that is never expected to be called."""
    return DelegatingSpecimenContext()
