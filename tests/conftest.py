#!/usr/bin/env python3
"""
Pytest configuration and fixtures for thermokernels tests.

This file contains shared test fixtures, configuration, and utilities
used across the test suite.
"""

import math
import os
import sys

import numpy as np
import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from thermokernels import _config


@pytest.fixture(autouse=True)
def default_sort_threshold():
    """Restore the default sort threshold after every test."""
    yield
    _config.set_sort_threshold(_config.DEFAULT_SORT_THRESHOLD)


@pytest.fixture
def rng():
    """Seeded random generator."""
    return np.random.default_rng(42)


@pytest.fixture
def random_values(rng):
    """Random float64 values, long enough to exercise the quicksort branch."""
    return rng.normal(0.0, 100.0, 1000)


@pytest.fixture
def mixed_magnitude_data(rng):
    """Non-negative data spanning many orders of magnitude."""
    exponents = rng.uniform(-12, 12, 10000)
    return 10.0 ** exponents


@pytest.fixture
def exponent_data(rng):
    """Log-weights of the kind reweighting estimators produce."""
    return rng.uniform(-700.0, 50.0, 500)


@pytest.fixture
def two_state_matrix():
    """Small unnormalized transition matrix with known renormalization."""
    return np.array([[0.5, 0.6], [0.3, 0.3]])


@pytest.fixture
def positive_matrix(rng):
    """Random strictly positive transition weights."""
    return rng.uniform(0.01, 1.0, (40, 40))


@pytest.fixture
def drifted_transition_matrix(rng):
    """Row-stochastic matrix with small multiplicative drift, spanning magnitudes."""
    n = 30
    weights = 10.0 ** rng.uniform(-9, 0, (n, n))
    p = weights / weights.sum(axis=1, keepdims=True)
    return p * (1.0 + rng.uniform(-1e-6, 1e-6, (n, n)))


@pytest.fixture(params=["plain", "kahan", "sort", "sort_kahan"])
def variant(request):
    """Parameterized fixture over the logsumexp variants."""
    return request.param


class AccuracyChecker:
    """Utility class for checking numerical accuracy."""

    @staticmethod
    def relative_error(computed: float, reference: float) -> float:
        """Calculate relative error."""
        if reference == 0:
            return abs(computed)
        return abs(computed - reference) / abs(reference)

    @staticmethod
    def exact_sum(values) -> float:
        """Correctly rounded reference sum."""
        return math.fsum(float(v) for v in values)

    @staticmethod
    def reference_logsumexp(values) -> float:
        """Reference log-sum-exp computed with exact summation."""
        values = np.asarray(values, dtype=np.float64)
        if values.size == 0:
            return -math.inf
        m = float(np.max(values))
        if m == -math.inf:
            return -math.inf
        return m + math.log(math.fsum(math.exp(v - m) for v in values))


@pytest.fixture
def accuracy_checker():
    """Fixture providing accuracy checking utilities."""
    return AccuracyChecker()


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers automatically."""
    for item in items:
        # Mark tests that take long time as slow
        if "large" in item.name or "stress" in item.name:
            item.add_marker(pytest.mark.slow)

        # Mark integration tests
        if "integration" in item.name or "end_to_end" in item.name:
            item.add_marker(pytest.mark.integration)


# Custom assertion helpers
def assert_arrays_close(a, b, rtol=1e-7, atol=1e-14):
    """Assert that two arrays are close with informative error messages."""
    if hasattr(a, 'numpy'):
        a = a.numpy()
    if hasattr(b, 'numpy'):
        b = b.numpy()

    a = np.asarray(a)
    b = np.asarray(b)

    assert a.shape == b.shape, f"Shape mismatch: {a.shape} vs {b.shape}"

    if not np.allclose(a, b, rtol=rtol, atol=atol):
        diff = np.abs(a - b)
        max_diff_idx = np.unravel_index(np.argmax(diff), diff.shape)
        max_diff = diff[max_diff_idx]

        raise AssertionError(
            f"Arrays not close enough:\n"
            f"Max difference: {max_diff} at index {max_diff_idx}\n"
            f"Values: {a[max_diff_idx]} vs {b[max_diff_idx]}\n"
            f"Relative tolerance: {rtol}, Absolute tolerance: {atol}"
        )
