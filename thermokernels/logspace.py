"""
Log-space summation kernels.

Each variant computes ``log(sum(exp(a_i)))`` as ``m + log(sum(exp(a_i - m)))``
for a stabilizing maximum ``m``. The variants differ along two axes: plain or
Kahan-compensated accumulation, and a caller-supplied maximum or one taken
from the sorted buffer. An empty buffer, or a maximum of ``-inf``, yields
``-inf`` rather than NaN. Exponentials are taken with numpy under
``np.errstate`` so a supplied maximum that is not the true maximum gives the
IEEE results ``-inf`` (all terms underflow) or ``+inf`` (a term overflows)
instead of raising.
"""

import math

import numpy as np

from .core import kahan_summation, mixed_sort


def logsumexp(array: np.ndarray, size: int, array_max: float) -> float:
    """
    Log-sum-exp with plain accumulation.

    Args:
        array: Buffer of exponents, left unchanged
        size: Number of leading entries to use
        array_max: Maximum of ``array[:size]``

    Returns:
        ``log(sum(exp(array[:size])))``
    """
    if size == 0:
        return -math.inf
    if array_max == -math.inf:
        return -math.inf
    total = 0.0
    with np.errstate(over="ignore", divide="ignore"):
        for i in range(size):
            total += np.exp(array[i] - array_max)
        return float(array_max + np.log(total))


def logsumexp_kahan_inplace(array: np.ndarray, size: int, array_max: float) -> float:
    """
    Log-sum-exp with Kahan accumulation.

    Overwrites ``array[:size]`` with ``exp(array[i] - array_max)``.

    Args:
        array: Buffer of exponents, overwritten
        size: Number of leading entries to use
        array_max: Maximum of ``array[:size]``

    Returns:
        ``log(sum(exp(array[:size])))``
    """
    if size == 0:
        return -math.inf
    if array_max == -math.inf:
        return -math.inf
    overflow = False
    with np.errstate(over="ignore", divide="ignore"):
        for i in range(size):
            array[i] = np.exp(array[i] - array_max)
            overflow = overflow or array[i] == math.inf
        # an infinite term would turn the compensation term into NaN
        if overflow:
            return math.inf
        return float(array_max + np.log(kahan_summation(array, size)))


def logsumexp_sort_inplace(array: np.ndarray, size: int) -> float:
    """Sort ``array[:size]`` ascending, then plain log-sum-exp with its last entry as maximum."""
    if size == 0:
        return -math.inf
    mixed_sort(array, 0, size - 1)
    return logsumexp(array, size, float(array[size - 1]))


def logsumexp_sort_kahan_inplace(array: np.ndarray, size: int) -> float:
    """Sort ``array[:size]`` ascending, then Kahan log-sum-exp with its last entry as maximum."""
    if size == 0:
        return -math.inf
    mixed_sort(array, 0, size - 1)
    return logsumexp_kahan_inplace(array, size, float(array[size - 1]))


def logsumexp_pair(a: float, b: float) -> float:
    """
    Closed-form log-sum-exp of two values.

    Args:
        a: First exponent
        b: Second exponent

    Returns:
        ``log(exp(a) + exp(b))``, ``-inf`` when both are ``-inf``
    """
    if a == -math.inf and b == -math.inf:
        return -math.inf
    if b > a:
        return b + math.log(1.0 + math.exp(a - b))
    return a + math.log(1.0 + math.exp(b - a))
