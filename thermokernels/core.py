"""
Core sorting and compensated summation kernels.

This module contains the leaf kernels every other routine builds on: the
hybrid quicksort/insertion sort used as a stabilization step, and Kahan
compensated summation, both as a whole-buffer sum and as a single pure step.

All kernels operate on caller-owned buffers (one-dimensional float64 numpy
arrays) and never allocate replacements for them.
"""

from typing import List, NamedTuple, Tuple

import numpy as np

from . import _config


class KahanAccumulator(NamedTuple):
    """
    State of a Kahan compensated summation.

    Attributes:
        sum: The accumulated sum
        err: The compensation term tracking lost low-order bits
    """

    sum: float = 0.0
    err: float = 0.0


def kahan_step(acc: KahanAccumulator, new_value: float) -> KahanAccumulator:
    """
    Single Kahan accumulation step.

    Args:
        acc: Current accumulator state
        new_value: Value to add

    Returns:
        Updated accumulator state
    """
    loc = new_value - acc.err
    tmp = acc.sum + loc
    return KahanAccumulator(tmp, (tmp - acc.sum) - loc)


def kahan_summation(array: np.ndarray, size: int) -> float:
    """
    Sum the first ``size`` entries of a buffer with Kahan compensation.

    Summing non-negative values in ascending order (see :func:`mixed_sort`)
    further reduces the rounding error.

    Args:
        array: Buffer holding the values
        size: Number of leading entries to sum

    Returns:
        Compensated sum, 0.0 for ``size == 0``
    """
    total = 0.0
    err = 0.0
    for i in range(size):
        loc = float(array[i]) - err
        tmp = total + loc
        err = (tmp - total) - loc
        total = tmp
    return total


def _insertion_sort(array: np.ndarray, L: int, R: int):
    for l in range(L + 1, R + 1):
        swap = array[l]
        r = l - 1
        while r >= L and swap < array[r]:
            array[r + 1] = array[r]
            r -= 1
        array[r + 1] = swap


def _partition(array: np.ndarray, L: int, R: int) -> int:
    # rightmost element is the pivot
    pivot = array[R]
    l = L - 1
    r = R
    while True:
        l += 1
        while array[l] < pivot:
            l += 1
        r -= 1
        while r > l and array[r] > pivot:
            r -= 1
        if l >= r:
            break
        array[l], array[r] = array[r], array[l]
    array[l], array[R] = array[R], array[l]
    return l


def mixed_sort(array: np.ndarray, L: int, R: int):
    """
    Sort ``array[L:R + 1]`` into ascending order in place.

    Ranges longer than the sort threshold are partitioned around their
    rightmost element; shorter ranges are finished with insertion sort.
    Pending ranges live on an explicit stack, smaller side first, so the
    stack depth stays logarithmic even for adversarial input.

    The threshold is read from :func:`thermokernels.set_sort_threshold`
    (default 25). Any threshold yields ascending output, but only the default
    reproduces the original kernel bit for bit; other values may order equal
    keys such as ``-0.0`` and ``0.0`` differently.

    Args:
        array: Buffer to sort
        L: First index of the range (inclusive)
        R: Last index of the range (inclusive)
    """
    threshold = _config.get_sort_threshold()
    stack: List[Tuple[int, int]] = [(L, R)]
    while stack:
        low, high = stack.pop()
        if high - low > threshold:
            p = _partition(array, low, high)
            left = (low, p - 1)
            right = (p + 1, high)
            if left[1] - left[0] < right[1] - right[0]:
                stack.append(right)
                stack.append(left)
            else:
                stack.append(left)
                stack.append(right)
        else:
            _insertion_sort(array, low, high)
