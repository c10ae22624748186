"""
High-level array front-end for the kernels.

This module accepts lists, numpy arrays and PyTorch tensors, converts them
into the contiguous buffers the kernels expect, validates arguments and
allocates scratch and output space. Errors for misuse are raised here; the
kernels themselves never raise.
"""

import logging
import math
from typing import Dict, Iterator, List, Optional, Tuple, Union

import numpy as np
import torch

from .core import kahan_summation, mixed_sort
from . import logspace
from . import segmentation
from . import transition

logger = logging.getLogger(__name__)

ArrayLike = Union[List[float], Tuple[float, ...], np.ndarray, torch.Tensor]


def as_float_buffer(values: ArrayLike, copy: bool = True, ndim: int = 1) -> np.ndarray:
    """
    Convert input values to a contiguous float64 buffer.

    Args:
        values: List, tuple, numpy array or torch tensor
        copy: If False, return a buffer sharing memory with ``values`` so that
            in-place kernels mutate the caller's object
        ndim: Required number of dimensions

    Returns:
        float64 numpy array
    """
    if isinstance(values, torch.Tensor):
        tensor = values.detach()
        if copy:
            array = tensor.cpu().numpy().astype(np.float64, copy=True)
        else:
            if tensor.device.type != "cpu" or tensor.dtype != torch.float64 or not tensor.is_contiguous():
                raise ValueError(
                    "In-place operation requires a contiguous float64 CPU tensor, "
                    f"got dtype={tensor.dtype} device={tensor.device}"
                )
            array = tensor.numpy()
    elif isinstance(values, np.ndarray):
        if copy:
            array = np.array(values, dtype=np.float64, order="C")
        else:
            if values.dtype != np.float64 or not values.flags.c_contiguous or not values.flags.writeable:
                raise ValueError(
                    "In-place operation requires a writeable C-contiguous float64 array, "
                    f"got dtype={values.dtype}"
                )
            array = values
    elif isinstance(values, (list, tuple)):
        if not copy:
            raise ValueError("In-place operation requires a numpy array or torch tensor")
        array = np.array(values, dtype=np.float64)
    else:
        raise TypeError(f"Unsupported input type: {type(values).__name__}")

    if array.ndim != ndim:
        raise ValueError(f"Expected a {ndim}-dimensional array, got shape {array.shape}")
    if copy:
        logger.debug("Copied input of shape %s into a float64 buffer", array.shape)
    return array


def as_label_buffer(values: Union[List[int], Tuple[int, ...], np.ndarray, torch.Tensor]) -> np.ndarray:
    """
    Convert a label sequence to a non-empty one-dimensional integer array.

    Args:
        values: List, tuple, numpy array or torch tensor of integer labels

    Returns:
        Integer numpy array
    """
    if isinstance(values, torch.Tensor):
        labels = values.detach().cpu().numpy()
    elif isinstance(values, (list, tuple, np.ndarray)):
        labels = np.asarray(values)
    else:
        raise TypeError(f"Unsupported input type: {type(values).__name__}")

    if labels.ndim != 1:
        raise ValueError(f"Expected a 1-dimensional label sequence, got shape {labels.shape}")
    if labels.size == 0:
        raise ValueError("Label sequence must not be empty")
    if not np.issubdtype(labels.dtype, np.integer):
        raise ValueError(f"Labels must be integers, got dtype {labels.dtype}")
    return labels


def sort(values: ArrayLike, inplace: bool = False) -> np.ndarray:
    """
    Sort values ascending with the hybrid quicksort/insertion sort.

    Args:
        values: Values to sort
        inplace: Sort the caller's float64 array or tensor directly

    Returns:
        The sorted buffer
    """
    array = as_float_buffer(values, copy=not inplace)
    if array.size > 0:
        mixed_sort(array, 0, array.size - 1)
    return array


def kahan_sum(values: ArrayLike, sort_array: bool = False) -> float:
    """
    Compute sum using Kahan compensated summation.

    Args:
        values: Sequence of values to sum
        sort_array: Sum in ascending order, which helps for non-negative values

    Returns:
        Compensated sum, 0.0 for empty input
    """
    array = as_float_buffer(values)
    if sort_array and array.size > 0:
        mixed_sort(array, 0, array.size - 1)
    return kahan_summation(array, array.size)


def logsumexp(values: ArrayLike, array_max: Optional[float] = None, sort_array: bool = True,
              use_kahan: bool = True, inplace: bool = False) -> float:
    """
    Compute ``log(sum(exp(values)))`` without overflow or underflow.

    Args:
        values: Exponents
        array_max: Maximum of ``values``; only valid with ``sort_array=False``.
            Taken from the data when omitted.
        sort_array: Sort first and use the last entry as maximum
        use_kahan: Kahan-compensated accumulation of the exponentials
        inplace: Work on the caller's float64 array or tensor directly. The
            sorting and Kahan variants overwrite it.

    Returns:
        The log-sum-exp, ``-inf`` for empty input or all ``-inf`` input
    """
    if array_max is not None and sort_array:
        raise ValueError("array_max cannot be combined with sort_array=True")

    array = as_float_buffer(values, copy=not inplace)
    size = array.size

    if sort_array:
        logger.debug("logsumexp over %d values (sort, kahan=%s)", size, use_kahan)
        if use_kahan:
            return logspace.logsumexp_sort_kahan_inplace(array, size)
        return logspace.logsumexp_sort_inplace(array, size)

    if array_max is None:
        array_max = float(np.max(array)) if size > 0 else -math.inf
    logger.debug("logsumexp over %d values (max=%g, kahan=%s)", size, array_max, use_kahan)
    if use_kahan:
        return logspace.logsumexp_kahan_inplace(array, size, float(array_max))
    return logspace.logsumexp(array, size, float(array_max))


def logsumexp_pair(a: float, b: float) -> float:
    """Compute ``log(exp(a) + exp(b))``."""
    return logspace.logsumexp_pair(float(a), float(b))


def get_therm_state_break_points(T_x) -> np.ndarray:
    """
    Find the indices at which the thermodynamic state of a trajectory changes.

    Args:
        T_x: Non-empty sequence of thermodynamic state labels

    Returns:
        Ascending integer array of break points, starting with 0
    """
    labels = as_label_buffer(T_x)
    break_points = np.zeros(labels.size, dtype=np.intp)
    count = segmentation.get_therm_state_break_points(labels, labels.size, break_points)
    return break_points[:count]


def split_by_break_points(T_x, *arrays) -> Iterator[Tuple]:
    """
    Split a trajectory into segments of constant thermodynamic state.

    Args:
        T_x: Non-empty sequence of thermodynamic state labels
        *arrays: Per-sample arrays of the same length as ``T_x``, e.g. the
            configurational state trajectory

    Yields:
        Tuples ``(therm_state, segment_0, segment_1, ...)`` in trajectory order
    """
    labels = as_label_buffer(T_x)
    arrays = tuple(np.asarray(a) for a in arrays)
    for a in arrays:
        if len(a) != labels.size:
            raise ValueError(
                f"Array of length {len(a)} does not match trajectory length {labels.size}"
            )

    break_points = get_therm_state_break_points(labels)
    ends = list(break_points[1:]) + [labels.size]
    for start, end in zip(break_points, ends):
        yield (int(labels[start]),) + tuple(a[start:end] for a in arrays)


def renormalize_transition_matrix(p: ArrayLike, inplace: bool = False) -> np.ndarray:
    """
    Make a non-negative transition matrix row-stochastic.

    Args:
        p: Square transition matrix
        inplace: Modify the caller's float64 array or tensor directly

    Returns:
        The renormalized matrix
    """
    matrix = as_float_buffer(p, copy=not inplace, ndim=2)
    n_rows, n_cols = matrix.shape
    if n_rows != n_cols:
        raise ValueError(f"Transition matrix must be square, got shape {matrix.shape}")

    scratch_M = np.zeros(n_rows, dtype=np.float64)
    transition.renormalize_transition_matrix(matrix, n_rows, scratch_M)
    return matrix


class BatchLogSumExp:
    """
    Batch processor for log-sum-exp evaluations.

    Applies one logsumexp variant to many sequences, or to every row of a
    2-D array, and keeps simple call statistics.
    """

    METHODS = {
        "plain": (False, False),
        "kahan": (False, True),
        "sort": (True, False),
        "sort_kahan": (True, True),
    }

    def __init__(self, method: str = "sort_kahan", track_statistics: bool = True):
        """
        Initialize batch processor.

        Args:
            method: Variant ('plain', 'kahan', 'sort', 'sort_kahan')
            track_statistics: Whether to track operation statistics
        """
        if method not in self.METHODS:
            raise ValueError(f"Unknown method: {method}")
        self.method = method
        self.sort_array, self.use_kahan = self.METHODS[method]
        self.track_statistics = track_statistics
        self.reset_statistics()

    def reset_statistics(self):
        """Reset operation statistics."""
        self.operation_count = 0
        self.total_elements = 0
        self.neg_inf_count = 0

    def evaluate(self, batch_values: Union[List[ArrayLike], np.ndarray, torch.Tensor]) -> List[float]:
        """
        Evaluate log-sum-exp for every sequence in the batch.

        Args:
            batch_values: List of sequences, or a 2-D array / tensor whose rows
                are the sequences

        Returns:
            List of log-sum-exp values
        """
        if isinstance(batch_values, (np.ndarray, torch.Tensor)) and batch_values.ndim != 2:
            raise ValueError(f"Expected a 2-dimensional batch, got shape {tuple(batch_values.shape)}")

        results = []
        for values in batch_values:
            result = logsumexp(values, sort_array=self.sort_array, use_kahan=self.use_kahan)
            results.append(result)

            if self.track_statistics:
                self.operation_count += 1
                self.total_elements += len(values)
                if result == -math.inf:
                    self.neg_inf_count += 1

        return results

    def get_statistics(self) -> Dict[str, Union[int, str]]:
        """Get operation statistics."""
        if not self.track_statistics or self.operation_count == 0:
            return {}

        return {
            "method": self.method,
            "operation_count": self.operation_count,
            "total_elements": self.total_elements,
            "neg_inf_count": self.neg_inf_count,
        }
