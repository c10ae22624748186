"""
Thermodynamic reweighting kernels

Numerically stable primitive kernels for free-energy reweighting estimators
(WHAM, dTRAM, MBAR) operating on molecular-simulation trajectories.

This library provides:
- Hybrid quicksort/insertion sort as a stabilization step
- Kahan compensated summation
- The logsumexp family, with plain or compensated accumulation
- Thermodynamic-state break-point detection
- Transition matrix renormalization to exact row-stochasticity
"""

import logging

from .core import KahanAccumulator, kahan_step, kahan_summation, mixed_sort
from .logspace import (
    logsumexp_kahan_inplace,
    logsumexp_sort_inplace,
    logsumexp_sort_kahan_inplace,
)
from .segmentation import get_therm_state_break_points
from .transition import renormalize_row
from .algorithms import (
    BatchLogSumExp,
    as_float_buffer,
    as_label_buffer,
    kahan_sum,
    logsumexp,
    logsumexp_pair,
    renormalize_transition_matrix,
    sort,
    split_by_break_points,
)
from ._config import get_config, get_sort_threshold, set_sort_threshold

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"
__author__ = "thermokernels contributors"

__all__ = [
    "KahanAccumulator",
    "kahan_step",
    "kahan_summation",
    "mixed_sort",
    "logsumexp_kahan_inplace",
    "logsumexp_sort_inplace",
    "logsumexp_sort_kahan_inplace",
    "get_therm_state_break_points",
    "renormalize_row",
    "BatchLogSumExp",
    "as_float_buffer",
    "as_label_buffer",
    "kahan_sum",
    "logsumexp",
    "logsumexp_pair",
    "renormalize_transition_matrix",
    "sort",
    "split_by_break_points",
    "get_config",
    "get_sort_threshold",
    "set_sort_threshold",
]
