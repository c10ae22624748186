"""
Transition matrix renormalization.

Iterative estimators let transition matrices drift away from being
row-stochastic. The renormalizer scales the whole matrix by its largest row
sum and then sets every diagonal entry to one minus the row's off-diagonal
sum, so each row sums to 1 and the rounding drift ends up in the
self-transition probability. Row sums are taken over sorted copies with Kahan
compensation.
"""

import logging

import numpy as np

from .core import kahan_summation, mixed_sort

logger = logging.getLogger(__name__)


def _as_rows(p: np.ndarray, n_conf_states: int) -> np.ndarray:
    # flat row-major buffers are viewed as (n, n) without copying
    if p.ndim == 2:
        return p
    return p.reshape(n_conf_states, n_conf_states)


def renormalize_row(p: np.ndarray, i: int, n_conf_states: int, scratch_M: np.ndarray):
    """
    Set ``p[i, i]`` to one minus the sum of the off-diagonal entries of row ``i``.

    Args:
        p: Transition matrix, shape (n, n) or flat of length n*n
        i: Row index
        n_conf_states: Number of configurational states n
        scratch_M: Scratch buffer of length >= n
    """
    rows = _as_rows(p, n_conf_states)
    scratch_M[:n_conf_states] = rows[i, :n_conf_states]
    scratch_M[i] = 0.0
    mixed_sort(scratch_M, 0, n_conf_states - 1)
    rows[i, i] = 1.0 - kahan_summation(scratch_M, n_conf_states)


def renormalize_transition_matrix(p: np.ndarray, n_conf_states: int, scratch_M: np.ndarray):
    """
    Make a non-negative transition matrix row-stochastic in place.

    The matrix is divided by its largest row sum (one factor for the whole
    matrix), then each diagonal entry absorbs the remainder of its row. An
    all-zero matrix is left untouched.

    Args:
        p: Transition matrix, shape (n, n) or flat of length n*n
        n_conf_states: Number of configurational states n
        scratch_M: Scratch buffer of length >= n
    """
    rows = _as_rows(p, n_conf_states)
    max_sum = 0.0
    for i in range(n_conf_states):
        scratch_M[:n_conf_states] = rows[i, :n_conf_states]
        mixed_sort(scratch_M, 0, n_conf_states - 1)
        row_sum = kahan_summation(scratch_M, n_conf_states)
        max_sum = max_sum if max_sum > row_sum else row_sum
    if 0.0 >= max_sum:
        logger.debug("Transition matrix has no positive row sum, leaving it unchanged")
        return
    rows /= max_sum
    for i in range(n_conf_states):
        renormalize_row(rows, i, n_conf_states, scratch_M)
