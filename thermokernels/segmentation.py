"""Thermodynamic-state break-point detection for piecewise-constant label sequences."""

from typing import Sequence

import numpy as np


def get_therm_state_break_points(T_x: Sequence[int], seq_length: int,
                                 break_points: np.ndarray) -> int:
    """
    Find the indices at which a label sequence changes value.

    Index 0 is always the first break point. ``break_points`` must have room
    for ``seq_length`` entries; entries past the returned count are left as
    they were.

    Args:
        T_x: Non-empty label sequence, e.g. the thermodynamic state of each sample
        seq_length: Number of labels to scan
        break_points: Output buffer of capacity >= ``seq_length``

    Returns:
        Number of break points written
    """
    break_points[0] = 0
    K = T_x[0]
    o = 1
    for i in range(1, seq_length):
        if T_x[i] != K:
            K = T_x[i]
            break_points[o] = i
            o += 1
    return o
