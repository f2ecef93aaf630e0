"""
Order-statistic selection (quickselect).

Locates the value that would sit at rank k of the sorted data without
sorting it. Used by median() and the trimmed mean.

The buffer is permuted IN PLACE. Callers that need their data intact must
pass a copy; the public solvers do this unless overwrite_input=True.
Concurrent selection on one buffer from several threads is not supported.

Algorithm (iterative, Hoare's FIND with Lomuto partitioning):
    1. A single-element range is its own answer.
    2. Pivot is the midpoint of [left, right] (deterministic).
    3. Partition around the pivot value; the pivot lands at store_index.
    4. Stop if store_index == k, otherwise continue on the side holding k.

Average O(n), worst case O(n^2) on adversarial orderings; O(1) extra space.
"""

from __future__ import annotations

import math
from typing import MutableSequence


def partition(
    buffer: MutableSequence[float],
    left: int,
    right: int,
    pivot_index: int,
) -> int:
    """
    Partition buffer[left..right] around the value at pivot_index.

    Parameters
    ----------
    buffer : mutable sequence of float
        Working buffer, modified in place.
    left, right : int
        Inclusive bounds of the active range.
    pivot_index : int
        Index of the pivot, left <= pivot_index <= right.

    Returns
    -------
    int
        Final index of the pivot. Every element before it is <= the pivot
        value, every element after it is >= the pivot value. Elements
        outside [left, right] are untouched.
    """
    pivot_value = buffer[pivot_index]
    buffer[pivot_index], buffer[right] = buffer[right], buffer[pivot_index]

    store_index = left
    for i in range(left, right):
        if buffer[i] < pivot_value:
            buffer[store_index], buffer[i] = buffer[i], buffer[store_index]
            store_index += 1

    buffer[right], buffer[store_index] = buffer[store_index], buffer[right]
    return store_index


def segregate_invalid(
    buffer: MutableSequence[float],
    left: int,
    right: int,
) -> int:
    """
    Move every NaN in buffer[left..right] to the tail of that range.

    Relative order of the valid values is not preserved.

    Returns
    -------
    int
        Number of valid (non-NaN) values, which now occupy
        buffer[left : left + n_valid].
    """
    tail = right
    i = left
    while i <= tail:
        if math.isnan(buffer[i]):
            buffer[i], buffer[tail] = buffer[tail], buffer[i]
            tail -= 1
        else:
            i += 1
    return tail - left + 1


def select(
    buffer: MutableSequence[float],
    k: int,
    left: int = 0,
    right: int | None = None,
    *,
    handle_invalid: bool = False,
) -> float:
    """
    Return the k-th smallest value of buffer[left..right] (k is 0-based).

    No bounds validation is performed: left <= k <= right <= len(buffer) - 1
    is the caller's responsibility.

    Parameters
    ----------
    buffer : mutable sequence of float
        Working buffer (list or 1D numpy array), permuted in place.
    k : int
        Target rank, as an absolute index into buffer.
    left, right : int
        Inclusive bounds of the range to select from. right defaults to
        the last index.
    handle_invalid : bool
        If True, NaN values are first moved to the tail of the range and
        never take part in comparisons. Selection then runs over the valid
        prefix only, and NaN is returned when k lies past it.

    Returns
    -------
    float
        The value that would occupy index k if buffer[left..right] were
        sorted ascending.
    """
    if right is None:
        right = len(buffer) - 1

    if handle_invalid:
        n_valid = segregate_invalid(buffer, left, right)
        right = left + n_valid - 1
        if n_valid == 0 or k > right:
            return math.nan

    while True:
        if left == right:
            return buffer[left]

        pivot_index = partition(buffer, left, right, (left + right) // 2)

        if k == pivot_index:
            return buffer[k]
        elif k < pivot_index:
            right = pivot_index - 1
        else:
            left = pivot_index + 1
