"""
Exact enumeration helpers over permutations.

Both Page's L (per block) and Spearman's rho depend on a random permutation
pi of 1..n only through the rank product sum(j * pi(j)). Its null
distribution is obtained by dynamic programming over the set of values
already placed (a bitmask), which avoids enumerating all n! permutations.
The rank von Neumann statistic, sum of squared successive differences of
the permutation, is handled the same way with the last value in the state.
"""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray

from pynpst.core.exceptions import ValidationError
from pynpst.core.validation import check_positive_int

# 2**n masks times n(n+1)(2n+1)/6 sums; beyond this the table gets large
MAX_RANK_PRODUCT_N = 10


def rank_product_counts(n: int) -> NDArray[np.float64]:
    """
    Number of permutations of 1..n for each value of sum(j * pi(j)).

    Returns
    -------
    ndarray
        counts[s] = #{pi : sum_j j * pi(j) = s}, for s = 0..n(n+1)(2n+1)/6.
        The counts sum to n!.
    """
    n = check_positive_int(n, "n")
    if n > MAX_RANK_PRODUCT_N:
        raise ValidationError(f"n: must be <= {MAX_RANK_PRODUCT_N}, got {n}")

    max_sum = n * (n + 1) * (2 * n + 1) // 6
    counts = np.zeros((1 << n, max_sum + 1), dtype=np.float64)
    counts[0, 0] = 1.0

    # Masks only grow, so each state is complete before it is expanded
    for mask in range(1 << n):
        row = counts[mask]
        position = bin(mask).count("1") + 1
        if position > n:
            continue
        for value in range(1, n + 1):
            bit = 1 << (value - 1)
            if mask & bit:
                continue
            shift = position * value
            counts[mask | bit, shift:] += row[:max_sum + 1 - shift]

    return counts[-1]


def rank_product_probabilities(n: int) -> NDArray[np.float64]:
    """Null probabilities of sum(j * pi(j)); see rank_product_counts."""
    return rank_product_counts(n) / math.factorial(n)


def squared_difference_counts(n: int) -> NDArray[np.float64]:
    """
    Number of permutations of 1..n for each value of sum (pi(j) - pi(j+1))^2.

    The dynamic programme runs over (values placed, last value) and only
    keeps the layer of the current length. counts[s] is defined for
    s = 0..(n-1)^3 and the counts sum to n!.
    """
    n = check_positive_int(n, "n")
    if n > MAX_RANK_PRODUCT_N:
        raise ValidationError(f"n: must be <= {MAX_RANK_PRODUCT_N}, got {n}")

    size = (n - 1) ** 3 + 1
    layer = {}
    for value in range(n):
        start = np.zeros(size, dtype=np.float64)
        start[0] = 1.0
        layer[(1 << value, value)] = start

    for _ in range(n - 1):
        following = {}
        for (mask, last), row in layer.items():
            for value in range(n):
                if mask & (1 << value):
                    continue
                key = (mask | (1 << value), value)
                target = following.get(key)
                if target is None:
                    target = following[key] = np.zeros(size, dtype=np.float64)
                step = (last - value) ** 2
                target[step:] += row[:size - step]
        layer = following

    return np.sum(list(layer.values()), axis=0)
