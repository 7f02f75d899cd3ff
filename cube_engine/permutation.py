# cube_engine/permutation.py
# Lehmer-code ranking of k-permutations of n symbols.
from __future__ import annotations
from typing import List, Optional, Sequence

POPCOUNT_TABLE_MAX_N = 20


def factorial(n: int) -> int:
    out = 1
    for i in range(2, n + 1):
        out *= i
    return out


def pick(n: int, k: int) -> int:
    """nPk = n! / (n-k)!"""
    if k < 0 or k > n:
        return 0
    return factorial(n) // factorial(n - k)


def choose(n: int, k: int) -> int:
    """nCk = n! / ((n-k)! k!)"""
    if k < 0 or k > n:
        return 0
    return factorial(n) // (factorial(n - k) * factorial(k))


class PermutationIndexer:
    """
    Maps an ordered selection of k distinct symbols from [0, n) onto a dense
    rank in [0, n!/(n-k)!). Ranks are lexicographic, so the identity
    selection (0, 1, ..., k-1) ranks 0.
    """

    def __init__(self, n: int, k: Optional[int] = None):
        if k is None:
            k = n
        if n <= 0 or not 0 < k <= n:
            raise ValueError(f"need 0 < k <= n, got n={n} k={k}")
        self.n = n
        self.k = k

        # weight of lehmer digit i: pick(n-1-i, k-1-i)
        self.weights: List[int] = [pick(n - 1 - i, k - 1 - i) for i in range(k)]

        self._ones = None
        if n <= POPCOUNT_TABLE_MAX_N:
            self._ones = [bin(i).count("1") for i in range(1 << n)]

    @property
    def size(self) -> int:
        return pick(self.n, self.k)

    def _count_ones(self, x: int) -> int:
        if self._ones is not None:
            return self._ones[x]
        return bin(x).count("1")

    def rank(self, perm: Sequence[int]) -> int:
        n, k = self.n, self.k
        if len(perm) != k:
            raise ValueError(f"expected {k} symbols, got {len(perm)}")

        seen = 0  # bit (n-1-p) set once symbol p is used
        index = 0
        for i in range(k):
            p = perm[i]
            if not 0 <= p < n:
                raise ValueError(f"symbol out of range: {p}")
            bit = 1 << (n - 1 - p)
            if seen & bit:
                raise ValueError(f"repeated symbol: {p}")
            seen |= bit
            # used symbols smaller than p sit left of p's bit
            lehmer = p - self._count_ones(seen >> (n - p))
            index += lehmer * self.weights[i]
        return index
