"""Brute-force clamp array used to cross-check RangeMaxLazyTree."""

from __future__ import annotations

from numbers import Integral
from typing import Iterable, List

from .tree import check_query_range, normalize_elements


class NaiveClampArray:
    """Plain list with the same update/query surface as RangeMaxLazyTree.

    Every operation walks the whole range, so it is only suitable for tests
    and for verifying benchmark answers on small inputs.
    """

    def __init__(self, initial: Iterable[int]):
        self._nums = normalize_elements(initial)
        self.upper_bound = len(self._nums) - 1

    def __len__(self) -> int:
        return len(self._nums)

    def update(self, left_query: int, right_query: int, cap: int) -> None:
        check_query_range(left_query, right_query, self.upper_bound)
        if not isinstance(cap, Integral) or isinstance(cap, bool):
            raise TypeError(f"cap must be an integer, got {type(cap).__name__}")
        for p in range(left_query, right_query + 1):
            if self._nums[p] > cap:
                self._nums[p] = int(cap)

    def query_max(self, left_query: int, right_query: int) -> int:
        check_query_range(left_query, right_query, self.upper_bound)
        return max(self._nums[left_query:right_query + 1])

    def to_list(self) -> List[int]:
        return list(self._nums)
