"""Range-maximum segment tree with lazy "clamp to at most cap" updates.

The tree is stored implicitly in two flat lists addressed like a heap: the
root is slot 0 and the children of slot ``i`` are ``2i + 1`` and ``2i + 2``.
``4 * n`` slots are allocated so that every child address produced while
splitting ``[0, n - 1]`` stays inside the arrays even when ``n`` is not a
power of two.

Each slot holds:
- ``_values[i]``: maximum of the node's range
- ``_pending[i]``: a clamp not yet pushed into the children, or ``None``

Every visit to a node starts by discharging its own pending clamp, so a read
never observes a node whose ancestors' clamps have not reached it.
"""

from __future__ import annotations

import logging
from numbers import Integral
from typing import Iterable, List, Optional

from .errors import ConstructionError, InvalidRange

logger = logging.getLogger("range_max_tree")


def check_query_range(left_query, right_query, upper_bound: int) -> None:
    """Raise InvalidRange unless ``0 <= left_query <= right_query <= upper_bound``."""
    for bound in (left_query, right_query):
        if not isinstance(bound, Integral) or isinstance(bound, bool):
            raise InvalidRange(left_query, right_query, upper_bound)
    if left_query < 0 or right_query > upper_bound or left_query > right_query:
        raise InvalidRange(left_query, right_query, upper_bound)


def normalize_elements(initial: Iterable[int]) -> List[int]:
    """Copy the input into a list of plain ints, rejecting empty or non-integer input."""
    # Tensors and ndarrays expose tolist(); iterating them yields 0-d objects
    if hasattr(initial, "tolist"):
        initial = initial.tolist()
    nums = list(initial)
    if not nums:
        raise ConstructionError("Cannot build a range tree from an empty sequence")
    for index, num in enumerate(nums):
        if not isinstance(num, Integral) or isinstance(num, bool):
            raise ConstructionError(
                f"Element {index} must be an integer, got {type(num).__name__}: {num!r}"
            )
    return [int(num) for num in nums]


class RangeMaxLazyTree:
    """Segment tree answering range maxima under range clamp updates.

    ``update(l, r, cap)`` lowers every element of ``[l, r]`` that exceeds
    ``cap`` down to ``cap`` and leaves smaller elements alone. It is not a
    range assignment: a cap at or above the current maximum is a no-op.

    Both ``update`` and ``query_max`` mutate the pending buffer as they walk,
    so a single instance must not be shared between threads without external
    locking.
    """

    def __init__(self, initial: Iterable[int]):
        nums = normalize_elements(initial)
        self.n = len(nums)
        self.upper_bound = self.n - 1

        slot_count = 4 * self.n
        self._values: List[int] = [0] * slot_count
        self._pending: List[Optional[int]] = [None] * slot_count

        self._build(nums, 0, self.upper_bound, 0)
        logger.debug(f"Built range tree over {self.n} elements ({slot_count} slots)")

    @classmethod
    def build(cls, initial: Iterable[int]) -> RangeMaxLazyTree:
        """Create a tree over ``initial``."""
        return cls(initial)

    def __len__(self) -> int:
        return self.n

    def __repr__(self) -> str:
        return f"RangeMaxLazyTree(n={self.n})"

    # ------------------------------------------------------------------
    # Index arithmetic
    # ------------------------------------------------------------------

    @staticmethod
    def _mid(left: int, right: int) -> int:
        return left + (right - left) // 2

    @staticmethod
    def _left(index: int) -> int:
        return 2 * index + 1

    @staticmethod
    def _right(index: int) -> int:
        return 2 * index + 2

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def _build(self, nums: List[int], left_bound: int, right_bound: int, index: int) -> None:
        if left_bound == right_bound:
            self._values[index] = nums[left_bound]
            return

        mid = self._mid(left_bound, right_bound)
        left_child = self._left(index)
        right_child = self._right(index)

        self._build(nums, left_bound, mid, left_child)
        self._build(nums, mid + 1, right_bound, right_child)

        self._values[index] = max(self._values[left_child], self._values[right_child])

    # ------------------------------------------------------------------
    # Lazy propagation
    # ------------------------------------------------------------------

    def _propagate(self, index: int, left_bound: int, right_bound: int) -> None:
        """Apply the node's pending clamp to itself and queue it on its children."""
        pending = self._pending[index]
        if pending is None:
            return

        self._values[index] = pending

        if left_bound != right_bound:
            for child in (self._left(index), self._right(index)):
                if child >= len(self._values):
                    continue
                # Only clamp children that would actually decrease; keep a smaller pending value
                if self._values[child] > pending:
                    child_pending = self._pending[child]
                    if child_pending is None or child_pending > pending:
                        self._pending[child] = pending

        self._pending[index] = None

    # ------------------------------------------------------------------
    # Update
    # ------------------------------------------------------------------

    def update(self, left_query: int, right_query: int, cap: int) -> None:
        """Clamp every element of ``[left_query, right_query]`` to at most ``cap``.

        Args:
            left_query: Inclusive left index (0-based)
            right_query: Inclusive right index (0-based)
            cap: Upper bound applied to the range

        Raises:
            InvalidRange: if the bounds are reversed or outside the tree
        """
        check_query_range(left_query, right_query, self.upper_bound)
        if not isinstance(cap, Integral) or isinstance(cap, bool):
            raise TypeError(f"cap must be an integer, got {type(cap).__name__}")
        self._update(0, left_query, right_query, 0, self.upper_bound, int(cap))

    def _update(
        self,
        index: int,
        left_query: int,
        right_query: int,
        left_bound: int,
        right_bound: int,
        cap: int,
    ) -> None:
        self._propagate(index, left_bound, right_bound)

        # No overlap
        if left_query > right_bound or right_query < left_bound:
            return

        # Total overlap
        if left_query <= left_bound and right_bound <= right_query:
            if cap < self._values[index]:
                self._pending[index] = cap
                self._propagate(index, left_bound, right_bound)
            return

        # Partial overlap
        mid = self._mid(left_bound, right_bound)
        left_child = self._left(index)
        right_child = self._right(index)

        self._update(left_child, left_query, right_query, left_bound, mid, cap)
        self._update(right_child, left_query, right_query, mid + 1, right_bound, cap)

        self._values[index] = max(self._values[left_child], self._values[right_child])

    # ------------------------------------------------------------------
    # Query
    # ------------------------------------------------------------------

    def query_max(self, left_query: int, right_query: int) -> int:
        """Return the maximum element of ``[left_query, right_query]``.

        Raises:
            InvalidRange: if the bounds are reversed or outside the tree
        """
        check_query_range(left_query, right_query, self.upper_bound)
        result = self._query(0, left_query, right_query, 0, self.upper_bound)
        # A validated range always overlaps the root
        assert result is not None
        return result

    def _query(
        self,
        index: int,
        left_query: int,
        right_query: int,
        left_bound: int,
        right_bound: int,
    ) -> Optional[int]:
        """Return the max of the overlap, or None when the node contributes nothing."""
        self._propagate(index, left_bound, right_bound)

        if left_query > right_bound or right_query < left_bound:
            return None

        if left_query <= left_bound and right_bound <= right_query:
            return self._values[index]

        mid = self._mid(left_bound, right_bound)
        max_left = self._query(self._left(index), left_query, right_query, left_bound, mid)
        max_right = self._query(self._right(index), left_query, right_query, mid + 1, right_bound)

        if max_left is None:
            return max_right
        if max_right is None:
            return max_left
        return max(max_left, max_right)

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    def to_list(self) -> List[int]:
        """Return the logical array, pushing every pending clamp down to the leaves."""
        result: List[int] = []
        self._collect(0, 0, self.upper_bound, result)
        return result

    def _collect(self, index: int, left_bound: int, right_bound: int, out: List[int]) -> None:
        self._propagate(index, left_bound, right_bound)
        if left_bound == right_bound:
            out.append(self._values[index])
            return
        mid = self._mid(left_bound, right_bound)
        self._collect(self._left(index), left_bound, mid, out)
        self._collect(self._right(index), mid + 1, right_bound, out)

    def format_tree(self) -> str:
        """Render the value and pending buffers sideways, right subtree on top."""
        lines = ["Segment Tree:"]
        self._format_node(self._values, 0, 0, self.upper_bound, 0, "T", lines)
        lines.append("")
        lines.append("Lazy Tree:")
        self._format_node(self._pending, 0, 0, self.upper_bound, 0, "L", lines)
        return "\n".join(lines)

    def _format_node(self, buffer, index, left_bound, right_bound, level, label, lines) -> None:
        if left_bound != right_bound:
            mid = self._mid(left_bound, right_bound)
            self._format_node(buffer, self._right(index), mid + 1, right_bound, level + 1, label, lines)
        lines.append(f"{'    ' * level}{label}{index} [{left_bound}, {right_bound}]: {buffer[index]}")
        if left_bound != right_bound:
            self._format_node(buffer, self._left(index), left_bound, mid, level + 1, label, lines)

    def print_tree(self) -> None:
        """Print the tree structure for debugging."""
        print(self.format_tree())


def build(initial: Iterable[int]) -> RangeMaxLazyTree:
    """Build a range tree over ``initial``."""
    return RangeMaxLazyTree(initial)


def update(tree: RangeMaxLazyTree, left_query: int, right_query: int, cap: int) -> None:
    """Clamp ``[left_query, right_query]`` of ``tree`` to at most ``cap``."""
    tree.update(left_query, right_query, cap)


def query_max(tree: RangeMaxLazyTree, left_query: int, right_query: int) -> int:
    """Return the maximum of ``[left_query, right_query]`` in ``tree``."""
    return tree.query_max(left_query, right_query)
