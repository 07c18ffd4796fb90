"""Exceptions raised by the range-max tree and its reference implementation."""


class RangeTreeError(ValueError):
    """Base class for range tree failures."""


class InvalidRange(RangeTreeError):
    """Query or update bounds are reversed or fall outside ``[0, upper_bound]``."""

    def __init__(self, left_query, right_query, upper_bound: int):
        self.left_query = left_query
        self.right_query = right_query
        self.upper_bound = upper_bound
        super().__init__(
            f"Invalid query range [{left_query}, {right_query}] "
            f"for tree covering [0, {upper_bound}]"
        )


class ConstructionError(RangeTreeError):
    """The tree cannot be built from the given input."""
