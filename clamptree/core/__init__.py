"""Core range tree for clamptree."""

from .errors import RangeTreeError, InvalidRange, ConstructionError
from .tree import RangeMaxLazyTree, build, update, query_max
from .reference import NaiveClampArray

__all__ = [
    # errors module
    "RangeTreeError",
    "InvalidRange",
    "ConstructionError",
    # tree module
    "RangeMaxLazyTree",
    "build",
    "update",
    "query_max",
    # reference module
    "NaiveClampArray",
]
