from clamptree.core import (
    RangeTreeError,
    InvalidRange,
    ConstructionError,
    RangeMaxLazyTree,
    NaiveClampArray,
    build,
    update,
    query_max,
)
from clamptree.io import MaxQuery, UpdateQuery, QueryParseError, parse_input
from clamptree.runner import run_queries, run_batch

__all__ = [
    "RangeTreeError",
    "InvalidRange",
    "ConstructionError",
    "RangeMaxLazyTree",
    "NaiveClampArray",
    "build",
    "update",
    "query_max",
    "MaxQuery",
    "UpdateQuery",
    "QueryParseError",
    "parse_input",
    "run_queries",
    "run_batch",
]
