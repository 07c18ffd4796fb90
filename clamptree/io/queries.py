"""Parsing of query batches in the plain-text competition format.

Layout::

    n m
    a_1 a_2 ... a_n
    0 l r v      (update: clamp [l, r] to at most v)
    1 l r        (max query over [l, r])

Indices in the file are 1-based. Conversion to the tree's 0-based indices
happens in :mod:`clamptree.runner`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, List, Tuple, Union

logger = logging.getLogger("query_parser")

UPDATE_TYPE = 0
MAX_TYPE = 1


class QueryParseError(ValueError):
    """Raised when a query batch does not follow the expected layout."""

    def __init__(self, message: str, line_number: int = 0):
        self.line_number = line_number
        if line_number:
            message = f"line {line_number}: {message}"
        super().__init__(message)


@dataclass(frozen=True)
class UpdateQuery:
    """Clamp ``[left_query, right_query]`` (1-based, inclusive) to at most ``value``."""

    left_query: int
    right_query: int
    value: int

    def __post_init__(self) -> None:
        if self.left_query < 1:
            raise ValueError("left_query must be at least 1")
        if self.left_query > self.right_query:
            raise ValueError("left_query must not exceed right_query")

    def __str__(self) -> str:
        return (f"Update query: left_bound = {self.left_query}, "
                f"right_bound = {self.right_query}, value = {self.value}")


@dataclass(frozen=True)
class MaxQuery:
    """Maximum over ``[left_query, right_query]`` (1-based, inclusive)."""

    left_query: int
    right_query: int

    def __post_init__(self) -> None:
        if self.left_query < 1:
            raise ValueError("left_query must be at least 1")
        if self.left_query > self.right_query:
            raise ValueError("left_query must not exceed right_query")

    def __str__(self) -> str:
        return f"Max query: left_bound = {self.left_query}, right_bound = {self.right_query}"


Query = Union[UpdateQuery, MaxQuery]


def _parse_ints(line: str, line_number: int) -> List[int]:
    try:
        return [int(token) for token in line.split()]
    except ValueError as e:
        raise QueryParseError(f"non-integer token ({e})", line_number) from None


def parse_query(line: str, line_number: int = 0) -> Query:
    """Parse a single query line."""
    parts = _parse_ints(line, line_number)
    if not parts:
        raise QueryParseError("empty query line", line_number)

    query_type = parts[0]
    try:
        if query_type == UPDATE_TYPE and len(parts) == 4:
            return UpdateQuery(left_query=parts[1], right_query=parts[2], value=parts[3])
        if query_type == MAX_TYPE and len(parts) == 3:
            return MaxQuery(left_query=parts[1], right_query=parts[2])
    except ValueError as e:
        raise QueryParseError(str(e), line_number) from None

    raise QueryParseError(f"invalid query format: {line.strip()!r}", line_number)


def _numbered_lines(lines: Iterable[str]) -> Iterator[Tuple[int, str]]:
    for line_number, line in enumerate(lines, 1):
        yield line_number, line.rstrip("\n")


def _next_line(lines: Iterator[Tuple[int, str]], what: str, last_line: int) -> Tuple[int, str]:
    try:
        return next(lines)
    except StopIteration:
        raise QueryParseError(f"missing {what}", last_line + 1) from None


def parse_input(source: Union[str, Iterable[str]]) -> Tuple[List[int], List[Query]]:
    """Parse a complete batch into the initial array and its queries.

    Args:
        source: Whole batch as one string, or an iterable of lines

    Returns:
        Tuple of (array, queries)
    """
    if isinstance(source, str):
        source = source.splitlines()
    lines = _numbered_lines(source)

    line_number, header = _next_line(lines, "header line", 0)
    counts = _parse_ints(header, line_number)
    if len(counts) < 2:
        raise QueryParseError("header must contain the array size and the query count", line_number)
    if len(counts) > 2:
        raise QueryParseError("too many numbers on the header line", line_number)
    n, m = counts
    if n < 1:
        raise QueryParseError(f"array size must be positive, got {n}", line_number)
    if m < 0:
        raise QueryParseError(f"query count must be non-negative, got {m}", line_number)

    line_number, array_line = _next_line(lines, "array line", line_number)
    nums = _parse_ints(array_line, line_number)
    if len(nums) != n:
        raise QueryParseError(
            f"declared array size {n} does not match the {len(nums)} numbers given", line_number
        )

    queries: List[Query] = []
    for _ in range(m):
        line_number, query_line = _next_line(lines, "query line", line_number)
        queries.append(parse_query(query_line, line_number))

    for line_number, extra in lines:
        if extra.strip():
            raise QueryParseError("unexpected content after the last query", line_number)

    logger.debug(f"Parsed batch: n={n}, m={m}, "
                 f"updates={sum(isinstance(q, UpdateQuery) for q in queries)}")
    return nums, queries


def read_input_file(path: Union[str, Path]) -> Tuple[List[int], List[Query]]:
    """Parse a batch stored in a file."""
    with open(path, "r", encoding="utf-8") as f:
        return parse_input(f)
