"""Query batch parsing."""

from .queries import (
    MaxQuery,
    Query,
    QueryParseError,
    UpdateQuery,
    parse_input,
    parse_query,
    read_input_file,
)

__all__ = [
    "MaxQuery",
    "Query",
    "QueryParseError",
    "UpdateQuery",
    "parse_input",
    "parse_query",
    "read_input_file",
]
