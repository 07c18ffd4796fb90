"""Tests for parsing query batches."""

import pytest

from clamptree.io import (
    MaxQuery,
    QueryParseError,
    UpdateQuery,
    parse_input,
    parse_query,
    read_input_file,
)


BATCH = """8 4
3 1 4 1 5 9 2 6
1 1 8
0 3 6 4
1 3 6
1 1 8
"""


def test_parse_batch():
    nums, queries = parse_input(BATCH)
    assert nums == [3, 1, 4, 1, 5, 9, 2, 6]
    assert queries == [
        MaxQuery(left_query=1, right_query=8),
        UpdateQuery(left_query=3, right_query=6, value=4),
        MaxQuery(left_query=3, right_query=6),
        MaxQuery(left_query=1, right_query=8),
    ]


def test_parse_lines_and_trailing_blank_lines():
    lines = (BATCH + "\n\n").splitlines(keepends=True)
    nums, queries = parse_input(lines)
    assert len(nums) == 8
    assert len(queries) == 4


def test_parse_negative_values():
    nums, queries = parse_input("3 1\n-1 -2 -3\n0 1 3 -5\n")
    assert nums == [-1, -2, -3]
    assert queries == [UpdateQuery(left_query=1, right_query=3, value=-5)]


def test_query_display():
    assert str(parse_query("0 2 5 7")) == "Update query: left_bound = 2, right_bound = 5, value = 7"
    assert str(parse_query("1 2 5")) == "Max query: left_bound = 2, right_bound = 5"


@pytest.mark.parametrize("line", ["2 1 3", "0 1 3", "1 1 3 4", "1 x 3", "", "1 0 2", "1 4 2"])
def test_invalid_query_line(line):
    with pytest.raises(QueryParseError):
        parse_query(line, line_number=5)


def test_query_bounds_validated():
    with pytest.raises(ValueError):
        MaxQuery(left_query=0, right_query=1)
    with pytest.raises(ValueError):
        UpdateQuery(left_query=3, right_query=2, value=0)


@pytest.mark.parametrize("text, line_number", [
    ("", 1),
    ("3\n1 2 3\n", 1),
    ("3 1 7\n1 2 3\n", 1),
    ("0 0\n\n", 1),
    ("3 1\n", 2),
    ("3 1\n1 2\n1 1 2\n", 2),
    ("3 2\n1 2 3\n1 1 2\n", 4),
    ("3 1\n1 2 3\n1 1 2\n1 1 1\n", 4),
])
def test_invalid_batch(text, line_number):
    with pytest.raises(QueryParseError) as excinfo:
        parse_input(text)
    assert excinfo.value.line_number == line_number
    assert f"line {line_number}:" in str(excinfo.value)


def test_read_input_file(tmp_path):
    path = tmp_path / "input0.txt"
    path.write_text(BATCH, encoding="utf-8")
    nums, queries = read_input_file(path)
    assert nums[5] == 9
    assert isinstance(queries[1], UpdateQuery)


if __name__ == "__main__":
    test_parse_batch()
    test_parse_lines_and_trailing_blank_lines()
    test_parse_negative_values()
    test_query_display()
    test_query_bounds_validated()
    print("All parsing tests completed!")
