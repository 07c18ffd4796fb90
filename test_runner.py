"""Tests for replaying batches and the command line entry point."""

from clamptree.core import RangeMaxLazyTree
from clamptree.io import MaxQuery, UpdateQuery
from clamptree.runner import compare_outputs, main, run_batch, run_queries


BATCH = """8 4
3 1 4 1 5 9 2 6
1 1 8
0 3 6 4
1 3 6
1 1 8
"""


def test_run_queries_converts_to_zero_based():
    tree = RangeMaxLazyTree([3, 1, 4, 1, 5, 9, 2, 6])
    answers = run_queries(tree, [
        UpdateQuery(left_query=3, right_query=6, value=4),
        MaxQuery(left_query=3, right_query=6),
        MaxQuery(left_query=8, right_query=8),
        UpdateQuery(left_query=1, right_query=8, value=0),
        MaxQuery(left_query=1, right_query=8),
    ])
    assert answers == [4, 6, 0]


def test_run_batch():
    assert run_batch(BATCH) == [9, 4, 6]
    assert run_batch("1 3\n42\n0 1 1 100\n0 1 1 10\n1 1 1\n") == [10]


def test_compare_outputs(tmp_path):
    (tmp_path / "input0.txt").write_text(BATCH, encoding="utf-8")
    (tmp_path / "output0.txt").write_text("9\n4\n\n6\n\n", encoding="utf-8")
    (tmp_path / "input1.txt").write_text(BATCH, encoding="utf-8")
    (tmp_path / "output1.txt").write_text("9\n5\n6\n", encoding="utf-8")
    (tmp_path / "input2.txt").write_text(BATCH, encoding="utf-8")

    results = compare_outputs(tmp_path)
    assert results == {"input0.txt": True, "input1.txt": False}


def test_main_prints_answers(tmp_path, capsys):
    path = tmp_path / "batch.txt"
    path.write_text(BATCH, encoding="utf-8")

    assert main([str(path)]) == 0
    assert capsys.readouterr().out.split() == ["9", "4", "6"]


def test_main_dump(tmp_path, capsys):
    path = tmp_path / "batch.txt"
    path.write_text("2 1\n5 7\n0 1 2 6\n", encoding="utf-8")

    assert main([str(path), "--dump"]) == 0
    out = capsys.readouterr().out
    assert "Segment Tree:" in out
    assert "L2 [1, 1]: 6" in out


def test_main_reports_errors(tmp_path):
    bad_parse = tmp_path / "bad.txt"
    bad_parse.write_text("3 1\n1 2\n1 1 2\n", encoding="utf-8")
    assert main([str(bad_parse)]) == 2

    out_of_range = tmp_path / "range.txt"
    out_of_range.write_text("3 1\n1 2 3\n1 1 4\n", encoding="utf-8")
    assert main([str(out_of_range)]) == 2


def test_main_check(tmp_path):
    (tmp_path / "input0.txt").write_text(BATCH, encoding="utf-8")
    (tmp_path / "output0.txt").write_text("9\n4\n6\n", encoding="utf-8")
    assert main(["--check", str(tmp_path)]) == 0

    (tmp_path / "input1.txt").write_text(BATCH, encoding="utf-8")
    (tmp_path / "output1.txt").write_text("9\n4\n", encoding="utf-8")
    assert main(["--check", str(tmp_path)]) == 1


if __name__ == "__main__":
    test_run_queries_converts_to_zero_based()
    test_run_batch()
    print("All runner tests completed!")
