"""Replay query batches against a RangeMaxLazyTree.

Usage::

    python -m clamptree batch.txt           # print one answer per max query
    python -m clamptree < batch.txt
    python -m clamptree --check Testset/    # compare inputN.txt against outputN.txt
"""

from __future__ import annotations

import argparse
import logging
import re
import sys
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Union

from .core.errors import RangeTreeError
from .core.tree import RangeMaxLazyTree
from .io.queries import MaxQuery, Query, QueryParseError, UpdateQuery, parse_input, read_input_file

logger = logging.getLogger("runner")

_INPUT_NAME = re.compile(r"^input(\d+)\.txt$")


def run_queries(tree: RangeMaxLazyTree, queries: Iterable[Query]) -> List[int]:
    """Apply ``queries`` in order and return the answers to the max queries.

    Query indices are 1-based and converted to the tree's 0-based indices.
    """
    answers: List[int] = []
    for query in queries:
        if isinstance(query, UpdateQuery):
            tree.update(query.left_query - 1, query.right_query - 1, query.value)
        elif isinstance(query, MaxQuery):
            answers.append(tree.query_max(query.left_query - 1, query.right_query - 1))
        else:
            raise TypeError(f"Unsupported query type: {type(query).__name__}")
    return answers


def run_batch(source: Union[str, Iterable[str]]) -> List[int]:
    """Parse a batch, build its tree and return the max-query answers."""
    nums, queries = parse_input(source)
    tree = RangeMaxLazyTree(nums)
    return run_queries(tree, queries)


def _significant_lines(text: str) -> List[str]:
    return [line.strip() for line in text.splitlines() if line.strip()]


def compare_outputs(test_dir: Union[str, Path]) -> Dict[str, bool]:
    """Run every ``input<i>.txt`` in ``test_dir`` and compare with ``output<i>.txt``.

    Blank lines are ignored on both sides. Cases without an expected output
    file are skipped with a warning.

    Returns:
        Mapping from input file name to whether the answers matched
    """
    test_path = Path(test_dir)
    cases = []
    for input_file in test_path.iterdir():
        match = _INPUT_NAME.match(input_file.name)
        if match:
            cases.append((int(match.group(1)), input_file))
    cases.sort()

    results: Dict[str, bool] = {}
    for case_id, input_file in cases:
        expected_file = test_path / f"output{case_id}.txt"
        if not expected_file.exists():
            logger.warning(f"Skipping {input_file.name}: {expected_file.name} not found")
            continue

        nums, queries = read_input_file(input_file)
        answers = run_queries(RangeMaxLazyTree(nums), queries)

        expected = _significant_lines(expected_file.read_text(encoding="utf-8"))
        actual = [str(answer) for answer in answers]
        passed = expected == actual
        results[input_file.name] = passed

        if passed:
            logger.info(f"Test {case_id} passed.")
        else:
            logger.error(f"ERROR! Test {case_id} not passed")
            for line_no, (want, got) in enumerate(zip(expected, actual), 1):
                if want != got:
                    logger.error(f"  first mismatch at answer {line_no}: expected {want}, got {got}")
                    break
            else:
                logger.error(f"  expected {len(expected)} answers, got {len(actual)}")

    return results


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="clamptree",
        description="Answer range-max queries under range clamp updates.",
    )
    parser.add_argument("input", nargs="?", help="batch file to run (defaults to stdin)")
    parser.add_argument("--check", metavar="DIR",
                        help="compare inputN.txt against outputN.txt in DIR")
    parser.add_argument("--dump", action="store_true",
                        help="print the tree and its pending buffer after the run")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    try:
        if args.check:
            results = compare_outputs(args.check)
            failed = [name for name, passed in results.items() if not passed]
            logger.info(f"{len(results) - len(failed)}/{len(results)} cases passed")
            return 1 if failed else 0

        if args.input:
            nums, queries = read_input_file(args.input)
        else:
            nums, queries = parse_input(sys.stdin)

        tree = RangeMaxLazyTree(nums)
        for answer in run_queries(tree, queries):
            print(answer)

        if args.dump:
            tree.print_tree()
    except (QueryParseError, RangeTreeError) as e:
        logger.error(f"{type(e).__name__}: {e}")
        return 2

    return 0
