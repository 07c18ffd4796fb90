"""Benchmark utilities for the range-max clamp tree.

Workloads are drawn with a seeded torch generator so that every run of a
configuration replays the same array and query stream.
"""

import torch
import logging
import csv
import time
import traceback
from dataclasses import dataclass
from pathlib import Path
from datetime import datetime
from typing import Dict, List, Any, Tuple

import pandas as pd

from clamptree.core.tree import RangeMaxLazyTree
from clamptree.core.reference import NaiveClampArray
from clamptree.io.queries import MaxQuery, Query, UpdateQuery
from clamptree.runner import run_queries


CSV_FIELDNAMES = [
    'size', 'num_queries', 'update_ratio', 'seed',
    'build_time', 'query_time', 'total_time',
    'update_count', 'max_count', 'verified', 'timestamp',
    'success', 'error', 'traceback'
]


@dataclass(frozen=True)
class WorkloadSpec:
    """Immutable description of a random workload.

    Args:
        size: Number of array elements
        num_queries: Number of queries in the stream
        max_value: Elements and caps are drawn from [0, max_value]
        update_ratio: Fraction of queries that are clamp updates
        seed: Seed of the torch generator
    """

    size: int
    num_queries: int
    max_value: int = 1_000_000
    update_ratio: float = 0.5
    seed: int = 0

    def __post_init__(self) -> None:
        if self.size <= 0:
            raise ValueError("size must be positive")
        if self.num_queries < 0:
            raise ValueError("num_queries must be non-negative")
        if self.max_value < 0:
            raise ValueError("max_value must be non-negative")
        if not 0.0 <= self.update_ratio <= 1.0:
            raise ValueError("update_ratio must be within [0, 1]")

    def __str__(self) -> str:
        return (f"WorkloadSpec(size={self.size}, queries={self.num_queries}, "
                f"update_ratio={self.update_ratio}, seed={self.seed})")


def generate_workload(spec: WorkloadSpec) -> Tuple[List[int], List[Query]]:
    """Draw the initial array and the query stream (1-based indices) for ``spec``."""
    generator = torch.Generator().manual_seed(spec.seed)

    nums = torch.randint(0, spec.max_value + 1, (spec.size,), generator=generator).tolist()

    is_update = (torch.rand(spec.num_queries, generator=generator) < spec.update_ratio).tolist()
    bounds = torch.randint(1, spec.size + 1, (spec.num_queries, 2), generator=generator)
    bounds, _ = torch.sort(bounds, dim=1)
    caps = torch.randint(0, spec.max_value + 1, (spec.num_queries,), generator=generator).tolist()

    queries: List[Query] = []
    for (left, right), update, cap in zip(bounds.tolist(), is_update, caps):
        if update:
            queries.append(UpdateQuery(left_query=left, right_query=right, value=cap))
        else:
            queries.append(MaxQuery(left_query=left, right_query=right))

    return nums, queries


def setup_logging(log_dir: str = "logs") -> tuple:
    """Setup logging to file and console."""
    log_path = Path(log_dir)
    log_path.mkdir(exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = log_path / f"benchmark_{timestamp}.log"

    logger = logging.getLogger(f"benchmark_{timestamp}")
    logger.setLevel(logging.INFO)
    logger.handlers.clear()

    file_handler = logging.FileHandler(log_file, encoding='utf-8')
    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(logging.Formatter(
        '[%(asctime)s] %(levelname)s: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    ))

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))

    logger.addHandler(file_handler)
    logger.addHandler(console_handler)

    return logger, log_file


def setup_csv_output(results_dir: str = "results") -> tuple:
    """Setup CSV output file and writer.

    Rows are streamed to a temporary file and sorted into the final file by
    :func:`finalize_csv` once every run has finished.
    """
    results_path = Path(results_dir)
    results_path.mkdir(exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    tmp_csv_file = results_path / f"benchmark_results_{timestamp}.tmp.csv"
    csv_file = results_path / f"benchmark_results_{timestamp}.csv"

    file_handle = open(tmp_csv_file, 'w', newline='', encoding='utf-8')
    writer = csv.DictWriter(file_handle, fieldnames=CSV_FIELDNAMES, extrasaction='ignore')
    writer.writeheader()

    return tmp_csv_file, csv_file, writer, file_handle


def run_single_test(args: tuple) -> Dict[str, Any]:
    """Run a single workload configuration in an isolated process.

    ``args`` is ``(spec, verify_limit)``. Answers are cross-checked against
    NaiveClampArray when ``spec.size <= verify_limit``.
    """
    spec, verify_limit = args

    try:
        nums, queries = generate_workload(spec)
        update_count = sum(isinstance(q, UpdateQuery) for q in queries)

        start = time.perf_counter()
        tree = RangeMaxLazyTree(nums)
        build_time = time.perf_counter() - start

        start = time.perf_counter()
        answers = run_queries(tree, queries)
        query_time = time.perf_counter() - start

        verified = False
        if spec.size <= verify_limit:
            expected = run_queries(NaiveClampArray(nums), queries)
            if answers != expected:
                mismatch = next(i for i, (a, b) in enumerate(zip(answers, expected)) if a != b)
                raise AssertionError(
                    f"Answer {mismatch} differs from reference: "
                    f"tree={answers[mismatch]}, reference={expected[mismatch]}"
                )
            verified = True

        return {
            'size': spec.size,
            'num_queries': spec.num_queries,
            'update_ratio': spec.update_ratio,
            'seed': spec.seed,
            'build_time': build_time,
            'query_time': query_time,
            'total_time': build_time + query_time,
            'update_count': update_count,
            'max_count': len(queries) - update_count,
            'verified': verified,
            'timestamp': datetime.now().strftime('%Y-%m-%d %H:%M:%S'),
            'success': True
        }
    except Exception as e:
        return {
            'size': spec.size,
            'num_queries': spec.num_queries,
            'update_ratio': spec.update_ratio,
            'seed': spec.seed,
            'build_time': -1,
            'query_time': -1,
            'total_time': -1,
            'update_count': -1,
            'max_count': -1,
            'verified': False,
            'timestamp': datetime.now().strftime('%Y-%m-%d %H:%M:%S'),
            'success': False,
            'error': str(e),
            'traceback': traceback.format_exc()
        }


def log_result_details(logger: logging.Logger, result: Dict[str, Any]):
    """Log timing details for a successful run."""
    if not result['success']:
        return

    per_query = result['query_time'] / result['num_queries'] if result['num_queries'] else 0.0
    logger.info(f"    Build: {result['build_time']:.6f}s")
    logger.info(f"    Queries: {result['query_time']:.6f}s "
                f"({result['update_count']} updates, {result['max_count']} max, "
                f"{per_query * 1e6:.2f}us/query)")
    logger.info(f"    Verified against reference: {result['verified']}")


def finalize_csv(tmp_csv_file: Path, csv_file: Path) -> pd.DataFrame:
    """Sort streamed rows by configuration, write the final CSV and drop the temporary one."""
    df = pd.read_csv(tmp_csv_file)
    df = df.sort_values(['size', 'num_queries', 'update_ratio', 'seed']).reset_index(drop=True)
    df.to_csv(csv_file, index=False)
    Path(tmp_csv_file).unlink()
    return df


def summarize_results(df: pd.DataFrame) -> pd.DataFrame:
    """Mean timings per (size, num_queries, update_ratio) over successful runs."""
    ok = df[df['success'] == True]
    summary = ok.groupby(['size', 'num_queries', 'update_ratio'], as_index=False).agg(
        runs=('seed', 'count'),
        build_time=('build_time', 'mean'),
        query_time=('query_time', 'mean'),
        total_time=('total_time', 'mean'),
    )
    summary['us_per_query'] = summary['query_time'] / summary['num_queries'] * 1e6
    return summary
