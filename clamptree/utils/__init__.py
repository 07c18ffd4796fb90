"""Benchmark helpers for clamptree."""

from .benchmark import (
    WorkloadSpec,
    generate_workload,
    run_single_test,
    summarize_results,
)

__all__ = [
    "WorkloadSpec",
    "generate_workload",
    "run_single_test",
    "summarize_results",
]
