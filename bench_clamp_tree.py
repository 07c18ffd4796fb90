"""Benchmark the range-max clamp tree on random workloads."""

import multiprocessing
from clamptree.utils.benchmark import (
    WorkloadSpec, setup_logging, setup_csv_output, run_single_test,
    log_result_details, finalize_csv, summarize_results,
)


# Workload configuration
SIZES = [1_000, 10_000, 100_000]
QUERY_COUNTS = [10_000, 100_000]
UPDATE_RATIOS = [0.1, 0.5, 0.9]
SEEDS = [0, 1, 2]
MAX_VALUE = 1_000_000

# Cross-check against the brute-force array up to this size
VERIFY_LIMIT = 10_000

NUM_PROCESSES = 4


def run_benchmark():
    """Run the clamp tree benchmark."""
    logger, log_file = setup_logging()
    logger.info("="*80)
    logger.info("Range Max Clamp Tree Benchmark")
    logger.info("="*80)
    logger.info(f"Log file: {log_file}")

    tmp_csv_file, final_csv_file, csv_writer, csv_handle = setup_csv_output()
    logger.info(f"CSV file: {final_csv_file}")
    logger.info("")

    logger.info("Configuration:")
    logger.info(f"  Sizes: {SIZES}")
    logger.info(f"  Query counts: {QUERY_COUNTS}")
    logger.info(f"  Update ratios: {UPDATE_RATIOS}")
    logger.info(f"  Seeds: {SEEDS}")
    logger.info(f"  Verify limit: {VERIFY_LIMIT}")
    logger.info("")

    test_configs = [
        (WorkloadSpec(size=size, num_queries=count, max_value=MAX_VALUE,
                      update_ratio=ratio, seed=seed), VERIFY_LIMIT)
        for size in SIZES
        for count in QUERY_COUNTS
        for ratio in UPDATE_RATIOS
        for seed in SEEDS
    ]

    total_tests = len(test_configs)
    logger.info(f"Total tests: {total_tests}")
    logger.info("Starting parallel execution...")
    logger.info("")

    results = []
    pool = multiprocessing.Pool(processes=NUM_PROCESSES)
    try:
        async_results = [pool.apply_async(run_single_test, (config,)) for config in test_configs]

        for i, async_result in enumerate(async_results, 1):
            spec = test_configs[i-1][0]
            try:
                result = async_result.get()
            except Exception as e:
                result = {
                    'size': spec.size, 'num_queries': spec.num_queries,
                    'update_ratio': spec.update_ratio, 'seed': spec.seed,
                    'build_time': -1, 'query_time': -1, 'total_time': -1,
                    'success': False, 'error': f'Process crashed: {str(e)}'
                }

            results.append(result)
            csv_writer.writerow(result)
            csv_handle.flush()

            status = "✓" if result['success'] else "✗"
            logger.info(f"[{i}/{total_tests}] {status} {spec} "
                        f"total={result['total_time']:.6f}s")

            if not result['success']:
                logger.error(f"  Error: {result['error']}")
            else:
                log_result_details(logger, result)
    finally:
        pool.close()
        pool.terminate()
        pool.join()
        csv_handle.close()

    logger.info("\nFinalizing results...")
    df = finalize_csv(tmp_csv_file, final_csv_file)
    summary = summarize_results(df)
    logger.info("\n" + summary.to_string(index=False))

    logger.info("")
    logger.info("="*80)
    logger.info("Benchmark Completed")
    logger.info("="*80)
    logger.info(f"Total tests: {total_tests}")
    logger.info(f"Successful: {sum(1 for r in results if r['success'])}")
    logger.info(f"Failed: {sum(1 for r in results if not r['success'])}")
    logger.info(f"Results: {final_csv_file}")
    logger.info(f"Log: {log_file}")

    return results


if __name__ == "__main__":
    multiprocessing.freeze_support()
    multiprocessing.set_start_method('spawn', force=True)
    run_benchmark()
