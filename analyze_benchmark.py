"""
Summarize a clamp tree benchmark CSV: mean timings per configuration and the
cost per query as the update ratio grows.
"""
import sys

import pandas as pd

from clamptree.utils.benchmark import summarize_results

csv_path = sys.argv[1] if len(sys.argv) > 1 else 'results/benchmark_results.csv'
df = pd.read_csv(csv_path)

failed = df[df['success'] == False]
if len(failed):
    print(f"{len(failed)} failed runs:")
    for _, row in failed.iterrows():
        print(f"  size={row['size']} queries={row['num_queries']} "
              f"ratio={row['update_ratio']} seed={row['seed']}: {row['error']}")

summary = summarize_results(df)

for size in sorted(summary['size'].unique()):
    print(f"\nsize={size}:")
    data = summary[summary['size'] == size]
    for _, row in data.iterrows():
        print(f"  queries={row['num_queries']} ratio={row['update_ratio']}: "
              f"build={row['build_time']:.4f}s, queries={row['query_time']:.4f}s "
              f"({row['us_per_query']:.2f}us/query, {row['runs']} runs)")
