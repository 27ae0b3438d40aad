"""
Benchmark the list-insertion strategies behind the search fringe.

Usage:
    python -m scripts.benchmark_insert [--iterations N] [--sizes 100000 1000000]

For each list size, inserts one element at 0.1%, 1%, 50% and 90% of the
length with every strategy and prints avg/min/max time per insertion.
"""
import argparse
import sys
from pathlib import Path

# Ensure project root is on path
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from letterbox.metrics import time_repeated
from letterbox.ordered import INSERT_STRATEGIES

POSITIONS = (0.001, 0.01, 0.5, 0.9)


def main():
    parser = argparse.ArgumentParser(description="Insertion strategy benchmark")
    parser.add_argument("--iterations", type=int, default=10,
                        help="Insertions timed per strategy and position (default: 10)")
    parser.add_argument("--sizes", type=int, nargs="+", default=[100_000, 1_000_000],
                        help="List sizes to test (default: 100000 1000000)")
    parser.add_argument("--skip", nargs="*", default=[], choices=sorted(INSERT_STRATEGIES),
                        help="Strategies to leave out (shift is very slow on big lists)")
    args = parser.parse_args()

    for size in args.sizes:
        for pos in POSITIONS:
            index = int(size * pos)
            print(f"\n--- size={size} index={index} ---")
            for name, fn in INSERT_STRATEGIES.items():
                if name in args.skip:
                    continue
                lst = [0] * size
                stats = time_repeated(lambda: fn(lst, 1, index), args.iterations)
                print(f"  {name:<12} avg={stats['avg_us']:>10.1f}us  "
                      f"min={stats['min_us']:>10.1f}us  max={stats['max_us']:>10.1f}us")


if __name__ == "__main__":
    main()
