#!/usr/bin/env python3
"""Quick perf benchmark for the calculator lex/parse/evaluate pipeline."""

from __future__ import annotations

import argparse
import cProfile
import io
import pstats
import random
import statistics
import time

from tqdm import tqdm

from cstcalc.calculator import VALUES, evaluate

OPERATORS = ("plus", "minus", "times")


def _generate_expressions(count: int, operands: int, seed: int) -> list[str]:
    rng = random.Random(seed)
    words = sorted(VALUES)
    expressions: list[str] = []
    for _ in range(count):
        parts = [rng.choice(words)]
        for _ in range(operands - 1):
            parts.append(rng.choice(OPERATORS))
            parts.append(rng.choice(words))
        expressions.append(" ".join(parts))
    return expressions


def _run_once(
    expressions: list[str],
    *,
    label: str,
    show_progress: bool,
) -> tuple[float, int]:
    start = time.perf_counter()
    checksum = 0
    iterator = tqdm(expressions, desc=label, unit="expr") if show_progress else expressions
    for text in iterator:
        checksum += evaluate(text)
    duration = time.perf_counter() - start
    return duration, checksum


def main() -> int:
    parser = argparse.ArgumentParser(description="Benchmark calculator evaluation throughput")
    parser.add_argument("--expressions", type=int, default=2000, help="Number of generated expressions")
    parser.add_argument("--operands", type=int, default=50, help="Operands per expression")
    parser.add_argument("--seed", type=int, default=0, help="Random seed for expression generation")
    parser.add_argument("--runs", type=int, default=5, help="Measured runs")
    parser.add_argument("--warmups", type=int, default=1, help="Warmup runs")
    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Disable tqdm progress bars (useful for pure timing)",
    )
    parser.add_argument(
        "--profile",
        action="store_true",
        help="Run cProfile and print top hotspots",
    )
    parser.add_argument(
        "--profile-top",
        type=int,
        default=30,
        help="Number of cProfile rows to print (default: 30)",
    )
    parser.add_argument(
        "--profile-sort",
        type=str,
        default="tottime",
        help="cProfile sort key (default: tottime, common: cumulative)",
    )
    args = parser.parse_args()

    if args.operands < 1:
        raise SystemExit(f"Invalid --operands: {args.operands}")

    expressions = _generate_expressions(args.expressions, args.operands, args.seed)
    show_progress = not args.no_progress

    def _benchmark() -> tuple[list[float], int]:
        for warmup_idx in range(max(args.warmups, 0)):
            _run_once(
                expressions,
                label=f"warmup {warmup_idx + 1}/{max(args.warmups, 0)}",
                show_progress=show_progress,
            )

        timings: list[float] = []
        checksum = 0
        for run_idx in range(max(args.runs, 1)):
            duration, checksum = _run_once(
                expressions,
                label=f"run {run_idx + 1}/{max(args.runs, 1)}",
                show_progress=show_progress,
            )
            timings.append(duration)
        return timings, checksum

    if args.profile:
        profiler = cProfile.Profile()
        profiler.enable()
        timings, checksum = _benchmark()
        profiler.disable()
        stream = io.StringIO()
        stats = pstats.Stats(profiler, stream=stream)
        stats.sort_stats(args.profile_sort).print_stats(max(args.profile_top, 1))
        print("\n[cProfile top functions]")
        print(stream.getvalue())
    else:
        timings, checksum = _benchmark()

    mean = statistics.mean(timings)
    print(f"Expressions: {len(expressions)} x {args.operands} operands")
    print(f"Checksum: {checksum}")
    print(f"Runs: {len(timings)} (warmups={max(args.warmups, 0)})")
    print(f"Best:   {min(timings):.4f}s")
    print(f"Median: {statistics.median(timings):.4f}s")
    print(f"Mean:   {mean:.4f}s")
    print(f"Worst:  {max(timings):.4f}s")
    print(f"Expressions/s (mean): {len(expressions) / mean:.1f}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
