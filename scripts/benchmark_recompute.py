#!/usr/bin/env python3
"""
Benchmark crossing index maintenance on generated levels.

Compares the incremental update done at the end of a drag with a full
recompute of every segment pair on the same positions.

Usage:
    uv run python scripts/benchmark_recompute.py [--levels N] [--drags N]

Examples:
    uv run python scripts/benchmark_recompute.py
    uv run python scripts/benchmark_recompute.py --levels 20 --drags 200
    uv run python scripts/benchmark_recompute.py --output results.json
"""

from __future__ import annotations

import argparse
import json
import time
from typing import Any

import numpy as np

from untangle import GameLevel, Graph, LevelGenerator


def copy_level(level: GameLevel) -> GameLevel:
    """Build a new level on the same topology and positions (full recompute)."""
    graph = Graph()
    for x, y in level.graph.positions():
        graph.add_vertex(x, y)
    for a, b in level.graph.edges():
        graph.connect(a, b)
    return GameLevel(graph)


def benchmark_level(level_number: int, drags: int, seed: int) -> dict[str, Any]:
    """
    Benchmark one level.

    Returns:
        Dict with timing and size info
    """
    rng = np.random.default_rng(seed)
    level = LevelGenerator.for_level(level_number, random_seed=seed).generate_level()
    radius = 350.0

    incremental = 0.0
    full = 0.0
    mismatches = 0

    for _ in range(drags):
        vertex = level.vertices[int(rng.integers(level.vertex_count))]
        x, y = rng.uniform(-radius, radius, size=2)

        level.start_drag(vertex)
        level.drag_to((float(x), float(y)))
        start = time.perf_counter()
        level.finish_drag()
        incremental += time.perf_counter() - start

        start = time.perf_counter()
        reference = copy_level(level)
        full += time.perf_counter() - start

        if reference.intersection_count != level.intersection_count:
            mismatches += 1

    return {
        "level": level_number,
        "num_vertices": level.vertex_count,
        "num_segments": level.segment_count,
        "drags": drags,
        "incremental_seconds": incremental,
        "full_seconds": full,
        "mismatches": mismatches,
    }


def run_benchmarks(levels: int = 10, drags: int = 100, seed: int = 42) -> list[dict]:
    """Run benchmarks for level numbers 1..levels."""
    results = []

    print(f"\nBenchmarking {levels} levels, {drags} drags each")
    print("=" * 72)
    print(f"{'Level':>6s}{'Vertices':>10s}{'Segments':>10s}{'Incremental':>14s}{'Full':>12s}{'Ratio':>10s}")
    print("-" * 72)

    for level_number in range(1, levels + 1):
        result = benchmark_level(level_number, drags, seed + level_number)
        ratio = result["full_seconds"] / result["incremental_seconds"] if result["incremental_seconds"] else 0.0
        print(
            f"{level_number:>6d}{result['num_vertices']:>10d}{result['num_segments']:>10d}"
            f"{result['incremental_seconds']:>14.4f}{result['full_seconds']:>12.4f}{ratio:>10.1f}"
        )
        if result["mismatches"]:
            print(f"  WARNING: {result['mismatches']} intersection count mismatches")
        results.append(result)

    return results


def main():
    parser = argparse.ArgumentParser(description="Benchmark crossing index updates")
    parser.add_argument("--levels", type=int, default=10, help="Highest level number to benchmark")
    parser.add_argument("--drags", type=int, default=100, help="Random drags per level")
    parser.add_argument("--seed", type=int, default=42, help="Base random seed")
    parser.add_argument("--output", help="Output JSON file for results")

    args = parser.parse_args()

    results = run_benchmarks(levels=args.levels, drags=args.drags, seed=args.seed)

    if args.output and results:
        with open(args.output, "w") as f:
            json.dump(results, f, indent=2)
        print(f"\nResults saved to {args.output}")


if __name__ == "__main__":
    main()
