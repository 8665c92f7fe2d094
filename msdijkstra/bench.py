"""Micro-benchmark for the engine.

Run this module as a script to time :class:`ShortestPathEngine` against the
lazy-deletion reference on random graphs.

Example:
```bash
python -m msdijkstra.bench --trials 5 --sizes 1000,5000 2000,10000 --sources 3 --out-csv out.csv
```
"""

from __future__ import annotations

import argparse
import csv
import random
import statistics
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Tuple

import numpy as np

from .engine import EngineConfig, EngineMetrics, ShortestPathEngine
from .graph import Digraph
from .reference import dijkstra_reference


@dataclass
class BenchResult:
    """Result of a single benchmarking run."""

    metrics: EngineMetrics
    reference_ms: float
    max_abs_err: float


def random_digraph(n: int, m: int, seed: int, dtype: str = "float32") -> Digraph:
    """Generate a random graph with ``n`` vertices and up to ``m`` distinct edges.

    Self-loops are allowed; repeated ordered pairs are dropped so the result
    is a valid :class:`Digraph`.
    """
    rnd = random.Random(seed)
    edges: Dict[Tuple[int, int], float] = {}
    for _ in range(m):
        u = rnd.randrange(n)
        v = rnd.randrange(n)
        edges.setdefault((u, v), round(rnd.random() * 10.0, 2))
    return Digraph.from_edges(n, ((u, v, w) for (u, v), w in edges.items()), dtype=dtype)


def run_once(n: int, m: int, k: int = 1, seed: int = 0, dtype: str = "float32") -> BenchResult:
    """Run the engine once and compare against the reference.

    Args:
        n: Number of vertices.
        m: Number of edge draws.
        k: Number of sources.
        seed: Seed for the random graph and source choice.
        dtype: Weight and distance precision.

    Returns:
        Timing information and the maximum absolute distance error.
    """
    G = random_digraph(n, m, seed, dtype=dtype)
    sources = random.Random(seed).sample(range(n), min(k, n))

    engine = ShortestPathEngine(G, sources, config=EngineConfig(dtype=dtype))
    t0 = time.perf_counter()
    res = engine.run()
    t1 = time.perf_counter()
    ref = dijkstra_reference(G, sources)
    t2 = time.perf_counter()

    a = np.where(np.isfinite(res.distances), res.distances, 1e18).astype(np.float64)
    b = np.where(np.isfinite(ref.distances), ref.distances, 1e18).astype(np.float64)
    max_err = float(np.max(np.abs(a - b))) if n else 0.0

    return BenchResult(
        metrics=engine.metrics(wall_ms=(t1 - t0) * 1000.0),
        reference_ms=(t2 - t1) * 1000.0,
        max_abs_err=max_err,
    )


def _p95(values: List[float]) -> float:
    if len(values) < 2:
        return values[0]
    return statistics.quantiles(values, n=100, method="inclusive")[94]


def main(argv: List[str] | None = None) -> None:
    """Run benchmarking trials and optionally record results.

    Args:
        argv: Optional argument list for testing.
    """
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--trials", type=int, default=1, help="Number of trials per size")
    parser.add_argument(
        "--sizes",
        nargs="+",
        default=["10,20", "20,40"],
        help="Size pairs as n,m (e.g. 1000,5000). Defaults to a small demo.",
    )
    parser.add_argument("--sources", type=int, default=1, help="Number of random sources")
    parser.add_argument("--double", action="store_true", help="Use double precision")
    parser.add_argument("--seed-base", type=int, default=0, help="Base seed for random graphs")
    parser.add_argument("--out-csv", type=Path, help="Optional path to write per-trial CSV data")
    args = parser.parse_args(argv)

    sizes: List[Tuple[int, int]] = []
    for pair in args.sizes:
        try:
            n_str, m_str = pair.split(",")
            sizes.append((int(n_str), int(m_str)))
        except ValueError:
            parser.error(f"invalid size pair '{pair}'")

    if args.trials < 1:
        parser.error("--trials must be at least 1")

    dtype = "float64" if args.double else "float32"
    rows: List[List[object]] = []
    print(
        f"{'n':>7} {'m':>8} {'k':>3} {'settled':>8} {'decr':>8}"
        f" {'eng_med':>9} {'eng_p95':>9} {'ref_med':>9} {'ref_p95':>9} {'max_err':>9}"
    )
    for n, m in sizes:
        e_times: List[float] = []
        r_times: List[float] = []
        errs: List[float] = []
        last: EngineMetrics | None = None
        for trial in range(args.trials):
            res = run_once(n, m, k=args.sources, seed=args.seed_base + trial, dtype=dtype)
            mtx = res.metrics
            rows.append(
                [
                    n,
                    m,
                    args.sources,
                    trial,
                    f"{mtx.wall_ms:.6f}",
                    f"{res.reference_ms:.6f}",
                    mtx.counters["settled"],
                    mtx.counters["decrease_keys"],
                    f"{res.max_abs_err:.3g}",
                ]
            )
            e_times.append(mtx.wall_ms)
            r_times.append(res.reference_ms)
            errs.append(res.max_abs_err)
            last = mtx
        if last is None:
            continue
        print(
            f"{n:7d} {m:8d} {args.sources:3d} {last.counters['settled']:8d}"
            f" {last.counters['decrease_keys']:8d}"
            f" {statistics.median(e_times):9.2f} {_p95(e_times):9.2f}"
            f" {statistics.median(r_times):9.2f} {_p95(r_times):9.2f} {max(errs):9.2g}"
        )

    if args.out_csv:
        with args.out_csv.open("w", newline="") as fh:
            writer = csv.writer(fh)
            writer.writerow(
                [
                    "n",
                    "m",
                    "k",
                    "trial",
                    "engine_ms",
                    "reference_ms",
                    "settled",
                    "decrease_keys",
                    "max_abs_err",
                ]
            )
            writer.writerows(rows)


if __name__ == "__main__":  # pragma: no cover - manual invocation
    main()
