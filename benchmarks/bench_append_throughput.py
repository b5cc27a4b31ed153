"""Benchmark: RollingWriter append throughput — per-append p50/p99.

Measures the per-call latency of RollingWriter.append_line() on a single
simulated day (no rotations) and across day boundaries (one rotation,
alias refresh and sweep every ``_LINES_PER_DAY`` appends).
"""
from __future__ import annotations

import json
import sys
import tempfile
import time
from datetime import date, timedelta
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from rolling_file_sink.config.loader import RotationConfig
from rolling_file_sink.rotation.writer import RollingWriter

_WARMUP: int = 100
_ITERATIONS: int = 5_000
_LINES_PER_DAY: int = 500
_LINE: str = '{"level": "info", "message": "request served", "meta": {"status": 200}}'


def bench_append_throughput() -> dict[str, object]:
    """Benchmark RollingWriter.append_line() per-call latency.

    Returns
    -------
    dict with keys: operation, iterations, total_seconds, ops_per_second,
    avg_latency_ms, p99_latency_ms, rotations.
    """
    day = [date(2024, 1, 1)]

    with tempfile.TemporaryDirectory() as tmp:
        config = RotationConfig(
            directory=Path(tmp), base_name="bench", extension="log", retention_count=3
        )
        writer = RollingWriter(config, clock=lambda: day[0])

        for _ in range(_WARMUP):
            writer.append_line(_LINE)

        latencies_ms: list[float] = []
        for i in range(_ITERATIONS):
            if i and i % _LINES_PER_DAY == 0:
                day[0] += timedelta(days=1)
            t0 = time.perf_counter()
            writer.append_line(_LINE)
            latencies_ms.append((time.perf_counter() - t0) * 1000)
        rotations = writer.rotation_count

    sorted_lats = sorted(latencies_ms)
    n = len(sorted_lats)
    total = sum(latencies_ms) / 1000

    result: dict[str, object] = {
        "operation": "append_throughput",
        "iterations": _ITERATIONS,
        "total_seconds": round(total, 4),
        "ops_per_second": round(_ITERATIONS / total, 1),
        "avg_latency_ms": round(sum(latencies_ms) / n, 4),
        "p99_latency_ms": round(sorted_lats[min(int(n * 0.99), n - 1)], 4),
        "rotations": rotations,
    }
    print(
        f"[bench_append_throughput] {result['operation']}: "
        f"p99={result['p99_latency_ms']:.4f}ms  "
        f"mean={result['avg_latency_ms']:.4f}ms  "
        f"rotations={rotations}"
    )
    return result


def run_benchmark() -> dict[str, object]:
    """Entry point returning the benchmark result dict."""
    return bench_append_throughput()


if __name__ == "__main__":
    result = run_benchmark()
    results_dir = Path(__file__).parent / "results"
    results_dir.mkdir(exist_ok=True)
    output_path = results_dir / "append_baseline.json"
    with open(output_path, "w", encoding="utf-8") as fh:
        json.dump(result, fh, indent=2)
    print(f"Results saved to {output_path}")
