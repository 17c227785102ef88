"""Typed records passed between the parser, comparator, gate and renderers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

from cob.config import DEFAULT_BENCH_PATTERN, DEFAULT_BENCH_TIME, DEFAULT_HARNESS, DEFAULT_THRESHOLD


@dataclass(frozen=True, slots=True)
class BenchmarkRecord:
    """One result line emitted by the benchmark harness.

    Fields
    ------
    name:
        Benchmark name as printed by the harness (including any ``-N`` CPU suffix).
    iterations:
        Number of iterations the harness ran.
    ns_per_op:
        Mean wall-clock nanoseconds per iteration.
    bytes_per_op:
        Mean heap bytes allocated per iteration; ``None`` unless memory stats were reported.
    allocs_per_op:
        Mean allocations per iteration; ``None`` unless memory stats were reported.
    mb_per_s:
        Throughput; ``None`` unless the benchmark sets a byte count.
    """

    name: str
    iterations: int
    ns_per_op: float
    bytes_per_op: int | None = None
    allocs_per_op: int | None = None
    mb_per_s: float | None = None


BenchmarkSet: TypeAlias = dict[str, list[BenchmarkRecord]]
"""Benchmark name mapped to its samples in emission order."""


@dataclass(frozen=True, slots=True)
class ComparisonResult:
    """Relative change of one benchmark between baseline and candidate."""

    name: str
    ratio_time: float
    ratio_bytes: float | None
    baseline: BenchmarkRecord
    candidate: BenchmarkRecord


@dataclass(frozen=True, slots=True)
class RunConfiguration:
    """Everything one comparison run needs, fixed for the lifetime of the run."""

    bench_pattern: str = DEFAULT_BENCH_PATTERN
    bench_time: str = DEFAULT_BENCH_TIME
    mem_stats: bool = False
    threshold: float = DEFAULT_THRESHOLD
    only_degression: bool = False
    extra_args: tuple[str, ...] = ()
    harness: str = DEFAULT_HARNESS


__all__ = [
    "BenchmarkRecord",
    "BenchmarkSet",
    "ComparisonResult",
    "RunConfiguration",
]
