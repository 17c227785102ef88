"""Match benchmark records by name and compute relative changes."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from cob.model import ComparisonResult

if TYPE_CHECKING:
    from collections.abc import Iterator

    from cob.model import BenchmarkRecord, BenchmarkSet


def ratio(baseline: float, candidate: float) -> float:
    """Return ``(candidate - baseline) / baseline``, or ``0.0`` when *baseline* is zero.

    A result that is not finite (overflow, NaN input) is also reported as ``0.0``.
    """
    if baseline == 0:
        return 0.0
    value = (candidate - baseline) / baseline
    return value if math.isfinite(value) else 0.0


def _matched_pairs(
    baseline: BenchmarkSet,
    candidate: BenchmarkSet,
) -> Iterator[tuple[str, BenchmarkRecord, BenchmarkRecord]]:
    for name, candidate_samples in candidate.items():
        baseline_samples = baseline.get(name)
        if not baseline_samples or not candidate_samples:
            continue
        # first sample wins; later samples of the same benchmark are ignored
        yield name, baseline_samples[0], candidate_samples[0]


def compare_sets(
    baseline: BenchmarkSet,
    candidate: BenchmarkSet,
    *,
    mem_stats: bool = False,
) -> list[ComparisonResult]:
    """Compare every benchmark present in both sets, sorted by name.

    ``ratio_bytes`` is only computed when *mem_stats* is set; a record
    without a ``B/op`` figure counts as zero bytes.
    """
    results: list[ComparisonResult] = []
    for name, prev, head in _matched_pairs(baseline, candidate):
        ratio_bytes = (
            ratio(float(prev.bytes_per_op or 0), float(head.bytes_per_op or 0)) if mem_stats else None
        )
        results.append(
            ComparisonResult(
                name=name,
                ratio_time=ratio(prev.ns_per_op, head.ns_per_op),
                ratio_bytes=ratio_bytes,
                baseline=prev,
                candidate=head,
            )
        )
    results.sort(key=lambda r: r.name)
    return results


__all__ = ["compare_sets", "ratio"]
