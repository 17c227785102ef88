from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from cob.core.compare import compare_sets
from cob.core.gate import GateResult, evaluate_gate
from cob.core.orchestrator import run_against_revisions
from cob.core.runner import run_benchmark
from cob.render.tables import render_measurements, render_ratios

if TYPE_CHECKING:
    from cob.core.orchestrator import BenchmarkRunner
    from cob.model import BenchmarkSet, ComparisonResult, RunConfiguration
    from cob.vcs import Repository


@dataclass(frozen=True, slots=True)
class ComparisonReport:
    """Compared results, the gate verdict and the rendered tables."""

    results: list[ComparisonResult]
    gate: GateResult
    text: str

    @property
    def degression_detected(self) -> bool:
        return self.gate.degression_detected


def build_report(
    baseline: BenchmarkSet,
    candidate: BenchmarkSet,
    config: RunConfiguration,
    *,
    color: bool = False,
) -> ComparisonReport:
    """Compare two benchmark sets, gate them and render both tables."""
    results = compare_sets(baseline, candidate, mem_stats=config.mem_stats)
    gate = evaluate_gate(results, threshold=config.threshold, only_degression=config.only_degression)
    text = render_measurements(results, mem_stats=config.mem_stats, color=color) + render_ratios(
        gate.rows, mem_stats=config.mem_stats, color=color
    )
    return ComparisonReport(results=results, gate=gate, text=text)


def compare_revisions(
    repo: Repository,
    config: RunConfiguration,
    *,
    runner: BenchmarkRunner = run_benchmark,
    allow_dirty: bool = False,
    color: bool = False,
) -> ComparisonReport:
    """Benchmark ``HEAD~1`` and ``HEAD`` in *repo* and report the difference."""
    baseline, candidate = run_against_revisions(repo, config, runner=runner, allow_dirty=allow_dirty)
    return build_report(baseline, candidate, config, color=color)


__all__ = ["ComparisonReport", "build_report", "compare_revisions"]
