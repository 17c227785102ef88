"""Benchmark comparison engine."""

from __future__ import annotations

from cob.core.compare import compare_sets, ratio
from cob.core.gate import GateResult, evaluate_gate, is_degression
from cob.core.orchestrator import pinned_worktree, run_against_revisions
from cob.core.parse import parse_line, parse_output, parse_set
from cob.core.pipeline import ComparisonReport, build_report, compare_revisions
from cob.core.runner import build_harness_args, run_benchmark

__all__ = [
    "ComparisonReport",
    "GateResult",
    "build_harness_args",
    "build_report",
    "compare_revisions",
    "compare_sets",
    "evaluate_gate",
    "is_degression",
    "parse_line",
    "parse_output",
    "parse_set",
    "pinned_worktree",
    "ratio",
    "run_against_revisions",
    "run_benchmark",
]
