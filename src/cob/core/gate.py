"""Threshold policy deciding whether a comparison is a degression."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from cob.model import ComparisonResult


@dataclass(frozen=True, slots=True)
class GateResult:
    """Outcome of the regression gate.

    Fields
    ------
    degression_detected:
        ``True`` if any compared benchmark got worse than the threshold allows.
    rows:
        Results to render (all of them, or only degressions).
    degressions:
        Results that exceeded the threshold.
    """

    degression_detected: bool
    rows: list[ComparisonResult]
    degressions: list[ComparisonResult]


def is_degression(result: ComparisonResult, threshold: float) -> bool:
    """Return ``True`` if time, or bytes when measured, grew by more than *threshold*."""
    if result.ratio_time > threshold:
        return True
    return result.ratio_bytes is not None and result.ratio_bytes > threshold


def evaluate_gate(
    results: Sequence[ComparisonResult],
    *,
    threshold: float,
    only_degression: bool = False,
) -> GateResult:
    """Apply *threshold* to *results* using the raw (unrounded) ratios."""
    degressions = [r for r in results if is_degression(r, threshold)]
    rows = list(degressions) if only_degression else list(results)
    return GateResult(degression_detected=bool(degressions), rows=rows, degressions=degressions)


__all__ = ["GateResult", "evaluate_gate", "is_degression"]
