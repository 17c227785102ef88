from __future__ import annotations

from typing import TYPE_CHECKING

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from cob.config import DISPLAY_EPSILON

if TYPE_CHECKING:
    from collections.abc import Iterable

    from cob.model import BenchmarkRecord, ComparisonResult

CURRENT_LABEL = "current"
PREVIOUS_LABEL = "previous"

DEGRESSION_STYLE = "bold bright_red"
IMPROVEMENT_STYLE = "bold blue"


# --------------------------- Formatting --------------------------------------
def display_ratio(ratio: float) -> float:
    """Clamp ratios within ``DISPLAY_EPSILON`` of zero to exactly zero."""
    if -DISPLAY_EPSILON < ratio < DISPLAY_EPSILON:
        return 0.0
    return ratio


def format_ratio(ratio: float) -> str:
    """Percentage magnitude with two decimals; direction is carried by style, not sign."""
    return f"{abs(display_ratio(ratio)) * 100:.2f}%"


def ratio_style(ratio: float) -> str:
    return DEGRESSION_STYLE if display_ratio(ratio) > 0 else IMPROVEMENT_STYLE


def _ratio_cell(ratio: float) -> Text:
    return Text(format_ratio(ratio), style=ratio_style(ratio))


def _time_cell(record: BenchmarkRecord) -> str:
    return f"{record.ns_per_op:.2f} ns/op"


def _bytes_cell(record: BenchmarkRecord) -> str:
    return f"{record.bytes_per_op or 0} B/op"


# --------------------------- Tables ------------------------------------------
def _new_table(title: str, headers: list[str]) -> Table:
    table = Table(title=title, box=box.HEAVY_HEAD, header_style="bold", show_lines=False)
    table.add_column(headers[0], overflow="fold")
    for header in headers[1:]:
        table.add_column(header, justify="center")
    return table


def _capture(table: Table, *, color: bool) -> str:
    console = Console(
        force_terminal=color,
        color_system="standard" if color else None,
        no_color=not color,
        highlight=False,
    )
    with console.capture() as cap:
        console.print()
        console.print(table)
        console.print()
    return cap.get()


def render_measurements(
    results: Iterable[ComparisonResult],
    *,
    mem_stats: bool = False,
    color: bool = False,
) -> str:
    """Raw per-revision figures, two rows per benchmark, grouped by name."""
    headers = ["Name", "Revision", "ns/op"]
    if mem_stats:
        headers.append("B/op")
    table = _new_table("Result", headers)

    for result in results:
        for label, record in ((CURRENT_LABEL, result.candidate), (PREVIOUS_LABEL, result.baseline)):
            # the name is printed once per group
            row = [result.name if label == CURRENT_LABEL else "", label, _time_cell(record)]
            if mem_stats:
                row.append(_bytes_cell(record))
            table.add_row(*row)
        table.add_section()

    return _capture(table, color=color)


def render_ratios(
    rows: Iterable[ComparisonResult],
    *,
    mem_stats: bool = False,
    color: bool = False,
) -> str:
    """Relative change per benchmark; worse in red, better or unchanged in blue."""
    headers = ["Name", "ns/op"]
    if mem_stats:
        headers.append("B/op")
    table = _new_table("Comparison", headers)

    for result in rows:
        cells: list[str | Text] = [result.name, _ratio_cell(result.ratio_time)]
        if mem_stats:
            cells.append(_ratio_cell(result.ratio_bytes or 0.0))
        table.add_row(*cells)

    return _capture(table, color=color)


__all__ = [
    "CURRENT_LABEL",
    "DEGRESSION_STYLE",
    "IMPROVEMENT_STYLE",
    "PREVIOUS_LABEL",
    "display_ratio",
    "format_ratio",
    "ratio_style",
    "render_measurements",
    "render_ratios",
]
