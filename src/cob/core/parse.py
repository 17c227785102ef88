"""Parse benchmark harness output into :class:`~cob.model.BenchmarkRecord` sets."""

from __future__ import annotations

import io
import math
from typing import TYPE_CHECKING

from cob.errors import ParseError
from cob.model import BenchmarkRecord, BenchmarkSet

if TYPE_CHECKING:
    from collections.abc import Iterable

_NAME_PREFIX = "Benchmark"
_FLOAT_UNITS = {"ns/op": "ns_per_op", "MB/s": "mb_per_s"}


def _parse_measurements(fields: list[str]) -> dict[str, float | int]:
    """Collect ``<value> <unit>`` pairs; unknown units and bad or non-finite numbers are skipped."""
    out: dict[str, float | int] = {}
    for value, unit in zip(fields[::2], fields[1::2], strict=False):
        try:
            if unit in _FLOAT_UNITS:
                number = float(value)
                if math.isfinite(number):
                    out[_FLOAT_UNITS[unit]] = number
            elif unit == "B/op":
                out["bytes_per_op"] = int(value)
            elif unit == "allocs/op":
                out["allocs_per_op"] = int(value)
        except ValueError:
            continue
    return out


def parse_line(line: str) -> BenchmarkRecord | None:
    """Parse a single harness result line.

    Expected shape::

        BenchmarkName-8   1000000   1234 ns/op   128 B/op   2 allocs/op

    Returns ``None`` for anything that is not a result line.
    """
    fields = line.split()
    if len(fields) < 2 or not fields[0].startswith(_NAME_PREFIX):  # noqa: PLR2004
        return None
    try:
        iterations = int(fields[1])
    except ValueError:
        return None

    measurements = _parse_measurements(fields[2:])
    if "ns_per_op" not in measurements:
        return None
    return BenchmarkRecord(name=fields[0], iterations=iterations, **measurements)


def parse_set(stream: Iterable[str]) -> BenchmarkSet:
    """Parse every result line of *stream*, keeping samples in emission order.

    Unrelated lines are ignored. Only a failure to read the stream raises
    :class:`~cob.errors.ParseError`.
    """
    result: BenchmarkSet = {}
    try:
        for line in stream:
            record = parse_line(line)
            if record is not None:
                result.setdefault(record.name, []).append(record)
    except OSError as exc:
        msg = f"failed to read benchmark output: {exc}"
        raise ParseError(msg) from exc
    return result


def parse_output(raw: bytes) -> BenchmarkSet:
    """Decode captured harness stdout and parse it; undecodable bytes are replaced."""
    return parse_set(io.TextIOWrapper(io.BytesIO(raw), encoding="utf-8", errors="replace"))


__all__ = ["parse_line", "parse_output", "parse_set"]
