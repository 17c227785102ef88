"""Central configuration and constants for ``cob``."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from cob._meta import logger
from cob.errors import ConfigError

if TYPE_CHECKING:
    from pathlib import Path

# Default logging format used by the CLI entry point.
LOG_FORMAT = "%(levelname)s: %(message)s"

DEFAULT_BENCH_PATTERN = "."
DEFAULT_BENCH_TIME = "1s"
DEFAULT_THRESHOLD = 0.1
DEFAULT_HARNESS = "go"

# Ratios smaller than this in magnitude are displayed as zero.
DISPLAY_EPSILON = 0.0001

BASELINE_REF = "HEAD~1"
CANDIDATE_REF = "HEAD"


@dataclass(frozen=True, slots=True)
class FileConfig:
    """Defaults read from ``[tool.cob]``; ``None`` means "not set in the file"."""

    bench: str | None = None
    benchtime: str | None = None
    threshold: float | None = None
    benchmem: bool | None = None
    only_degression: bool | None = None
    harness: str | None = None
    args: tuple[str, ...] | None = None


_STR_KEYS = {"bench", "benchtime", "harness"}
_BOOL_KEYS = {"benchmem", "only-degression"}


def _check_type(key: str, value: Any, expected: type | tuple[type, ...], label: str) -> None:
    # bool is an int subclass; only accept it where a boolean is wanted
    if isinstance(value, expected) and (expected is bool or not isinstance(value, bool)):
        return
    msg = f"[tool.cob] {key} must be {label}, got {value!r}"
    raise ConfigError(msg)


def parse_tool_table(table: dict[str, Any]) -> FileConfig:
    """Validate a ``[tool.cob]`` table and return it as a :class:`FileConfig`."""
    values: dict[str, Any] = {}
    for key, value in table.items():
        if key in _STR_KEYS:
            _check_type(key, value, str, "a string")
            values[key] = value
        elif key in _BOOL_KEYS:
            _check_type(key, value, bool, "a boolean")
            values[key.replace("-", "_")] = value
        elif key == "threshold":
            _check_type(key, value, (int, float), "a number")
            values[key] = float(value)
        elif key == "args":
            if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                msg = f"[tool.cob] args must be a list of strings, got {value!r}"
                raise ConfigError(msg)
            values[key] = tuple(value)
        else:
            msg = f"[tool.cob] unknown key: {key!r}"
            raise ConfigError(msg)
    return FileConfig(**values)


def load_file_config(pyproject: Path) -> FileConfig:
    """Read ``[tool.cob]`` from *pyproject*; a missing file or table yields empty defaults."""
    if not pyproject.is_file():
        return FileConfig()
    try:
        with pyproject.open("rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        msg = f"failed to parse {pyproject}: {exc}"
        raise ConfigError(msg) from exc

    tool = data.get("tool", {})
    if not isinstance(tool, dict):
        msg = f"[tool] in {pyproject} must be a table"
        raise ConfigError(msg)
    table = tool.get("cob")
    if table is None:
        return FileConfig()
    if not isinstance(table, dict):
        msg = f"[tool.cob] in {pyproject} must be a table"
        raise ConfigError(msg)

    logger.debug("using [tool.cob] from %s", pyproject)
    return parse_tool_table(table)


__all__ = [
    "BASELINE_REF",
    "CANDIDATE_REF",
    "DEFAULT_BENCH_PATTERN",
    "DEFAULT_BENCH_TIME",
    "DEFAULT_HARNESS",
    "DEFAULT_THRESHOLD",
    "DISPLAY_EPSILON",
    "LOG_FORMAT",
    "FileConfig",
    "load_file_config",
    "parse_tool_table",
]
