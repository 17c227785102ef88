"""Invoke the benchmark harness once and parse what it prints."""

from __future__ import annotations

import shlex
import subprocess
from typing import TYPE_CHECKING

from cob._meta import logger
from cob.config import DEFAULT_HARNESS
from cob.core.parse import parse_output
from cob.errors import HarnessExecutionError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from cob.model import BenchmarkSet, RunConfiguration

# Lines of stdout quoted in the error when the harness writes nothing to stderr.
_DIAGNOSTIC_TAIL = 20


def build_harness_args(config: RunConfiguration) -> list[str]:
    """Return the harness argument list (without the executable) for *config*."""
    args = ["test", "-benchtime", config.bench_time, "-bench", config.bench_pattern]
    if config.mem_stats:
        args.append("-benchmem")
    args.extend(config.extra_args)
    return args


def _diagnostic(proc: subprocess.CompletedProcess[bytes]) -> str:
    stderr = proc.stderr.decode("utf-8", errors="replace").strip()
    if stderr:
        return stderr
    stdout = proc.stdout.decode("utf-8", errors="replace").strip().splitlines()
    return "\n".join(stdout[-_DIAGNOSTIC_TAIL:])


def run_benchmark(
    args: Sequence[str],
    *,
    harness: str = DEFAULT_HARNESS,
    cwd: Path | None = None,
) -> BenchmarkSet:
    """Run ``harness *args`` to completion and return the parsed results.

    Raises
    ------
    HarnessExecutionError
        The process could not be started or exited with a non-zero status.
    ParseError
        The captured output could not be read.
    """
    cmd = [harness, *args]
    logger.debug("running harness: %s", shlex.join(cmd))
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd) if cwd else None,
            capture_output=True,
            check=False,
        )
    except OSError as exc:
        msg = f"failed to start {harness!r}: {exc}"
        raise HarnessExecutionError(msg, diagnostic=str(exc)) from exc

    if proc.returncode != 0:
        diagnostic = _diagnostic(proc)
        msg = f"'{shlex.join(cmd)}' exited with status {proc.returncode}"
        if diagnostic:
            msg = f"{msg}:\n{diagnostic}"
        raise HarnessExecutionError(msg, returncode=proc.returncode, diagnostic=diagnostic)

    return parse_output(proc.stdout)


__all__ = ["build_harness_args", "run_benchmark"]
