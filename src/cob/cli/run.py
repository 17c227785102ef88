from __future__ import annotations

from pathlib import Path
from typing import Annotated, TypeVar

import typer

from cob._meta import __version__, logger
from cob.cli._shared import color_allowed_for_stdout, configure_logging, resolve_use_color
from cob.cli.exit_codes import (
    EXIT_CONFIG,
    EXIT_DATAERR,
    EXIT_DEGRESSION,
    EXIT_IOERR,
    EXIT_NOINPUT,
    EXIT_OK,
    EXIT_SOFTWARE,
)
from cob.config import (
    DEFAULT_BENCH_PATTERN,
    DEFAULT_BENCH_TIME,
    DEFAULT_HARNESS,
    DEFAULT_THRESHOLD,
    FileConfig,
    load_file_config,
)
from cob.core.pipeline import compare_revisions
from cob.core.runner import run_benchmark
from cob.errors import (
    CheckoutError,
    CobError,
    ConfigError,
    ParseError,
    RevisionResolutionError,
)
from cob.model import RunConfiguration
from cob.vcs import GitRepository

_BOOL_FALSE = False

T = TypeVar("T")

# Looked up at call time so tests can substitute fakes.
open_repository = GitRepository.discover


def _pick(cli_value: T | None, file_value: T | None, default: T) -> T:
    if cli_value is not None:
        return cli_value
    if file_value is not None:
        return file_value
    return default


def resolve_run_configuration(
    file_config: FileConfig,
    *,
    bench: str | None,
    benchtime: str | None,
    threshold: float | None,
    benchmem: bool | None,
    only_degression: bool | None,
    harness: str | None,
    args: list[str],
) -> RunConfiguration:
    """Merge CLI values over ``[tool.cob]`` values over built-in defaults."""
    extra_args = tuple(args) if args else (file_config.args or ())
    return RunConfiguration(
        bench_pattern=_pick(bench, file_config.bench, DEFAULT_BENCH_PATTERN),
        bench_time=_pick(benchtime, file_config.benchtime, DEFAULT_BENCH_TIME),
        mem_stats=_pick(benchmem, file_config.benchmem, False),  # noqa: FBT003
        threshold=float(_pick(threshold, file_config.threshold, DEFAULT_THRESHOLD)),
        only_degression=_pick(only_degression, file_config.only_degression, False),  # noqa: FBT003
        extra_args=extra_args,
        harness=_pick(harness, file_config.harness, DEFAULT_HARNESS),
    )


def exit_code_for(exc: CobError) -> int:
    """Map a failure to the process exit status reported for it."""
    if isinstance(exc, ConfigError):
        return EXIT_CONFIG
    if isinstance(exc, RevisionResolutionError):
        return EXIT_NOINPUT
    if isinstance(exc, CheckoutError):
        return EXIT_IOERR
    if isinstance(exc, ParseError) or isinstance(exc.__cause__, ParseError):
        return EXIT_DATAERR
    return EXIT_SOFTWARE


def _version_callback(value: bool) -> None:  # noqa: FBT001
    if value:
        typer.echo(f"cob {__version__}")
        raise typer.Exit


def run_cmd(
    args: Annotated[
        list[str] | None,
        typer.Argument(help="Extra arguments passed through to the harness (put them after '--')."),
    ] = None,
    bench: Annotated[
        str | None,
        typer.Option(
            "--bench",
            help="Run only those benchmarks matching a regular expression. Defaults to '.'.",
        ),
    ] = None,
    benchtime: Annotated[
        str | None,
        typer.Option(
            "--benchtime",
            help="Run enough iterations of each benchmark to take this long, e.g. 1h30s. Defaults to 1s.",
        ),
    ] = None,
    benchmem: Annotated[
        bool | None,
        typer.Option("--benchmem/--no-benchmem", help="Compare memory allocation statistics as well."),
    ] = None,
    threshold: Annotated[
        float | None,
        typer.Option(
            "--threshold",
            help="Fail if a benchmark gets worse than this ratio (0.1 = 10%). Defaults to 0.1.",
        ),
    ] = None,
    only_degression: Annotated[
        bool | None,
        typer.Option(
            "--only-degression/--no-only-degression",
            help="Show only benchmarks that got worse than the threshold.",
        ),
    ] = None,
    harness: Annotated[
        str | None,
        typer.Option("--harness", help="Benchmark harness executable. Defaults to go."),
    ] = None,
    force: Annotated[
        bool,
        typer.Option("--force", help="Run even if the worktree has uncommitted changes (they will be lost)."),
    ] = _BOOL_FALSE,
    color: Annotated[
        bool,
        typer.Option("--color", help="Force color output"),
    ] = _BOOL_FALSE,
    no_color: Annotated[
        bool,
        typer.Option("--no-color", help="Disable color output"),
    ] = _BOOL_FALSE,
    quiet: Annotated[
        bool,
        typer.Option("-q", "--quiet", help="Suppress INFO logs, emit only errors"),
    ] = _BOOL_FALSE,
    verbose: Annotated[
        bool,
        typer.Option("-v", "--verbose", help="Emit diagnostic logging"),
    ] = _BOOL_FALSE,
    version: Annotated[
        bool,
        typer.Option("--version", help="Show version and exit", callback=_version_callback, is_eager=True),
    ] = _BOOL_FALSE,
) -> None:
    """Benchmark HEAD~1 and HEAD and fail if HEAD is slower than the threshold allows.

    The worktree is hard-reset twice during the run; do not run two
    instances against the same repository at once.
    """
    configure_logging(quiet=quiet, verbose=verbose)

    cwd = Path.cwd()
    try:
        file_config = load_file_config(cwd / "pyproject.toml")
        config = resolve_run_configuration(
            file_config,
            bench=bench,
            benchtime=benchtime,
            threshold=threshold,
            benchmem=benchmem,
            only_degression=only_degression,
            harness=harness,
            args=args or [],
        )
        logger.debug("run configuration: %s", config)

        use_color = resolve_use_color(color=color, no_color=no_color, color_allowed=color_allowed_for_stdout())
        report = compare_revisions(
            open_repository(cwd),
            config,
            runner=run_benchmark,
            allow_dirty=force,
            color=use_color,
        )
    except CobError as exc:
        typer.echo(f"ERROR: {exc}", err=True)
        raise typer.Exit(code=exit_code_for(exc)) from exc

    typer.echo(report.text.rstrip("\n"))

    if report.degression_detected:
        typer.echo(
            (
                "ERROR: this commit makes benchmarks worse: "
                f"{len(report.gate.degressions)} above the {config.threshold:.2%} threshold"
            ),
            err=True,
        )
        raise typer.Exit(code=EXIT_DEGRESSION)
    raise typer.Exit(code=EXIT_OK)


def register(app: typer.Typer) -> None:
    app.command("run")(run_cmd)


__all__ = ["exit_code_for", "register", "resolve_run_configuration", "run_cmd"]
