"""Run the benchmark suite once at ``HEAD~1`` and once at ``HEAD``.

The working tree is the one shared mutable resource. It is owned by a
:class:`PinnedWorktree` for the duration of a comparison and reset back to
the revision it started at on every exit path. Two invocations against the
same repository at the same time are not supported, and any uncommitted
change to tracked files is lost by the resets (hence the dirty-tree check).
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING

from cob._meta import logger
from cob.config import BASELINE_REF, CANDIDATE_REF
from cob.core.runner import build_harness_args, run_benchmark
from cob.errors import (
    BenchmarkExecutionError,
    CheckoutError,
    DirtyWorktreeError,
    HarnessExecutionError,
    ParseError,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator, Sequence

    from cob.model import BenchmarkSet, RunConfiguration
    from cob.vcs import Repository

    BenchmarkRunner = Callable[..., BenchmarkSet]


class PinnedWorktree:
    """Tracks which revision the working tree is at, relative to its *home* revision."""

    def __init__(self, repo: Repository, home: str) -> None:
        self.repo = repo
        self.home = home
        # None while a reset is in flight or after one failed
        self.at: str | None = home

    def switch(self, commit: str) -> None:
        self.at = None
        self.repo.reset_hard(commit)
        self.at = commit

    def restore(self) -> None:
        """Best-effort reset to the home revision; failures are logged, not raised."""
        if self.at == self.home:
            return
        try:
            self.switch(self.home)
        except CheckoutError as exc:
            logger.warning("failed to restore the worktree to %s: %s", self.home, exc)


@contextmanager
def pinned_worktree(repo: Repository, home: str) -> Iterator[PinnedWorktree]:
    tree = PinnedWorktree(repo, home)
    try:
        yield tree
    finally:
        tree.restore()


def _run_at(
    runner: BenchmarkRunner,
    args: Sequence[str],
    *,
    harness: str,
    revision: str,
    label: str,
) -> BenchmarkSet:
    logger.info("Run Benchmark: %s %s", revision, label)
    try:
        return runner(args, harness=harness)
    except (HarnessExecutionError, ParseError) as exc:
        msg = f"failed to run a benchmark at {label} ({revision}): {exc}"
        raise BenchmarkExecutionError(msg, revision=revision) from exc


def run_against_revisions(
    repo: Repository,
    config: RunConfiguration,
    *,
    runner: BenchmarkRunner = run_benchmark,
    allow_dirty: bool = False,
) -> tuple[BenchmarkSet, BenchmarkSet]:
    """Return ``(baseline, candidate)`` benchmark sets for ``HEAD~1`` and ``HEAD``.

    Raises
    ------
    RevisionResolutionError
        ``HEAD`` or ``HEAD~1`` does not resolve.
    DirtyWorktreeError
        Tracked files have uncommitted changes and *allow_dirty* is false.
    CheckoutError
        A working-tree reset failed.
    BenchmarkExecutionError
        A harness run failed at either revision.
    """
    head = repo.current()
    prev = repo.resolve(BASELINE_REF)

    if not allow_dirty and repo.is_dirty():
        msg = "the worktree has uncommitted changes that would be discarded; commit or stash them first"
        raise DirtyWorktreeError(msg)

    args = build_harness_args(config)
    with pinned_worktree(repo, head) as tree:
        tree.switch(prev)
        baseline = _run_at(runner, args, harness=config.harness, revision=prev, label=BASELINE_REF)
        tree.switch(head)
        candidate = _run_at(runner, args, harness=config.harness, revision=head, label=CANDIDATE_REF)
    return baseline, candidate


__all__ = ["PinnedWorktree", "pinned_worktree", "run_against_revisions"]
