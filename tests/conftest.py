from __future__ import annotations

import shutil
import subprocess
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path

import pytest
from click.testing import CliRunner

from cob.core.parse import parse_set
from cob.errors import CheckoutError, HarnessExecutionError, RevisionResolutionError
from cob.model import BenchmarkRecord, BenchmarkSet

BASELINE_ID = "1111111111111111111111111111111111111111"
CANDIDATE_ID = "2222222222222222222222222222222222222222"


@pytest.fixture
def cli_runner() -> CliRunner:
    """Return a Click CLI runner for invoking the command-line interface."""
    return CliRunner()


def record(name: str, ns: float, nbytes: int | None = None, *, iterations: int = 1000) -> BenchmarkRecord:
    return BenchmarkRecord(name=name, iterations=iterations, ns_per_op=ns, bytes_per_op=nbytes)


def bench_set(*records: BenchmarkRecord) -> BenchmarkSet:
    out: BenchmarkSet = {}
    for rec in records:
        out.setdefault(rec.name, []).append(rec)
    return out


def bench_line(name: str, ns: float, nbytes: int | None = None, allocs: int | None = None) -> str:
    line = f"{name}\t    1000\t{ns} ns/op"
    if nbytes is not None:
        line += f"\t{nbytes} B/op"
    if allocs is not None:
        line += f"\t{allocs} allocs/op"
    return line


@dataclass
class FakeRepository:
    """In-memory stand-in for :class:`cob.vcs.GitRepository`."""

    refs: dict[str, str] = field(
        default_factory=lambda: {"HEAD": CANDIDATE_ID, "HEAD~1": BASELINE_ID},
    )
    dirty: bool = False
    failing_resets: set[str] = field(default_factory=set)
    at: str = CANDIDATE_ID
    resets: list[str] = field(default_factory=list)

    def resolve(self, ref: str) -> str:
        try:
            return self.refs[ref]
        except KeyError:
            msg = f"unable to resolve revision {ref!r} to a commit"
            raise RevisionResolutionError(msg) from None

    def current(self) -> str:
        if "HEAD" not in self.refs:
            msg = "unable to resolve revision 'HEAD' to a commit"
            raise RevisionResolutionError(msg)
        return self.at

    def reset_hard(self, commit: str) -> None:
        self.resets.append(commit)
        if commit in self.failing_resets:
            msg = f"failed to reset the worktree to {commit}"
            raise CheckoutError(msg)
        self.at = commit

    def is_dirty(self) -> bool:
        return self.dirty


@dataclass
class FakeRunner:
    """Returns a canned :data:`BenchmarkSet` for whichever revision the repository is at."""

    repo: FakeRepository
    outputs: Mapping[str, str]
    failing: set[str] = field(default_factory=set)
    calls: list[tuple[str, tuple[str, ...], str]] = field(default_factory=list)

    def __call__(self, args: Sequence[str], *, harness: str = "go") -> BenchmarkSet:
        self.calls.append((self.repo.at, tuple(args), harness))
        if self.repo.at in self.failing:
            msg = f"'{harness} test' exited with status 1"
            raise HarnessExecutionError(msg, returncode=1)
        return parse_set(self.outputs[self.repo.at].splitlines())


@pytest.fixture
def fake_repo() -> FakeRepository:
    return FakeRepository()


@pytest.fixture
def make_runner(fake_repo: FakeRepository) -> Callable[..., FakeRunner]:
    def build(baseline: str, candidate: str, *, failing: set[str] | None = None) -> FakeRunner:
        return FakeRunner(
            repo=fake_repo,
            outputs={BASELINE_ID: baseline, CANDIDATE_ID: candidate},
            failing=failing or set(),
        )

    return build


def git(repo: Path, *args: str) -> str:
    proc = subprocess.run(
        ["git", "-c", "user.name=cob", "-c", "user.email=cob@example.invalid", *args],
        cwd=repo,
        capture_output=True,
        text=True,
        check=True,
    )
    return proc.stdout.strip()


requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git executable not available")


@pytest.fixture
def make_git_repo(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Callable[..., Path]:
    """Create a repository with one commit per entry of *commits* (path -> content maps)."""
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")

    def build(*commits: Mapping[str, str], name: str = "repo") -> Path:
        repo = tmp_path / name
        repo.mkdir()
        git(repo, "init", "--quiet")
        for idx, files in enumerate(commits):
            for rel, content in files.items():
                path = repo / rel
                path.parent.mkdir(parents=True, exist_ok=True)
                path.write_text(content, encoding="utf-8")
            git(repo, "add", "--all")
            git(repo, "commit", "--quiet", "-m", f"commit {idx}")
        return repo

    return build
