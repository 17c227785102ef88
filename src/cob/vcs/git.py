"""Thin wrapper over the ``git`` executable."""

from __future__ import annotations

import subprocess
from pathlib import Path

from cob._meta import logger
from cob.errors import CheckoutError, RevisionResolutionError


def _run_git(args: list[str], *, cwd: Path) -> subprocess.CompletedProcess[str]:
    return subprocess.run(
        ["git", *args],
        cwd=str(cwd),
        capture_output=True,
        text=True,
        check=False,
    )


class GitRepository:
    """A git working tree rooted at *root*."""

    def __init__(self, root: Path) -> None:
        self.root = root

    def __repr__(self) -> str:
        return f"GitRepository({str(self.root)!r})"

    @classmethod
    def discover(cls, path: Path) -> GitRepository:
        """Open the repository containing *path*."""
        try:
            proc = _run_git(["rev-parse", "--show-toplevel"], cwd=path)
        except OSError as exc:
            msg = f"unable to run git: {exc}"
            raise RevisionResolutionError(msg) from exc
        if proc.returncode != 0:
            msg = f"unable to open the git repository at {path}: {proc.stderr.strip()}"
            raise RevisionResolutionError(msg)
        return cls(Path(proc.stdout.strip()))

    def resolve(self, ref: str) -> str:
        try:
            proc = _run_git(["rev-parse", "--verify", "--quiet", f"{ref}^{{commit}}"], cwd=self.root)
        except OSError as exc:
            msg = f"unable to run git: {exc}"
            raise RevisionResolutionError(msg) from exc
        commit = proc.stdout.strip()
        if proc.returncode != 0 or not commit:
            msg = f"unable to resolve revision {ref!r} to a commit"
            raise RevisionResolutionError(msg)
        return commit

    def current(self) -> str:
        return self.resolve("HEAD")

    def reset_hard(self, commit: str) -> None:
        logger.debug("git reset --hard %s", commit)
        try:
            proc = _run_git(["reset", "--hard", "--quiet", commit], cwd=self.root)
        except OSError as exc:
            msg = f"unable to run git: {exc}"
            raise CheckoutError(msg) from exc
        if proc.returncode != 0:
            msg = f"failed to reset the worktree to {commit}: {proc.stderr.strip()}"
            raise CheckoutError(msg)

    def is_dirty(self) -> bool:
        try:
            proc = _run_git(["status", "--porcelain", "--untracked-files=no"], cwd=self.root)
        except OSError as exc:
            msg = f"unable to run git: {exc}"
            raise CheckoutError(msg) from exc
        if proc.returncode != 0:
            msg = f"unable to inspect the worktree: {proc.stderr.strip()}"
            raise CheckoutError(msg)
        return bool(proc.stdout.strip())


__all__ = ["GitRepository"]
