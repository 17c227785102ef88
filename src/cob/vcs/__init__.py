"""Revision-control collaborators used by the checkout orchestrator."""

from __future__ import annotations

from typing import Protocol

from cob.vcs.git import GitRepository


class Repository(Protocol):
    """What the orchestrator needs from a repository."""

    def resolve(self, ref: str) -> str:
        """Return the commit identifier *ref* points to."""
        ...

    def current(self) -> str:
        """Return the identifier currently checked out."""
        ...

    def reset_hard(self, commit: str) -> None:
        """Reset the working tree to *commit*, discarding uncommitted changes."""
        ...

    def is_dirty(self) -> bool:
        """Return ``True`` if tracked files have uncommitted changes."""
        ...


__all__ = ["GitRepository", "Repository"]
