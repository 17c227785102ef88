from __future__ import annotations

import typer
from typer.main import get_command

from cob.cli import run


def create_app() -> typer.Typer:
    app = typer.Typer(
        help="Continuous benchmark: compare HEAD against HEAD~1 and fail on degressions.",
        add_completion=False,
    )
    run.register(app)
    return app


def main() -> None:
    app = create_app()
    get_command(app)()


# Click-compatible object for tooling that imports it
cli = get_command(create_app())

__all__ = ["cli", "create_app", "main"]
