from cob.cli.exit_codes import (
    EXIT_CONFIG,
    EXIT_DATAERR,
    EXIT_DEGRESSION,
    EXIT_IOERR,
    EXIT_NOINPUT,
    EXIT_OK,
    EXIT_SOFTWARE,
)
from cob.cli.root import cli, create_app, main

__all__ = [
    "EXIT_CONFIG",
    "EXIT_DATAERR",
    "EXIT_DEGRESSION",
    "EXIT_IOERR",
    "EXIT_NOINPUT",
    "EXIT_OK",
    "EXIT_SOFTWARE",
    "cli",
    "create_app",
    "main",
]
