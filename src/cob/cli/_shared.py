from __future__ import annotations

import logging
import sys

import click.utils as click_utils

from cob.config import LOG_FORMAT


def resolve_use_color(*, color: bool, no_color: bool, color_allowed: bool) -> bool:
    # CLI flags take precedence over the IO policy default.
    if no_color:
        return False
    if color:
        return True
    return color_allowed


def color_allowed_for_stdout() -> bool:
    stdout = sys.stdout
    try:
        is_tty = bool(getattr(stdout, "isatty", lambda: False)())
    except OSError:
        return False
    return is_tty and not click_utils.should_strip_ansi(stdout)


def configure_logging(*, quiet: bool, verbose: bool) -> None:
    """Configure logging based on *quiet*/*verbose*."""
    level = logging.ERROR if quiet else (logging.DEBUG if verbose else logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)
