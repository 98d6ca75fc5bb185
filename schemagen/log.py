"""Console logging setup for the command line.

Modules log through structlog.get_logger(__name__); this module only decides
the level and the renderer.
"""

from __future__ import annotations

import logging
import sys

import structlog


def resolve_level(*, quiet: bool = False, verbose: bool = False) -> int:
    """quiet -> WARNING, verbose -> DEBUG, otherwise INFO."""
    if quiet and verbose:
        raise ValueError("Cannot be quiet and verbose at the same time")
    if quiet:
        return logging.WARNING
    if verbose:
        return logging.DEBUG
    return logging.INFO


def setup_logging(*, quiet: bool = False, verbose: bool = False) -> None:
    """Configure structlog for terminal output at the requested verbosity."""
    level = resolve_level(quiet=quiet, verbose=verbose)
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        # sys.stderr looked up per logger so a swapped stream is honoured
        logger_factory=lambda *args: structlog.PrintLogger(sys.stderr),
        cache_logger_on_first_use=False,
    )
