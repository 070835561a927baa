"""Logging setup for the ``cmdproc`` console script.

Library modules only create loggers; handlers are attached here, once,
by the CLI.  Log records go to stderr so they never mix with command
output on stdout.
"""

from __future__ import annotations

import logging
import sys

LOGGER_NAME = "cmdproc"


def configure_logging(debug: bool = False) -> logging.Logger:
    """Attach a stderr handler to the package logger.

    Uses ``rich.logging.RichHandler`` when Rich is installed, otherwise
    a plain ``StreamHandler``.  Calling this more than once replaces the
    previous handler.  Records still propagate to the root logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if debug else logging.WARNING)
    for existing in list(logger.handlers):
        if getattr(existing, "_cmdproc_handler", False):
            logger.removeHandler(existing)

    try:
        from rich.console import Console
        from rich.logging import RichHandler
    except ModuleNotFoundError:
        handler: logging.Handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter("%(levelname)-8s %(name)s: %(message)s"),
        )
    else:
        handler = RichHandler(
            console=Console(stderr=True),
            show_path=debug,
            rich_tracebacks=debug,
        )
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))

    handler._cmdproc_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    return logger
