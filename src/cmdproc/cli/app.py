"""CLI application entry point and command routing for cmdproc.

This module is the **process error boundary**.  Command failures are
already turned into exit statuses by the
:class:`~cmdproc.core.processor.CommandProcessor`; what reaches this
layer is everything the processor lets through (unknown formats,
missing optional dependencies, bugs), plus ``KeyboardInterrupt``.

Architecture notes
------------------
* No business logic lives here.  Commands live in
  :mod:`cmdproc.cli.commands`, the pipeline in :mod:`cmdproc.core`.
* This module is the only place that translates between statuses and
  the OS process exit code.
"""

from __future__ import annotations

import argparse
import logging
import sys

from cmdproc.cli import exit_codes
from cmdproc.cli.commands import CommandRegistry, build_default_registry
from cmdproc.cli.console import console
from cmdproc.cli.log import configure_logging
from cmdproc.core.processor import CommandProcessor
from cmdproc.core.protocols import OutputSink
from cmdproc.exceptions import CmdProcError
from cmdproc.infra.output import ConsoleOutput
from cmdproc.version import __version__

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _output_options() -> argparse.ArgumentParser:
    """Options accepted both before and after the command name.

    Defaults are suppressed so that a value given before the command is
    not overwritten by the sub-parser.
    """
    parent = argparse.ArgumentParser(add_help=False)
    group = parent.add_argument_group("output options")
    group.add_argument(
        "--format",
        default=argparse.SUPPRESS,
        help="Output format (string, list, json, csv, table).",
    )
    group.add_argument(
        "--pipe",
        action="store_true",
        default=argparse.SUPPRESS,
        help="Select the command's script-friendly output format.",
    )
    group.add_argument(
        "--fields",
        default=argparse.SUPPRESS,
        help="Comma-separated list of fields to show.",
    )
    return parent


def _build_parser(registry: CommandRegistry) -> argparse.ArgumentParser:
    """Construct the top-level parser with one sub-parser per command."""
    output_options = _output_options()
    parser = argparse.ArgumentParser(
        prog="cmdproc",
        description="Run commands through the cmdproc processing pipeline.",
        parents=[output_options],
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log pipeline steps to stderr.",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    for definition in registry.definitions():
        sub = subparsers.add_parser(
            definition.name,
            aliases=list(definition.names[1:]),
            help=definition.help,
            description=definition.help,
            parents=[output_options],
        )
        if definition.configure is not None:
            definition.configure(sub)
    return parser


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(
    argv: list[str] | None = None,
    *,
    registry: CommandRegistry | None = None,
    output: OutputSink | None = None,
) -> int:
    """Run the cmdproc CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.
    registry:
        Commands to expose; the built-in set when ``None``.
    output:
        Destination for command output; the process console when ``None``.

    Returns
    -------
    int
        The status resolved by the command processor.
    """
    registry = registry or build_default_registry()
    parser = _build_parser(registry)
    args = parser.parse_args(argv)
    configure_logging(debug=args.debug)

    if args.command is None:
        parser.print_help()
        return exit_codes.SUCCESS

    definition = registry.get(args.command)
    invocation = definition.invocation(args)
    logger.debug("Dispatching %s with options %s", definition.name, invocation.options)

    processor = CommandProcessor(registry.hook_manager, registry.formatter_manager)
    return processor.process_invocation(output or ConsoleOutput(), invocation)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except CmdProcError as exc:
        console.error(str(exc), exc.hint)
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        logger.debug("Unhandled exception", exc_info=True)
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
