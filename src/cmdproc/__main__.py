"""Allow ``python -m cmdproc`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m cmdproc`` behaves identically to the ``cmdproc``
console script.
"""

from __future__ import annotations

from cmdproc.cli.app import cli

if __name__ == "__main__":
    cli()
