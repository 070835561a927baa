"""cmdproc — command execution pipeline for annotation-driven CLIs.

Runs validation hooks, the command callback, result-alteration hooks,
status resolution and formatted output for a single invocation.
"""

from cmdproc.version import __version__

__all__: list[str] = ["__version__"]
