"""Infrastructure layer — default collaborators for the processor.

This layer provides concrete hook and formatter managers and the
output sinks that write to the process streams.

Rules
-----
* No imports from ``cli``.
* Must satisfy the protocols in :mod:`cmdproc.core.protocols`.
"""

from cmdproc.infra.formatters import FormatterManager
from cmdproc.infra.hook_manager import HookManager
from cmdproc.infra.output import BufferedOutput, ConsoleOutput, StreamOutput

__all__: list[str] = [
    "BufferedOutput",
    "ConsoleOutput",
    "FormatterManager",
    "HookManager",
    "StreamOutput",
]
