"""Core layer — the command processing pipeline and its contracts.

Rules
-----
* No ``print()`` calls.
* No filesystem or network I/O; output goes through an injected sink.
* No imports from ``cli`` or ``infra``.
"""

from cmdproc.core.format_selection import get_format
from cmdproc.core.models import (
    Accepted,
    CommandError,
    Invocation,
    Rejected,
    Replaced,
    ValidationOutcome,
)
from cmdproc.core.processor import CommandProcessor
from cmdproc.core.protocols import (
    ErrorOutputSink,
    Formatter,
    FormatterManager,
    HookManager,
    OutputSink,
)

__all__: list[str] = [
    "Accepted",
    "CommandError",
    "CommandProcessor",
    "ErrorOutputSink",
    "Formatter",
    "FormatterManager",
    "HookManager",
    "Invocation",
    "OutputSink",
    "Rejected",
    "Replaced",
    "ValidationOutcome",
    "get_format",
]
