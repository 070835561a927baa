"""Protocols (interfaces) consumed by the core layer.

These define the contracts that collaborators must satisfy.  The
:class:`~cmdproc.core.processor.CommandProcessor` depends ONLY on these
protocols, never on concrete implementations, so any hook or
formatter backend can be injected, including plain mocks.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable

from cmdproc.core.models import AnnotationData, Options, ValidationOutcome


class OutputSink(Protocol):
    """A destination for command output."""

    def writeln(self, text: str) -> None:
        """Write *text* followed by a line break."""
        ...  # pragma: no cover


@runtime_checkable
class ErrorOutputSink(Protocol):
    """A sink that differentiates standard and error streams.

    The processor switches to :meth:`get_error_output` whenever the
    resolved status is nonzero.
    """

    def writeln(self, text: str) -> None:
        ...  # pragma: no cover

    def get_error_output(self) -> OutputSink:
        """Return the sink for error output."""
        ...  # pragma: no cover


class HookManager(Protocol):
    """Contract for the cross-cutting hook backend.

    Every method receives the command *names* (primary name followed by
    aliases) so that implementations can resolve per-command hooks.
    """

    def validate_arguments(
        self,
        names: Sequence[str],
        args: Sequence[Any],
    ) -> ValidationOutcome | None:
        """Validate *args* before the callback runs.

        Returns
        -------
        Accepted | None
            Arguments are fine as they are.
        Replaced
            Arguments were normalised; use ``outcome.args`` instead.
        Rejected
            Validation failed; ``outcome.result`` becomes the command
            result and the callback is never invoked.
        """
        ...  # pragma: no cover

    def alter_result(
        self,
        names: Sequence[str],
        result: Any,
        args: Sequence[Any],
    ) -> Any:
        """Post-process the callback's result and return the new result."""
        ...  # pragma: no cover

    def determine_status_code(
        self,
        names: Sequence[str],
        result: Any,
    ) -> int | None:
        """Return an exit status for *result*, or ``None`` if undetermined."""
        ...  # pragma: no cover

    def extract_output(self, names: Sequence[str], result: Any) -> Any:
        """Return the data to display for *result*, or ``None``."""
        ...  # pragma: no cover


class Formatter(Protocol):
    """A renderer for structured output."""

    def write(
        self,
        output_data: Any,
        options: Options,
        output: OutputSink,
    ) -> None:
        """Render *output_data* to *output*."""
        ...  # pragma: no cover


class FormatterManager(Protocol):
    """Contract for the formatter registry."""

    def get_formatter(
        self,
        format_name: Any,
        annotation_data: AnnotationData,
    ) -> Formatter | None:
        """Return the formatter registered for *format_name*.

        *annotation_data* is passed so formatters may consult static
        command metadata such as field labels.
        """
        ...  # pragma: no cover
