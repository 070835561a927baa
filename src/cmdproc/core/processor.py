"""Core command processor — runs one command invocation end to end.

Pipeline per invocation::

    Validating → (ValidationFailed | Validated) → Running → Altering
        → StatusResolved → Writing → Done

The processor depends on a :class:`~cmdproc.core.protocols.HookManager`
and, optionally, a :class:`~cmdproc.core.protocols.FormatterManager`
injected at construction time.

Guarantees
----------
* Any exception raised while validating, running or altering becomes a
  :class:`~cmdproc.core.models.CommandError` and flows through the
  normal status/output path.
* A nonzero status never reaches a structured formatter.
* Exceptions raised while writing output (e.g. an unknown format)
  propagate to the caller.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from cmdproc.core.format_selection import get_format
from cmdproc.core.models import (
    AnnotationData,
    CommandError,
    Invocation,
    Options,
    Rejected,
    Replaced,
)
from cmdproc.core.protocols import (
    ErrorOutputSink,
    Formatter,
    FormatterManager,
    HookManager,
    OutputSink,
)
from cmdproc.exceptions import exit_code_of

logger = logging.getLogger(__name__)


class CommandProcessor:
    """Process a command, including hooks and output formatting.

    Parameters
    ----------
    hook_manager:
        Any object satisfying the :class:`HookManager` protocol.
    formatter_manager:
        Optional :class:`FormatterManager`.  Without one, only plain
        string output is ever written.
    """

    def __init__(
        self,
        hook_manager: HookManager,
        formatter_manager: FormatterManager | None = None,
    ) -> None:
        self._hook_manager: HookManager = hook_manager
        self._formatter_manager: FormatterManager | None = formatter_manager

    # ------------------------------------------------------------------
    # Collaborators
    # ------------------------------------------------------------------

    @property
    def hook_manager(self) -> HookManager:
        return self._hook_manager

    @property
    def formatter_manager(self) -> FormatterManager | None:
        return self._formatter_manager

    @formatter_manager.setter
    def formatter_manager(self, formatter_manager: FormatterManager | None) -> None:
        self._formatter_manager = formatter_manager

    def get_formatter(
        self,
        format_name: Any,
        annotation_data: AnnotationData,
    ) -> Formatter | None:
        """Ask the formatter manager for *format_name*, if there is one."""
        if self._formatter_manager is None:
            return None
        return self._formatter_manager.get_formatter(format_name, annotation_data)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def process(
        self,
        output: OutputSink,
        names: Sequence[str],
        callback: Callable[..., Any],
        annotation_data: AnnotationData,
        args: Sequence[Any],
        options: Options | None = None,
    ) -> int:
        """Validate, run and alter the command, then emit its output.

        When *options* is omitted it is recovered from the trailing
        element of *args*, provided that element is a mapping.

        Returns
        -------
        int
            The exit status of the invocation.
        """
        try:
            result = self.validate_run_and_alter(names, callback, args)
        except Exception as exc:
            logger.debug("Command %s failed outside its callback", _label(names), exc_info=True)
            result = CommandError(str(exc), exit_code_of(exc))

        if options is None:
            options = _trailing_options(args)
        return self.handle_results(output, names, result, annotation_data, options)

    def process_invocation(self, output: OutputSink, invocation: Invocation) -> int:
        """Run :meth:`process` for a prepared :class:`Invocation`."""
        return self.process(
            output,
            invocation.names,
            invocation.callback,
            invocation.annotation_data,
            invocation.args,
            invocation.options,
        )

    def validate_run_and_alter(
        self,
        names: Sequence[str],
        callback: Callable[..., Any],
        args: Sequence[Any],
    ) -> Any:
        """Run validators, the callback and alterers; return the result."""
        outcome = self._hook_manager.validate_arguments(names, args)
        if isinstance(outcome, Rejected):
            logger.debug("Validation rejected arguments for %s", _label(names))
            return outcome.result
        if isinstance(outcome, Replaced):
            args = outcome.args

        result = self.run_command_callback(callback, args)
        return self.process_results(names, result, args)

    def process_results(
        self,
        names: Sequence[str],
        result: Any,
        args: Sequence[Any] = (),
    ) -> Any:
        """Pass *result* through the hook manager's result alterers."""
        return self._hook_manager.alter_result(names, result, args)

    def handle_results(
        self,
        output: OutputSink,
        names: Sequence[str],
        result: Any,
        annotation_data: AnnotationData,
        options: Options | None = None,
    ) -> int:
        """Resolve the status code, then write the result's output."""
        options = options if options is not None else {}

        status = self._hook_manager.determine_status_code(names, result)
        if _is_plain_int(result) and status is None:
            status = result
            result = None
        status = self.interpret_status_code(status)
        logger.debug("Command %s resolved to status %d", _label(names), status)

        output_text = self._hook_manager.extract_output(names, result)
        output = self.choose_output_stream(output, status)
        formatter = self.choose_formatter(annotation_data, options, status)

        self.write_command_output(output_text, formatter, options, output)
        return status

    # ------------------------------------------------------------------
    # Pipeline steps
    # ------------------------------------------------------------------

    @staticmethod
    def run_command_callback(
        callback: Callable[..., Any],
        args: Sequence[Any],
    ) -> Any:
        """Invoke *callback*, converting any exception to a CommandError."""
        try:
            return callback(*args)
        except Exception as exc:
            logger.debug("Command callback raised %s", type(exc).__name__, exc_info=True)
            return CommandError(str(exc), exit_code_of(exc))

    def choose_formatter(
        self,
        annotation_data: AnnotationData,
        options: Options,
        status: int,
    ) -> Formatter | None:
        """Select the formatter, or ``None`` for a failed command.

        A failed command's result may carry printable text, but it is
        never rendered through the ``--format`` formatter.
        """
        if status:
            return None
        return self.get_formatter(get_format(options), annotation_data)

    @staticmethod
    def choose_output_stream(output: OutputSink, status: int) -> OutputSink:
        """Switch to the error stream when the status indicates failure."""
        if status and isinstance(output, ErrorOutputSink):
            return output.get_error_output()
        return output

    @staticmethod
    def write_command_output(
        output_text: Any,
        formatter: Formatter | None,
        options: Options,
        output: OutputSink,
    ) -> None:
        """Render through *formatter* if present, else print plain strings."""
        if output_text is not None and formatter is not None:
            formatter.write(output_text, options, output)
            return
        if isinstance(output_text, str):
            output.writeln(output_text)
        elif output_text is not None:
            logger.debug(
                "Dropping unformatted output of type %s", type(output_text).__name__,
            )

    @staticmethod
    def interpret_status_code(status: int | None) -> int:
        """Return *status* if it was set; otherwise presume success."""
        if status is None:
            return 0
        return status


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _is_plain_int(value: object) -> bool:
    """``True`` for ints, excluding ``bool``."""
    return isinstance(value, int) and not isinstance(value, bool)


def _trailing_options(args: Sequence[Any]) -> Options:
    if args and isinstance(args[-1], Mapping):
        return args[-1]
    return {}


def _label(names: Sequence[str]) -> str:
    return names[0] if names else "<anonymous>"
