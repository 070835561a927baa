"""Custom exception hierarchy for cmdproc.

Exceptions raised by command callbacks, validators and formatters
should inherit from :class:`CmdProcError` so that the processor can
recover a meaningful exit code and the CLI error boundary can render a
clean message without leaking stack traces.

Hierarchy
---------
CmdProcError
├── CommandFailedError
├── ValidationError
├── UnknownFormatError
├── IncompatibleDataError
├── UnknownCommandError
└── EnvironmentError
"""

from __future__ import annotations


class CmdProcError(Exception):
    """Base exception for all cmdproc errors.

    ``code`` becomes the exit status when the error is converted into a
    :class:`~cmdproc.core.models.CommandError` by the processor.
    """

    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        code: int = 1,
    ) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""
        self.code: int = code


# --- Command execution -----------------------------------------------------

class CommandFailedError(CmdProcError):
    """Raised by a command callback to report a failure with an exit code."""


class ValidationError(CmdProcError):
    """Raised by a validator hook when arguments are rejected."""


# --- Output formatting -----------------------------------------------------

class UnknownFormatError(CmdProcError):
    """Raised when no formatter is registered under the requested name."""


class IncompatibleDataError(CmdProcError):
    """Raised when a formatter cannot render the shape of the given data."""


# --- CLI / environment -----------------------------------------------------

class UnknownCommandError(CmdProcError):
    """Raised when the CLI is asked to run a command that is not registered."""


class EnvironmentError(CmdProcError):
    """Raised when an optional runtime dependency is not available."""


def exit_code_of(exc: BaseException) -> int:
    """Return the exit code carried by *exc*, defaulting to ``1``.

    Any exception exposing an integer ``code`` attribute is honoured,
    not only :class:`CmdProcError` subclasses.
    """
    code = getattr(exc, "code", None)
    if isinstance(code, int) and not isinstance(code, bool):
        return code
    return 1
