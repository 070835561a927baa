"""Smoke tests — verify package wiring.

These tests prove that:
* The CLI entry point is importable and callable.
* The exception hierarchy is correctly structured.
* Version is accessible.
* Exit codes are defined.
"""

from __future__ import annotations

import pytest

from cmdproc import __version__
from cmdproc.cli import exit_codes
from cmdproc.cli.app import main
from cmdproc.exceptions import (
    CmdProcError,
    CommandFailedError,
    EnvironmentError,
    IncompatibleDataError,
    UnknownCommandError,
    UnknownFormatError,
    ValidationError,
    exit_code_of,
)


# ---------------------------------------------------------------------------
# Version
# ---------------------------------------------------------------------------

class TestVersion:
    def test_version_is_string(self) -> None:
        assert isinstance(__version__, str)

    def test_version_is_semver_like(self) -> None:
        parts = __version__.split(".")
        assert len(parts) == 3
        assert all(part.isdigit() for part in parts)


# ---------------------------------------------------------------------------
# Exception hierarchy
# ---------------------------------------------------------------------------

class TestExceptions:
    @pytest.mark.parametrize(
        "exc_class",
        [
            CommandFailedError,
            ValidationError,
            UnknownFormatError,
            IncompatibleDataError,
            UnknownCommandError,
            EnvironmentError,
        ],
    )
    def test_all_exceptions_inherit_from_base(
        self, exc_class: type[CmdProcError]
    ) -> None:
        assert issubclass(exc_class, CmdProcError)

    def test_base_inherits_from_exception(self) -> None:
        assert issubclass(CmdProcError, Exception)

    def test_hint_and_code_are_stored(self) -> None:
        err = CmdProcError("boom", hint="try this", code=3)
        assert str(err) == "boom"
        assert err.hint == "try this"
        assert err.code == 3

    def test_defaults(self) -> None:
        err = CmdProcError("boom")
        assert err.hint is None
        assert err.code == 1


class TestExitCodeOf:
    def test_cmdproc_error_code(self) -> None:
        assert exit_code_of(CommandFailedError("x", code=7)) == 7

    def test_foreign_exception_with_code(self) -> None:
        exc = OSError("x")
        exc.code = 5  # type: ignore[attr-defined]
        assert exit_code_of(exc) == 5

    def test_exception_without_code(self) -> None:
        assert exit_code_of(ValueError("x")) == 1

    def test_non_int_code_ignored(self) -> None:
        exc = ValueError("x")
        exc.code = "E42"  # type: ignore[attr-defined]
        assert exit_code_of(exc) == 1


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------

class TestExitCodes:
    def test_success_is_zero(self) -> None:
        assert exit_codes.SUCCESS == 0

    def test_general_error_is_one(self) -> None:
        assert exit_codes.GENERAL_ERROR == 1

    def test_keyboard_interrupt_is_130(self) -> None:
        assert exit_codes.KEYBOARD_INTERRUPT == 130

    def test_unexpected_error_is_two(self) -> None:
        assert exit_codes.UNEXPECTED_ERROR == 2


# ---------------------------------------------------------------------------
# CLI routing
# ---------------------------------------------------------------------------

class TestCLIRouting:
    def test_no_args_returns_success(self, capsys: pytest.CaptureFixture[str]) -> None:
        """No arguments should print help and exit 0."""
        code = main([])
        assert code == exit_codes.SUCCESS
        assert "COMMAND" in capsys.readouterr().out

    def test_version_flag(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
