"""Default :class:`~cmdproc.core.protocols.HookManager` implementation.

Hooks are registered per command name; the special name ``"*"``
registers a hook for every command.  Global hooks always run before
command-specific ones.

Hook signatures
---------------
validator
    ``(args) -> Accepted | Replaced | Rejected | None``.  Raising
    :class:`~cmdproc.exceptions.ValidationError` is equivalent to
    returning ``Rejected(CommandError(message, code))``.
alterer
    ``(result, args) -> result``
status determiner
    ``(result) -> int | None``
output extractor
    ``(result) -> object | None``
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Callable, Iterator, Sequence
from typing import Any

from cmdproc.core.models import (
    Accepted,
    CommandError,
    Rejected,
    Replaced,
    ValidationOutcome,
)
from cmdproc.exceptions import ValidationError

logger = logging.getLogger(__name__)

ALL_COMMANDS = "*"

Validator = Callable[[Sequence[Any]], "ValidationOutcome | None"]
Alterer = Callable[[Any, Sequence[Any]], Any]
StatusDeterminer = Callable[[Any], "int | None"]
OutputExtractor = Callable[[Any], Any]


class HookManager:
    """Registry of validation, alteration, status and output hooks."""

    def __init__(self) -> None:
        self._validators: dict[str, list[Validator]] = defaultdict(list)
        self._alterers: dict[str, list[Alterer]] = defaultdict(list)
        self._status_determiners: dict[str, list[StatusDeterminer]] = defaultdict(list)
        self._output_extractors: dict[str, list[OutputExtractor]] = defaultdict(list)

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def add_validator(self, hook: Validator, name: str = ALL_COMMANDS) -> None:
        self._validators[name].append(hook)

    def add_alterer(self, hook: Alterer, name: str = ALL_COMMANDS) -> None:
        self._alterers[name].append(hook)

    def add_status_determiner(
        self, hook: StatusDeterminer, name: str = ALL_COMMANDS,
    ) -> None:
        self._status_determiners[name].append(hook)

    def add_output_extractor(
        self, hook: OutputExtractor, name: str = ALL_COMMANDS,
    ) -> None:
        self._output_extractors[name].append(hook)

    # ------------------------------------------------------------------
    # HookManager protocol
    # ------------------------------------------------------------------

    def validate_arguments(
        self,
        names: Sequence[str],
        args: Sequence[Any],
    ) -> ValidationOutcome:
        """Run validators in order; the first rejection wins."""
        replaced = False
        for hook in self._hooks(self._validators, names):
            try:
                outcome = hook(args)
            except ValidationError as exc:
                logger.debug("Validator rejected %s: %s", list(names), exc)
                return Rejected(CommandError(str(exc), exc.code))
            if isinstance(outcome, Rejected):
                return outcome
            if isinstance(outcome, Replaced):
                args = outcome.args
                replaced = True
        return Replaced(args) if replaced else Accepted()

    def alter_result(
        self,
        names: Sequence[str],
        result: Any,
        args: Sequence[Any],
    ) -> Any:
        for hook in self._hooks(self._alterers, names):
            result = hook(result, args)
        return result

    def determine_status_code(self, names: Sequence[str], result: Any) -> int | None:
        """Ask registered determiners, then fall back to ``result.exit_code``."""
        for hook in self._hooks(self._status_determiners, names):
            status = hook(result)
            if status is not None:
                return status
        exit_code = getattr(result, "exit_code", None)
        if isinstance(exit_code, int) and not isinstance(exit_code, bool):
            return exit_code
        return None

    def extract_output(self, names: Sequence[str], result: Any) -> Any:
        """Ask registered extractors; an error yields its message."""
        for hook in self._hooks(self._output_extractors, names):
            output = hook(result)
            if output is not None:
                return output
        if isinstance(result, CommandError):
            return result.message
        return result

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    @staticmethod
    def _hooks(registry: dict[str, list[Any]], names: Sequence[str]) -> Iterator[Any]:
        yield from registry.get(ALL_COMMANDS, ())
        for name in names:
            yield from registry.get(name, ())
