"""Built-in command definitions and the registry that wires them up.

A :class:`CommandDefinition` bundles everything the processor needs
for one command: names, callback, annotation data, plus the argparse
configuration used to collect its arguments.  Callbacks receive their
positional arguments followed by the options mapping.
"""

from __future__ import annotations

import argparse
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from cmdproc.cli import doctor
from cmdproc.core.models import Invocation, Replaced
from cmdproc.exceptions import CommandFailedError, UnknownCommandError, ValidationError
from cmdproc.infra.formatters import FormatterManager
from cmdproc.infra.hook_manager import HookManager

# Annotation keys that seed the options mapping when the user left them unset.
_OPTION_DEFAULT_KEYS: tuple[str, ...] = ("default-format", "format-pipe")

# Options collected from the command line for every command.
_GLOBAL_OPTION_KEYS: tuple[str, ...] = ("format", "pipe", "fields")


@dataclass(frozen=True)
class CommandDefinition:
    """Static declaration of a CLI command."""

    names: tuple[str, ...]
    callback: Callable[..., Any]
    help: str
    annotation_data: Mapping[str, Any] = field(default_factory=dict)
    configure: Callable[[argparse.ArgumentParser], None] | None = None
    """Adds the command's own arguments to its sub-parser."""
    positional: tuple[str, ...] = ()
    """Namespace attributes passed to the callback, in order."""
    option_keys: tuple[str, ...] = ()
    """Namespace attributes copied into the options mapping."""

    @property
    def name(self) -> str:
        return self.names[0]

    def build_options(self, namespace: argparse.Namespace) -> dict[str, Any]:
        """Collect options from *namespace*, then fill annotation defaults."""
        options: dict[str, Any] = {}
        for key in _GLOBAL_OPTION_KEYS + self.option_keys:
            options[key] = getattr(namespace, key.replace("-", "_"), None)
        options["pipe"] = bool(options.get("pipe"))
        for key in _OPTION_DEFAULT_KEYS:
            if options.get(key) is None and key in self.annotation_data:
                options[key] = self.annotation_data[key]
        return options

    def invocation(self, namespace: argparse.Namespace) -> Invocation:
        """Build the :class:`Invocation` for a parsed command line."""
        options = self.build_options(namespace)
        args = tuple(getattr(namespace, attr) for attr in self.positional)
        return Invocation(
            names=self.names,
            callback=self.callback,
            args=args + (options,),
            annotation_data=self.annotation_data,
            options=options,
        )


class CommandRegistry:
    """Holds command definitions plus the hook and formatter managers."""

    def __init__(
        self,
        hook_manager: HookManager | None = None,
        formatter_manager: FormatterManager | None = None,
    ) -> None:
        self.hook_manager: HookManager = hook_manager or HookManager()
        self.formatter_manager: FormatterManager = formatter_manager or FormatterManager()
        self._commands: dict[str, CommandDefinition] = {}

    def register(self, definition: CommandDefinition) -> None:
        for name in definition.names:
            self._commands[name] = definition

    def get(self, name: str) -> CommandDefinition:
        """Look up a command by its name or any alias."""
        try:
            return self._commands[name]
        except KeyError:
            raise UnknownCommandError(
                f"Unknown command: {name}",
                hint="Available commands: " + ", ".join(sorted(self.primary_names())),
            ) from None

    def primary_names(self) -> list[str]:
        return [d.name for d in self.definitions()]

    def definitions(self) -> list[CommandDefinition]:
        """Unique definitions in registration order."""
        seen: dict[int, CommandDefinition] = {}
        for definition in self._commands.values():
            seen.setdefault(id(definition), definition)
        return list(seen.values())


# ---------------------------------------------------------------------------
# Callbacks
# ---------------------------------------------------------------------------

def echo(words: Sequence[str], options: Mapping[str, Any]) -> str:
    """Return the words joined by single spaces."""
    return " ".join(words)


def exit_with(code: int, options: Mapping[str, Any]) -> int:
    """Return *code*; an int result becomes the exit status."""
    return code


def fail(message: str, options: Mapping[str, Any]) -> None:
    raise CommandFailedError(message, code=options.get("code") or 1)


def validate_exit_code(args: Sequence[Any]) -> Replaced:
    """Coerce the ``exit`` command's code to an int in ``0..255``."""
    raw, *rest = args
    try:
        code = int(raw)
    except (TypeError, ValueError):
        raise ValidationError(f"Exit code must be an integer, got {raw!r}.") from None
    if not 0 <= code <= 255:
        raise ValidationError(f"Exit code must be between 0 and 255, got {code}.")
    return Replaced((code, *rest))


# ---------------------------------------------------------------------------
# Argument configurators
# ---------------------------------------------------------------------------

def _configure_echo(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("words", nargs="*", help="Words to print.")


def _configure_exit(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("code", help="Exit status to return (0-255).")


def _configure_fail(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("message", help="Error message to report.")
    parser.add_argument("--code", type=int, default=1, help="Exit status (default: 1).")


# ---------------------------------------------------------------------------
# Default registry
# ---------------------------------------------------------------------------

def build_default_registry() -> CommandRegistry:
    """Create a registry holding the built-in commands and their hooks."""
    registry = CommandRegistry()

    def list_formats(options: Mapping[str, Any]) -> list[str]:
        return registry.formatter_manager.format_names()

    registry.register(CommandDefinition(
        names=("echo", "say"),
        callback=echo,
        help="Print the given words.",
        configure=_configure_echo,
        positional=("words",),
    ))
    registry.register(CommandDefinition(
        names=("exit",),
        callback=exit_with,
        help="Exit with the given status code.",
        configure=_configure_exit,
        positional=("code",),
    ))
    registry.register(CommandDefinition(
        names=("fail",),
        callback=fail,
        help="Fail with a message and exit code.",
        configure=_configure_fail,
        positional=("message",),
        option_keys=("code",),
    ))
    registry.register(CommandDefinition(
        names=("doctor",),
        callback=doctor.run_doctor,
        help="Run environment diagnostics.",
        annotation_data={
            "default-format": "table",
            "format-pipe": "json",
            "field-labels": {
                "component": "Component",
                "value": "Value",
                "status": "Status",
            },
        },
    ))
    registry.register(CommandDefinition(
        names=("formats",),
        callback=list_formats,
        help="List the available output formats.",
        annotation_data={"default-format": "list", "format-pipe": "json"},
    ))

    hooks = registry.hook_manager
    hooks.add_validator(validate_exit_code, "exit")
    hooks.add_status_determiner(doctor.doctor_status, "doctor")
    hooks.add_output_extractor(doctor.doctor_failure_text, "doctor")
    return registry
