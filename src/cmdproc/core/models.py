"""Domain models for cmdproc.

All models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access and light normalisation.  They carry zero
I/O and zero dependencies on external packages.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, Union

Options = Mapping[str, Any]
"""Read-only mapping of option name to value."""

AnnotationData = Mapping[str, Any]
"""Static per-command metadata attached at definition time."""


# ---------------------------------------------------------------------------
# Error result
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class CommandError:
    """Result value representing a failed command.

    An exit code of ``0`` is normalised to ``1``: exceptions often carry
    a zero code when none was set, and an error must never be reported
    as success.
    """

    message: str | None
    """Human-readable error text, or ``None`` when there is nothing to print."""

    exit_code: int = 1
    """Nonzero process exit status."""

    def __post_init__(self) -> None:
        if self.exit_code == 0:
            object.__setattr__(self, "exit_code", 1)


# ---------------------------------------------------------------------------
# Validation outcome (tagged variant)
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Accepted:
    """Arguments passed validation unchanged."""


@dataclass(frozen=True, slots=True)
class Replaced:
    """Arguments passed validation after being normalised or coerced."""

    args: tuple[Any, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "args", tuple(self.args))


@dataclass(frozen=True, slots=True)
class Rejected:
    """Validation failed; ``result`` replaces the command's result."""

    result: Any


ValidationOutcome = Union[Accepted, Replaced, Rejected]


# ---------------------------------------------------------------------------
# Invocation record
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Invocation:
    """Everything needed to process a single command invocation."""

    names: tuple[str, ...]
    """Command name followed by its aliases."""

    callback: Callable[..., Any]

    args: tuple[Any, ...] = ()
    """Positional arguments; the last one conventionally holds the options."""

    annotation_data: AnnotationData = field(default_factory=dict)

    options: Options = field(default_factory=dict)
