"""Pure output-format selection logic.

Every function in this module is a **pure** transformation of the
options mapping and never mutates its input.

Resolution order:

1. ``default-format`` and ``pipe`` default to ``False``.
2. ``format`` and ``format-pipe`` default to ``default-format``.
3. ``--pipe`` selects ``format-pipe``; otherwise ``format`` wins.

``--pipe`` marks script-oriented invocation, letting a command declare
a distinct output shape for piped use versus interactive use.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


def _value(options: Mapping[str, Any], key: str, default: Any) -> Any:
    """Return ``options[key]``, treating a missing or ``None`` entry as unset."""
    value = options.get(key)
    return default if value is None else value


def with_format_defaults(options: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy of *options* with every format key populated."""
    resolved = dict(options)
    resolved["default-format"] = _value(options, "default-format", False)
    resolved["pipe"] = _value(options, "pipe", False)
    resolved["format"] = _value(options, "format", resolved["default-format"])
    resolved["format-pipe"] = _value(
        options, "format-pipe", resolved["default-format"],
    )
    return resolved


def get_format(options: Mapping[str, Any] | None) -> Any:
    """Return the requested format name, or ``False`` when none applies."""
    resolved = with_format_defaults(options or {})
    if resolved["pipe"]:
        return resolved["format-pipe"]
    return resolved["format"]
