"""``cmdproc doctor`` — environment diagnostics command.

Collects one row per component.  Rendering is left to the processor:
rows go through the ``table`` formatter by default (``json`` under
``--pipe``).  When a critical check fails the status becomes nonzero,
so the report is reduced to plain text for the error stream.
"""

from __future__ import annotations

import platform
import sys
from importlib.metadata import PackageNotFoundError, version
from typing import Any

from cmdproc.cli import exit_codes
from cmdproc.version import __version__

Check = dict[str, str]

OK = "OK"
WARN = "WARN"
FAIL = "FAIL"


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _row(component: str, value: str, status: str) -> Check:
    return {"component": component, "value": value, "status": status}


def _cmdproc_version_check() -> Check:
    return _row("cmdproc", __version__, OK)


def _python_version_check() -> Check:
    """Python 3.10 or newer is required."""
    python_version = platform.python_version()
    major, minor = sys.version_info[:2]
    ok = (major, minor) >= (3, 10)
    return _row("Python", python_version, OK if ok else FAIL)


def _rich_check() -> Check:
    """Rich is optional: without it tables and diagnostics render as plain text."""
    try:
        import rich  # noqa: F401
    except ModuleNotFoundError:
        return _row("rich", "NOT INSTALLED", WARN)

    try:
        return _row("rich", version("rich"), OK)
    except PackageNotFoundError:
        return _row("rich", "unknown", OK)


def _os_check() -> Check:
    system_raw = platform.system()
    system_display = {
        "Windows": "Windows",
        "Linux": "Linux",
        "Darwin": "macOS",
    }.get(system_raw, system_raw)
    value = f"{system_display} {platform.release()} ({platform.machine()})"
    return _row("OS", value, OK)


def collect_checks() -> list[Check]:
    return [
        _cmdproc_version_check(),
        _python_version_check(),
        _rich_check(),
        _os_check(),
    ]


# ---------------------------------------------------------------------------
# Hooks
# ---------------------------------------------------------------------------

def _is_report(result: Any) -> bool:
    return isinstance(result, list) and all(
        isinstance(row, dict) and "status" in row for row in result
    )


def doctor_status(result: Any) -> int | None:
    """Status determiner: fail the command when any check failed."""
    if not _is_report(result):
        return None
    if any(row["status"] == FAIL for row in result):
        return exit_codes.GENERAL_ERROR
    return exit_codes.SUCCESS


def doctor_failure_text(result: Any) -> str | None:
    """Output extractor: plain-text report for a failing run.

    A failing run bypasses formatters, so the rows must already be a
    string to be printed at all.
    """
    if not _is_report(result) or doctor_status(result) == exit_codes.SUCCESS:
        return None
    return plain_report(result)


def plain_report(checks: list[Check]) -> str:
    """Render *checks* as a fixed-width text table."""
    lines = [
        "cmdproc doctor",
        "=" * 56,
        f"{'Component':<12} {'Value':<32} {'Status':<8}",
        "-" * 56,
    ]
    for row in checks:
        lines.append(f"{row['component']:<12} {row['value']:<32} {row['status']:<8}")
    lines.append("Some checks failed.")
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Command callback
# ---------------------------------------------------------------------------

def run_doctor(options: dict[str, Any] | None = None) -> list[Check]:
    """Execute all diagnostic checks and return their rows."""
    return collect_checks()
