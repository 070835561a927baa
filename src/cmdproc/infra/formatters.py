"""Built-in output formatters and the registry that hands them out.

Formatters are created per invocation by
:meth:`FormatterManager.get_formatter` and receive the command's
annotation data, which they consult for field labels and default
fields.

Rich is imported lazily by :class:`TableFormatter` only; without it the
table falls back to plain fixed-width text.
"""

from __future__ import annotations

import csv
import io
import json
import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from cmdproc.core.models import AnnotationData, Options
from cmdproc.core.protocols import Formatter, OutputSink
from cmdproc.exceptions import (
    IncompatibleDataError,
    UnknownFormatError,
)

logger = logging.getLogger(__name__)

FormatterFactory = Callable[[AnnotationData], Formatter]


# ---------------------------------------------------------------------------
# Row / field helpers (pure)
# ---------------------------------------------------------------------------

def _is_sequence(value: object) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def to_rows(data: Any) -> list[Mapping[Any, Any]]:
    """Normalise *data* into a list of row mappings.

    Accepted shapes: a sequence of mappings, a mapping of mappings
    (values become rows), or a sequence of sequences (columns keyed by
    position).

    Raises
    ------
    IncompatibleDataError
        For any other shape.
    """
    if isinstance(data, Mapping) and all(isinstance(v, Mapping) for v in data.values()):
        return list(data.values())
    if _is_sequence(data):
        if all(isinstance(item, Mapping) for item in data):
            return list(data)
        if all(_is_sequence(item) for item in data):
            return [dict(enumerate(item)) for item in data]
    raise IncompatibleDataError(
        f"Data of type {type(data).__name__} cannot be rendered as rows.",
        hint="Try --format=json or --format=string.",
    )


def _split_fields(requested: Any) -> list[str]:
    if isinstance(requested, str):
        return [part.strip() for part in requested.split(",") if part.strip()]
    return [str(part) for part in requested]


def resolve_fields(
    rows: Sequence[Mapping[Any, Any]],
    annotation_data: AnnotationData,
    options: Options,
) -> list[tuple[Any, str]]:
    """Return ``(key, label)`` pairs for the columns to render.

    Candidate columns come from the ``field-labels`` annotation, or the
    keys of the first row.  The ``fields`` option (or the
    ``default-fields`` annotation) narrows and orders them; each entry
    may name either a key or a label.
    """
    labels: Mapping[Any, str] = annotation_data.get("field-labels") or {}
    if labels:
        columns = [(key, str(label)) for key, label in labels.items()]
    elif rows:
        columns = [(key, str(key)) for key in rows[0]]
    else:
        columns = []

    requested = options.get("fields") or annotation_data.get("default-fields")
    if not requested:
        return columns

    by_name: dict[str, tuple[Any, str]] = {}
    for key, label in columns:
        by_name[str(key)] = (key, label)
        by_name.setdefault(label, (key, label))

    selected: list[tuple[Any, str]] = []
    for name in _split_fields(requested):
        if name not in by_name:
            raise IncompatibleDataError(
                f"Unknown field: {name}",
                hint="Available fields: " + ", ".join(str(k) for k, _ in columns),
            )
        selected.append(by_name[name])
    return selected


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (Mapping, list, tuple)):
        return json.dumps(value, default=str)
    return str(value)


# ---------------------------------------------------------------------------
# Formatters
# ---------------------------------------------------------------------------

class _BaseFormatter:
    """Stores the annotation data shared by every formatter."""

    def __init__(self, annotation_data: AnnotationData | None = None) -> None:
        self.annotation_data: AnnotationData = annotation_data or {}


class StringFormatter(_BaseFormatter):
    """Plain text; sequences are written one item per line."""

    def write(self, output_data: Any, options: Options, output: OutputSink) -> None:
        if _is_sequence(output_data):
            output.writeln("\n".join(_cell(item) for item in output_data))
            return
        output.writeln(_cell(output_data))


class ListFormatter(_BaseFormatter):
    """One line per element of a sequence, or per value of a mapping."""

    def write(self, output_data: Any, options: Options, output: OutputSink) -> None:
        if isinstance(output_data, Mapping):
            items: Sequence[Any] = list(output_data.values())
        elif _is_sequence(output_data):
            items = output_data
        else:
            items = [output_data]
        for item in items:
            output.writeln(_cell(item))


class JsonFormatter(_BaseFormatter):
    """Pretty-printed JSON."""

    def write(self, output_data: Any, options: Options, output: OutputSink) -> None:
        output.writeln(
            json.dumps(output_data, indent=2, default=str, ensure_ascii=False),
        )


class CsvFormatter(_BaseFormatter):
    """Comma-separated rows with an optional header of field labels."""

    def write(self, output_data: Any, options: Options, output: OutputSink) -> None:
        if isinstance(output_data, Mapping) and not all(
            isinstance(v, Mapping) for v in output_data.values()
        ):
            output_data = [output_data]
        rows = to_rows(output_data)
        fields = resolve_fields(rows, self.annotation_data, options)

        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        if options.get("include-field-labels", True):
            writer.writerow([label for _, label in fields])
        for row in rows:
            writer.writerow([_cell(row.get(key)) for key, _ in fields])
        output.writeln(buffer.getvalue().rstrip("\n"))


class TableFormatter(_BaseFormatter):
    """Human-readable table rendered by Rich and captured as text.

    Without Rich the same cells are laid out as a fixed-width text table.
    """

    width: int = 120

    def write(self, output_data: Any, options: Options, output: OutputSink) -> None:
        labels, cells = self._table_cells(output_data, options)
        show_header = options.get("include-field-labels", True)

        rich_classes = _import_rich_table()
        if rich_classes is None:
            logger.debug("rich is not installed; rendering a plain table")
            lines = _plain_table(labels, cells, show_header=show_header)
        else:
            lines = self._rich_table(rich_classes, labels, cells, show_header)
        for line in lines:
            output.writeln(line)

    def _table_cells(
        self,
        output_data: Any,
        options: Options,
    ) -> tuple[list[str], list[list[str]]]:
        if isinstance(output_data, Mapping) and not all(
            isinstance(v, Mapping) for v in output_data.values()
        ):
            # A single record renders as key/value pairs.
            names: Mapping[Any, str] = self.annotation_data.get("field-labels") or {}
            return ["Field", "Value"], [
                [str(names.get(key, key)), _cell(value)]
                for key, value in output_data.items()
            ]
        rows = to_rows(output_data)
        fields = resolve_fields(rows, self.annotation_data, options)
        return [label for _, label in fields], [
            [_cell(row.get(key)) for key, _ in fields] for row in rows
        ]

    def _rich_table(
        self,
        rich_classes: tuple[type[Any], type[Any]],
        labels: list[str],
        cells: list[list[str]],
        show_header: bool,
    ) -> list[str]:
        table_class, console_class = rich_classes
        table = table_class(show_header=show_header)
        for label in labels:
            table.add_column(label)
        for row in cells:
            table.add_row(*row)

        buffer = io.StringIO()
        console = console_class(
            file=buffer,
            width=self.width,
            color_system=None,
            highlight=False,
        )
        console.print(table)
        return [line.rstrip() for line in buffer.getvalue().rstrip("\n").splitlines()]


def _plain_table(
    labels: list[str],
    cells: list[list[str]],
    *,
    show_header: bool = True,
) -> list[str]:
    """Lay out *cells* in left-aligned columns separated by two spaces."""
    widths = [len(label) if show_header else 0 for label in labels]
    for row in cells:
        widths = [max(width, len(value)) for width, value in zip(widths, row)]

    def line(values: list[str]) -> str:
        return "  ".join(v.ljust(w) for v, w in zip(values, widths)).rstrip()

    lines: list[str] = []
    if show_header:
        lines.append(line(labels))
        lines.append("  ".join("-" * w for w in widths))
    lines.extend(line(row) for row in cells)
    return lines


def _import_rich_table() -> tuple[type[Any], type[Any]] | None:
    """Import Rich's ``Table`` and ``Console`` lazily; ``None`` without Rich."""
    try:
        from rich.console import Console
        from rich.table import Table
    except ModuleNotFoundError:
        return None
    return Table, Console


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

DEFAULT_FORMATTERS: dict[str, FormatterFactory] = {
    "string": StringFormatter,
    "list": ListFormatter,
    "json": JsonFormatter,
    "csv": CsvFormatter,
    "table": TableFormatter,
}


class FormatterManager:
    """Hands out formatter instances by format name.

    Satisfies :class:`~cmdproc.core.protocols.FormatterManager`.
    """

    def __init__(self, *, include_defaults: bool = True) -> None:
        self._factories: dict[str, FormatterFactory] = (
            dict(DEFAULT_FORMATTERS) if include_defaults else {}
        )

    def add_formatter(self, name: str, factory: FormatterFactory) -> None:
        self._factories[name] = factory

    def format_names(self) -> list[str]:
        return sorted(self._factories)

    def get_formatter(
        self,
        format_name: Any,
        annotation_data: AnnotationData,
    ) -> Formatter | None:
        """Return a formatter for *format_name*, or ``None`` if it is falsy.

        Raises
        ------
        UnknownFormatError
            If no formatter is registered under *format_name*.
        """
        if not format_name:
            return None
        factory = self._factories.get(str(format_name))
        if factory is None:
            raise UnknownFormatError(
                f"Unknown output format: {format_name}",
                hint="Available formats: " + ", ".join(self.format_names()),
            )
        logger.debug("Using %s formatter", format_name)
        return factory(annotation_data)
