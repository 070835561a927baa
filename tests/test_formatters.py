"""Tests for the built-in formatters and FormatterManager (infra/formatters.py).

Formatters write into a BufferedOutput; assertions are made on the
captured lines.  The table formatter needs Rich, which is a declared
dependency.
"""

from __future__ import annotations

import json
from decimal import Decimal
from typing import Any

import pytest

from cmdproc.exceptions import IncompatibleDataError, UnknownFormatError
from cmdproc.infra.formatters import (
    CsvFormatter,
    FormatterManager,
    JsonFormatter,
    ListFormatter,
    StringFormatter,
    TableFormatter,
    resolve_fields,
    to_rows,
)
from cmdproc.infra.output import BufferedOutput

ROWS: list[dict[str, Any]] = [
    {"name": "alpha", "size": 1, "ok": True},
    {"name": "beta", "size": 22, "ok": False},
]


def _render(formatter: Any, data: Any, options: dict[str, Any] | None = None) -> str:
    out = BufferedOutput()
    formatter.write(data, options or {}, out)
    return out.fetch()


# ---------------------------------------------------------------------------
# Row / field helpers
# ---------------------------------------------------------------------------

class TestToRows:
    def test_list_of_dicts(self) -> None:
        assert to_rows(ROWS) == ROWS

    def test_dict_of_dicts(self) -> None:
        assert to_rows({"a": {"x": 1}, "b": {"x": 2}}) == [{"x": 1}, {"x": 2}]

    def test_list_of_lists(self) -> None:
        assert to_rows([["a", 1]]) == [{0: "a", 1: 1}]

    def test_empty_list(self) -> None:
        assert to_rows([]) == []

    @pytest.mark.parametrize("data", ["text", 5, [1, 2], {"a": 1}])
    def test_incompatible_shapes(self, data: Any) -> None:
        with pytest.raises(IncompatibleDataError):
            to_rows(data)


class TestResolveFields:
    def test_keys_of_first_row(self) -> None:
        assert resolve_fields(ROWS, {}, {}) == [
            ("name", "name"), ("size", "size"), ("ok", "ok"),
        ]

    def test_field_labels_annotation(self) -> None:
        data = {"field-labels": {"size": "Size", "name": "Name"}}
        assert resolve_fields(ROWS, data, {}) == [("size", "Size"), ("name", "Name")]

    def test_fields_option_by_key_or_label(self) -> None:
        data = {"field-labels": {"name": "Name", "size": "Size"}}
        assert resolve_fields(ROWS, data, {"fields": "Size, name"}) == [
            ("size", "Size"), ("name", "Name"),
        ]

    def test_default_fields_annotation(self) -> None:
        assert resolve_fields(ROWS, {"default-fields": ["ok"]}, {}) == [("ok", "ok")]

    def test_fields_option_beats_default_fields(self) -> None:
        data = {"default-fields": ["ok"]}
        assert resolve_fields(ROWS, data, {"fields": "name"}) == [("name", "name")]

    def test_unknown_field(self) -> None:
        with pytest.raises(IncompatibleDataError, match="Unknown field: colour"):
            resolve_fields(ROWS, {}, {"fields": "colour"})


# ---------------------------------------------------------------------------
# Formatters
# ---------------------------------------------------------------------------

class TestStringFormatter:
    def test_string(self) -> None:
        assert _render(StringFormatter(), "hello") == "hello\n"

    def test_list_joined_by_newlines(self) -> None:
        assert _render(StringFormatter(), ["a", "b"]) == "a\nb\n"

    def test_number(self) -> None:
        assert _render(StringFormatter(), 3) == "3\n"


class TestListFormatter:
    def test_sequence(self) -> None:
        assert _render(ListFormatter(), ["a", "b"]) == "a\nb\n"

    def test_mapping_values(self) -> None:
        assert _render(ListFormatter(), {"x": "one", "y": "two"}) == "one\ntwo\n"

    def test_scalar(self) -> None:
        assert _render(ListFormatter(), "only") == "only\n"


class TestJsonFormatter:
    def test_round_trips(self) -> None:
        assert json.loads(_render(JsonFormatter(), ROWS)) == ROWS

    def test_unserialisable_values_use_str(self) -> None:
        assert json.loads(_render(JsonFormatter(), {"v": Decimal("1.5")})) == {"v": "1.5"}


class TestCsvFormatter:
    def test_header_and_rows(self) -> None:
        assert _render(CsvFormatter(), ROWS) == (
            "name,size,ok\n"
            "alpha,1,true\n"
            "beta,22,false\n"
        )

    def test_labels_from_annotation(self) -> None:
        formatter = CsvFormatter({"field-labels": {"name": "Name"}})
        assert _render(formatter, ROWS) == "Name\nalpha\nbeta\n"

    def test_without_header(self) -> None:
        text = _render(CsvFormatter(), ROWS, {"include-field-labels": False})
        assert text.splitlines()[0] == "alpha,1,true"

    def test_single_record(self) -> None:
        assert _render(CsvFormatter(), {"a": 1, "b": None}) == "a,b\n1,\n"

    def test_quotes_commas(self) -> None:
        assert _render(CsvFormatter(), [{"v": "x,y"}]) == 'v\n"x,y"\n'

    def test_incompatible(self) -> None:
        with pytest.raises(IncompatibleDataError):
            _render(CsvFormatter(), "text")


class TestTableFormatter:
    def test_rows_rendered_with_labels(self) -> None:
        formatter = TableFormatter({"field-labels": {"name": "Name", "size": "Size"}})
        text = _render(formatter, ROWS)
        assert "Name" in text
        assert "Size" in text
        assert "alpha" in text
        assert "22" in text
        assert "ok" not in text

    def test_fields_option(self) -> None:
        text = _render(TableFormatter(), ROWS, {"fields": "size"})
        assert "22" in text
        assert "alpha" not in text

    def test_single_record_as_key_value(self) -> None:
        text = _render(TableFormatter(), {"version": "1.0"})
        assert "Field" in text
        assert "version" in text
        assert "1.0" in text

    def test_no_trailing_whitespace(self) -> None:
        text = _render(TableFormatter(), ROWS)
        assert all(line == line.rstrip() for line in text.splitlines())


# ---------------------------------------------------------------------------
# FormatterManager
# ---------------------------------------------------------------------------

class TestFormatterManager:
    @pytest.mark.parametrize(
        ("name", "cls"),
        [
            ("string", StringFormatter),
            ("list", ListFormatter),
            ("json", JsonFormatter),
            ("csv", CsvFormatter),
            ("table", TableFormatter),
        ],
    )
    def test_builtin_formats(self, name: str, cls: type) -> None:
        assert isinstance(FormatterManager().get_formatter(name, {}), cls)

    @pytest.mark.parametrize("name", [False, None, ""])
    def test_falsy_name_gives_no_formatter(self, name: Any) -> None:
        assert FormatterManager().get_formatter(name, {}) is None

    def test_unknown_format(self) -> None:
        with pytest.raises(UnknownFormatError, match="xml") as exc_info:
            FormatterManager().get_formatter("xml", {})
        assert exc_info.value.hint is not None
        assert "json" in exc_info.value.hint

    def test_annotation_data_reaches_formatter(self) -> None:
        data = {"field-labels": {"a": "A"}}
        formatter = FormatterManager().get_formatter("csv", data)
        assert formatter.annotation_data is data  # type: ignore[union-attr]

    def test_add_formatter(self) -> None:
        manager = FormatterManager(include_defaults=False)
        manager.add_formatter("shout", StringFormatter)
        assert manager.format_names() == ["shout"]
        assert isinstance(manager.get_formatter("shout", {}), StringFormatter)

    def test_format_names_sorted(self) -> None:
        assert FormatterManager().format_names() == [
            "csv", "json", "list", "string", "table",
        ]
