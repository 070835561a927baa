"""Tests for output sinks (infra/output.py)."""

from __future__ import annotations

import io

import pytest

from cmdproc.core.protocols import ErrorOutputSink
from cmdproc.infra.output import BufferedOutput, ConsoleOutput, StreamOutput


class TestStreamOutput:
    def test_writeln_appends_newline(self) -> None:
        stream = io.StringIO()
        StreamOutput(stream).writeln("hello")
        assert stream.getvalue() == "hello\n"

    def test_has_no_error_output(self) -> None:
        assert not isinstance(StreamOutput(io.StringIO()), ErrorOutputSink)


class TestConsoleOutput:
    def test_writes_to_stdout(self, capsys: pytest.CaptureFixture[str]) -> None:
        ConsoleOutput().writeln("out")
        captured = capsys.readouterr()
        assert captured.out == "out\n"
        assert captured.err == ""

    def test_error_output_writes_to_stderr(
        self, capsys: pytest.CaptureFixture[str],
    ) -> None:
        ConsoleOutput().get_error_output().writeln("err")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == "err\n"

    def test_is_error_output_sink(self) -> None:
        assert isinstance(ConsoleOutput(), ErrorOutputSink)


class TestBufferedOutput:
    def test_collects_lines(self) -> None:
        out = BufferedOutput()
        out.writeln("a")
        out.writeln("b")
        assert out.lines == ["a", "b"]
        assert out.fetch() == "a\nb\n"

    def test_error_output_is_separate(self) -> None:
        out = BufferedOutput()
        out.get_error_output().writeln("oops")
        assert out.lines == []
        assert out.get_error_output().lines == ["oops"]

    def test_without_error_output_returns_self(self) -> None:
        out = BufferedOutput(with_error_output=False)
        assert out.get_error_output() is out
