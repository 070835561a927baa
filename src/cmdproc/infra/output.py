"""Output sinks satisfying :class:`~cmdproc.core.protocols.OutputSink`.

* :class:`StreamOutput` — writes lines to any text stream.
* :class:`ConsoleOutput` — stdout, with stderr as its error output.
* :class:`BufferedOutput` — in-memory sink for tests and embedding.
"""

from __future__ import annotations

import sys
from collections.abc import Callable
from typing import TextIO


class StreamOutput:
    """Line-oriented writer over a text stream."""

    def __init__(self, stream: TextIO) -> None:
        self._stream: TextIO = stream

    def writeln(self, text: str) -> None:
        self._stream.write(text + "\n")
        self._stream.flush()


class _LazyStreamOutput:
    """Resolves its stream at write time so redirected ``sys`` streams win."""

    def __init__(self, get_stream: Callable[[], TextIO]) -> None:
        self._get_stream = get_stream

    def writeln(self, text: str) -> None:
        StreamOutput(self._get_stream()).writeln(text)


class ConsoleOutput(_LazyStreamOutput):
    """Process console: standard output plus a separate error output."""

    def __init__(self) -> None:
        super().__init__(lambda: sys.stdout)
        self._error_output = _LazyStreamOutput(lambda: sys.stderr)

    def get_error_output(self) -> _LazyStreamOutput:
        return self._error_output


class BufferedOutput:
    """Collects written lines in memory.

    When *with_error_output* is true (the default) the sink exposes a
    separate buffered error output, mirroring :class:`ConsoleOutput`.
    """

    def __init__(self, *, with_error_output: bool = True) -> None:
        self.lines: list[str] = []
        self._error_output: BufferedOutput | None = (
            BufferedOutput(with_error_output=False) if with_error_output else None
        )

    def writeln(self, text: str) -> None:
        self.lines.append(text)

    def fetch(self) -> str:
        """Return everything written so far, one line per ``writeln``."""
        return "".join(line + "\n" for line in self.lines)

    def get_error_output(self) -> BufferedOutput:
        if self._error_output is None:
            return self
        return self._error_output
