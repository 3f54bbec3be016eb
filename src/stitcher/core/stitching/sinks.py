"""Output sinks: ordered text consumers the compositor streams into.

The compositor only ever calls ``write``; whoever created the sink calls
``close`` once the root render returns, or ``abort`` when it fails.
"""
from __future__ import annotations

import os
import sys
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, List, Optional, TextIO, Union

from ..utils.io import ensure_parent_dir


class OutputSink(ABC):
    """Ordered text consumer with ``write``/``close``.

    Usable as a context manager: a clean exit closes the sink, an exception
    aborts it.
    """

    def __init__(self) -> None:
        self.closed = False
        self.chars_written = 0

    def write(self, text: str) -> None:
        if self.closed:
            raise ValueError(f"write to closed {self.__class__.__name__}")
        if not text:
            return
        self._write(text)
        self.chars_written += len(text)

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        self._close()

    def abort(self) -> None:
        """Give up on the output. Defaults to ``close``; bytes already written stay written."""
        self.close()

    @abstractmethod
    def _write(self, text: str) -> None:
        ...

    def _close(self) -> None:
        return None

    def __enter__(self) -> "OutputSink":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.close()
        else:
            self.abort()


class MemorySink(OutputSink):
    """Collects output in memory (embedding, tests, stdout preview)."""

    def __init__(self) -> None:
        super().__init__()
        self._chunks: List[str] = []

    def _write(self, text: str) -> None:
        self._chunks.append(text)

    def getvalue(self) -> str:
        return "".join(self._chunks)


class NullSink(OutputSink):
    """Discards output; only ``chars_written`` is kept."""

    def _write(self, text: str) -> None:
        return None


class StreamSink(OutputSink):
    """Writes to an existing text stream, stdout by default.

    The wrapped stream is flushed on close but never closed.
    """

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        super().__init__()
        self.stream = stream if stream is not None else sys.stdout

    def _write(self, text: str) -> None:
        self.stream.write(text)

    def _close(self) -> None:
        self.stream.flush()


class BufferedStreamSink(StreamSink):
    """``StreamSink`` that holds everything until ``close``.

    ``abort`` drops the buffered text, so a failed render prints nothing.
    """

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        super().__init__(stream)
        self._pending = MemorySink()

    def _write(self, text: str) -> None:
        self._pending.write(text)

    def _close(self) -> None:
        self.stream.write(self._pending.getvalue())
        super()._close()

    def abort(self) -> None:
        if self.closed:
            return
        self.closed = True
        self._pending.close()


class AtomicFileSink(OutputSink):
    """Writes to a temp file next to ``path`` and renames it into place on close.

    ``abort`` removes the temp file, so a failed render never leaves a
    partially written output behind.
    """

    def __init__(self, path: Union[str, Path], encoding: str = "utf-8") -> None:
        super().__init__()
        self.path = Path(path)
        ensure_parent_dir(self.path)
        self._file: IO[str] = tempfile.NamedTemporaryFile(
            "w",
            encoding=encoding,
            dir=str(self.path.parent),
            prefix=f".{self.path.name}.",
            suffix=".tmp",
            delete=False,
        )
        self.temp_path = Path(self._file.name)

    def _write(self, text: str) -> None:
        self._file.write(text)

    def _close(self) -> None:
        try:
            self._file.flush()
            os.fsync(self._file.fileno())
            self._file.close()
            os.chmod(self.temp_path, self._target_mode())
            os.replace(str(self.temp_path), str(self.path))
        finally:
            self._discard_temp()

    def abort(self) -> None:
        if self.closed:
            return
        self.closed = True
        self._file.close()
        self._discard_temp()

    def _target_mode(self) -> int:
        # Temp files are created 0600; keep the existing file's mode or honour the umask.
        if self.path.exists():
            return self.path.stat().st_mode & 0o777
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask

    def _discard_temp(self) -> None:
        if self.temp_path.exists():
            self.temp_path.unlink()


__all__ = ["OutputSink", "MemorySink", "NullSink", "StreamSink", "BufferedStreamSink", "AtomicFileSink"]
