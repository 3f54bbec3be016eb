from __future__ import annotations

import io
import os
import stat

import pytest

from stitcher.core.stitching.sinks import AtomicFileSink, BufferedStreamSink, MemorySink, NullSink, StreamSink


def test_memory_sink_preserves_order_and_counts():
    sink = MemorySink()
    for chunk in ("<a>", "", "b", "</a>"):
        sink.write(chunk)
    sink.close()
    assert sink.getvalue() == "<a>b</a>"
    assert sink.chars_written == 8


def test_write_after_close_raises():
    sink = MemorySink()
    sink.close()
    sink.close()
    with pytest.raises(ValueError):
        sink.write("x")


def test_null_sink_discards_but_counts():
    sink = NullSink()
    sink.write("hello")
    assert sink.chars_written == 5


def test_stream_sink_does_not_close_stream():
    stream = io.StringIO()
    with StreamSink(stream) as sink:
        sink.write("one")
        sink.write("two")
    assert sink.closed
    assert not stream.closed
    assert stream.getvalue() == "onetwo"


def test_buffered_stream_sink_writes_only_on_close():
    stream = io.StringIO()
    sink = BufferedStreamSink(stream)
    sink.write("<p>head</p>")
    assert stream.getvalue() == ""
    sink.close()
    assert stream.getvalue() == "<p>head</p>"
    assert sink.chars_written == 11


def test_buffered_stream_sink_abort_prints_nothing():
    stream = io.StringIO()
    with pytest.raises(RuntimeError):
        with BufferedStreamSink(stream) as sink:
            sink.write("<p>head</p>")
            raise RuntimeError("render failed")
    assert stream.getvalue() == ""
    assert sink.closed


def test_context_manager_aborts_on_error():
    with pytest.raises(RuntimeError):
        with MemorySink() as sink:
            sink.write("x")
            raise RuntimeError("boom")
    assert sink.closed


class TestAtomicFileSink:
    def test_output_appears_only_on_close(self, tmp_path):
        target = tmp_path / "out" / "index.html"
        sink = AtomicFileSink(target)
        sink.write("<html>")
        assert not target.exists()
        assert sink.temp_path.exists()
        assert sink.temp_path.parent == target.parent
        sink.write("</html>")
        sink.close()
        assert target.read_text(encoding="utf-8") == "<html></html>"
        assert not sink.temp_path.exists()

    def test_abort_leaves_no_file(self, tmp_path):
        target = tmp_path / "index.html"
        sink = AtomicFileSink(target)
        sink.write("partial output")
        sink.abort()
        assert not target.exists()
        assert list(tmp_path.iterdir()) == []

    def test_abort_keeps_previous_output(self, tmp_path):
        target = tmp_path / "index.html"
        target.write_text("previous", encoding="utf-8")
        with pytest.raises(RuntimeError):
            with AtomicFileSink(target) as sink:
                sink.write("new")
                raise RuntimeError("render failed")
        assert target.read_text(encoding="utf-8") == "previous"
        assert [p.name for p in tmp_path.iterdir()] == ["index.html"]

    def test_replacing_keeps_existing_mode(self, tmp_path):
        target = tmp_path / "index.html"
        target.write_text("old", encoding="utf-8")
        os.chmod(target, 0o640)
        with AtomicFileSink(target) as sink:
            sink.write("new")
        assert stat.S_IMODE(target.stat().st_mode) == 0o640
        assert target.read_text(encoding="utf-8") == "new"
