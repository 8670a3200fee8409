"""
Tests for output renderers and the buffered sink.
"""

from io import BytesIO, StringIO

import pytest
from rich.box import ASCII

from multiwriter.errors import SinkError, WriterError
from multiwriter.output import (
    ALL_FORMATS,
    BufferedSink,
    CSVRenderer,
    NullRenderer,
    OutputFormat,
    TableRenderer,
    TextRenderer,
    get_renderer,
)


class TestOutputFormat:
    """Tests for OutputFormat enum."""

    def test_values(self):
        assert OutputFormat.CSV.value == "csv"
        assert OutputFormat.TABLE.value == "table"
        assert OutputFormat.TEXT.value == "text"

    def test_all_formats(self):
        assert ALL_FORMATS == ("csv", "table", "text")


class TestGetRenderer:
    """Tests for get_renderer factory function."""

    @pytest.mark.parametrize(
        "format,expected",
        [
            ("csv", CSVRenderer),
            ("table", TableRenderer),
            ("text", TextRenderer),
            (OutputFormat.TABLE, TableRenderer),
        ],
    )
    def test_known_formats(self, sink, format, expected):
        assert isinstance(get_renderer(format, sink, ["a"]), expected)

    @pytest.mark.parametrize("format", ["xml", "Table", "", None])
    def test_unknown_formats(self, sink, format):
        assert isinstance(get_renderer(format, sink, ["a"]), NullRenderer)

    def test_passes_options(self, sink):
        renderer = get_renderer("table", sink, ["a"], box=ASCII, width=50, size=5)
        assert renderer.width == 50
        assert renderer.box is ASCII


class TestBufferedSink:
    """Tests for BufferedSink."""

    def test_holds_until_flush(self, sink):
        buffer = BufferedSink(sink, size=100)
        buffer.write("hello")
        assert sink.getvalue() == ""
        assert buffer.buffered == 5
        buffer.flush()
        assert sink.getvalue() == "hello"
        assert buffer.buffered == 0

    def test_spills_when_full(self, sink):
        buffer = BufferedSink(sink, size=4)
        buffer.write("ab")
        assert sink.getvalue() == ""
        buffer.write("cd")
        assert sink.getvalue() == "abcd"

    def test_rejects_non_positive_size(self, sink):
        with pytest.raises(ValueError):
            BufferedSink(sink, size=0)

    def test_error_is_sticky(self, broken_sink):
        buffer = BufferedSink(broken_sink, size=1)
        with pytest.raises(SinkError, match="broken pipe"):
            buffer.write("a")
        with pytest.raises(SinkError):
            buffer.write("b")
        with pytest.raises(SinkError):
            buffer.flush()
        assert broken_sink.attempts == 1

    def test_reset_clears_error_and_pending(self, broken_sink, sink):
        buffer = BufferedSink(broken_sink, size=1)
        with pytest.raises(SinkError):
            buffer.write("a")
        buffer.reset(sink)
        assert buffer.error is None
        assert buffer.buffered == 0
        buffer.write("b")
        assert sink.getvalue() == "b"

    def test_closed_sink(self):
        closed = StringIO()
        closed.close()
        buffer = BufferedSink(closed, size=10)
        buffer.write("data")
        with pytest.raises(SinkError):
            buffer.flush()

    def test_sink_without_flush(self):
        class WriteOnly:
            def __init__(self):
                self.parts = []

            def write(self, s):
                self.parts.append(s)

        target = WriteOnly()
        buffer = BufferedSink(target, size=10)  # type: ignore[arg-type]
        buffer.write("x")
        buffer.flush()
        assert target.parts == ["x"]

    def test_binary_sink(self):
        buffer = BufferedSink(BytesIO(), size=100)  # type: ignore[arg-type]
        buffer.write("data")
        with pytest.raises(SinkError) as exc_info:
            buffer.flush()
        assert isinstance(exc_info.value.cause, TypeError)
        assert buffer.error is exc_info.value


class TestCSVRenderer:
    """Tests for CSVRenderer."""

    def test_header_and_rows(self, sink):
        renderer = CSVRenderer(sink, ["a", "b"])
        renderer.write_header()
        renderer.write(["1", "2"])
        renderer.flush()
        assert sink.getvalue() == "a,b\n1,2\n"

    def test_no_header_unless_requested(self, sink):
        renderer = CSVRenderer(sink, ["a", "b"])
        renderer.write(["1", "2"])
        renderer.flush()
        assert sink.getvalue() == "1,2\n"

    def test_sink_failure_raises_writer_error(self, broken_sink):
        renderer = CSVRenderer(broken_sink, ["a"], size=1)
        with pytest.raises(WriterError):
            renderer.write(["1"])


class TestTableRenderer:
    """Tests for TableRenderer."""

    def test_rows_accumulate_and_clear(self, sink):
        renderer = TableRenderer(sink, ["a", "b"])
        renderer.write(["1", "2"])
        renderer.write(["3", "4"])
        assert renderer.rows == [["1", "2"], ["3", "4"]]
        renderer.flush()
        assert renderer.rows == []
        assert "3" in sink.getvalue()

    def test_width_is_a_minimum(self, sink):
        renderer = TableRenderer(sink, ["a"], width=20)
        renderer.write(["x" * 60])
        renderer.flush()
        assert "x" * 60 in sink.getvalue()
        assert "…" not in sink.getvalue()


class TestTextRenderer:
    """Tests for TextRenderer."""

    def test_block_format(self, sink):
        renderer = TextRenderer(sink, ["name", "size"])
        renderer.write(["Bob", "10"])
        renderer.flush()
        assert sink.getvalue() == "---\nname: Bob\nsize: 10\n"

    def test_flush_failure_raises_then_recovers(self, broken_sink):
        renderer = TextRenderer(broken_sink, ["a"])
        renderer.write(["1"])
        with pytest.raises(SinkError):
            renderer.flush()
        # Buffer was reset and points at the original sink again
        renderer.flush()


class TestNullRenderer:
    """Tests for NullRenderer."""

    def test_noop(self):
        renderer = NullRenderer()
        renderer.write_header()
        renderer.write(["a"])
        renderer.flush()
        assert renderer.format is None
