"""
Output renderer implementations.

Provides one renderer per output format:
- CSV (comma-separated values, via the csv module)
- Table (ASCII table, via Rich)
- Text (one "column: value" block per record)

Renderers only handle buffering and serialization. Formatting of column
values and error bookkeeping belong to the Writer.

Usage:
    renderer = get_renderer(OutputFormat.CSV, sys.stdout, ["name", "size"])
    renderer.write_header()
    renderer.write(["Bob", "10"])
    renderer.flush()
"""

import csv
import logging
from abc import ABC, abstractmethod
from enum import Enum
from io import StringIO
from typing import Any, TextIO

from rich.box import ASCII, Box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from ..errors import SinkError, WriterError

logger = logging.getLogger(__name__)

DEFAULT_SIZE = 10000
DEFAULT_CSV_SIZE = 4096
DEFAULT_TABLE_WIDTH = 200
# Upper bound when measuring a table; wider tables wrap
MEASURE_WIDTH = 100_000


class OutputFormat(str, Enum):
    """Supported output formats."""

    CSV = "csv"
    TABLE = "table"
    TEXT = "text"


ALL_FORMATS: tuple[str, ...] = tuple(f.value for f in OutputFormat)


class BufferedSink:
    """
    Size-bounded write buffer in front of a text sink.

    Writes are held in memory until ``size`` characters are pending, then
    pushed to the sink. The first sink failure is kept and raised again by
    every later write or flush until ``reset()`` is called.
    """

    def __init__(self, sink: TextIO, size: int = DEFAULT_SIZE):
        if size <= 0:
            raise ValueError(f"buffer size must be positive, got {size}")
        self.sink = sink
        self.size = size
        self._pending: list[str] = []
        self._pending_len = 0
        self.error: SinkError | None = None

    @property
    def buffered(self) -> int:
        """Number of characters waiting to be written."""
        return self._pending_len

    def write(self, text: str) -> int:
        if self.error is not None:
            raise self.error
        self._pending.append(text)
        self._pending_len += len(text)
        if self._pending_len >= self.size:
            self._spill()
        return len(text)

    def flush(self) -> None:
        """Write everything pending to the sink and flush the sink."""
        if self.error is not None:
            raise self.error
        self._spill()
        flush = getattr(self.sink, "flush", None)
        if flush is None:
            return
        try:
            flush()
        except (OSError, TypeError, ValueError) as e:
            self.error = SinkError(str(e), cause=e)
            raise self.error from e

    def reset(self, sink: TextIO | None = None) -> None:
        """Discard pending data and any stored error, optionally switching sinks."""
        if sink is not None:
            self.sink = sink
        self._pending.clear()
        self._pending_len = 0
        self.error = None

    def _spill(self) -> None:
        if not self._pending:
            return
        data = "".join(self._pending)
        try:
            self.sink.write(data)
        except (OSError, TypeError, ValueError) as e:
            self.error = SinkError(str(e), cause=e)
            raise self.error from e
        self._pending.clear()
        self._pending_len = 0


class Renderer(ABC):
    """
    Base class for output renderers.

    A renderer receives already-formatted records and pushes them to the
    sink when flushed. Failures are raised as WriterError subclasses.
    """

    format: OutputFormat | None = None
    flush_label: str = "error flushing output"

    def write_header(self) -> None:
        """Emit the header row, if the format has one at the start of output."""
        pass

    @abstractmethod
    def write(self, record: list[str]) -> None:
        """Buffer one formatted record."""
        pass

    @abstractmethod
    def flush(self) -> None:
        """Push buffered output to the sink."""
        pass


class CSVRenderer(Renderer):
    """
    CSV renderer for spreadsheet-compatible output.

    The header is written once, when ``write_header()`` is called at writer
    construction. Rows are buffered and reach the sink when the buffer fills
    or on flush.
    """

    format = OutputFormat.CSV
    flush_label = "error flushing csv"

    def __init__(
        self,
        sink: TextIO,
        columns: list[str],
        delimiter: str = ",",
        size: int = DEFAULT_CSV_SIZE,
    ):
        self.columns = columns
        self.delimiter = delimiter
        self._buffer = BufferedSink(sink, size)
        self._writer = csv.writer(self._buffer, delimiter=delimiter, lineterminator="\n")

    def write_header(self) -> None:
        self.write(self.columns)

    def write(self, record: list[str]) -> None:
        try:
            self._writer.writerow(record)
        except csv.Error as e:
            raise WriterError(str(e), cause=e) from e

    def flush(self) -> None:
        self._buffer.flush()


class TableRenderer(Renderer):
    """
    ASCII table renderer.

    Rows accumulate in memory and are drawn as one aligned table, header
    included, on every flush that has rows. The rows are cleared afterwards
    so the next flush starts a fresh table. ``width`` is a minimum: a table
    wider than that grows to fit, so no cell is ever cropped.
    """

    format = OutputFormat.TABLE
    flush_label = "error rendering table"

    def __init__(
        self,
        sink: TextIO,
        columns: list[str],
        box: Box = ASCII,
        width: int = DEFAULT_TABLE_WIDTH,
    ):
        self.sink = sink
        self.columns = columns
        self.box = box
        self.width = width
        self._rows: list[list[str]] = []

    @property
    def rows(self) -> list[list[str]]:
        return list(self._rows)

    def write(self, record: list[str]) -> None:
        self._rows.append(list(record))

    def flush(self) -> None:
        if not self._rows:
            return
        table = self._build_table()
        # Plain console so nothing but the table characters reaches the sink
        console = Console(
            file=self.sink,
            force_terminal=False,
            color_system=None,
            width=max(self.width, self._natural_width(table)),
            highlight=False,
            emoji=False,
        )
        try:
            console.print(table)
        except (OSError, TypeError, ValueError) as e:
            raise SinkError(str(e), cause=e) from e
        finally:
            self._rows.clear()

    @staticmethod
    def _natural_width(table: Table) -> int:
        """Width the table needs to draw every cell without wrapping or cropping."""
        measuring = Console(file=StringIO(), width=MEASURE_WIDTH, color_system=None)
        return measuring.measure(table).maximum

    def _build_table(self) -> Table:
        table = Table(box=self.box)
        for col in self.columns:
            # Text keeps names and values literal (no Rich markup parsing)
            table.add_column(Text(col))
        for row in self._rows:
            table.add_row(*(Text(value) for value in row))
        return table


class TextRenderer(Renderer):
    """
    Plain text renderer.

    Each record becomes a block:

        ---
        name: Bob
        size: 10

    Blocks go through a size-bounded buffer. Sink failures while the buffer
    spills are held back and reported by the next flush.
    """

    format = OutputFormat.TEXT
    flush_label = "error flushing text"

    def __init__(self, sink: TextIO, columns: list[str], size: int = DEFAULT_SIZE):
        self.sink = sink
        self.columns = columns
        self._scratch = StringIO()
        self._buffer = BufferedSink(sink, size)

    def write(self, record: list[str]) -> None:
        self._scratch.write("---\n")
        for col, value in zip(self.columns, record):
            self._scratch.write(f"{col}: {value}\n")
        try:
            self._buffer.write(self._scratch.getvalue())
        except SinkError as e:
            logger.debug("text sink write failed, reporting on flush: %s", e)
        finally:
            self._reset_scratch()

    def flush(self) -> None:
        try:
            self._buffer.flush()
        finally:
            self._buffer.reset(self.sink)
            self._reset_scratch()

    def _reset_scratch(self) -> None:
        self._scratch.seek(0)
        self._scratch.truncate(0)


class NullRenderer(Renderer):
    """Renderer for unrecognized formats. Writes nothing, never fails."""

    def write(self, record: list[str]) -> None:
        pass

    def flush(self) -> None:
        pass


def get_renderer(
    format: OutputFormat | str,
    sink: TextIO,
    columns: list[str],
    **kwargs: Any,
) -> Renderer:
    """
    Factory function to get the renderer for a format.

    Format names are matched exactly ("csv", "table", "text"). Anything
    else yields a NullRenderer, which silently discards all output.

    Args:
        format: Output format
        sink: Text stream to render into
        columns: Column names, in record order
        **kwargs: Renderer options: ``size`` (text buffer), ``csv_size``,
            ``delimiter``, ``box`` and ``width``. Options that do not apply
            to the selected format are ignored.

    Returns:
        Renderer instance
    """
    try:
        output_format = OutputFormat(format)
    except ValueError:
        logger.debug("unrecognized output format %r, output disabled", format)
        return NullRenderer()

    if output_format is OutputFormat.CSV:
        return CSVRenderer(
            sink,
            columns,
            delimiter=kwargs.get("delimiter", ","),
            size=kwargs.get("csv_size", DEFAULT_CSV_SIZE),
        )
    if output_format is OutputFormat.TABLE:
        return TableRenderer(
            sink,
            columns,
            box=kwargs.get("box", ASCII),
            width=kwargs.get("width", DEFAULT_TABLE_WIDTH),
        )
    return TextRenderer(sink, columns, size=kwargs.get("size", DEFAULT_SIZE))
