"""
Multi-format record writer.

Writer buffers records of string values, runs each value through its
column's formatter chain and renders everything as CSV, an ASCII table or
plain text blocks when flushed.

Error reporting:
    CSV write failures are raised from ``write()`` and also recorded. Flush
    failures are only recorded. Call ``error()`` after the final flush,
    otherwise flush-time failures are silently lost.

Usage:
    writer = Writer(
        sys.stdout,
        ["name", "size"],
        "csv",
        with_formatter("size", NumberFormatter(factor=2, spec=".0f")),
    )
    writer.write(["Bob", "5"])
    writer.flush()
    if err := writer.error():
        raise err
"""

import logging
from collections.abc import Callable, Iterable, Sequence
from typing import TYPE_CHECKING, TextIO

from rich.box import ASCII, Box

from .errors import MultiError, RecordLengthError, WriterError
from .output.formatters import Formatter, apply_chain
from .output.renderers import (
    DEFAULT_CSV_SIZE,
    DEFAULT_SIZE,
    DEFAULT_TABLE_WIDTH,
    OutputFormat,
    Renderer,
    get_renderer,
)

if TYPE_CHECKING:
    from .config import WriterSettings

logger = logging.getLogger(__name__)

Option = Callable[["Writer"], None]


def with_formatter(column: str, formatter: Formatter) -> Option:
    """Append a formatter to the column's chain."""

    def apply(w: "Writer") -> None:
        w._formatters.setdefault(column, []).append(formatter)

    return apply


def with_size(size: int) -> Option:
    """Set the capacity of the text output buffer."""
    if size <= 0:
        raise ValueError(f"buffer size must be positive, got {size}")

    def apply(w: "Writer") -> None:
        w._size = size

    return apply


def with_csv_size(size: int) -> Option:
    """Set the capacity of the CSV output buffer."""
    if size <= 0:
        raise ValueError(f"buffer size must be positive, got {size}")

    def apply(w: "Writer") -> None:
        w._csv_size = size

    return apply


def with_delimiter(delimiter: str) -> Option:
    """Set the CSV field delimiter."""
    if len(delimiter) != 1:
        raise ValueError(f"delimiter must be a single character, got {delimiter!r}")

    def apply(w: "Writer") -> None:
        w._delimiter = delimiter

    return apply


def with_box(box: Box) -> Option:
    """Set the Rich box style used for table output."""

    def apply(w: "Writer") -> None:
        w._box = box

    return apply


def with_table_width(width: int) -> Option:
    """Set the minimum console width for tables. Wider tables grow to fit."""

    def apply(w: "Writer") -> None:
        w._table_width = width

    return apply


class Writer:
    """
    Writes records to an internal buffer and outputs them in the selected
    format when flushed.

    The sink is borrowed: the writer flushes it but never closes it. A
    writer is not safe for concurrent use.
    """

    def __init__(
        self,
        sink: TextIO,
        columns: Sequence[str],
        format: OutputFormat | str,
        *options: Option,
    ):
        """
        Initialize writer.

        Args:
            sink: Text stream to write to. A sink that rejects str (such as
                a binary file) fails at write or flush time like any other
                sink failure.
            columns: Column names; records must have one value per column
            format: "csv", "table" or "text". Any other value disables all
                output without raising.
            *options: Options such as ``with_formatter`` and ``with_size``
        """
        columns = list(columns)
        if len(set(columns)) != len(columns):
            raise ValueError(f"column names must be unique: {columns}")

        self.sink = sink
        self._columns = columns
        self._format = format
        self._formatters: dict[str, list[Formatter]] = {}
        self._size = DEFAULT_SIZE
        self._csv_size = DEFAULT_CSV_SIZE
        self._delimiter = ","
        self._box: Box = ASCII
        self._table_width = DEFAULT_TABLE_WIDTH
        self._err: MultiError | None = None

        for option in options:
            option(self)

        self._renderer: Renderer = get_renderer(
            format,
            sink,
            self._columns,
            size=self._size,
            csv_size=self._csv_size,
            delimiter=self._delimiter,
            box=self._box,
            width=self._table_width,
        )
        try:
            self._renderer.write_header()
        except WriterError as e:
            self._record("error writing header to csv", e)

        logger.debug(
            "writer ready: format=%s columns=%s formatters=%s",
            format,
            self._columns,
            {col: len(chain) for col, chain in self._formatters.items()},
        )

    @classmethod
    def from_settings(
        cls,
        sink: TextIO,
        columns: Sequence[str],
        settings: "WriterSettings | None" = None,
        *options: Option,
    ) -> "Writer":
        """
        Build a writer from configuration.

        Args:
            sink: Text stream to write to
            columns: Column names
            settings: Writer settings (None = global settings)
            *options: Extra options, applied after the configured ones

        Returns:
            Writer instance
        """
        if settings is None:
            from .config import get_settings

            settings = get_settings().writer

        return cls(
            sink,
            columns,
            settings.format,
            with_size(settings.buffer_size),
            with_delimiter(settings.delimiter),
            with_box(settings.box),
            with_table_width(settings.table_width),
            with_csv_size(settings.csv_buffer_size),
            *options,
        )

    @property
    def columns(self) -> list[str]:
        return list(self._columns)

    @property
    def format(self) -> OutputFormat | str:
        return self._format

    def formatters(self, column: str) -> list[Formatter]:
        """Return the formatter chain registered for a column."""
        return list(self._formatters.get(column, []))

    def write(self, record: Sequence[str]) -> None:
        """
        Format a record and buffer it for output.

        Args:
            record: One value per column, in column order

        Raises:
            RecordLengthError: If the record length differs from the column count
            WriterError: If the CSV renderer fails to take the record (the
                error is also recorded in ``error()``)
        """
        if len(record) != len(self._columns):
            raise RecordLengthError(len(self._columns), len(record))

        formatted = self._format_record(record)
        try:
            self._renderer.write(formatted)
        except WriterError as e:
            err = self._record("error writing record to csv", e)
            raise err from e

    def write_all(self, records: Iterable[Sequence[str]]) -> None:
        """Write several records in order."""
        for record in records:
            self.write(record)

    def flush(self) -> None:
        """
        Push buffered output to the sink.

        Failures are never raised here. They are recorded and returned by
        ``error()``.
        """
        try:
            self._renderer.flush()
        except WriterError as e:
            self._record(self._renderer.flush_label, e)

    def error(self) -> MultiError | None:
        """Return all errors recorded so far, or None."""
        return self._err

    def _format_record(self, record: Sequence[str]) -> list[str]:
        return [apply_chain(value, self._formatters.get(col, [])) for col, value in zip(self._columns, record)]

    def _record(self, label: str, cause: WriterError) -> WriterError:
        err = WriterError(f"{label}: {cause}", cause=cause)
        self._err = MultiError.append(self._err, err)
        logger.warning("%s", err)
        return err

    def __enter__(self) -> "Writer":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.flush()

    def __repr__(self) -> str:
        return f"Writer(format={self._format!r}, columns={self._columns!r})"
