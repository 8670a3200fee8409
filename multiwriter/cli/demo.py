"""
Demo records and column formatters used by the ``demo`` command.

Shows how to register formatter chains: a template for names, a function
for departments and a numeric scale for sizes.
"""

import logging
from typing import TextIO

from ..errors import WriterError
from ..output.formatters import BasicFormatter, FuncFormatter, NumberFormatter
from ..writer import Option, Writer, with_formatter, with_size

logger = logging.getLogger(__name__)

DEMO_COLUMNS = ["name", "department", "size", "color"]
DEMO_RECORDS = [
    ["Bob", "Engineering", "10", "blue"],
    ["Sally", "Engineering", "1000", "orange"],
    ["Vivek", "Leadership", "23129", "purple"],
]

SIZE_FACTOR = 1.9074


def demo_formatters() -> list[Option]:
    """Formatter options for the demo columns."""
    return [
        with_formatter("name", BasicFormatter("** %s **")),
        with_formatter("department", FuncFormatter(str.upper)),
        with_formatter("size", NumberFormatter(factor=SIZE_FACTOR, spec=".4f")),
    ]


def run_demo(
    sink: TextIO,
    format: str,
    size: int | None = None,
    records: list[list[str]] | None = None,
) -> Writer:
    """
    Write the demo records to a sink and flush.

    Records that fail to write are logged and skipped. Flush failures are
    left on the returned writer for the caller to check with ``error()``.

    Args:
        sink: Text stream to render into
        format: Output format name
        size: Optional text buffer size
        records: Records to write (None = built-in demo records)

    Returns:
        The flushed writer
    """
    options = demo_formatters()
    if size is not None:
        options.append(with_size(size))

    with Writer(sink, DEMO_COLUMNS, format, *options) as writer:
        for i, record in enumerate(records if records is not None else DEMO_RECORDS):
            try:
                writer.write(record)
            except WriterError as e:
                logger.error("could not write record %d: %s", i, e)
    return writer
