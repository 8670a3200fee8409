"""
multiwriter - render string records as CSV, an ASCII table or text blocks.
"""

__version__ = "0.1.0"

from .errors import MultiError, RecordLengthError, SinkError, WriterError
from .output import (
    ALL_FORMATS,
    BasicFormatter,
    Formatter,
    FuncFormatter,
    NumberFormatter,
    OutputFormat,
)
from .writer import (
    Option,
    Writer,
    with_box,
    with_csv_size,
    with_delimiter,
    with_formatter,
    with_size,
    with_table_width,
)

__all__ = [
    "__version__",
    # Writer
    "Writer",
    "Option",
    "with_box",
    "with_csv_size",
    "with_delimiter",
    "with_formatter",
    "with_size",
    "with_table_width",
    # Formats
    "ALL_FORMATS",
    "OutputFormat",
    # Formatters
    "Formatter",
    "BasicFormatter",
    "FuncFormatter",
    "NumberFormatter",
    # Exceptions
    "WriterError",
    "RecordLengthError",
    "SinkError",
    "MultiError",
]
