"""
Output formatting and rendering.

Formatters rewrite individual column values. Renderers serialize formatted
records as CSV, an ASCII table (rich) or plain text blocks.
"""

from .formatters import BasicFormatter, Formatter, FuncFormatter, NumberFormatter, apply_chain
from .renderers import (
    ALL_FORMATS,
    BufferedSink,
    CSVRenderer,
    NullRenderer,
    OutputFormat,
    Renderer,
    TableRenderer,
    TextRenderer,
    get_renderer,
)

__all__ = [
    "ALL_FORMATS",
    "apply_chain",
    "BasicFormatter",
    "BufferedSink",
    "CSVRenderer",
    "Formatter",
    "FuncFormatter",
    "get_renderer",
    "NullRenderer",
    "NumberFormatter",
    "OutputFormat",
    "Renderer",
    "TableRenderer",
    "TextRenderer",
]
