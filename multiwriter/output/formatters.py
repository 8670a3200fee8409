"""
Column formatter implementations.

Formatters rewrite a single column value before it is rendered. They are
registered per column on a Writer and applied in registration order, the
output of one feeding the next.

Contract:
    A formatter must never fail. When it cannot interpret a value (for
    example a numeric formatter given "n/a") it reports the problem through
    logging and returns the value unchanged.

Usage:
    name = BasicFormatter("** %s **")
    department = FuncFormatter(str.upper)
    size = NumberFormatter(factor=1.9074, spec=".4f")

    name.format("Bob")        # "** Bob **"
    size.format("10")         # "19.0740"
    size.format("n/a")        # "n/a" (warning logged)
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable

logger = logging.getLogger(__name__)


class Formatter(ABC):
    """
    Base class for column formatters.

    Subclasses turn one string into another. Implementations must return
    the input unchanged when they cannot handle it, reporting the problem
    through logging instead of raising.
    """

    @abstractmethod
    def format(self, value: str) -> str:
        """Format a source string into a new string."""
        pass

    def __call__(self, value: str) -> str:
        return self.format(value)


class BasicFormatter(Formatter):
    """Substitutes the value into a static printf-style template."""

    def __init__(self, template: str):
        self.template = template

    def format(self, value: str) -> str:
        try:
            return self.template % value
        except (TypeError, ValueError) as e:
            logger.warning("could not apply template %r to %r: %s, skipping formatting", self.template, value, e)
            return value

    def __repr__(self) -> str:
        return f"BasicFormatter({self.template!r})"


class FuncFormatter(Formatter):
    """
    Wraps a user-defined function to apply formatting.

    Anything the function raises is logged and the value is returned
    unchanged.
    """

    def __init__(self, func: Callable[[str], str]):
        self.func = func

    def format(self, value: str) -> str:
        try:
            return self.func(value)
        except Exception as e:
            logger.warning("could not apply %r to %r: %s, skipping formatting", self, value, e)
            return value

    def __repr__(self) -> str:
        name = getattr(self.func, "__name__", repr(self.func))
        return f"FuncFormatter({name})"


class NumberFormatter(Formatter):
    """
    Scales numeric values and formats the result.

    Values that do not parse as a float are passed through unchanged and a
    warning is logged.
    """

    def __init__(self, factor: float = 1.0, spec: str = "g"):
        """
        Initialize formatter.

        Args:
            factor: Multiplier applied to the parsed value
            spec: Format spec for the result (e.g. ".4f", ".0f", ",d")
        """
        self.factor = factor
        self.spec = spec

    def format(self, value: str) -> str:
        try:
            number = float(value)
        except ValueError:
            logger.warning("could not parse float: %s, skipping formatting", value)
            return value
        result = number * self.factor
        try:
            if self.spec.endswith("d"):
                return format(round(result), self.spec)
            return format(result, self.spec)
        except (OverflowError, ValueError) as e:
            logger.warning("could not format %s with %r: %s, skipping formatting", value, self.spec, e)
            return value

    def __repr__(self) -> str:
        return f"NumberFormatter(factor={self.factor!r}, spec={self.spec!r})"


def apply_chain(value: str, chain: list[Formatter]) -> str:
    """Apply formatters left to right, threading each output into the next."""
    for formatter in chain:
        value = formatter.format(value)
    return value
