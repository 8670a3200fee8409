"""
CLI support module.

- demo: sample employee records rendered with column formatters
"""

from .demo import DEMO_COLUMNS, DEMO_RECORDS, demo_formatters, run_demo

__all__ = [
    "DEMO_COLUMNS",
    "DEMO_RECORDS",
    "demo_formatters",
    "run_demo",
]
