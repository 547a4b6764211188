"""Output formatters for Query Workbench.

Importing the package registers every built-in format.
"""

from query_workbench.formatters.base import (
    Formatter,
    RenderOptions,
    available_formats,
    create_formatter,
    register_format,
)
from query_workbench.formatters.csv import CSVFormatter
from query_workbench.formatters.json import JSONFormatter
from query_workbench.formatters.table import TableFormatter

__all__ = [
    "CSVFormatter",
    "Formatter",
    "JSONFormatter",
    "RenderOptions",
    "TableFormatter",
    "available_formats",
    "create_formatter",
    "register_format",
]
