"""Export module for presenting catalogs and selections."""

from maxcalorie.export.formatters import (
    JSONFormatter,
    TableFormatter,
    TextFormatter,
    format_foods,
)

__all__ = ["TableFormatter", "JSONFormatter", "TextFormatter", "format_foods"]
