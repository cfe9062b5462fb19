"""CSV reading module."""
from .reader import parse_line, read_rows, open_source, Row

__all__ = ["parse_line", "read_rows", "open_source", "Row"]
