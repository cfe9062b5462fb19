"""Minimal CSV reader for SMS transaction exports.

Supports quoted values containing commas and doubled quotes. Every body line
becomes a mapping keyed by the header line's fields.
"""
import re
from pathlib import Path
from typing import BinaryIO, Dict, List, TextIO, Union

from smskpi.utils.logger import get_logger
from smskpi.utils.exceptions import SourceError

logger = get_logger()

Row = Dict[str, str]
CsvSource = Union[BinaryIO, TextIO, bytes, str]

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def parse_line(line: str) -> List[str]:
    """
    Split one CSV line into cells.

    Commas inside a double-quoted span do not split. Inside quotes, ``""``
    yields a literal quote; any other quote toggles the quoted state and is
    dropped.
    """
    result = []
    cell = []
    in_quotes = False
    i = 0
    while i < len(line):
        c = line[i]
        if c == '"':
            if in_quotes and i + 1 < len(line) and line[i + 1] == '"':
                cell.append('"')
                i += 1
            else:
                in_quotes = not in_quotes
        elif c == "," and not in_quotes:
            result.append("".join(cell))
            cell = []
        else:
            cell.append(c)
        i += 1
    result.append("".join(cell))
    return result


def _read_text(source: CsvSource, encoding: str) -> str:
    """Read the whole source as text."""
    data = source if isinstance(source, (bytes, str)) else source.read()
    if isinstance(data, str):
        return data[1:] if data.startswith("\ufeff") else data
    try:
        return data.decode(encoding)
    except (UnicodeDecodeError, LookupError) as e:
        raise SourceError(f"Failed to decode CSV as {encoding}: {e}")


def read_rows(source: CsvSource, encoding: str = "utf-8-sig") -> List[Row]:
    """
    Parse CSV text into header -> cell mappings.

    Args:
        source: Binary or text stream, or the raw bytes/str content
        encoding: Codec for binary input

    Returns:
        One row per non-blank body line; empty list for empty input
    """
    text = _read_text(source, encoding)
    if not text:
        return []

    lines = _LINE_BREAK.split(text)
    headers = parse_line(lines[0])
    if not headers:
        return []

    rows = []
    for line in lines[1:]:
        if not line.strip():
            continue
        cells = parse_line(line)
        # Pad short rows, ignore cells beyond the header
        rows.append({
            key: cells[index] if index < len(cells) else ""
            for index, key in enumerate(headers)
        })

    logger.debug(f"Read {len(rows)} rows with {len(headers)} columns")
    return rows


def open_source(path: Union[str, Path]) -> BinaryIO:
    """
    Open a CSV file as a binary stream.

    Raises:
        SourceError: If the file cannot be opened
    """
    try:
        return open(path, "rb")
    except OSError as e:
        raise SourceError(f"Cannot open CSV {path}: {e}")
