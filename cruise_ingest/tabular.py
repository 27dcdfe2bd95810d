"""
Tabular text decoding shared by the offer and booked-cruise importers.

Responsibilities:
- delimiter detection (header line only)
- quote-aware field splitting
- alias-based header resolution
- per-row value coercion (text, number, boolean)
"""

from __future__ import annotations

import enum
import logging
import math
import re
from typing import Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

from .rules import ABSENT, COMMA, TAB, TRUTHY_VALUES

logger = logging.getLogger(__name__)

_NUMBER_NOISE_RE = re.compile(r"[,$]")
# Leading number only, trailing text such as "Nights" or "pp" is ignored.
_LEADING_NUMBER_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_LINE_SPLIT_RE = re.compile(r"\r?\n")


class Delimiter(str, enum.Enum):
    TAB = "\t"
    COMMA = ","


def split_lines(text: str) -> List[str]:
    """Non-blank lines, line endings removed but inner whitespace kept."""
    return [line for line in _LINE_SPLIT_RE.split(text or "") if line.strip()]


def detect_delimiter(text: str) -> Delimiter:
    lines = split_lines(text)
    header = lines[0] if lines else ""
    return Delimiter.TAB if TAB in header else Delimiter.COMMA


def split_fields(line: str, delimiter: Delimiter) -> List[str]:
    """
    Split one line into trimmed fields.

    In comma mode every double quote toggles an inside-quotes state, wherever
    it sits in the field, and commas inside quotes stay in their field. The
    quote characters themselves are dropped. Surrounding whitespace is
    trimmed afterwards, so padding inside a quoted field is lost.
    """
    if delimiter is Delimiter.TAB:
        return [field.strip() for field in line.split(TAB)]

    fields = []
    current = []
    in_quotes = False
    for char in line:
        if char == '"':
            in_quotes = not in_quotes
        elif char == COMMA and not in_quotes:
            fields.append("".join(current).strip())
            current = []
        else:
            current.append(char)
    fields.append("".join(current).strip())
    return fields


def resolve_headers(headers: Sequence[str], aliases: Mapping[str, Sequence[str]]) -> Dict[str, int]:
    """
    Map each canonical field to a column index.

    For every field the first alias that appears in the header row wins.
    Fields with no matching header map to ABSENT. When the same spelling
    repeats, its first column is used.
    """
    positions: Dict[str, int] = {}
    for idx, cell in enumerate(headers):
        positions.setdefault(cell.strip().lower(), idx)

    columns: Dict[str, int] = {}
    for field, names in aliases.items():
        columns[field] = next((positions[name] for name in names if name in positions), ABSENT)
    return columns


class Row:
    """One decoded data row, read through the resolved header map."""

    def __init__(self, values: List[str], columns: Mapping[str, int], ordinal: int):
        self.values = values
        self.columns = columns
        self.ordinal = ordinal

    def text(self, field: str) -> str:
        idx = self.columns.get(field, ABSENT)
        if idx == ABSENT or idx >= len(self.values):
            return ""
        return self.values[idx]

    def number(self, field: str) -> float:
        raw = _NUMBER_NOISE_RE.sub("", self.text(field)).strip()
        m = _LEADING_NUMBER_RE.match(raw)
        if not m:
            return 0
        value = float(m.group(0))
        return value if math.isfinite(value) else 0

    def integer(self, field: str) -> int:
        return int(self.number(field))

    def flag(self, field: str) -> bool:
        return self.text(field).lower() in TRUTHY_VALUES


def read_table(text: str, aliases: Mapping[str, Sequence[str]]) -> Tuple[Optional[Delimiter], Iterator[Row]]:
    """
    Detect the delimiter, resolve the header and yield the data rows.

    Returns (None, empty iterator) when there is no data row at all.
    Row ordinals are 1-based positions among the non-blank data lines.
    """
    lines = split_lines(text)
    if len(lines) < 2:
        logger.info("Tabular input has no data rows")
        return None, iter(())

    delimiter = detect_delimiter(text)
    headers = [h.lower() for h in split_fields(lines[0], delimiter)]
    columns = resolve_headers(headers, aliases)

    logger.info("Detected delimiter: %s", delimiter.name)
    logger.debug("Headers: %s", headers)
    logger.debug("Column indices: %s", columns)

    def rows() -> Iterator[Row]:
        for ordinal, line in enumerate(lines[1:], start=1):
            yield Row(split_fields(line, delimiter), columns, ordinal)

    return delimiter, rows()
