"""
Tagged cell values for the raw grid: blank, text, number (and boolean).
"""
import math
import re
from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any, List, Optional, Union

BLANK = 'blank'
TEXT = 'text'
NUMBER = 'number'
BOOLEAN = 'boolean'

# Leading decimal literal, the way spreadsheet UIs read "7 points" as 7
_LEADING_NUMBER = re.compile(r'^\s*([+-]?(?:\d+\.?\d*(?:[eE][+-]?\d+)?|\.\d+(?:[eE][+-]?\d+)?))')


@dataclass(frozen=True)
class Cell:
    kind: str
    value: Union[str, float, bool, None] = None

    @property
    def is_blank(self) -> bool:
        return self.kind == BLANK

    @property
    def is_boolean(self) -> bool:
        return self.kind == BOOLEAN

    def as_number(self) -> Optional[float]:
        """Numeric reading of the cell, or None when it has none."""
        if self.kind == NUMBER:
            return self.value
        if self.kind == TEXT:
            return parse_number(self.value)
        return None

    def as_text(self) -> str:
        if self.kind == BLANK:
            return ''
        if self.kind == BOOLEAN:
            return 'true' if self.value else 'false'
        if self.kind == NUMBER:
            return format_number(self.value)
        return self.value

    def is_truthy(self) -> bool:
        """False for blank cells, empty text and numeric zero."""
        if self.kind == BLANK:
            return False
        if self.kind == NUMBER:
            return self.value != 0 and not math.isnan(self.value)
        return bool(self.value)


BLANK_CELL = Cell(BLANK)


def to_cell(raw: Any) -> Cell:
    """Wrap a raw reader value (openpyxl / pandas) as a Cell."""
    if raw is None or raw == '':
        return BLANK_CELL
    if isinstance(raw, Cell):
        return raw
    if isinstance(raw, bool):
        return Cell(BOOLEAN, raw)
    if isinstance(raw, (int, float)):
        if isinstance(raw, float) and math.isnan(raw):
            return BLANK_CELL
        return Cell(NUMBER, float(raw))
    if isinstance(raw, (datetime, date, time)):
        return Cell(TEXT, raw.isoformat())
    return Cell(TEXT, str(raw))


def to_row(raw_row: Optional[List[Any]]) -> List[Cell]:
    if not raw_row:
        return []
    return [to_cell(v) for v in raw_row]


def parse_number(text: str) -> Optional[float]:
    """
    Read the leading number of `text`; None when it does not start with one.

    Non-finite results ("1e999") count as unparseable so that records stay
    JSON-serialisable.
    """
    m = _LEADING_NUMBER.match(text)
    if not m:
        return None
    value = float(m.group(1))
    return value if math.isfinite(value) else None


def format_number(value: float) -> str:
    """
    Render a number the way spreadsheet UIs print it: 8.0 as '8', 7.5 as
    '7.5', 1e-05 as '0.00001', 1e-07 as '1e-7', 1e21 as '1e+21'.
    """
    if value == 0:
        return '0'
    mantissa, _, exponent = repr(value).partition('e')
    if mantissa.endswith('.0'):
        mantissa = mantissa[:-2]
    if 1e-6 <= abs(value) < 1e21:
        return format(Decimal(repr(value)), 'f') if exponent else mantissa
    exp = int(exponent)
    return f"{mantissa}e{'+' if exp >= 0 else '-'}{abs(exp)}"


def normalize_number(value: float) -> Union[int, float]:
    if math.isfinite(value) and value == int(value):
        return int(value)
    return value
