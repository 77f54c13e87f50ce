"""
Locates the header row and the student-name column in a raw grid.
"""
import logging
import re
from typing import List

from .cells import TEXT, Cell

logger = logging.getLogger(__name__)

HEADER_SCAN_ROWS = 10
HEADER_KEYWORD = re.compile(r'name|student', re.IGNORECASE)
NAME_COLUMN = re.compile(r'student\s*name|name|student', re.IGNORECASE)


def _row_has_header_keyword(row: List[Cell]) -> bool:
    return any(cell.kind == TEXT and HEADER_KEYWORD.search(cell.value) for cell in row)


def locate_header_row(grid: List[List[Cell]], max_scan_rows: int = HEADER_SCAN_ROWS) -> int:
    """
    Return the 0-based index of the header row.

    The first of the leading `max_scan_rows` rows holding a text cell that
    mentions "name" or "student" wins; row 0 when none does.
    """
    for i, row in enumerate(grid[:max_scan_rows]):
        if _row_has_header_keyword(row):
            logger.debug(f"Header row detected at index {i}")
            return i

    logger.warning(f"No name/student header in first {max_scan_rows} rows, assuming row 0")
    return 0


def extract_header_labels(grid: List[List[Cell]], header_row: int) -> List[str]:
    """Header cells as trimmed strings; empty labels stay empty here."""
    if header_row >= len(grid):
        return []
    return [cell.as_text().strip() if cell.is_truthy() else '' for cell in grid[header_row]]


def label_for(labels: List[str], col_idx: int) -> str:
    """Display label of a column, with a synthetic one for unlabelled columns."""
    if col_idx < len(labels) and labels[col_idx]:
        return labels[col_idx]
    return f'Column {col_idx}'


def select_name_column(labels: List[str]) -> int:
    """First label naming the student column, else column 0."""
    for i, label in enumerate(labels):
        if NAME_COLUMN.search(label):
            logger.debug(f"Name column '{label}' at index {i}")
            return i
    return 0
