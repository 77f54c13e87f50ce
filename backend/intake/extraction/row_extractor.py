"""
Turns one data row into a StudentRecord.

Columns are walked left to right. A criterion column may claim the column
right after it as its comment; claimed columns are tracked in a set that
lives only for the current row.
"""
import logging
from typing import Dict, List, Optional, Set

from ..sheet_loader.cells import BLANK_CELL, Cell, format_number, normalize_number
from ..sheet_loader.header_detector import label_for
from .column_rules import FIXED_FIELD_LABELS, ColumnRole, match_label, pairs_as_comment
from .record_schema import CriterionEntry, StudentRecord, build_record
from .score_aggregator import ScoreAggregator, in_generic_range

logger = logging.getLogger(__name__)


def _cell_at(row: List[Cell], col_idx: int) -> Cell:
    return row[col_idx] if col_idx < len(row) else BLANK_CELL


def row_name(row: List[Cell], name_col: int) -> Optional[str]:
    """Trimmed student name, or None when the row has no usable name."""
    cell = _cell_at(row, name_col)
    if not cell.is_truthy():
        return None
    return cell.as_text().strip() or None


class RowExtractor:
    """Extracts records from data rows sharing one header row and name column."""

    def __init__(self, labels: List[str], name_col: int):
        self.labels = labels
        self.name_col = name_col

    def extract(self, row: List[Cell]) -> Optional[StudentRecord]:
        if not row:
            return None
        name = row_name(row, self.name_col)
        if name is None:
            logger.debug(f"Skipping row with no name in column {self.name_col}")
            return None

        consumed: Set[int] = set()
        scores = ScoreAggregator()
        criteria: Dict[str, CriterionEntry] = {}
        fixed_fields: Dict[str, str] = {}
        context: List[str] = []

        for col_idx, cell in enumerate(row):
            if col_idx == self.name_col or col_idx in consumed or cell.is_blank:
                continue

            label = label_for(self.labels, col_idx)
            match = match_label(label)

            if match.role in FIXED_FIELD_LABELS:
                fixed_fields.setdefault(match.role.value, cell.as_text())
                context.append(f'{FIXED_FIELD_LABELS[match.role]}: {cell.as_text()}')
                continue

            value = cell.as_number()

            if match.role is ColumnRole.CRITERION and value is not None:
                comment = self._take_comment(row, col_idx, match.letter, consumed)
                criteria[match.letter] = CriterionEntry(normalize_number(value), comment)
                scores.add_criterion(value)
                line = f'Criterion {match.letter}: {format_number(value)}'
                context.append(f'{line} - {comment}' if comment else line)
                continue

            # Criterion columns that fail to parse fall through to the generic checks
            numeric = value is not None and not cell.is_boolean
            if numeric and match.role is not ColumnRole.FREE_TEXT and in_generic_range(value):
                if value > 0:
                    scores.add(value)
                context.append(f'{label}: {format_number(value)}')
            elif not numeric:
                context.append(f'{label}: {cell.as_text()}')

        return build_record(name, scores.average(), criteria, fixed_fields, context)

    def _take_comment(self, row: List[Cell], col_idx: int, letter: str, consumed: Set[int]) -> str:
        next_idx = col_idx + 1
        if next_idx >= len(row):
            return ''
        next_label = self.labels[next_idx] if next_idx < len(self.labels) else ''
        next_cell = row[next_idx]
        if not pairs_as_comment(letter, next_label, next_cell):
            return ''
        consumed.add(next_idx)
        return next_cell.as_text()
