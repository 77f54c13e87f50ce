"""
Ordered column-role rules. Header labels are matched top to bottom and the
first rule that fires decides the role, so the order of COLUMN_RULES matters:
e.g. "Criterion A" must be tried before the generic "criterion" score rule.
"""
import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Tuple

from ..sheet_loader.cells import Cell


class ColumnRole(str, Enum):
    NAME = 'name'
    CLASSROOM_BEHAVIOUR = 'classroom_behaviour'
    LEARNING_ATTITUDE = 'learning_attitude'
    SUBMISSION_QUALITY = 'submission_quality'
    SUBMISSION_PUNCTUALITY = 'submission_punctuality'
    PROGRESS = 'progress'
    PERSONAL_NOTE = 'personal_note'
    CRITERION = 'criterion'
    CRITERION_COMMENT = 'criterion_comment'
    GENERIC_SCORE = 'generic_score'
    FREE_TEXT = 'free_text'
    IGNORED = 'ignored'


# Roles that fill a fixed text field on the record, with their display label
FIXED_FIELD_LABELS = {
    ColumnRole.CLASSROOM_BEHAVIOUR: 'Classroom Behaviour',
    ColumnRole.LEARNING_ATTITUDE: 'Learning Attitude',
    ColumnRole.SUBMISSION_QUALITY: 'Submission Quality',
    ColumnRole.SUBMISSION_PUNCTUALITY: 'Submission Punctuality',
    ColumnRole.PROGRESS: 'Progress',
    ColumnRole.PERSONAL_NOTE: 'Personal Note',
}

CRITERION_LABEL = re.compile(r'^(?:criterion\s*)?([a-d])(?:\s*score)?$', re.IGNORECASE)
SCORE_WORDS = re.compile(r'score|grade|mark|criterion|crit|total|sum', re.IGNORECASE)
SHORT_CODE = re.compile(r'^[a-z0-9]{1,3}$', re.IGNORECASE)


def _either_order(a: str, b: str) -> Callable[[str], bool]:
    pattern = re.compile(f'{a}.*{b}|{b}.*{a}', re.IGNORECASE)
    return lambda label: bool(pattern.search(label))


def _exactly(word: str) -> Callable[[str], bool]:
    pattern = re.compile(f'^{word}$', re.IGNORECASE)
    return lambda label: bool(pattern.search(label.strip()))


def is_score_label(label: str) -> bool:
    """Labels that look like a numeric mark column (never comment columns)."""
    lower = label.lower()
    if 'comment' in lower:
        return False
    return bool(SCORE_WORDS.search(lower) or SHORT_CODE.search(lower))


def _is_criterion_label(label: str) -> bool:
    return bool(CRITERION_LABEL.search(label.strip()))


COLUMN_RULES: List[Tuple[Callable[[str], bool], ColumnRole]] = [
    (_either_order('classroom', 'behavio?u?r'), ColumnRole.CLASSROOM_BEHAVIOUR),
    (_either_order('learning', 'attitude'), ColumnRole.LEARNING_ATTITUDE),
    (_either_order('submission', 'quality'), ColumnRole.SUBMISSION_QUALITY),
    (_either_order('submission', 'punctuality'), ColumnRole.SUBMISSION_PUNCTUALITY),
    (_exactly('progress'), ColumnRole.PROGRESS),
    (_either_order('personal', 'note'), ColumnRole.PERSONAL_NOTE),
    (_is_criterion_label, ColumnRole.CRITERION),
    (is_score_label, ColumnRole.GENERIC_SCORE),
]


@dataclass(frozen=True)
class LabelMatch:
    role: ColumnRole
    letter: Optional[str] = None


def match_label(label: str) -> LabelMatch:
    """
    Role implied by a header label alone.

    Returns FREE_TEXT when no rule fires; whether such a column actually
    contributes depends on its cell value (see RowExtractor).
    """
    lower = label.lower()
    for predicate, role in COLUMN_RULES:
        if predicate(lower):
            if role is ColumnRole.CRITERION:
                letter = CRITERION_LABEL.search(lower.strip()).group(1).upper()
                return LabelMatch(role, letter)
            return LabelMatch(role)
    return LabelMatch(ColumnRole.FREE_TEXT)


def pairs_as_comment(letter: str, next_label: str, next_cell: Cell) -> bool:
    """Whether the column after criterion `letter` holds that criterion's comment."""
    if not next_cell.is_truthy():
        return False
    lower = next_label.lower()
    return 'comment' in lower or letter.lower() in lower
