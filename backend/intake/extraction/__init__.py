from .record_schema import StudentRecord, CriterionEntry, RecordStatus, build_record
from .column_rules import ColumnRole, COLUMN_RULES, match_label, is_score_label, pairs_as_comment
from .score_aggregator import ScoreAggregator, round_half_away
from .row_extractor import RowExtractor
from .pipeline import parse, parse_file, parse_grid

__all__ = [
    'StudentRecord', 'CriterionEntry', 'RecordStatus', 'build_record',
    'ColumnRole', 'COLUMN_RULES', 'match_label', 'is_score_label', 'pairs_as_comment',
    'ScoreAggregator', 'round_half_away',
    'RowExtractor',
    'parse', 'parse_file', 'parse_grid',
]
