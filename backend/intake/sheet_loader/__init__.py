from .cells import Cell, to_cell, to_row, parse_number, format_number
from .sheet_reader import read_first_sheet, WorkbookDecodeError, SUPPORTED_EXTENSIONS
from .header_detector import locate_header_row, extract_header_labels, select_name_column, label_for

__all__ = [
    'Cell', 'to_cell', 'to_row', 'parse_number', 'format_number',
    'read_first_sheet', 'WorkbookDecodeError', 'SUPPORTED_EXTENSIONS',
    'locate_header_row', 'extract_header_labels', 'select_name_column', 'label_for',
]
