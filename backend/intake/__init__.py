"""
Student assessment sheet intake: spreadsheet upload -> per-student records.
"""
from .extraction import parse, parse_file, parse_grid, StudentRecord
from .sheet_loader import WorkbookDecodeError
from .routes import intake_bp

__all__ = ['parse', 'parse_file', 'parse_grid', 'StudentRecord', 'WorkbookDecodeError', 'intake_bp']
