"""
Spreadsheet -> student records.

    records = parse_file('marks.xlsx')
    records = await parse(upload_bytes, filename='marks.csv')
"""
import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, List, Optional

from ..sheet_loader.cells import Cell, to_row
from ..sheet_loader.header_detector import extract_header_labels, locate_header_row, select_name_column
from ..sheet_loader.sheet_reader import Source, read_first_sheet
from .record_schema import StudentRecord
from .row_extractor import RowExtractor

logger = logging.getLogger(__name__)


def _as_cells(grid: List[List[Any]]) -> List[List[Cell]]:
    return [row if row and isinstance(row[0], Cell) else to_row(row) for row in grid]


def parse_grid(grid: List[List[Any]], max_workers: Optional[int] = None) -> List[StudentRecord]:
    """
    Extract records from an already decoded grid, in sheet row order.

    Rows may hold Cells or raw values (str / int / float / bool / None).
    With `max_workers` > 1 rows are extracted on a thread pool; output order
    is still the row order.
    """
    if not grid:
        return []
    grid = _as_cells(grid)

    header_row = locate_header_row(grid)
    labels = extract_header_labels(grid, header_row)
    name_col = select_name_column(labels)
    extractor = RowExtractor(labels, name_col)

    data_rows = grid[header_row + 1:]
    if max_workers and max_workers > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            results = list(pool.map(extractor.extract, data_rows))
    else:
        results = [extractor.extract(row) for row in data_rows]

    records = [r for r in results if r is not None]
    skipped = len(data_rows) - len(records)
    logger.info(
        f"Extracted {len(records)} student record(s) "
        f"(header row {header_row}, name column {name_col}, {skipped} row(s) skipped)"
    )
    return records


def parse_file(source: Source, filename: Optional[str] = None,
               max_workers: Optional[int] = None) -> List[StudentRecord]:
    """Decode the first sheet of `source` and extract its records."""
    grid = read_first_sheet(source, filename=filename)
    return parse_grid(grid, max_workers=max_workers)


async def parse(source: Source, filename: Optional[str] = None) -> List[StudentRecord]:
    """Awaitable parse_file: resolves with every record or raises WorkbookDecodeError."""
    return await asyncio.to_thread(parse_file, source, filename)
