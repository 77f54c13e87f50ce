"""
Reads the first sheet of an uploaded workbook (or CSV) into a grid of Cells.
"""
import csv
import io
import logging
import os
import zipfile
from typing import Any, BinaryIO, List, Optional, Union

import openpyxl
import pandas as pd

from .cells import Cell, to_row

logger = logging.getLogger(__name__)

CSV_EXTENSIONS = ('.csv',)
WORKBOOK_EXTENSIONS = ('.xlsx', '.xlsm')
SUPPORTED_EXTENSIONS = WORKBOOK_EXTENSIONS + CSV_EXTENSIONS

Source = Union[str, os.PathLike, bytes, bytearray, BinaryIO]


class WorkbookDecodeError(ValueError):
    """The uploaded file could not be decoded as a workbook."""


def _read_bytes(source: Source) -> bytes:
    if isinstance(source, (bytes, bytearray)):
        return bytes(source)
    if isinstance(source, (str, os.PathLike)):
        try:
            with open(source, 'rb') as f:
                return f.read()
        except OSError as e:
            raise WorkbookDecodeError(f"Cannot open {source}: {e}") from e
    return source.read()


def _is_csv(data: bytes, filename: Optional[str]) -> bool:
    if filename:
        return filename.lower().endswith(CSV_EXTENSIONS)
    # xlsx is a zip container; anything else is treated as delimited text
    return not zipfile.is_zipfile(io.BytesIO(data))


def _read_workbook_rows(data: bytes) -> List[List[Any]]:
    wb = openpyxl.load_workbook(io.BytesIO(data), data_only=True, read_only=True)
    try:
        ws = wb[wb.sheetnames[0]]
        return [list(row) for row in ws.iter_rows(values_only=True)]
    finally:
        wb.close()


# Common CSV exports: BOM-prefixed UTF-8 from Excel, cp1251 from ru-locale Excel
CSV_ENCODINGS = ('utf-8-sig', 'utf-8', 'cp1251')
CSV_DELIMITERS = (';', ',', '\t', '|')


def _decode_csv(data: bytes) -> str:
    for enc in CSV_ENCODINGS:
        try:
            return data.decode(enc)
        except UnicodeDecodeError:
            continue
    return data.decode('utf-8', errors='replace')


def _guess_delimiter(sample_text: str) -> str:
    # Excel writes ';' instead of ',' in locales with a decimal comma
    try:
        dialect = csv.Sniffer().sniff(sample_text, delimiters=''.join(CSV_DELIMITERS))
        if dialect.delimiter:
            return dialect.delimiter
    except csv.Error:
        pass

    lines = [ln for ln in sample_text.splitlines() if ln.strip()][:20]
    if not lines:
        return ','

    scores = {d: sum(ln.count(d) for ln in lines) / len(lines) for d in CSV_DELIMITERS}
    best = max(scores.items(), key=lambda x: x[1])[0]
    return best if scores[best] > 0 else ','


def _read_csv_rows(data: bytes) -> List[List[Any]]:
    text = _decode_csv(data)
    delimiter = _guess_delimiter(text[:65536])

    # read_csv sizes the frame from the first line; title rows above the
    # header are narrower than the data, so name every column up front
    width = max((len(r) for r in csv.reader(io.StringIO(text), delimiter=delimiter)), default=0)
    if width == 0:
        return []

    df = pd.read_csv(
        io.StringIO(text),
        header=None,
        names=range(width),
        sep=delimiter,
        engine='python',
        dtype=str,
        keep_default_na=False,
        skip_blank_lines=False,
    )
    return df.values.tolist()


def _trim_trailing_blanks(row: List[Cell]) -> List[Cell]:
    end = len(row)
    while end and row[end - 1].is_blank:
        end -= 1
    return row[:end]


def read_first_sheet(source: Source, filename: Optional[str] = None) -> List[List[Cell]]:
    """
    Decode `source` and return its first sheet as rows of Cells.

    Trailing blank cells are dropped from each row so row lengths follow the
    data actually present. Raises WorkbookDecodeError when decoding fails;
    no partial grid is ever returned.
    """
    data = _read_bytes(source)
    if filename is None and isinstance(source, (str, os.PathLike)):
        filename = os.fspath(source)

    try:
        if _is_csv(data, filename):
            raw_rows = _read_csv_rows(data)
        else:
            raw_rows = _read_workbook_rows(data)
    except pd.errors.EmptyDataError:
        raw_rows = []
    except Exception as e:
        raise WorkbookDecodeError(f"Could not read spreadsheet: {e}") from e

    grid = [_trim_trailing_blanks(to_row(r)) for r in raw_rows]
    logger.debug(f"Decoded {len(grid)} row(s) from {filename or 'upload'}")
    return grid
