import io

import openpyxl
import pytest


def workbook_bytes(rows, extra_sheet=None):
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = 'Marks'
    for row in rows:
        ws.append(row)
    if extra_sheet is not None:
        other = wb.create_sheet('Other')
        for row in extra_sheet:
            other.append(row)
    buf = io.BytesIO()
    wb.save(buf)
    return buf.getvalue()


@pytest.fixture
def make_workbook():
    return workbook_bytes


@pytest.fixture
def class_sheet():
    return [
        ['Year 8 Science - Term 2'],
        [],
        ['Student Name', 'Classroom Behaviour', 'A', 'A Comment', 'B', 'Progress', 'Remarks'],
        ['Alice Smith', 'Attentive', 8, 'Clear method', 6, 'Steady', 'Strong lab work'],
        [None, None, 9, None, 9],
        ['Ben Jones', None, 7, None, 8, None, 'Needs to revise'],
    ]
