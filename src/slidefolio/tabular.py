"""Read slide rows from CSV and XLSX files.

The first row holds the column headers (``Image``, ``Text``,
``Highlighted``, ``Style``, ``backgroundVoice``); only the first worksheet
of a workbook is read. Rows with no values are skipped.
"""

import asyncio
import csv
import logging
from pathlib import Path
from typing import Any, Iterable

from openpyxl import load_workbook

from .errors import TabularReadError
from .models import RowRecord

logger = logging.getLogger(__name__)


def _is_blank_row(values: Iterable[Any]) -> bool:
    return all(value is None or str(value).strip() == '' for value in values)


def _format_cell(value: Any) -> Any:
    # Whole-number floats come back from spreadsheets as 1.0; keep them as "1".
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def _rows_from_table(table: Iterable[tuple]) -> list[RowRecord]:
    iterator = iter(table)
    header = next(iterator, None)
    if header is None:
        return []
    keys = ['' if h is None else str(h).strip() for h in header]

    rows = []
    for values in iterator:
        if _is_blank_row(values):
            continue
        mapping = {key: _format_cell(value) for key, value in zip(keys, values) if key}
        rows.append(RowRecord.from_mapping(mapping))
    return rows


def read_csv_rows(path: Path) -> list[RowRecord]:
    with open(path, 'r', encoding='utf-8-sig', newline='') as f:
        return _rows_from_table(tuple(row) for row in csv.reader(f))


def read_xlsx_rows(path: Path) -> list[RowRecord]:
    """Read the first worksheet of a workbook.

    openpyxl surfaces damaged workbooks through many exception types (zip,
    XML parser, value errors), so any failure here becomes TabularReadError.
    """
    try:
        workbook = load_workbook(str(path), read_only=True, data_only=True)
        try:
            sheet = workbook.worksheets[0]
            return _rows_from_table(sheet.iter_rows(values_only=True))
        finally:
            workbook.close()
    except Exception as e:
        raise TabularReadError(f"Cannot read {path.name}: {e}") from e


def read_rows(path: str | Path) -> list[RowRecord]:
    """Read row records from a tabular file.

    Args:
        path: Path to a .csv or .xlsx file

    Returns:
        Row records in file order

    Raises:
        TabularReadError: If the format is unsupported or the file is unreadable
    """
    path = Path(path)
    suffix = path.suffix.lower()
    try:
        if suffix == '.csv':
            rows = read_csv_rows(path)
        elif suffix == '.xlsx':
            rows = read_xlsx_rows(path)
        else:
            raise TabularReadError(f"Unsupported tabular format: {path.name}")
    except (OSError, UnicodeDecodeError, csv.Error) as e:
        raise TabularReadError(f"Cannot read {path.name}: {e}") from e

    logger.info(f"Read {len(rows)} row(s) from {path.name}")
    return rows


async def read_rows_async(path: str | Path) -> list[RowRecord]:
    """``read_rows`` on a worker thread."""
    return await asyncio.to_thread(read_rows, path)
