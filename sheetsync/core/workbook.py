"""Workbook reader — loads a local .xlsx worksheet as a SheetGrid.

Cells are rendered the way a spreadsheet API returns formatted values, so
the grid can go straight through parse_data: booleans become TRUE/FALSE,
dates ISO strings, blanks None.
"""

import logging
from datetime import date, datetime, time
from pathlib import Path
from typing import Any, Optional

import openpyxl

from sheetsync.core.models import SheetGrid

logger = logging.getLogger(__name__)


def _render_cell(value: Any) -> Any:
    if value is None:
        return None
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, datetime):
        if value.time() == time(0, 0):
            return value.date().isoformat()
        return value.isoformat(sep=" ")
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (int, float)):
        return str(value)
    return value


def load_grid(file_path: Path, sheet_name: Optional[str] = None) -> SheetGrid:
    """Read a worksheet (the active one by default) into a SheetGrid."""
    file_path = Path(file_path)
    if not file_path.exists():
        raise FileNotFoundError(f"Workbook not found: {file_path}")

    wb = openpyxl.load_workbook(file_path, read_only=False, data_only=True)
    try:
        if sheet_name:
            if sheet_name not in wb.sheetnames:
                raise ValueError(f"Sheet '{sheet_name}' not found in workbook {file_path}")
            ws = wb[sheet_name]
        else:
            ws = wb.active

        values = [[_render_cell(v) for v in row] for row in ws.iter_rows(values_only=True)]
    finally:
        wb.close()

    # Trailing blank rows carry no data
    while values and all(v is None for v in values[-1]):
        values.pop()

    grid = SheetGrid.from_values(values)
    logger.info(f"Loaded sheet '{ws.title}' from {file_path}: {len(grid.rows)} rows")
    return grid
