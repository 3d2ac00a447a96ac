"""Shared test helpers for the sheetsync test suite."""

from pathlib import Path
from typing import Optional

import openpyxl


def make_raw_schema(
    properties: dict,
    database_id: Optional[str] = "db_1",
) -> dict:
    """Helper to build a raw database schema mapping for testing."""
    raw = {"properties": properties}
    if database_id is not None:
        raw["database_id"] = database_id
    return raw


def create_workbook(path: Path, rows: list[list], sheet_name: str = "Sheet1") -> Path:
    """Write rows to an .xlsx file at path. First row is the header."""
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = sheet_name
    for row in rows:
        ws.append(row)
    wb.save(path)
    wb.close()
    return path
