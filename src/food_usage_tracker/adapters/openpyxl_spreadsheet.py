"""Spreadsheet reading and writing with openpyxl."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol
from zipfile import BadZipFile

from openpyxl import Workbook, load_workbook
from openpyxl.styles import Font, PatternFill
from openpyxl.utils import get_column_letter
from openpyxl.utils.exceptions import InvalidFileException

from food_usage_tracker.domain.errors import SpreadsheetFormatError

_logger = logging.getLogger(__name__)

_READABLE_SUFFIXES = {".xlsx", ".xlsm"}
_MAX_SHEET_TITLE = 31
_COLUMN_WIDTH = 15


class SpreadsheetReader(Protocol):
    """Interface for reading the first sheet of a workbook."""

    def read_table(self, path: str | Path) -> list[list[object]]:
        """Return the cell values of the first sheet, row by row."""


class SpreadsheetWriter(Protocol):
    """Interface for writing flat records to a workbook."""

    def write_records(
        self,
        path: str | Path,
        sheet_name: str,
        records: Sequence[dict[str, object]],
    ) -> Path:
        """Write records as a single sheet and return the file path."""


@dataclass
class OpenpyxlSpreadsheet(SpreadsheetReader, SpreadsheetWriter):
    """openpyxl-backed spreadsheet adapter."""

    column_width: int = _COLUMN_WIDTH

    def read_table(self, path: str | Path) -> list[list[object]]:
        """Read every row of the first sheet as a list of cell values."""
        file_path = Path(path)
        if file_path.suffix.lower() not in _READABLE_SUFFIXES:
            raise SpreadsheetFormatError(
                f"Invalid spreadsheet format {file_path.suffix!r} (.xlsx expected)"
            )
        try:
            workbook = load_workbook(file_path, read_only=True, data_only=True)
        except (BadZipFile, InvalidFileException, KeyError) as exc:
            raise SpreadsheetFormatError(
                f"{file_path.name} is not a valid .xlsx workbook"
            ) from exc
        try:
            sheet = workbook.worksheets[0]
            rows = [list(row) for row in sheet.iter_rows(values_only=True)]
        finally:
            workbook.close()
        _logger.info("Read %s rows from %s", len(rows), file_path)
        return rows

    def write_records(
        self,
        path: str | Path,
        sheet_name: str,
        records: Sequence[dict[str, object]],
    ) -> Path:
        """Write records with a bold header row taken from the record keys."""
        file_path = Path(path)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        headers = _collect_headers(records)

        workbook = Workbook()
        sheet = workbook.active
        sheet.title = sheet_name[:_MAX_SHEET_TITLE]
        sheet.append(headers)
        header_fill = PatternFill("solid", fgColor="D9D9D9")
        for cell in sheet[1]:
            cell.font = Font(bold=True)
            cell.fill = header_fill
        for record in records:
            sheet.append([record.get(header) for header in headers])
        for index in range(1, len(headers) + 1):
            sheet.column_dimensions[get_column_letter(index)].width = (
                self.column_width
            )
        sheet.freeze_panes = "A2"
        workbook.save(file_path)
        _logger.info("Exported %s rows to %s", len(records), file_path)
        return file_path


def _collect_headers(records: Sequence[dict[str, object]]) -> list[str]:
    headers: list[str] = []
    for record in records:
        for key in record:
            if key not in headers:
                headers.append(key)
    return headers
