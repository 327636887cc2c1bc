# passengers/spreadsheet.py
"""
Spreadsheet import and export for passenger lists.

Import reads the first sheet of an Excel workbook and requires the columns
id, name, address and city. Export writes the same columns plus latitude and
longitude, leaving the coordinate cells empty for ungeocoded rows.
"""

from __future__ import annotations

import io
import logging
from collections.abc import Sequence
from datetime import date
from typing import BinaryIO

import pandas as pd

from passengers.records import EXPORT_COLUMNS, REQUIRED_COLUMNS, PassengerRecord

EXPORT_SHEET_NAME: str = 'Geocoded Data'
EXCEL_TYPES: tuple[str, ...] = ('xlsx', 'xlsm')


class PassengerFileError(RuntimeError):
    """Raised when a passenger spreadsheet cannot be imported."""


def _cell_text(value: object) -> str:
    """Render a spreadsheet cell as text ('' for blanks, no trailing '.0' on whole numbers)."""
    if value is None:
        return ''
    try:
        if pd.isna(value):
            return ''
    except (TypeError, ValueError):
        pass
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def read_passengers_frame(source: str | bytes | BinaryIO) -> pd.DataFrame:
    """
    Read the first sheet of a workbook into a DataFrame.

    Args:
        source: Path, raw bytes or a binary file-like object (e.g. a Streamlit upload).

    Returns:
        DataFrame with trimmed column names and fully blank rows dropped.

    Raises:
        PassengerFileError: If the workbook cannot be read.
    """
    if isinstance(source, (bytes, bytearray)):
        source = io.BytesIO(source)

    try:
        df = pd.read_excel(source, sheet_name=0, dtype=object, engine='openpyxl')
    except Exception as exc:
        raise PassengerFileError(f'Could not read the Excel file: {exc}') from exc

    df.columns = [str(c).strip() for c in df.columns]
    return df.dropna(how='all').reset_index(drop=True)


def passengers_from_frame(df: pd.DataFrame) -> list[PassengerRecord]:
    """
    Convert a DataFrame to passenger records.

    Extra columns are ignored.

    Raises:
        PassengerFileError: If the frame is empty or a required column is missing.
    """
    if df.empty:
        raise PassengerFileError('The Excel file is empty.')

    missing = [col for col in REQUIRED_COLUMNS if col not in df.columns]
    if missing:
        raise PassengerFileError(
            'The Excel file must contain the columns: '
            f'{", ".join(REQUIRED_COLUMNS)} (missing: {", ".join(missing)})'
        )

    return [
        PassengerRecord(
            id=_cell_text(row['id']),
            name=_cell_text(row['name']),
            address=_cell_text(row['address']),
            city=_cell_text(row['city']),
        )
        for _, row in df.iterrows()
    ]


def read_passengers_file(source: str | bytes | BinaryIO) -> list[PassengerRecord]:
    """
    Import passenger records from an Excel workbook.

    Either the whole file imports or nothing does.

    Raises:
        PassengerFileError: On unreadable, empty or incomplete files.
    """
    passengers = passengers_from_frame(read_passengers_frame(source))
    logging.info('Imported %d passengers', len(passengers))
    return passengers


def passengers_to_frame(passengers: Sequence[PassengerRecord]) -> pd.DataFrame:
    """Export layout: one row per record, '' for missing coordinates."""
    rows = [
        {
            'id': p.id,
            'name': p.name,
            'address': p.address,
            'city': p.city,
            'latitude': p.latitude if p.latitude is not None else '',
            'longitude': p.longitude if p.longitude is not None else '',
        }
        for p in passengers
    ]
    return pd.DataFrame(rows, columns=list(EXPORT_COLUMNS))


def export_passengers_xlsx(passengers: Sequence[PassengerRecord]) -> bytes:
    """
    Serialize passenger records to an xlsx workbook.

    Returns:
        Workbook bytes, ready for a download button or a file write.
    """
    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine='openpyxl') as writer:
        passengers_to_frame(passengers).to_excel(writer, index=False, sheet_name=EXPORT_SHEET_NAME)
    return buffer.getvalue()


def export_filename(today: date | None = None) -> str:
    """File name for the geocoded export, e.g. 'geocoded_2025-03-01.xlsx'."""
    day = today or date.today()
    return f'geocoded_{day.isoformat()}.xlsx'
