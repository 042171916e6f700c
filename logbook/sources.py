"""
Logbook data sources.

Reads the raw logbook rows either from a local Excel workbook or from a
Google spreadsheet (Sheets API v4, API-key access). Both return the same
shape: a list of rows, each a list of cell strings, columns A..W.
"""

from datetime import date, datetime, time, timedelta
from zipfile import BadZipFile

import requests
from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from .errors import SourceEmpty, SourceUnavailable
from .records import TOTAL_COLUMNS

SHEETS_API_URL = "https://sheets.googleapis.com/v4/spreadsheets/{id}/values/{range}"
LAST_COLUMN = 'W'
REQUEST_TIMEOUT = 30


def _hours_minutes(total_minutes):
    hours, minutes = divmod(int(round(total_minutes)), 60)
    return f"{hours}:{minutes:02d}"


def cell_text(value):
    """Convert an openpyxl cell value to the text the sheet shows.

    Dates become YYYY-MM-DD, times of day HH:MM, durations H:MM, whole
    numbers lose their trailing ".0".
    """
    if value is None:
        return ''
    if isinstance(value, datetime):
        if value.time() == time(0, 0):
            return value.strftime('%Y-%m-%d')
        return value.strftime('%Y-%m-%d %H:%M')
    if isinstance(value, date):
        return value.strftime('%Y-%m-%d')
    if isinstance(value, time):
        return value.strftime('%H:%M')
    if isinstance(value, timedelta):
        return _hours_minutes(value.total_seconds() / 60)
    if isinstance(value, bool):
        return str(value).upper()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def _read_xlsx(file_name, sheet_name, start_row):
    """Read rows from a local workbook.

    Returns:
        List of rows (lists of cell strings), empty rows skipped.
    """
    try:
        wb = load_workbook(file_name, read_only=True, data_only=True)
    except (OSError, BadZipFile, InvalidFileException, KeyError) as e:
        raise SourceUnavailable(f"Error opening xlsx file {file_name}: {e}") from e

    try:
        if sheet_name not in wb.sheetnames:
            raise SourceUnavailable(
                f"Sheet '{sheet_name}' not found in {file_name} "
                f"(sheets: {', '.join(wb.sheetnames)})"
            )
        ws = wb[sheet_name]
        rows = []
        for row in ws.iter_rows(min_row=start_row, max_col=TOTAL_COLUMNS,
                                values_only=True):
            cells = [cell_text(v) for v in row]
            # Skip empty rows
            if not any(cells):
                continue
            rows.append(cells)
    finally:
        wb.close()

    return rows


def _read_google(api_key, spreadsheet_id, sheet_name, start_row):
    """Read rows from a Google spreadsheet shared for API-key access."""
    cell_range = f"{sheet_name}!A{start_row}:{LAST_COLUMN}"
    url = SHEETS_API_URL.format(id=spreadsheet_id, range=cell_range)
    try:
        response = requests.get(url, params={'key': api_key},
                                timeout=REQUEST_TIMEOUT)
        response.raise_for_status()
        payload = response.json()
    except requests.RequestException as e:
        raise SourceUnavailable(
            f"Unable to retrieve data from sheet: {e}"
        ) from e
    except ValueError as e:
        raise SourceUnavailable(f"Unexpected response from Sheets API: {e}") from e

    return [[str(v) for v in row] for row in payload.get('values', [])]


def fetch_rows(config):
    """Read the raw logbook rows described by the config.

    Args:
        config: Validated Config.

    Returns:
        List of rows, in sheet order.

    Raises:
        SourceUnavailable: If the workbook or spreadsheet cannot be read.
        SourceEmpty: If no rows were returned.
    """
    if config.source_type == 'google':
        rows = _read_google(config.api_key, config.spreadsheet_id,
                            config.sheet_name, config.start_row)
        where = f"spreadsheet {config.spreadsheet_id}"
    else:
        rows = _read_xlsx(config.file_name, config.sheet_name,
                          config.start_row)
        where = config.file_name

    if not rows:
        raise SourceEmpty(f"No data found in the sheet '{config.sheet_name}' "
                          f"of {where}")

    print(f"  Read {len(rows)} rows from {where}")
    return rows
