"""
Error types for the logbook exporter.

Every fatal condition derives from LogbookError so run.py and the web API
can report it with one except clause. There are no retries: any of these
aborts the whole export.
"""


class LogbookError(Exception):
    """Base class for fatal export errors."""


class ConfigInvalid(LogbookError):
    """A required configuration value is missing or malformed."""


class SourceUnavailable(LogbookError):
    """The spreadsheet or workbook could not be read."""


class SourceEmpty(LogbookError):
    """The data source returned no rows."""


class RenderFailure(LogbookError):
    """The PDF or PNG output could not be produced."""


class MalformedRow(LogbookError):
    """A source row could not be decoded into a flight record.

    Attributes:
        column: 0-based column index of the offending cell.
        column_name: Header name of that column.
        expected: Description of the expected cell type.
        value: The cell value found (None when the cell is missing).
        row: 1-based sheet row number, when known.
    """

    def __init__(self, column, column_name, expected, value=None, row=None):
        self.column = column
        self.column_name = column_name
        self.expected = expected
        self.value = value
        self.row = row
        super().__init__(self._message())

    def _message(self):
        where = f"row {self.row}, " if self.row is not None else ""
        found = "missing cell" if self.value is None else f"got {self.value!r}"
        return (
            f"Malformed logbook entry: {where}column {self.column + 1} "
            f"({self.column_name}) expected {self.expected}, {found}"
        )

    def at_row(self, row):
        """Return a copy of this error tagged with the sheet row number."""
        return MalformedRow(self.column, self.column_name, self.expected,
                            self.value, row)


class DurationParseError(ValueError):
    """A duration cell is not in H:MM form."""
