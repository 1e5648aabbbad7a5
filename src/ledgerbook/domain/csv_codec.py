"""CSV encoding and decoding of expenses.

Exported files quote every field and double embedded quotes. Imported files
are mapped by header name, so reordered or partial headers still load, and a
malformed file never raises: missing values get defaults instead.
"""

import csv
import io
import re
from datetime import date
from typing import Iterable, Iterator, Optional

import structlog

from ledgerbook.domain.entities import Expense, generate_expense_id
from ledgerbook.utils.amount_parser import parse_amount_or_zero

logger = structlog.get_logger(__name__)

CSV_COLUMNS = ("id", "date", "from", "to", "category", "amount", "spender", "note")

# One field: quoted with doubled inner quotes, or anything up to the next comma
_FIELD_PATTERN = re.compile(r'(?:^|,)("(?:[^"]|"")*"|[^,]*)')
_QUOTE_EDGES = re.compile(r'^"|"$')


def encode_csv(expenses: Iterable[Expense]) -> str:
    """Encode expenses as CSV text with a header row and no trailing newline."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, doublequote=True, lineterminator="\n")
    writer.writerow(CSV_COLUMNS)
    for expense in expenses:
        row = expense.to_dict()
        writer.writerow(["" if row[column] is None else row[column] for column in CSV_COLUMNS])
    return buffer.getvalue().rstrip("\n")


def _lines_from(lines: list[str], start: int) -> Iterator[str]:
    for index in range(start, len(lines)):
        yield lines[index]


def _split_line(line: str) -> list[str]:
    """Split one line field by field, unquoting without the csv module's checks."""
    fields = _FIELD_PATTERN.findall(line.rstrip("\r\n"))
    return [_QUOTE_EDGES.sub("", field).replace('""', '"') for field in fields]


def _split_rows(text: str) -> list[list[str]]:
    """Split CSV text into rows, honouring quotes.

    Records are read one at a time; a record the csv module rejects is split
    leniently from its first line and reading resumes on the next line, so a
    single bad row does not affect its neighbours.
    """
    lines = io.StringIO(text, newline="").readlines()
    rows = []
    index = 0
    while index < len(lines):
        reader = csv.reader(_lines_from(lines, index), strict=True)
        try:
            row = next(reader)
            consumed = reader.line_num
        except csv.Error as e:
            logger.warning("csv_row_fallback", line=index + 1, error=str(e))
            row = _split_line(lines[index])
            consumed = 1
        rows.append(row)
        index += max(consumed, 1)
    return [row for row in rows if any(cell.strip() for cell in row)]


def _clean_header(name: str) -> str:
    return name.replace('"', "").strip().lower()


def decode_csv(text: str, today: Optional[date] = None) -> list[Expense]:
    """Decode CSV text into expenses.

    Args:
        text: CSV content; the first non-empty row is the header
        today: Date used for rows without a date (defaults to date.today())

    Returns:
        Decoded expenses in file order; an empty list for empty input
    """
    rows = _split_rows(text.lstrip("\ufeff"))
    if not rows:
        return []

    header = [_clean_header(name) for name in rows[0]]
    positions: dict[str, int] = {}
    for index, name in enumerate(header):
        positions.setdefault(name, index)
    default_date = (today or date.today()).isoformat()

    expenses = []
    for row in rows[1:]:
        def cell(column: str, row: list[str] = row) -> str:
            index = positions.get(column)
            return row[index] if index is not None and index < len(row) else ""

        expenses.append(
            Expense(
                id=cell("id").strip() or generate_expense_id(),
                date=cell("date").strip() or default_date,
                from_=cell("from"),
                to=cell("to"),
                category=cell("category"),
                amount=parse_amount_or_zero(cell("amount")),
                spender=cell("spender"),
                note=cell("note"),
            )
        )
    return expenses


def export_filename(extension: str = "csv", today: Optional[date] = None) -> str:
    """Return the suggested export file name, e.g. expenses_2024-05-01.csv."""
    return f"expenses_{(today or date.today()).isoformat()}.{extension.lstrip('.')}"
