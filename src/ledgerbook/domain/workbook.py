"""Spreadsheet workbook export of the filtered expenses and their summaries."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Sequence, Union

import openpyxl
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from ledgerbook.domain.aggregation import group_totals, monthly_totals
from ledgerbook.domain.entities import Expense, GroupBy
from ledgerbook.domain.errors import ExportError

EXPENSE_SHEET_WIDTHS = (12, 18, 18, 20, 12, 16, 40)
SUMMARY_SHEET_WIDTHS = (24, 14)


@dataclass
class Sheet:
    """One worksheet: a title, a header row and data rows."""

    title: str
    header: tuple[str, ...]
    rows: list[tuple[Any, ...]] = field(default_factory=list)
    widths: tuple[int, ...] = SUMMARY_SHEET_WIDTHS


def build_workbook_sheets(expenses: Sequence[Expense]) -> list[Sheet]:
    """Lay out the expenses sheet plus spender, category and month summaries."""
    expense_rows = [
        (e.date, e.from_, e.to, e.category, float(e.amount), e.spender, e.note)
        for e in expenses
    ]
    by_spender = group_totals(expenses, GroupBy.SPENDER)
    by_category = group_totals(expenses, GroupBy.CATEGORY)

    return [
        Sheet(
            "Expenses",
            ("Date", "From", "To", "Category", "Amount", "Spender", "Note"),
            expense_rows,
            EXPENSE_SHEET_WIDTHS,
        ),
        Sheet(
            "By spender",
            ("Name", "Amount"),
            [(name, float(total)) for name, total in sorted(by_spender.items())],
        ),
        Sheet(
            "By category",
            ("Category", "Amount"),
            [(name, float(total)) for name, total in sorted(by_category.items())],
        ),
        Sheet(
            "By month",
            ("Month", "Total"),
            [(item.month, float(item.total)) for item in monthly_totals(expenses)],
        ),
    ]


def write_workbook(sheets: Sequence[Sheet], path: Union[str, Path]) -> Path:
    """Write sheets to an .xlsx file.

    Raises:
        ExportError: If the workbook could not be generated or saved
    """
    path = Path(path)
    try:
        wb = openpyxl.Workbook()
        wb.remove(wb.active)
        for sheet in sheets:
            ws = wb.create_sheet(sheet.title)
            ws.append(list(sheet.header))
            for cell in ws[1]:
                cell.font = Font(bold=True)
            for row in sheet.rows:
                ws.append(list(row))
            for index, width in enumerate(sheet.widths, start=1):
                ws.column_dimensions[get_column_letter(index)].width = width
        wb.save(path)
    except Exception as e:
        raise ExportError(f"Could not write workbook {path}: {e}")
    return path
