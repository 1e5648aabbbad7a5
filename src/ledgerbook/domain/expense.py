"""Expense domain service: validated user actions on the ledger store."""

from datetime import date as date_type
from decimal import Decimal
from typing import Optional, Union

from ledgerbook.domain.csv_codec import decode_csv, encode_csv, export_filename
from ledgerbook.domain.entities import Expense, ImportResult, generate_expense_id
from ledgerbook.domain.errors import (
    NotFoundError,
    ValidationError,
    expense_not_found,
    invalid_amount,
    missing_required_fields,
)
from ledgerbook.domain.filters import ExpenseFilter, filter_expenses
from ledgerbook.domain.store import LedgerStore
from ledgerbook.utils.amount_parser import parse_amount
from ledgerbook.utils.date_parser import parse_date

AmountInput = Union[str, int, float, Decimal]
DateInput = Union[str, date_type]


class ExpenseService:
    """Service for adding, editing, deleting, importing and exporting expenses."""

    def __init__(self, store: LedgerStore):
        """Initialize expense service.

        Args:
            store: Ledger store all mutations go through
        """
        self.store = store

    def build_expense(
        self,
        expense_id: str,
        date: Optional[DateInput],
        category: Optional[str],
        amount: Optional[AmountInput],
        spender: Optional[str],
        from_: Optional[str] = "",
        to: Optional[str] = "",
        note: Optional[str] = "",
    ) -> Expense:
        """Validate submitted fields and build an expense.

        Raises:
            ValidationError: If a required field is empty, the date does not
                parse, or the amount is zero or not a number
        """
        category = (category or "").strip()
        spender = (spender or "").strip()
        raw_amount = "" if amount is None else str(amount).strip()

        missing = [
            name
            for name, value in (
                ("date", date),
                ("amount", raw_amount),
                ("category", category),
                ("spender", spender),
            )
            if not value
        ]
        if missing:
            raise ValidationError(missing_required_fields(missing))

        if isinstance(date, date_type):
            iso_date = date.isoformat()
        else:
            try:
                iso_date = parse_date(date).isoformat()
            except ValueError as e:
                raise ValidationError(f"Invalid date: {e}")

        try:
            parsed_amount = parse_amount(raw_amount)
        except ValueError:
            raise ValidationError(invalid_amount(raw_amount))
        if parsed_amount == 0:
            raise ValidationError(invalid_amount(raw_amount))

        return Expense(
            id=expense_id,
            date=iso_date,
            category=category,
            amount=parsed_amount,
            spender=spender,
            from_=(from_ or "").strip(),
            to=(to or "").strip(),
            note=(note or "").strip(),
        )

    def add_expense(
        self,
        date: Optional[DateInput],
        category: Optional[str],
        amount: Optional[AmountInput],
        spender: Optional[str],
        from_: Optional[str] = "",
        to: Optional[str] = "",
        note: Optional[str] = "",
    ) -> Expense:
        """Validate and record a new expense under a fresh id."""
        expense = self.build_expense(
            generate_expense_id(), date, category, amount, spender, from_, to, note
        )
        self.store.upsert(expense)
        return expense

    def edit_expense(self, expense_id: str, **changes) -> Expense:
        """Replace an existing expense with an edited copy.

        Fields not given keep their current values; the result is validated
        like a new submission and replaces the stored record as a whole.

        Raises:
            NotFoundError: If no expense has this id
            ValidationError: If the edited record is invalid
        """
        current = self.store.get(expense_id)
        if current is None:
            raise NotFoundError(expense_not_found(expense_id))

        unknown = set(changes) - {"date", "category", "amount", "spender", "from_", "to", "note"}
        if unknown:
            raise ValidationError(f"Unknown expense fields: {', '.join(sorted(unknown))}")

        fields = {
            "date": current.date,
            "category": current.category,
            "amount": current.amount,
            "spender": current.spender,
            "from_": current.from_,
            "to": current.to,
            "note": current.note,
        }
        fields.update({key: value for key, value in changes.items() if value is not None})
        expense = self.build_expense(expense_id, **fields)
        self.store.upsert(expense)
        return expense

    def delete_expense(self, expense_id: str) -> bool:
        """Delete an expense. Returns False (and changes nothing) if it was absent."""
        existed = self.store.get(expense_id) is not None
        self.store.delete(expense_id)
        return existed

    def list_expenses(self, criteria: Optional[ExpenseFilter] = None) -> list[Expense]:
        """Return the working set narrowed by criteria, newest first."""
        return filter_expenses(self.store.expenses, criteria)

    def import_csv(self, text: str) -> ImportResult:
        """Merge CSV content into the ledger by id.

        Imported rows whose id already exists replace that expense entirely;
        new ids are added. The merge goes through the store, so it is
        replicated like any other local mutation.
        """
        expenses = decode_csv(text)
        existing_ids = {expense.id for expense in self.store.expenses}
        incoming_ids = {expense.id for expense in expenses}
        updated = len(incoming_ids & existing_ids)
        self.store.upsert_many(expenses)
        return ImportResult(
            imported=len(incoming_ids) - updated,
            updated=updated,
            total=len(self.store),
        )

    def export_csv(self, today: Optional[date_type] = None) -> tuple[str, str]:
        """Return the CSV text of the whole working set and a suggested file name."""
        return encode_csv(self.store.expenses), export_filename("csv", today)
