"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ExportError(DomainError):
    """Generating an export (CSV or workbook) failed."""


def expense_not_found(expense_id: str) -> str:
    """Return message for missing expense."""
    return f"Expense '{expense_id}' not found"


def missing_required_fields(fields: list[str]) -> str:
    """Return message listing required fields that were left empty."""
    return f"Please fill in the required fields: {', '.join(fields)}"


def invalid_amount(amount: str) -> str:
    """Return message for a zero or non-numeric amount."""
    return f"Amount must be a non-zero number, got '{amount}'"


def sharing_disabled() -> str:
    """Return message used when no remote store is configured."""
    return (
        "Sharing is disabled: set LEDGERBOOK_REMOTE_URL and LEDGERBOOK_REMOTE_KEY "
        "to enable households"
    )
