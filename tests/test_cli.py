"""End-to-end tests of the command-line interface."""

import re

import openpyxl
import pytest

from ledgerbook.cli.main import cli

LOCAL_ENV = {"LEDGERBOOK_REMOTE_URL": None, "LEDGERBOOK_REMOTE_KEY": None, "LEDGERBOOK_DB_PATH": None}


@pytest.fixture
def run(cli_runner, db_path):
    """Invoke the CLI against a fresh local database."""

    def _run(*args, env=None, path=None):
        return cli_runner.invoke(cli, ["--db-path", path or db_path, *args], env={**LOCAL_ENV, **(env or {})})

    return _run


def _added_id(result):
    match = re.search(r"Added expense (\w+):", result.output)
    assert match, result.output
    return match.group(1)


def test_add_list_and_summary(run):
    result = run("add", "--date", "2024-03-01", "--category", "Groceries", "--amount", "12,50", "--spender", "Sam", "--to", "Market")
    assert result.exit_code == 0, result.output
    assert "Added expense" in result.output

    run("add", "--date", "2024-03-05", "--category", "Fuel", "--amount", "40", "--spender", "Alex")

    result = run("list")
    assert result.exit_code == 0, result.output
    assert "Found 2 expense(s)" in result.output
    assert result.output.index("Fuel") < result.output.index("Groceries")
    assert "Total: 52.50" in result.output

    result = run("list", "--spender", "Sam", "--verbose")
    assert "Found 1 expense(s)" in result.output
    assert "To: Market" in result.output

    result = run("summary", "--by", "spender")
    assert result.exit_code == 0, result.output
    assert "Alex" in result.output and "Sam" in result.output
    assert "52.50" in result.output

    result = run("summary", "--by", "pivot")
    assert "2024-03" in result.output


def test_add_rejects_invalid_amount(run):
    result = run("add", "--category", "Food", "--amount", "0", "--spender", "Sam")

    assert result.exit_code == 1
    assert "Error: Amount must be a non-zero number" in result.output
    assert "No expenses found." in run("list").output


def test_list_rejects_conflicting_periods(run):
    result = run("list", "--this-month", "--last-month")

    assert result.exit_code == 1
    assert "Only one period option" in result.output


def test_edit_and_delete(run):
    expense_id = _added_id(run("add", "--date", "2024-03-01", "--category", "Food", "--amount", "5", "--spender", "Sam"))

    result = run("edit", expense_id, "--amount", "7.25", "--note", "corrected")
    assert result.exit_code == 0, result.output
    assert "7.25" in result.output

    result = run("edit", "nope", "--amount", "1")
    assert result.exit_code == 1
    assert "Expense 'nope' not found" in result.output

    assert f"Deleted expense {expense_id}" in run("delete", expense_id).output
    result = run("delete", expense_id)
    assert result.exit_code == 0
    assert "nothing to delete" in result.output


def test_import_and_export_csv(run, tmp_path):
    source = tmp_path / "in.csv"
    source.write_text('id,date,amount,category,spender,note\nx1,2024-01-05,"12,50",Food,Sam,"a, b"\nx2,2024-01-06,3,Fuel,Alex,\n', encoding="utf-8")

    result = run("import", str(source))
    assert result.exit_code == 0, result.output
    assert "Added: 2 expenses" in result.output

    result = run("import", str(source))
    assert "Replaced: 2 expenses" in result.output
    assert "Total in ledger: 2" in result.output

    target = tmp_path / "out.csv"
    result = run("export", "csv", "--output", str(target))
    assert result.exit_code == 0, result.output
    lines = target.read_text(encoding="utf-8").split("\n")
    assert lines[0] == '"id","date","from","to","category","amount","spender","note"'
    assert lines[1] == '"x2","2024-01-06","","","Fuel","3","Alex",""'
    assert lines[2] == '"x1","2024-01-05","","","Food","12.50","Sam","a, b"'


def test_export_xlsx_uses_filters(run, tmp_path):
    run("add", "--date", "2024-03-01", "--category", "Food", "--amount", "5", "--spender", "Sam")
    run("add", "--date", "2024-03-02", "--category", "Rent", "--amount", "500", "--spender", "Alex")

    target = tmp_path / "report.xlsx"
    result = run("export", "xlsx", "--spender", "Sam", "--output", str(target))
    assert result.exit_code == 0, result.output
    assert "Exported 1 expenses" in result.output

    wb = openpyxl.load_workbook(target)
    assert wb["Expenses"].max_row == 2
    assert wb["By spender"]["A2"].value == "Sam"


def test_household_without_sharing(run):
    run("add", "--date", "2024-03-01", "--category", "Food", "--amount", "5", "--spender", "Sam")

    result = run("household", "show")
    assert "No household set" in result.output
    assert "Sharing is disabled" in result.output

    result = run("household", "set", "Home")
    assert result.exit_code == 0, result.output
    assert "Switched to household Home (0 expenses)" in result.output
    assert "Household: Home" in run("household", "show").output
    assert "Already using household Home" in run("household", "set", "Home").output

    assert "Household cleared" in run("household", "clear").output

    result = run("sync")
    assert result.exit_code == 1
    assert "Sharing is disabled" in result.output


def test_household_sharing_between_two_ledgers(run, tmp_path):
    shared_env = {
        "LEDGERBOOK_REMOTE_URL": f"sqlite:///{tmp_path / 'shared.db'}",
        "LEDGERBOOK_REMOTE_KEY": "household-key",
    }
    first = str(tmp_path / "first.db")
    second = str(tmp_path / "second.db")

    assert run("household", "set", "family", env=shared_env, path=first).exit_code == 0
    result = run("add", "--date", "2024-04-01", "--category", "Food", "--amount", "9", "--spender", "Sam", env=shared_env, path=first)
    assert result.exit_code == 0, result.output

    result = run("household", "set", "family", env=shared_env, path=second)
    assert "Switched to household family (1 expenses)" in result.output

    run("add", "--date", "2024-04-02", "--category", "Fuel", "--amount", "30", "--spender", "Alex", env=shared_env, path=second)

    result = run("sync", env=shared_env, path=first)
    assert result.exit_code == 0, result.output
    assert "Synced household family (2 expenses)" in result.output
    assert "Found 2 expense(s)" in run("list", env=shared_env, path=first).output
