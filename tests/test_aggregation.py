"""Tests for aggregation of expenses."""

from decimal import Decimal

from ledgerbook.domain.aggregation import (
    UNCATEGORIZED,
    UNSPECIFIED_SPENDER,
    build_report,
    distinct_categories,
    distinct_months,
    distinct_spenders,
    grand_total,
    group_totals,
    month_key,
    monthly_totals,
    spender_month_pivot,
)
from ledgerbook.domain.entities import GroupBy, MonthlyTotal


def test_group_totals_by_spender_sum_to_grand_total(make_expense):
    expenses = [
        make_expense("1", amount="10", spender="A"),
        make_expense("2", amount="5", spender="B"),
        make_expense("3", amount="3", spender="A"),
    ]

    totals = group_totals(expenses, GroupBy.SPENDER)

    assert totals == {"A": Decimal("13"), "B": Decimal("5")}
    assert grand_total(expenses) == Decimal("18")
    assert sum(totals.values()) == grand_total(expenses)


def test_group_totals_use_sentinels_for_empty_keys(make_expense):
    expenses = [
        make_expense("1", amount="4", spender="", category=""),
        make_expense("2", amount="6", spender="A", category="Food"),
    ]

    assert group_totals(expenses, GroupBy.SPENDER) == {
        UNSPECIFIED_SPENDER: Decimal("4"),
        "A": Decimal("6"),
    }
    assert group_totals(expenses, GroupBy.CATEGORY) == {
        UNCATEGORIZED: Decimal("4"),
        "Food": Decimal("6"),
    }


def test_empty_input_yields_empty_outputs():
    assert grand_total([]) == Decimal("0")
    assert group_totals([], GroupBy.CATEGORY) == {}
    assert monthly_totals([]) == []
    pivot = spender_month_pivot([])
    assert pivot.months == () and pivot.spenders == () and pivot.rows == ()


def test_month_key():
    assert month_key("2024-03-15") == "2024-03"
    assert month_key("not-a-date") == ""
    assert month_key("") == ""


def test_monthly_totals_are_ascending_and_skip_unparsable_dates(make_expense):
    expenses = [
        make_expense("1", date="2024-03-02", amount="1"),
        make_expense("2", date="2024-01-20", amount="2"),
        make_expense("3", date="not-a-date", amount="100"),
        make_expense("4", date="2024-03-30", amount="4"),
    ]

    assert monthly_totals(expenses) == [
        MonthlyTotal(month="2024-01", total=Decimal("2")),
        MonthlyTotal(month="2024-03", total=Decimal("5")),
    ]


def test_distinct_values_are_sorted_and_non_empty(make_expense):
    expenses = [
        make_expense("1", spender="Sam", category="Rent", date="2024-02-01"),
        make_expense("2", spender="Alex", category="", date="2024-01-01"),
        make_expense("3", spender="", category="Fuel", date="bad"),
        make_expense("4", spender="Sam", category="Fuel", date="2024-02-10"),
    ]

    assert distinct_spenders(expenses) == ["Alex", "Sam"]
    assert distinct_categories(expenses) == ["Fuel", "Rent"]
    assert distinct_months(expenses) == ["2024-01", "2024-02"]


def test_spender_month_pivot_fills_missing_cells_with_zero(make_expense):
    expenses = [
        make_expense("1", date="2024-01-05", spender="A", amount="10"),
        make_expense("2", date="2024-02-05", spender="B", amount="7"),
        make_expense("3", date="2024-02-06", spender="A", amount="1"),
        make_expense("4", date="2024-02-07", spender="", amount="50"),
    ]

    pivot = spender_month_pivot(expenses)

    assert pivot.months == ("2024-01", "2024-02")
    assert pivot.spenders == ("A", "B")
    assert pivot.rows[0].cells == {"A": Decimal("10"), "B": Decimal("0")}
    assert pivot.rows[1].cells == {"A": Decimal("1"), "B": Decimal("7")}


def test_build_report_collects_every_view(make_expense):
    expenses = [
        make_expense("1", date="2024-01-05", spender="A", category="Food", amount="10"),
        make_expense("2", date="2024-02-05", spender="B", category="Rent", amount="7"),
    ]

    report = build_report(expenses)

    assert report.expenses == tuple(expenses)
    assert report.grand_total == Decimal("17")
    assert report.by_category == {"Food": Decimal("10"), "Rent": Decimal("7")}
    assert [item.month for item in report.by_month] == ["2024-01", "2024-02"]
    assert report.spenders == ("A", "B")
    assert report.categories == ("Food", "Rent")
