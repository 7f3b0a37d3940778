from datetime import date

import pytest

from models.category_node import CategoryKind
from models.report import Report, SubtotalBy
from models.transaction import Transaction
from rollup.diagnostics import DiagnosticKind
from tests.helpers import assert_rollups_consistent

INCOME = CategoryKind.INCOME
EXPENSE = CategoryKind.EXPENSE


def add_transaction(services, category, day, amount):
    services.transactions.create(
        Transaction.create_with_checksum(
            raw_data=f"{day.isoformat()},{category.id},{amount}",
            category_id=category.id,
            transaction_date=day,
            amount=amount,
        )
    )


def year_report(**kwargs):
    return Report(budget_name="Budget", year=2025, start_month=1, end_month=12, **kwargs)


@pytest.fixture
def household(services):
    """Salary, Auto:Fuel, Auto:Insurance and Rent with budgets and transactions."""
    budget = services.budgets.create("Budget")
    cats = services.categories

    salary = cats.create("Salary", INCOME)
    auto = cats.create("Auto", EXPENSE)
    fuel = cats.create("Fuel", EXPENSE, parent_id=auto.id)
    insurance = cats.create("Insurance", EXPENSE, parent_id=auto.id)
    rent = cats.create("Rent", EXPENSE)

    for month in (1, 2, 3):
        services.budgets.set_amount(budget.id, salary.id, 2025, month, 300000)
        services.budgets.set_amount(budget.id, rent.id, 2025, month, 120000)
        services.budgets.set_amount(budget.id, fuel.id, 2025, month, 15000)
    services.budgets.set_amount(budget.id, insurance.id, 2025, 1, 60000)

    add_transaction(services, salary, date(2025, 1, 31), 310000)
    add_transaction(services, salary, date(2025, 2, 28), 300000)
    add_transaction(services, rent, date(2025, 1, 1), -120000)
    add_transaction(services, fuel, date(2025, 1, 10), -4000)
    add_transaction(services, fuel, date(2025, 1, 24), -5500)
    add_transaction(services, fuel, date(2025, 2, 7), 1000)
    add_transaction(services, insurance, date(2025, 1, 15), -58000)
    add_transaction(services, rent, date(2024, 12, 1), -120000)

    return budget


class TestReportBuild:
    """Tests for ReportService.build."""

    def test_row_order_and_parents(self, services, household):
        built = services.reports.build(year_report())

        rows = [(n.full_name, n.indent_level, n.parent_index) for n in built.tree]
        assert rows == [
            ("Income-Expenses", 0, None),
            ("Income", 1, 0),
            ("Salary", 2, 1),
            ("Expenses", 1, 0),
            ("Auto", 2, 3),
            ("Auto:Fuel", 3, 4),
            ("Auto:Insurance", 3, 4),
            ("Rent", 2, 3),
        ]
        assert not built.diagnostics

    def test_budget_rollup(self, services, household):
        built = services.reports.build(year_report())
        tree = built.tree

        assert tree.get_by_key("Auto", EXPENSE).budget_month(1) == 75000
        assert tree.get_by_key("Expenses", EXPENSE).budget_total == 3 * 120000 + 3 * 15000 + 60000
        assert tree.get_by_index(0).budget_month(1) == 300000 - 120000 - 75000
        assert_rollups_consistent(tree)

    def test_actual_rollup(self, services, household):
        built = services.reports.build(year_report())
        tree = built.tree

        assert tree.get_by_key("Salary", INCOME).actual_month(1) == 310000
        assert tree.get_by_key("Auto:Fuel", EXPENSE).actual_month(1) == 9500
        assert tree.get_by_key("Auto:Fuel", EXPENSE).actual_month(2) == -1000
        assert tree.get_by_key("Auto", EXPENSE).actual_month(1) == 9500 + 58000
        # December 2024 rent is outside the report year
        assert tree.get_by_key("Rent", EXPENSE).actual_total == 120000
        assert tree.get_by_index(0).actual_month(1) == 310000 - 120000 - 67500
        assert_rollups_consistent(tree)

    def test_report_range_limits_values(self, services, household):
        built = services.reports.build(
            Report(budget_name="Budget", year=2025, start_month=2, end_month=3)
        )
        salary = built.tree.get_by_key("Salary", INCOME)

        assert salary.budget_month(1) == 0
        assert salary.budget_total == 600000
        assert salary.actual_total == 300000

    def test_projection_uses_report(self, services, household):
        built = services.reports.build(year_report(subtotal_by=SubtotalBy.MONTH))

        assert built.projection.column_count() == 12 * 3 + 1 + 3
        rent = built.tree.get_by_key("Rent", EXPENSE)
        assert built.projection.cell_value(rent, 1) == 120000

    def test_hidden_category_left_out(self, services, household):
        rent = services.categories.find_by_name("Rent")
        services.categories.set_flags(rent.id, hidden=True)

        built = services.reports.build(year_report())

        assert built.tree.get_by_key("Rent", EXPENSE) is None
        assert built.tree.get_by_key("Expenses", EXPENSE).actual_month(1) == 67500

    def test_duplicate_category_reported_and_skipped(self, services, household):
        services.categories.create("Rent", EXPENSE)

        built = services.reports.build(year_report())

        duplicates = built.diagnostics.of_kind(DiagnosticKind.DUPLICATE_CATEGORY)
        assert len(duplicates) == 1
        assert "Rent" in duplicates[0].message
        assert [n.full_name for n in built.tree].count("Rent") == 1

    def test_duplicate_rollup_skips_its_children(self, services, household):
        """Test that sub-categories of a rejected duplicate are left out."""
        second_auto = services.categories.create("Auto", EXPENSE)
        tires = services.categories.create("Tires", EXPENSE, parent_id=second_auto.id)
        add_transaction(services, tires, date(2025, 1, 5), -40000)

        built = services.reports.build(year_report())
        tree = built.tree

        assert tree.get_by_key("Auto:Tires", EXPENSE) is None
        for node in tree:
            if node.parent_index is not None:
                parent = tree.get_by_index(node.parent_index)
                assert parent.indent_level == node.indent_level - 1, node.full_name

        messages = [
            d.message
            for d in built.diagnostics.of_kind(DiagnosticKind.DUPLICATE_CATEGORY)
        ]
        assert len(messages) == 2
        assert any("Auto:Tires" in m for m in messages)

        # Rows after the skipped subtree attach normally
        rent = tree.get_by_key("Rent", EXPENSE)
        assert tree.get_by_index(rent.parent_index).full_name == "Expenses"
        assert tree.get_by_key("Expenses", EXPENSE).actual_month(1) == 67500 + 120000
        assert_rollups_consistent(tree)

    def test_rebuild_starts_fresh(self, services, household):
        first = services.reports.build(year_report())
        second = services.reports.build(year_report())

        assert first.tree is not second.tree
        assert second.tree.get_by_index(0).actual_total == first.tree.get_by_index(0).actual_total

    def test_unknown_budget(self, services, household):
        with pytest.raises(ValueError, match="Budget 'Missing' not found"):
            services.reports.build(Report(budget_name="Missing", year=2025))

    def test_empty_store(self, services):
        services.budgets.create("Budget")

        built = services.reports.build(year_report())

        assert [n.full_name for n in built.tree] == ["Income-Expenses", "Income", "Expenses"]


class TestUpdateBudget:
    """Tests for ReportService.update_budget."""

    def test_edit_rolls_up_and_persists(self, services, household):
        built = services.reports.build(year_report())
        row = built.tree.index_of("Auto:Fuel", EXPENSE)
        root = built.tree.get_by_index(0)
        root_before = root.budget_month(2)

        node = services.reports.update_budget(built, row, 2, 20000)

        assert node.budget_month(2) == 20000
        assert built.tree.get_by_key("Auto", EXPENSE).budget_month(2) == 20000
        assert root.budget_month(2) == root_before - 5000
        assert_rollups_consistent(built.tree)

        fuel = services.categories.find_by_name("Auto:Fuel")
        assert services.budgets.get_amount(household.id, fuel.id, 2025, 2) == 20000

    def test_edit_rollup_row_rejected(self, services, household):
        built = services.reports.build(year_report())
        row = built.tree.index_of("Auto", EXPENSE)

        with pytest.raises(ValueError, match="rollup"):
            services.reports.update_budget(built, row, 1, 100)

    def test_edit_outside_range_rejected(self, services, household):
        built = services.reports.build(
            Report(budget_name="Budget", year=2025, start_month=1, end_month=3)
        )
        row = built.tree.index_of("Rent", EXPENSE)

        with pytest.raises(ValueError, match="outside the report range"):
            services.reports.update_budget(built, row, 6, 100)

    def test_edit_unknown_row(self, services, household):
        built = services.reports.build(year_report())

        with pytest.raises(IndexError):
            services.reports.update_budget(built, 99, 1, 100)
