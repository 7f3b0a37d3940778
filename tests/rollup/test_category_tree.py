import pytest

from models.category import CategoryDescriptor
from models.category_node import CategoryKind
from rollup.category_tree import (
    CategoryTree,
    DuplicateCategoryError,
    calc_indent_level,
    short_name,
)
from tests.helpers import build_tree


class TestNameHelpers:
    """Tests for indent level and short name helpers."""

    def test_top_level_category_is_level_two(self):
        assert calc_indent_level("Groceries") == 2

    def test_each_separator_adds_a_level(self):
        assert calc_indent_level("Auto:Fuel") == 3
        assert calc_indent_level("Auto:Service:Oil") == 4

    def test_short_name(self):
        assert short_name("Auto:Service:Oil") == "Oil"
        assert short_name("Groceries") == "Groceries"


class TestCategoryTree:
    """Tests for CategoryTree."""

    def test_synthetic_rows(self):
        """Test that Root and section headers get the expected parents."""
        tree = CategoryTree()

        root = tree.add("Income-Expenses", CategoryKind.ROOT, 0)
        income = tree.add("Income", CategoryKind.INCOME, 1)
        expense = tree.add("Expenses", CategoryKind.EXPENSE, 1)

        assert root.parent_index is None
        assert income.parent_index == 0
        assert expense.parent_index == 0
        assert all(node.has_children for node in tree)
        assert tree.count() == 3

    def test_add_category_sets_names_and_level(self):
        """Test that a real category derives its short name and indent level."""
        tree = build_tree(expense=[("Auto", True), ("Auto:Fuel", False)])

        fuel = tree.get_by_key("Auto:Fuel", CategoryKind.EXPENSE)

        assert fuel.short_name == "Fuel"
        assert fuel.indent_level == 3
        assert fuel.category_id == 101
        assert fuel.parent_index == tree.index_of("Auto", CategoryKind.EXPENSE)
        assert not fuel.has_children

    def test_parents_follow_indentation(self):
        """Test parent indexes for a mixed income and expense hierarchy."""
        tree = build_tree(
            income=[("Salary", False), ("Investments", True), ("Investments:Dividends", False)],
            expense=[("Auto", True), ("Auto:Fuel", False), ("Groceries", False)],
        )

        parents = [node.parent_index for node in tree]

        # 0 Root, 1 Income, 2 Salary, 3 Investments, 4 Dividends,
        # 5 Expenses, 6 Auto, 7 Fuel, 8 Groceries
        assert parents == [None, 0, 1, 1, 3, 0, 5, 6, 5]

    def test_parent_is_always_earlier(self):
        """Test that no node refers to a later node."""
        tree = build_tree(
            income=[("Salary", False)],
            expense=[("A", True), ("A:B", True), ("A:B:C", False), ("D", False)],
        )

        for index, node in enumerate(tree):
            if node.parent_index is not None:
                assert node.parent_index < index

    def test_duplicate_rejected(self):
        """Test that adding the same full name and kind twice is rejected."""
        tree = build_tree(expense=[("Rent", False)])
        count = tree.count()

        with pytest.raises(DuplicateCategoryError) as exc_info:
            tree.add_category(
                CategoryDescriptor(999, "Rent", CategoryKind.EXPENSE, False)
            )

        assert tree.count() == count
        assert exc_info.value.full_name == "Rent"
        assert exc_info.value.kind is CategoryKind.EXPENSE
        assert tree.get_by_key("Rent", CategoryKind.EXPENSE).category_id == 100

    def test_duplicate_does_not_disturb_parents(self):
        """Test that a rejected rollup does not become a parent."""
        tree = build_tree(expense=[("Auto", False)])

        with pytest.raises(DuplicateCategoryError):
            tree.add_category(CategoryDescriptor(50, "Auto", CategoryKind.EXPENSE, True))
        groceries = tree.add_category(
            CategoryDescriptor(51, "Groceries", CategoryKind.EXPENSE, False)
        )

        assert groceries.parent_index == tree.index_of("Expenses", CategoryKind.EXPENSE)

    def test_same_name_different_kind_is_allowed(self):
        """Test that the key is the pair of full name and kind."""
        tree = build_tree(income=[("Refunds", False)], expense=[("Refunds", False)])

        income = tree.get_by_key("Refunds", CategoryKind.INCOME)
        expense = tree.get_by_key("Refunds", CategoryKind.EXPENSE)

        assert income is not expense
        assert tree.count() == 5

    def test_get_by_index(self):
        tree = build_tree(expense=[("Rent", False)])

        assert tree.get_by_index(3).full_name == "Rent"
        with pytest.raises(IndexError):
            tree.get_by_index(4)
        with pytest.raises(IndexError):
            tree.get_by_index(-1)

    def test_find_by_index_returns_none(self):
        tree = build_tree()

        assert tree.find_by_index(0).kind is CategoryKind.ROOT
        assert tree.find_by_index(10) is None

    def test_get_by_key_missing(self):
        tree = build_tree()

        assert tree.get_by_key("Nope", CategoryKind.EXPENSE) is None
        assert tree.get_by_key("Income", CategoryKind.EXPENSE) is None

    def test_children_of(self):
        tree = build_tree(expense=[("Auto", True), ("Auto:Fuel", False), ("Auto:Tolls", False)])

        names = [node.short_name for node in tree.children_of(3)]

        assert names == ["Fuel", "Tolls"]
