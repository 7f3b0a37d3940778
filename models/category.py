"""Category model for budget categories stored in the database."""

from dataclasses import dataclass
from typing import Optional

from models.category_node import CategoryKind


@dataclass
class Category:
    """Represents a user-defined budget category.

    Attributes:
        id: Unique identifier (auto-generated).
        name: Category name without its parents, e.g. "Fuel".
        kind: CategoryKind.INCOME or CategoryKind.EXPENSE.
        parent_id: Optional parent category ID for hierarchical categories.
        inactive: Inactive categories (and their sub-categories) are not reported.
        hidden: Hidden categories (and their sub-categories) are not reported.
    """

    id: int
    name: str
    kind: CategoryKind
    parent_id: Optional[int] = None
    inactive: bool = False
    hidden: bool = False

    @property
    def visible(self) -> bool:
        return not self.inactive and not self.hidden


@dataclass
class CategoryDescriptor:
    """A category as presented to the category tree.

    Attributes:
        category_id: Store ID of the category.
        full_name: Colon separated path, e.g. "Auto:Fuel".
        kind: CategoryKind of the category.
        has_children: True if at least one active, visible sub-category exists.
    """

    category_id: int
    full_name: str
    kind: CategoryKind
    has_children: bool
