"""Category service for database operations."""

from typing import Dict, Iterator, List, Optional
from models.category import Category, CategoryDescriptor
from models.category_node import CategoryKind

_CATEGORY_SELECT_FIELDS = "id, name, kind, parent_id, inactive, hidden"


def _row_to_category(row) -> Category:
    return Category(
        id=row[0],
        name=row[1],
        kind=CategoryKind(row[2]),
        parent_id=row[3],
        inactive=bool(row[4]),
        hidden=bool(row[5]),
    )


class CategoryService:
    """Service for managing categories."""

    def __init__(self, db_manager):
        """Initialize the category service.

        Args:
            db_manager: Database manager instance for database operations.
        """
        self.db_manager = db_manager

    def find_all(self) -> List[Category]:
        """Get all categories from the database.

        Returns:
            List of Category objects, ordered by name.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"SELECT {_CATEGORY_SELECT_FIELDS} FROM categories ORDER BY name, id"
            )
            return [_row_to_category(row) for row in cursor.fetchall()]

    def find(self, category_id: int) -> Optional[Category]:
        """Get a single category by ID.

        Args:
            category_id: The category ID to find.

        Returns:
            Category object if found, None otherwise.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"SELECT {_CATEGORY_SELECT_FIELDS} FROM categories WHERE id = ?",
                (category_id,),
            )
            row = cursor.fetchone()

            if row:
                return _row_to_category(row)
            return None

    def children_of(self, parent_id: Optional[int]) -> List[Category]:
        """Get the direct sub-categories of a category, ordered by name.

        Args:
            parent_id: Parent category ID, or None for top-level categories.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"""
                SELECT {_CATEGORY_SELECT_FIELDS} FROM categories
                WHERE parent_id IS ?
                ORDER BY name, id
                """,
                (parent_id,),
            )
            return [_row_to_category(row) for row in cursor.fetchall()]

    def find_by_name(
        self, full_name: str, kind: Optional[CategoryKind] = None
    ) -> Optional[Category]:
        """Get a single category by its full name, e.g. "Auto:Fuel".

        Args:
            full_name: Colon separated path of the category.
            kind: Optional kind to narrow the search.

        Returns:
            Category object if found, None otherwise.
        """
        parent_id = None
        category = None
        for segment in full_name.split(":"):
            matches = [c for c in self.children_of(parent_id) if c.name == segment]
            if kind is not None:
                matches = [c for c in matches if c.kind == kind]
            if not matches:
                return None
            category = matches[0]
            parent_id = category.id
        return category

    def full_name(self, category: Category) -> str:
        """Build the colon separated full name of a category."""
        names = [category.name]
        parent_id = category.parent_id
        while parent_id is not None:
            parent = self.find(parent_id)
            if parent is None:
                break
            names.append(parent.name)
            parent_id = parent.parent_id
        return ":".join(reversed(names))

    def create(
        self,
        name: str,
        kind: CategoryKind,
        parent_id: Optional[int] = None,
        inactive: bool = False,
        hidden: bool = False,
    ) -> Category:
        """Create a new category.

        Args:
            name: Category name without parents; must not contain ':'.
            kind: CategoryKind.INCOME or CategoryKind.EXPENSE.
            parent_id: Optional parent category ID; the parent must have the same kind.
            inactive: Create the category as inactive.
            hidden: Create the category as hidden.

        Returns:
            The created Category object with id populated.

        Raises:
            ValueError: If the name, kind or parent is invalid.
        """
        if not name or ":" in name:
            raise ValueError(f"Invalid category name '{name}'")
        if kind not in (CategoryKind.INCOME, CategoryKind.EXPENSE):
            raise ValueError(f"Categories must be income or expense, not {kind.value}")
        if parent_id is not None:
            parent = self.find(parent_id)
            if parent is None:
                raise ValueError(f"Parent category with ID {parent_id} not found")
            if parent.kind != kind:
                raise ValueError(
                    f"Parent category '{parent.name}' is {parent.kind.value}, not {kind.value}"
                )

        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                """
                INSERT INTO categories (name, kind, parent_id, inactive, hidden)
                VALUES (?, ?, ?, ?, ?)
                """,
                (name, kind.value, parent_id, int(inactive), int(hidden)),
            )
            conn.commit()

            return Category(
                id=cursor.lastrowid,
                name=name,
                kind=kind,
                parent_id=parent_id,
                inactive=inactive,
                hidden=hidden,
            )

    def set_flags(
        self, category_id: int, inactive: bool = False, hidden: bool = False
    ) -> Category:
        """Update the inactive and hidden flags of a category.

        Raises:
            Exception: If category not found.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                "UPDATE categories SET inactive = ?, hidden = ? WHERE id = ?",
                (int(inactive), int(hidden), category_id),
            )
            conn.commit()

            if cursor.rowcount == 0:
                raise Exception(f"Category with ID {category_id} not found")

        return self.find(category_id)

    def delete(self, category_id: int) -> bool:
        """Delete a category by ID.

        Args:
            category_id: The category ID to delete.

        Returns:
            True if category was deleted, False if not found.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute("DELETE FROM categories WHERE id = ?", (category_id,))
            conn.commit()
            return cursor.rowcount > 0

    def walk(self, kind: CategoryKind) -> Iterator[CategoryDescriptor]:
        """Yield the reportable categories of one kind in hierarchical pre-order.

        Siblings are sorted by name. An inactive or hidden category is
        skipped together with all of its sub-categories.

        Args:
            kind: CategoryKind.INCOME or CategoryKind.EXPENSE.

        Yields:
            CategoryDescriptor for each reportable category.
        """
        children: Dict[Optional[int], List[Category]] = {}
        for category in self.find_all():
            children.setdefault(category.parent_id, []).append(category)

        def visit(category: Category, prefix: str):
            full_name = f"{prefix}:{category.name}" if prefix else category.name
            visible_children = [
                c for c in children.get(category.id, []) if c.visible
            ]
            yield CategoryDescriptor(
                category_id=category.id,
                full_name=full_name,
                kind=kind,
                has_children=bool(visible_children),
            )
            for child in visible_children:
                yield from visit(child, full_name)

        for category in children.get(None, []):
            if category.kind == kind and category.visible:
                yield from visit(category, "")
