"""Insertion-ordered category tree built in a single forward pass."""

from typing import Dict, Iterator, List, Optional, Tuple

from models.category import CategoryDescriptor
from models.category_node import CategoryKind, CategoryNode
from rollup.diagnostics import Diagnostics
from rollup.parent_tracker import NO_PARENT, ParentTracker

SEPARATOR = ":"

# Levels 0 and 1 belong to the Root row and the Income/Expense headers
FIRST_CATEGORY_LEVEL = 2


class DuplicateCategoryError(Exception):
    """Raised when a (full name, kind) pair is added to a tree twice."""

    def __init__(self, full_name: str, kind: CategoryKind):
        super().__init__(f"Category '{full_name}' ({kind.value}) already exists")
        self.full_name = full_name
        self.kind = kind


def calc_indent_level(full_name: str) -> int:
    """Indent level of a real category, e.g. 3 for "Auto:Fuel"."""
    return FIRST_CATEGORY_LEVEL + full_name.count(SEPARATOR)


def short_name(full_name: str) -> str:
    """Last path segment of a full name, e.g. "Fuel" for "Auto:Fuel"."""
    return full_name.rsplit(SEPARATOR, 1)[-1]


class CategoryTree:
    """Flat arena of report rows with an index by (full name, kind).

    Rows must be added as Root, Income header, Income categories in
    pre-order, Expense header, Expense categories in pre-order. A row's
    index never changes for the life of the tree and is the value stored
    in its children's parent_index.

    Args:
        diagnostics: Optional collector shared with the caller.
    """

    def __init__(self, diagnostics: Optional[Diagnostics] = None):
        self.diagnostics = diagnostics if diagnostics is not None else Diagnostics()
        self._nodes: List[CategoryNode] = []
        self._index: Dict[Tuple[str, CategoryKind], int] = {}
        self._tracker = ParentTracker(diagnostics=self.diagnostics)

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[CategoryNode]:
        return iter(self._nodes)

    def count(self) -> int:
        return len(self._nodes)

    def nodes(self) -> List[CategoryNode]:
        return list(self._nodes)

    def add(
        self,
        full_name: str,
        kind: CategoryKind,
        indent_level: int,
        has_children: bool = True,
    ) -> CategoryNode:
        """Add a synthetic row (Root, Income or Expense header).

        Raises:
            DuplicateCategoryError: If (full_name, kind) is already present.
        """
        return self._append(
            short_name=full_name,
            full_name=full_name,
            kind=kind,
            indent_level=indent_level,
            has_children=has_children,
        )

    def add_category(self, descriptor: CategoryDescriptor) -> CategoryNode:
        """Add a real category.

        Args:
            descriptor: The category's full name, kind and has-children flag.

        Returns:
            The new node.

        Raises:
            DuplicateCategoryError: If (full_name, kind) is already present.
                The tree is left unchanged.
        """
        return self._append(
            short_name=short_name(descriptor.full_name),
            full_name=descriptor.full_name,
            kind=descriptor.kind,
            indent_level=calc_indent_level(descriptor.full_name),
            has_children=descriptor.has_children,
            category_id=descriptor.category_id,
        )

    def _append(
        self,
        short_name: str,
        full_name: str,
        kind: CategoryKind,
        indent_level: int,
        has_children: bool,
        category_id: Optional[int] = None,
    ) -> CategoryNode:
        key = (full_name, kind)
        if key in self._index:
            raise DuplicateCategoryError(full_name, kind)

        next_index = len(self._nodes)
        parent = self._tracker.resolve_parent(indent_level, has_children, next_index)

        node = CategoryNode(
            short_name=short_name,
            full_name=full_name,
            kind=kind,
            indent_level=indent_level,
            has_children=has_children,
            parent_index=None if parent == NO_PARENT else parent,
            category_id=category_id,
        )
        self._nodes.append(node)
        self._index[key] = next_index
        return node

    def get_by_index(self, index: int) -> CategoryNode:
        """Get the row at index.

        Raises:
            IndexError: If there is no such row.
        """
        if not 0 <= index < len(self._nodes):
            raise IndexError(f"Row {index} out of range (0-{len(self._nodes) - 1})")
        return self._nodes[index]

    def find_by_index(self, index: int) -> Optional[CategoryNode]:
        """Get the row at index, or None if there is no such row."""
        if 0 <= index < len(self._nodes):
            return self._nodes[index]
        return None

    def get_by_key(self, full_name: str, kind: CategoryKind) -> Optional[CategoryNode]:
        """Get a row by full name and kind, or None if absent."""
        index = self._index.get((full_name, kind))
        if index is None:
            return None
        return self._nodes[index]

    def index_of(self, full_name: str, kind: CategoryKind) -> Optional[int]:
        return self._index.get((full_name, kind))

    def children_of(self, index: int) -> List[CategoryNode]:
        return [node for node in self._nodes if node.parent_index == index]
