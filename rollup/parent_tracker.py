"""Parent resolution for categories appended in hierarchical pre-order.

Categories arrive as a flat sequence of (indent level, has children) pairs.
The tracker keeps a stack of saved (level, parent) frames so that each new
row can be attached to the right earlier row in a single forward pass.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from rollup.diagnostics import Diagnostics

NO_PARENT = -1


@dataclass
class ParentFrame:
    level: int
    parent_index: int


@dataclass
class ParentTracker:
    """Tracks the parent row for each indent level while a tree is built.

    Attributes:
        current_child_level: Indent level expected for the next child.
        current_parent_index: Row index children attach to.
        stack: Saved frames, the last item is the top.
        diagnostics: Where missing frames are reported.
    """

    current_child_level: int = 0
    current_parent_index: int = NO_PARENT
    stack: List[ParentFrame] = field(default_factory=list)
    diagnostics: Optional[Diagnostics] = None

    def resolve_parent(
        self, indent_level: int, has_children: bool, next_index: int
    ) -> int:
        """Return the parent row index for the next row.

        Must be called once per row, in the order rows are appended.

        Args:
            indent_level: Indent level of the incoming row.
            has_children: True if the incoming row has children.
            next_index: Row index the incoming row will occupy.

        Returns:
            Parent row index, or NO_PARENT (-1) for the first row.
        """
        if indent_level < self.current_child_level:
            self._restore(indent_level)

        parent = self.current_parent_index

        if has_children:
            self.stack.append(
                ParentFrame(self.current_child_level, self.current_parent_index)
            )
            self.current_parent_index = next_index
            self.current_child_level = indent_level + 1

        return parent

    def _restore(self, indent_level: int) -> None:
        # The matching frame stays on the stack for later siblings
        while self.stack:
            top = self.stack[-1]
            if top.level == indent_level:
                self.current_child_level = top.level
                self.current_parent_index = top.parent_index
                return
            self.stack.pop()

        if self.diagnostics is not None:
            self.diagnostics.missing_parent_frame(indent_level)
