"""
Derived view of the todo list.

build_view is a pure function of (todos, filter): it never touches the
list it is given and returns the same TodoView for the same inputs.
"""

from dataclasses import dataclass
from typing import Sequence, Tuple

from .models import Filter, Todo


@dataclass(frozen=True)
class TodoView:
    """What the front end shows for the current state"""
    filter: Filter
    items: Tuple[Todo, ...]
    active_count: int
    completed_count: int
    total: int

    @property
    def is_empty(self) -> bool:
        """True when the placeholder is shown instead of items"""
        return len(self.items) == 0

    @property
    def has_completed(self) -> bool:
        """True when the clear-completed action is available"""
        return self.completed_count > 0


def build_view(todos: Sequence[Todo], filter: Filter = Filter.ALL) -> TodoView:
    """
    Compute the derived view for a list and filter

    Args:
        todos: Full todo list
        filter: Active filter

    Returns:
        TodoView with filtered items and counts over the full list
    """
    items = tuple(todo for todo in todos if filter.matches(todo))
    active_count = sum(1 for todo in todos if not todo.is_done)
    total = len(todos)

    return TodoView(
        filter=filter,
        items=items,
        active_count=active_count,
        completed_count=total - active_count,
        total=total,
    )
