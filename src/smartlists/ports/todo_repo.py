"""Todo repository interface."""

from typing import Protocol

from smartlists.core.filters import SmartList
from smartlists.core.todos import Todo


class TodoRepository(Protocol):
    """Interface for loading todos and custom smart lists from any backend."""

    def fetch_todos(self) -> list[Todo]:
        """Fetch all todos."""
        ...

    def fetch_smart_lists(self) -> list[SmartList]:
        """Fetch user-defined smart lists."""
        ...

    def add_smart_list(self, smart_list: SmartList) -> None:
        """Store a new custom smart list."""
        ...

    def update_smart_list(self, smart_list: SmartList) -> None:
        """Replace the custom smart list with the same id."""
        ...

    def delete_smart_list(self, list_id: str) -> None:
        """Remove a custom smart list by id."""
        ...
