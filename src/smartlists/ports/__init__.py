"""Ports - interfaces/protocols for external dependencies."""

from .todo_repo import TodoRepository

__all__ = [
    "TodoRepository",
]
