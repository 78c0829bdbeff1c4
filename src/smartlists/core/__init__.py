"""Functional core - pure business logic with no I/O."""

from .todos import Priority, RepeatConfig, RepeatType, Subtask, Todo, parse_date
from .filters import (
    DateRange,
    DateRangeType,
    ListFilter,
    SmartList,
    SortCriteria,
    TodoStatus,
    all_smart_lists,
    apply_filter,
    create_system_lists,
    find_smart_list,
    get_todo_count,
    search_todos,
)
from .summary import ListSummary, format_todo_line, summarize_lists

__all__ = [
    # Todos
    "Priority",
    "RepeatConfig",
    "RepeatType",
    "Subtask",
    "Todo",
    "parse_date",
    # Filters
    "DateRange",
    "DateRangeType",
    "ListFilter",
    "SmartList",
    "SortCriteria",
    "TodoStatus",
    "all_smart_lists",
    "apply_filter",
    "create_system_lists",
    "find_smart_list",
    "get_todo_count",
    "search_todos",
    # Summary
    "ListSummary",
    "format_todo_line",
    "summarize_lists",
]
