"""Shared workflow layer between the CLI and the todo store.

Each function loads todos and custom lists from the store, then hands them to the
pure engine in smartlists.core.
"""

import time
from dataclasses import replace
from datetime import date

from .adapters.json_store import JsonTodoStore
from .config import Config
from .ports.todo_repo import TodoRepository
from .core.filters import (
    ListFilter,
    SmartList,
    SortCriteria,
    all_smart_lists,
    apply_filter,
    find_smart_list,
    search_todos,
)
from .core.summary import ListSummary, summarize_lists
from .core.todos import Todo


class ListNotFoundError(Exception):
    """Raised when a smart list id matches neither a system nor a custom list."""

    pass


def get_store(config: Config) -> TodoRepository:
    """Resolve the todo store from config."""
    return JsonTodoStore(config.data_path)


def list_overview(config: Config, as_of: date | None = None) -> list[ListSummary]:
    """Every smart list with its badge count."""
    store = get_store(config)
    todos = store.fetch_todos()
    lists = all_smart_lists(store.fetch_smart_lists())
    return summarize_lists(todos, lists, as_of)


def resolve_list(config: Config, list_id: str) -> SmartList:
    """Look up a system or custom list by id."""
    lists = all_smart_lists(get_store(config).fetch_smart_lists())
    smart_list = find_smart_list(lists, list_id)
    if smart_list is None:
        raise ListNotFoundError(f"No smart list with id '{list_id}'")
    return smart_list


def show_list(config: Config, list_id: str, as_of: date | None = None) -> tuple[SmartList, list[Todo]]:
    """The smart list and its filtered, sorted todos."""
    smart_list = resolve_list(config, list_id)
    todos = get_store(config).fetch_todos()
    return smart_list, apply_filter(todos, smart_list.filters, smart_list.sort_by, as_of)


def run_query(
    config: Config,
    filters: ListFilter,
    sort_by: SortCriteria | None = None,
    as_of: date | None = None,
) -> list[Todo]:
    """Ad-hoc filter over all todos; sort falls back to the configured default."""
    todos = get_store(config).fetch_todos()
    return apply_filter(todos, filters, sort_by or config.default_sort, as_of)


def run_search(config: Config, query: str) -> list[Todo]:
    return search_todos(get_store(config).fetch_todos(), query)


def create_custom_list(
    config: Config,
    name: str,
    filters: ListFilter,
    sort_by: SortCriteria | None = None,
    icon: str = "📋",
    color: str = "#3182F6",
) -> SmartList:
    """Build a custom list after the existing ones and store it."""
    store = get_store(config)
    existing = store.fetch_smart_lists()
    now_ms = int(time.time() * 1000)
    smart_list = SmartList(
        id=f"custom_{now_ms}",
        name=name,
        icon=icon,
        color=color,
        filters=filters,
        sort_by=sort_by or config.default_sort,
        is_system=False,
        order=max((s.order for s in existing), default=-1) + 1,
        created_at=now_ms,
    )
    store.add_smart_list(smart_list)
    return smart_list


def delete_custom_list(config: Config, list_id: str) -> None:
    """Delete a custom list; unknown ids are an error."""
    store = get_store(config)
    if find_smart_list(store.fetch_smart_lists(), list_id) is None:
        # Unknown ids raise here; system ids reach the store, which rejects them.
        resolve_list(config, list_id)
    store.delete_smart_list(list_id)


def edit_custom_list(config: Config, list_id: str, **changes) -> SmartList:
    """
    Replace fields of a custom list and store it.

    changes maps SmartList field names to new values; None values are skipped.
    """
    store = get_store(config)
    smart_list = find_smart_list(store.fetch_smart_lists(), list_id)
    if smart_list is None:
        # Unknown ids raise here; system lists are rejected by the store.
        smart_list = resolve_list(config, list_id)
    updated = replace(smart_list, **{k: v for k, v in changes.items() if v is not None})
    store.update_smart_list(updated)
    return updated
