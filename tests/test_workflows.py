"""Tests for the shared workflow layer."""

import json
from datetime import date
from unittest.mock import patch

import pytest

from smartlists.adapters.json_store import ReadOnlyListError
from smartlists.config import Config
from smartlists.core.filters import ListFilter, SortCriteria
from smartlists.core.todos import Priority
from smartlists.workflows import (
    ListNotFoundError,
    create_custom_list,
    delete_custom_list,
    edit_custom_list,
    get_store,
    list_overview,
    resolve_list,
    run_query,
    run_search,
    show_list,
)


@pytest.fixture
def today():
    return date(2025, 1, 15)


@pytest.fixture
def config(tmp_path):
    path = tmp_path / "todos.json"
    path.write_text(
        json.dumps(
            {
                "todos": [
                    {"id": "1", "title": "Buy milk", "priority": "HIGH", "dueDate": "2025-01-15", "createdAt": 2},
                    {"id": "2", "title": "Write report", "tags": ["work"], "createdAt": 1},
                    {"id": "3", "title": "Old bill", "dueDate": "2025-01-01", "createdAt": 3},
                ],
                "smartLists": [
                    {"id": "c1", "name": "Work", "filters": {"tags": ["work"]}, "order": 0},
                ],
            }
        )
    )
    return Config(data_file=str(path), default_sort=SortCriteria.CREATED_DATE)


class TestGetStore:
    def test_uses_configured_path(self, config, tmp_path):
        assert get_store(config).path == tmp_path / "todos.json"


class TestListOverview:
    def test_system_then_custom_with_counts(self, config, today):
        summaries = list_overview(config, today)

        assert len(summaries) == 9
        assert summaries[-1].smart_list.id == "c1"
        counts = {s.smart_list.id: s.count for s in summaries}
        assert counts["system_all"] == 3
        assert counts["system_today"] == 1
        assert counts["system_overdue"] == 1
        assert counts["c1"] == 1


class TestShowList:
    def test_system_list(self, config, today):
        smart_list, todos = show_list(config, "system_inbox", today)
        assert smart_list.name == "Inbox"
        assert [t.id for t in todos] == ["2", "1", "3"]

    def test_custom_list(self, config, today):
        _, todos = show_list(config, "c1", today)
        assert [t.id for t in todos] == ["2"]

    def test_unknown_list(self, config):
        with pytest.raises(ListNotFoundError):
            resolve_list(config, "nope")


class TestQueries:
    def test_run_query_uses_default_sort(self, config, today):
        todos = run_query(config, ListFilter(), as_of=today)
        assert [t.id for t in todos] == ["2", "1", "3"]

    def test_run_query_explicit_sort(self, config, today):
        todos = run_query(config, ListFilter(has_due_date=True), SortCriteria.DUE_DATE, today)
        assert [t.id for t in todos] == ["3", "1"]

    def test_run_search(self, config):
        assert [t.id for t in run_search(config, "BILL")] == ["3"]


class TestCustomLists:
    @patch("smartlists.workflows.time.time", return_value=1700000000.0)
    def test_create_appends_after_existing(self, _mock_time, config):
        created = create_custom_list(config, "Urgent", ListFilter(priorities=frozenset({Priority.HIGH})))

        assert created.id == "custom_1700000000000"
        assert created.order == 1
        assert created.sort_by is SortCriteria.CREATED_DATE
        assert created.is_system is False
        assert resolve_list(config, created.id).name == "Urgent"

    def test_delete(self, config):
        delete_custom_list(config, "c1")
        with pytest.raises(ListNotFoundError):
            resolve_list(config, "c1")

    def test_delete_unknown(self, config):
        with pytest.raises(ListNotFoundError):
            delete_custom_list(config, "nope")

    def test_delete_system(self, config):
        with pytest.raises(ReadOnlyListError):
            delete_custom_list(config, "system_today")

    def test_edit_changes_only_given_fields(self, config):
        edited = edit_custom_list(config, "c1", name="Office", sort_by=SortCriteria.TITLE, icon=None)

        assert edited.name == "Office"
        assert edited.sort_by is SortCriteria.TITLE
        assert edited.icon == "📋"
        stored = resolve_list(config, "c1")
        assert stored.name == "Office"
        assert stored.filters.tags == frozenset({"work"})

    def test_edit_unknown(self, config):
        with pytest.raises(ListNotFoundError):
            edit_custom_list(config, "nope", name="x")

    def test_edit_system(self, config):
        with pytest.raises(ReadOnlyListError):
            edit_custom_list(config, "system_today", name="x")
