"""Tests for the JSON file todo store."""

import json

import pytest

from smartlists.adapters.json_store import JsonTodoStore, ReadOnlyListError, StoreError
from smartlists.core.filters import ListFilter, SmartList, SortCriteria, create_system_lists
from smartlists.core.todos import Priority


@pytest.fixture
def data_file(tmp_path):
    path = tmp_path / "todos.json"
    path.write_text(
        json.dumps(
            {
                "todos": [
                    {"id": "1", "title": "Buy milk", "priority": "HIGH", "dueDate": "2025-01-15"},
                    {"id": "2", "title": "Write report", "tags": ["work"]},
                    {"id": "1", "title": "Duplicate of 1"},
                    {"id": "", "title": "No id"},
                ],
                "smartLists": [
                    {"id": "c1", "name": "Work", "filters": {"tags": ["work"]}, "sortBy": "TITLE", "order": 1},
                ],
            }
        )
    )
    return path


@pytest.fixture
def store(data_file):
    return JsonTodoStore(data_file)


class TestFetch:
    def test_fetch_todos_drops_empty_and_duplicate_ids(self, store):
        todos = store.fetch_todos()
        assert [t.id for t in todos] == ["1", "2"]
        assert todos[0].title == "Buy milk"
        assert todos[0].priority is Priority.HIGH

    def test_fetch_smart_lists(self, store):
        lists = store.fetch_smart_lists()
        assert len(lists) == 1
        assert lists[0].filters.tags == frozenset({"work"})
        assert lists[0].sort_by is SortCriteria.TITLE
        assert lists[0].is_system is False

    def test_missing_file_is_empty(self, tmp_path):
        store = JsonTodoStore(tmp_path / "absent.json")
        assert store.fetch_todos() == []
        assert store.fetch_smart_lists() == []

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        with pytest.raises(StoreError, match="Invalid JSON"):
            JsonTodoStore(path).fetch_todos()

    def test_wrong_shape(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[]")
        with pytest.raises(StoreError, match="JSON object"):
            JsonTodoStore(path).fetch_todos()

    def test_todos_not_a_list(self, tmp_path):
        path = tmp_path / "shape.json"
        path.write_text('{"todos": {}}')
        with pytest.raises(StoreError, match="'todos'"):
            JsonTodoStore(path).fetch_todos()


class TestSmartListEditing:
    def test_add(self, store, data_file):
        store.add_smart_list(SmartList(id="c2", name="Urgent", order=2))

        assert [s.id for s in store.fetch_smart_lists()] == ["c1", "c2"]
        # todos are left alone
        raw = json.loads(data_file.read_text())
        assert len(raw["todos"]) == 4

    def test_add_creates_file(self, tmp_path):
        store = JsonTodoStore(tmp_path / "nested" / "todos.json")
        store.add_smart_list(SmartList(id="c1", name="First"))
        assert store.fetch_smart_lists()[0].name == "First"

    def test_add_duplicate_id(self, store):
        with pytest.raises(StoreError, match="already exists"):
            store.add_smart_list(SmartList(id="c1", name="Again"))

    def test_update(self, store):
        store.update_smart_list(SmartList(id="c1", name="Renamed", filters=ListFilter(has_due_date=True)))
        updated = store.fetch_smart_lists()[0]
        assert updated.name == "Renamed"
        assert updated.filters.has_due_date is True

    def test_delete(self, store):
        store.delete_smart_list("c1")
        assert store.fetch_smart_lists() == []

    def test_system_lists_are_read_only(self, store):
        system = create_system_lists()[0]
        with pytest.raises(ReadOnlyListError):
            store.add_smart_list(system)
        with pytest.raises(ReadOnlyListError):
            store.update_smart_list(system)
        with pytest.raises(ReadOnlyListError):
            store.delete_smart_list(system.id)
