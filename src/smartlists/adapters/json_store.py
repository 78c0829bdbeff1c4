"""JSON file todo storage adapter."""

import json
import logging
from pathlib import Path

from smartlists.core.filters import SmartList
from smartlists.core.todos import Todo

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Raised when the data file cannot be read or has the wrong shape."""

    pass


class ReadOnlyListError(Exception):
    """Raised when a system list is added, edited or deleted."""

    pass


def _dedupe(records: list[dict], kind: str) -> list[dict]:
    """Drop records with an empty id and keep the first of each id."""
    seen = set()
    kept = []
    for record in records:
        record_id = record.get("id")
        if not record_id or record_id in seen:
            continue
        seen.add(record_id)
        kept.append(record)
    dropped = len(records) - len(kept)
    if dropped:
        logger.debug(f"Dropped {dropped} empty or duplicate {kind} records")
    return kept


class JsonTodoStore:
    """
    File-based todo storage.

    Implements TodoRepository protocol. A single JSON document holds
    {"todos": [...], "smartLists": [...]} with camelCase records.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path).expanduser()

    def _read(self) -> dict:
        if not self.path.exists():
            return {"todos": [], "smartLists": []}
        try:
            data = json.loads(self.path.read_text())
        except json.JSONDecodeError as e:
            raise StoreError(f"Invalid JSON in {self.path}: {e}") from e
        except OSError as e:
            raise StoreError(f"Cannot read {self.path}: {e}") from e

        if not isinstance(data, dict):
            raise StoreError(f"Expected a JSON object in {self.path}")
        for key in ("todos", "smartLists"):
            if not isinstance(data.get(key, []), list):
                raise StoreError(f"Expected '{key}' to be a list in {self.path}")
        return data

    def _write(self, data: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2, ensure_ascii=False))

    def fetch_todos(self) -> list[Todo]:
        """Fetch all todos."""
        records = _dedupe(self._read().get("todos", []), "todo")
        return [Todo.from_dict(r) for r in records]

    def fetch_smart_lists(self) -> list[SmartList]:
        """Fetch user-defined smart lists, in stored order."""
        records = _dedupe(self._read().get("smartLists", []), "smart list")
        return [SmartList.from_dict(r) for r in records]

    def add_smart_list(self, smart_list: SmartList) -> None:
        """Store a new custom smart list."""
        if smart_list.is_system:
            raise ReadOnlyListError(f"System list '{smart_list.id}' cannot be stored")
        data = self._read()
        lists = data.get("smartLists", [])
        if any(r.get("id") == smart_list.id for r in lists):
            raise StoreError(f"Smart list '{smart_list.id}' already exists")
        data["smartLists"] = lists + [smart_list.to_dict()]
        self._write(data)
        logger.info(f"Added smart list {smart_list.id}")

    def update_smart_list(self, smart_list: SmartList) -> None:
        """Replace the custom smart list with the same id."""
        if smart_list.is_system:
            raise ReadOnlyListError(f"System list '{smart_list.id}' cannot be edited")
        data = self._read()
        data["smartLists"] = [
            smart_list.to_dict() if r.get("id") == smart_list.id else r
            for r in data.get("smartLists", [])
        ]
        self._write(data)

    def delete_smart_list(self, list_id: str) -> None:
        """Remove a custom smart list by id."""
        if list_id.startswith("system_"):
            raise ReadOnlyListError(f"System list '{list_id}' cannot be deleted")
        data = self._read()
        data["smartLists"] = [r for r in data.get("smartLists", []) if r.get("id") != list_id]
        self._write(data)
        logger.info(f"Deleted smart list {list_id}")
