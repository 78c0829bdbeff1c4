"""Pure display formatting for todos and smart lists - no I/O dependencies."""

from dataclasses import dataclass
from datetime import date

from .filters import SmartList, get_todo_count
from .todos import Priority, Todo

PRIORITY_MARKERS = {
    Priority.HIGH: "!!!",
    Priority.MEDIUM: "!!",
    Priority.LOW: "!",
    Priority.NONE: "",
}


@dataclass
class ListSummary:
    """A smart list paired with its badge count."""

    smart_list: SmartList
    count: int

    def format(self) -> str:
        kind = "system" if self.smart_list.is_system else "custom"
        return f"{self.smart_list.icon} {self.smart_list.name} ({self.count}) [{self.smart_list.id}, {kind}]"


def summarize_lists(
    todos: list[Todo],
    smart_lists: list[SmartList],
    as_of: date | None = None,
) -> list[ListSummary]:
    """Badge counts for each list, in the given order."""
    as_of = as_of or date.today()
    return [ListSummary(s, get_todo_count(todos, s, as_of)) for s in smart_lists]


def format_due(todo: Todo, as_of: date | None = None) -> str:
    """
    Human-readable due text.

    Unparseable due dates are shown verbatim rather than dropped.
    """
    if todo.due_date is None:
        return ""
    days = todo.days_until_due(as_of)
    if days is None:
        return f"due {todo.due_date}"
    if days < 0:
        return f"OVERDUE by {-days}d" if not todo.is_completed else f"was due {todo.due_date}"
    if days == 0:
        return "due TODAY"
    return f"due in {days}d"


def format_todo_line(todo: Todo, as_of: date | None = None) -> str:
    """Format a single todo as a checklist line."""
    check = "x" if todo.is_completed else " "
    marker = PRIORITY_MARKERS[todo.priority]
    parts = [f"- [{check}]"]
    if marker:
        parts.append(marker)
    parts.append(todo.title)

    details = []
    due = format_due(todo, as_of)
    if due:
        details.append(due)
    if todo.subtasks:
        done = sum(1 for s in todo.subtasks if s.is_completed)
        details.append(f"{done}/{len(todo.subtasks)} subtasks")
    if todo.repeat.is_recurring:
        details.append(f"repeats {todo.repeat.type.name.lower()}")
    if todo.tags:
        details.append(" ".join(f"#{tag}" for tag in todo.tags))

    line = " ".join(parts)
    if details:
        line += f" ({', '.join(details)})"
    return line


def todo_to_json(todo: Todo, as_of: date | None = None) -> dict:
    """Stored record plus derived fields, for JSON output."""
    data = todo.to_dict()
    data["isOverdue"] = todo.is_overdue(as_of)
    data["completionProgress"] = todo.completion_progress
    return data
