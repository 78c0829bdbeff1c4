"""Smart list filter/sort engine - pure, no I/O dependencies."""

import calendar
import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from enum import Enum
from typing import Callable, Iterable

from .todos import Priority, Todo, enum_from_name, parse_date

logger = logging.getLogger(__name__)


class DateRangeType(Enum):
    TODAY = "TODAY"
    TOMORROW = "TOMORROW"
    THIS_WEEK = "THIS_WEEK"
    NEXT_WEEK = "NEXT_WEEK"
    THIS_MONTH = "THIS_MONTH"
    OVERDUE = "OVERDUE"
    CUSTOM = "CUSTOM"


class SortCriteria(Enum):
    DUE_DATE = "DUE_DATE"
    PRIORITY = "PRIORITY"
    CREATED_DATE = "CREATED_DATE"
    TITLE = "TITLE"
    CUSTOM_ORDER = "CUSTOM_ORDER"


class TodoStatus(Enum):
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"
    OVERDUE = "OVERDUE"


def _members(enum_cls, names: Iterable) -> frozenset:
    """Enum members for the given names, dropping unknown ones."""
    members = set()
    for name in names:
        try:
            members.add(enum_cls[str(name).upper()])
        except KeyError:
            logger.warning(f"Dropping unknown {enum_cls.__name__} value {name!r}")
    return frozenset(members)


@dataclass(frozen=True)
class DateRange:
    """A named range, or explicit yyyy-MM-dd bounds when type is CUSTOM."""

    type: DateRangeType = DateRangeType.CUSTOM
    start: str | None = None
    end: str | None = None

    @classmethod
    def from_dict(cls, data: dict | None) -> "DateRange | None":
        if data is None:
            return None
        return cls(
            type=enum_from_name(DateRangeType, data.get("type"), DateRangeType.CUSTOM),
            start=data.get("start"),
            end=data.get("end"),
        )

    def to_dict(self) -> dict:
        return {"type": self.type.name, "start": self.start, "end": self.end}


@dataclass(frozen=True)
class ListFilter:
    """
    Declarative inclusion criteria.

    Empty collections and None tri-states mean "no restriction".
    """

    priorities: frozenset[Priority] = frozenset()
    tags: frozenset[str] = frozenset()
    date_range: DateRange | None = None
    status: frozenset[TodoStatus] = frozenset()
    goal_ids: frozenset[str] = frozenset()
    has_subtasks: bool | None = None
    has_due_date: bool | None = None
    is_recurring: bool | None = None

    @classmethod
    def from_dict(cls, data: dict | None) -> "ListFilter":
        if not data:
            return cls()
        return cls(
            priorities=_members(Priority, data.get("priorities", [])),
            tags=frozenset(data.get("tags", [])),
            date_range=DateRange.from_dict(data.get("dateRange")),
            status=_members(TodoStatus, data.get("status", [])),
            goal_ids=frozenset(data.get("goalIds", [])),
            has_subtasks=data.get("hasSubtasks"),
            has_due_date=data.get("hasDueDate"),
            is_recurring=data.get("isRecurring"),
        )

    def to_dict(self) -> dict:
        return {
            "priorities": sorted(p.name for p in self.priorities),
            "tags": sorted(self.tags),
            "dateRange": self.date_range.to_dict() if self.date_range else None,
            "status": sorted(s.name for s in self.status),
            "goalIds": sorted(self.goal_ids),
            "hasSubtasks": self.has_subtasks,
            "hasDueDate": self.has_due_date,
            "isRecurring": self.is_recurring,
        }


@dataclass(frozen=True)
class SmartList:
    """A named, reusable (filter, sort) pair."""

    id: str = ""
    name: str = ""
    icon: str = "📋"
    color: str = "#3182F6"
    filters: ListFilter = field(default_factory=ListFilter)
    sort_by: SortCriteria = SortCriteria.DUE_DATE
    is_system: bool = False
    order: int = 0
    created_at: int = 0

    @classmethod
    def from_dict(cls, data: dict) -> "SmartList":
        return cls(
            id=data.get("id", ""),
            name=data.get("name", ""),
            icon=data.get("icon", "📋"),
            color=data.get("color", "#3182F6"),
            filters=ListFilter.from_dict(data.get("filters")),
            sort_by=enum_from_name(SortCriteria, data.get("sortBy"), SortCriteria.DUE_DATE),
            is_system=bool(data.get("isSystem", False)),
            order=data.get("order", 0) or 0,
            created_at=data.get("createdAt", 0) or 0,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "icon": self.icon,
            "color": self.color,
            "filters": self.filters.to_dict(),
            "sortBy": self.sort_by.name,
            "isSystem": self.is_system,
            "order": self.order,
            "createdAt": self.created_at,
        }


# ============== Date ranges ==============


def _due_within(todo: Todo, start: date | None, end: date | None) -> bool:
    """Parsed due date lies in [start, end]; a None bound is open."""
    due = parse_date(todo.due_date)
    if due is None:
        return False
    if start is not None and due < start:
        return False
    if end is not None and due > end:
        return False
    return True


def date_range_predicate(date_range: DateRange, as_of: date) -> Callable[[Todo], bool]:
    """
    Build the inclusion test for a date range, evaluated against as_of.

    Weeks end on Sunday. The week arithmetic is taken literally: when as_of is
    a Sunday, THIS_WEEK is just that day and NEXT_WEEK starts the next day.
    """
    match date_range.type:
        case DateRangeType.TODAY:
            today = as_of.isoformat()
            return lambda t: t.due_date == today or t.date == today
        case DateRangeType.TOMORROW:
            tomorrow = (as_of + timedelta(days=1)).isoformat()
            return lambda t: t.due_date == tomorrow
        case DateRangeType.THIS_WEEK:
            end_of_week = as_of + timedelta(days=7 - as_of.isoweekday())
            return lambda t: _due_within(t, as_of, end_of_week)
        case DateRangeType.NEXT_WEEK:
            start = as_of + timedelta(days=8 - as_of.isoweekday())
            end = start + timedelta(days=6)
            return lambda t: _due_within(t, start, end)
        case DateRangeType.THIS_MONTH:
            last_day = calendar.monthrange(as_of.year, as_of.month)[1]
            start = as_of.replace(day=1)
            end = as_of.replace(day=last_day)
            return lambda t: _due_within(t, start, end)
        case DateRangeType.OVERDUE:
            return lambda t: t.is_overdue(as_of)
        case DateRangeType.CUSTOM:
            start = parse_date(date_range.start)
            end = parse_date(date_range.end)
            # A malformed bound can never be satisfied.
            if (date_range.start is not None and start is None) or (
                date_range.end is not None and end is None
            ):
                return lambda t: False
            return lambda t: _due_within(t, start, end)
    raise ValueError(f"Unsupported date range type: {date_range.type}")


def matches_status(todo: Todo, statuses: Iterable[TodoStatus], as_of: date) -> bool:
    """True if the todo is in ANY of the given statuses."""
    overdue = todo.is_overdue(as_of)
    for status in statuses:
        if status is TodoStatus.COMPLETED and todo.is_completed:
            return True
        if status is TodoStatus.OVERDUE and overdue and not todo.is_completed:
            return True
        if status is TodoStatus.ACTIVE and not todo.is_completed and not overdue:
            return True
    return False


# ============== Engine ==============


def sort_todos(todos: Iterable[Todo], sort_by: SortCriteria) -> list[Todo]:
    """Stable sort by a single criterion."""
    match sort_by:
        case SortCriteria.DUE_DATE:
            return sorted(todos, key=lambda t: (t.due_date is None, t.due_date or ""))
        case SortCriteria.PRIORITY:
            return sorted(todos, key=lambda t: -t.priority)
        case SortCriteria.CREATED_DATE:
            return sorted(todos, key=lambda t: t.created_at)
        case SortCriteria.TITLE:
            return sorted(todos, key=lambda t: t.title.lower())
        case SortCriteria.CUSTOM_ORDER:
            return sorted(todos, key=lambda t: t.order)
    raise ValueError(f"Unsupported sort criteria: {sort_by}")


def apply_filter(
    todos: Iterable[Todo],
    filters: ListFilter,
    sort_by: SortCriteria = SortCriteria.DUE_DATE,
    as_of: date | None = None,
) -> list[Todo]:
    """
    Filter todos by every set criterion, then sort.

    Criteria narrow the working set in a fixed order: priority, tags, date
    range, status, goal, subtasks, due date, recurrence. Unset criteria are
    skipped. Pure function - never mutates its inputs.
    """
    as_of = as_of or date.today()
    filtered = list(todos)

    if filters.priorities:
        filtered = [t for t in filtered if t.priority in filters.priorities]

    if filters.tags:
        filtered = [t for t in filtered if any(tag in t.tags for tag in filters.tags)]

    if filters.date_range is not None:
        in_range = date_range_predicate(filters.date_range, as_of)
        filtered = [t for t in filtered if in_range(t)]

    if filters.status:
        filtered = [t for t in filtered if matches_status(t, filters.status, as_of)]

    if filters.goal_ids:
        filtered = [t for t in filtered if t.goal_id is not None and t.goal_id in filters.goal_ids]

    if filters.has_subtasks is not None:
        filtered = [t for t in filtered if t.has_subtasks == filters.has_subtasks]

    if filters.has_due_date is not None:
        filtered = [t for t in filtered if (t.due_date is not None) == filters.has_due_date]

    if filters.is_recurring is not None:
        filtered = [t for t in filtered if t.repeat.is_recurring == filters.is_recurring]

    return sort_todos(filtered, sort_by)


def create_system_lists() -> list[SmartList]:
    """The predefined lists, rebuilt on every call."""
    return [
        SmartList(
            id="system_inbox",
            name="Inbox",
            icon="📥",
            sort_by=SortCriteria.CREATED_DATE,
            is_system=True,
            order=0,
        ),
        SmartList(
            id="system_today",
            name="Today",
            icon="📅",
            filters=ListFilter(date_range=DateRange(type=DateRangeType.TODAY)),
            is_system=True,
            order=1,
        ),
        SmartList(
            id="system_tomorrow",
            name="Tomorrow",
            icon="➡️",
            filters=ListFilter(date_range=DateRange(type=DateRangeType.TOMORROW)),
            is_system=True,
            order=2,
        ),
        SmartList(
            id="system_week",
            name="This Week",
            icon="📆",
            filters=ListFilter(date_range=DateRange(type=DateRangeType.THIS_WEEK)),
            is_system=True,
            order=3,
        ),
        SmartList(
            id="system_overdue",
            name="Overdue",
            icon="⚠️",
            filters=ListFilter(
                date_range=DateRange(type=DateRangeType.OVERDUE),
                status=frozenset({TodoStatus.OVERDUE}),
            ),
            is_system=True,
            order=4,
        ),
        SmartList(
            id="system_high_priority",
            name="High Priority",
            icon="🔴",
            filters=ListFilter(priorities=frozenset({Priority.HIGH})),
            is_system=True,
            order=5,
        ),
        SmartList(
            id="system_completed",
            name="Completed",
            icon="✅",
            filters=ListFilter(status=frozenset({TodoStatus.COMPLETED})),
            is_system=True,
            order=6,
        ),
        SmartList(
            id="system_all",
            name="All",
            icon="📋",
            is_system=True,
            order=7,
        ),
    ]


def search_todos(todos: list[Todo], query: str) -> list[Todo]:
    """Case-insensitive substring search over title, description, note and tags."""
    if not query or not query.strip():
        return list(todos)

    needle = query.lower()
    return [
        t
        for t in todos
        if needle in t.title.lower()
        or needle in t.description.lower()
        or needle in t.note.lower()
        or any(needle in tag.lower() for tag in t.tags)
    ]


def get_todo_count(todos: Iterable[Todo], smart_list: SmartList, as_of: date | None = None) -> int:
    """Badge count for a smart list."""
    return len(apply_filter(todos, smart_list.filters, smart_list.sort_by, as_of))


def all_smart_lists(custom_lists: Iterable[SmartList]) -> list[SmartList]:
    """System lists first, then custom lists by their manual order."""
    return create_system_lists() + sorted(custom_lists, key=lambda s: s.order)


def find_smart_list(lists: Iterable[SmartList], list_id: str) -> SmartList | None:
    return next((s for s in lists if s.id == list_id), None)
