"""Pure todo domain logic - no I/O dependencies."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import date
from enum import Enum, IntEnum

logger = logging.getLogger(__name__)

DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


class Priority(IntEnum):
    """Todo priority. Higher value sorts first under priority ordering."""

    NONE = 0
    LOW = 1
    MEDIUM = 2
    HIGH = 3


class RepeatType(Enum):
    NONE = "NONE"
    DAILY = "DAILY"
    WEEKLY = "WEEKLY"
    MONTHLY = "MONTHLY"
    CUSTOM = "CUSTOM"


def parse_date(value: str | None) -> date | None:
    """Parse a yyyy-MM-dd string. Returns None if missing or malformed."""
    if not value or not isinstance(value, str) or not DATE_PATTERN.fullmatch(value):
        return None
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError):
        return None


def enum_from_name(enum_cls, name, default):
    """Look up an enum member by name, falling back to default."""
    if name is None:
        return default
    try:
        return enum_cls[str(name).upper()]
    except KeyError:
        logger.warning(f"Unknown {enum_cls.__name__} value {name!r}, using {default.name}")
        return default


@dataclass(frozen=True)
class Subtask:
    id: str = ""
    title: str = ""
    is_completed: bool = False
    created_at: int = 0
    completed_at: int | None = None

    @classmethod
    def from_dict(cls, data: dict) -> "Subtask":
        return cls(
            id=data.get("id", ""),
            title=data.get("title", "") or "",
            is_completed=bool(data.get("isCompleted", False)),
            created_at=data.get("createdAt", 0) or 0,
            completed_at=data.get("completedAt"),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "isCompleted": self.is_completed,
            "createdAt": self.created_at,
            "completedAt": self.completed_at,
        }


@dataclass(frozen=True)
class RepeatConfig:
    """Recurrence settings. days_of_week uses 1=Mon..7=Sun."""

    type: RepeatType = RepeatType.NONE
    interval: int = 1
    days_of_week: tuple[int, ...] = ()
    end_date: str | None = None

    @property
    def is_recurring(self) -> bool:
        return self.type != RepeatType.NONE

    @classmethod
    def from_dict(cls, data: dict | None) -> "RepeatConfig":
        if not data:
            return cls()
        return cls(
            type=enum_from_name(RepeatType, data.get("type"), RepeatType.NONE),
            interval=data.get("interval", 1) or 1,
            days_of_week=tuple(data.get("daysOfWeek") or ()),
            end_date=data.get("endDate"),
        )

    def to_dict(self) -> dict:
        return {
            "type": self.type.name,
            "interval": self.interval,
            "daysOfWeek": list(self.days_of_week),
            "endDate": self.end_date,
        }


@dataclass(frozen=True)
class Todo:
    """
    A to-do item.

    Dates are kept as the raw yyyy-MM-dd strings they were stored with, so a
    malformed value survives loading and only fails the predicates that need
    to parse it.
    """

    id: str = ""
    title: str = ""
    description: str = ""
    is_completed: bool = False
    goal_id: str | None = None
    date: str | None = None
    due_date: str | None = None
    due_time: str | None = None
    priority: Priority = Priority.NONE
    tags: tuple[str, ...] = ()
    subtasks: tuple[Subtask, ...] = ()
    repeat: RepeatConfig = field(default_factory=RepeatConfig)
    reminder_time: str | None = None
    note: str = ""
    pomodoro_count: int = 0
    order: int = 0
    created_at: int = 0
    completed_at: int | None = None
    updated_at: int = 0

    def is_overdue(self, as_of: date | None = None) -> bool:
        """Not completed and due strictly before as_of."""
        if self.is_completed or self.due_date is None:
            return False
        due = parse_date(self.due_date)
        if due is None:
            return False
        as_of = as_of or date.today()
        return due < as_of

    @property
    def has_subtasks(self) -> bool:
        return len(self.subtasks) > 0

    @property
    def completion_progress(self) -> float:
        """Fraction of subtasks done; falls back to the todo's own flag."""
        if not self.subtasks:
            return 1.0 if self.is_completed else 0.0
        done = sum(1 for s in self.subtasks if s.is_completed)
        return done / len(self.subtasks)

    def days_until_due(self, as_of: date | None = None) -> int | None:
        """Days until due date (negative if overdue). None if unparseable."""
        due = parse_date(self.due_date)
        if due is None:
            return None
        as_of = as_of or date.today()
        return (due - as_of).days

    @classmethod
    def from_dict(cls, data: dict) -> "Todo":
        """Create Todo from a stored (camelCase) record."""
        return cls(
            id=data.get("id", ""),
            title=data.get("title", "") or "",
            description=data.get("description", "") or "",
            is_completed=bool(data.get("isCompleted", False)),
            goal_id=data.get("goalId"),
            date=data.get("date"),
            due_date=data.get("dueDate"),
            due_time=data.get("dueTime"),
            priority=enum_from_name(Priority, data.get("priority"), Priority.NONE),
            tags=tuple(data.get("tags") or ()),
            subtasks=tuple(Subtask.from_dict(s) for s in data.get("subtasks") or ()),
            repeat=RepeatConfig.from_dict(data.get("repeat")),
            reminder_time=data.get("reminderTime"),
            note=data.get("note", "") or "",
            pomodoro_count=data.get("pomodoroCount", 0) or 0,
            order=data.get("order", 0) or 0,
            created_at=data.get("createdAt", 0) or 0,
            completed_at=data.get("completedAt"),
            updated_at=data.get("updatedAt", 0) or 0,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "isCompleted": self.is_completed,
            "goalId": self.goal_id,
            "date": self.date,
            "dueDate": self.due_date,
            "dueTime": self.due_time,
            "priority": self.priority.name,
            "tags": list(self.tags),
            "subtasks": [s.to_dict() for s in self.subtasks],
            "repeat": self.repeat.to_dict(),
            "reminderTime": self.reminder_time,
            "note": self.note,
            "pomodoroCount": self.pomodoro_count,
            "order": self.order,
            "createdAt": self.created_at,
            "completedAt": self.completed_at,
            "updatedAt": self.updated_at,
        }
