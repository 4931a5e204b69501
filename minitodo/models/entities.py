from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional, List, Dict, Any

from config import (
    DEFAULT_CATEGORY,
    DEFAULT_THEME,
    Category,
    StatusFilter,
    Theme,
)


def _parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse a stored ISO timestamp into naive local time.

    Records written by other clients may carry an offset or a trailing "Z";
    those are converted so they compare with datetime.now().
    """
    if not value:
        return None
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


@dataclass
class Task:
    """A single to-do item.

    completed_at is set exactly while completed is True.
    """
    id: int
    text: str
    created_at: datetime
    completed: bool = False
    category: Category = DEFAULT_CATEGORY
    completed_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the JSON shape kept in the blob store."""
        return {
            "id": self.id,
            "text": self.text,
            "completed": self.completed,
            "category": self.category.value,
            "createdAt": self.created_at.isoformat(),
            "completedAt": self.completed_at.isoformat() if self.completed_at else None,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Task":
        """Create Task from its stored JSON shape.

        Raises KeyError/ValueError/TypeError on entries that cannot be read.
        """
        try:
            category = Category(d.get("category", DEFAULT_CATEGORY.value))
        except ValueError:
            category = DEFAULT_CATEGORY
        # Only a real JSON boolean marks a task done
        completed = d.get("completed") is True
        completed_at = _parse_timestamp(d.get("completedAt")) if completed else None
        created_at = _parse_timestamp(d.get("createdAt")) or datetime.now()
        if completed and completed_at is None:
            # Older records never stored a completion time
            completed_at = created_at
        return cls(
            id=int(d["id"]),
            text=str(d["text"]),
            created_at=created_at,
            completed=completed,
            category=category,
            completed_at=completed_at,
        )


@dataclass
class DailyRecord:
    """Activity counters for one calendar day."""
    completed: int = 0
    created: int = 0
    latency_seconds: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "completed": self.completed,
            "created": self.created,
            "latencySeconds": self.latency_seconds,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "DailyRecord":
        return cls(
            completed=max(0, int(d.get("completed", 0))),
            created=max(0, int(d.get("created", 0))),
            latency_seconds=max(0.0, float(d.get("latencySeconds", 0.0))),
        )


@dataclass
class DayStats:
    """Stats for a single day, as shown in charts."""
    day: date
    completed: int
    created: int
    avg_completion_minutes: int


@dataclass
class AppState:
    tasks: List[Task] = field(default_factory=list)
    status_filter: StatusFilter = StatusFilter.ALL
    category_filter: Category = DEFAULT_CATEGORY
    theme: Theme = DEFAULT_THEME

    def get_task_by_id(self, task_id: Optional[int]) -> Optional[Task]:
        if task_id is None:
            return None
        for t in self.tasks:
            if t.id == task_id:
                return t
        return None
