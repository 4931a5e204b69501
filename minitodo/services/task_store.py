import logging
from datetime import datetime
from typing import Callable, Dict, List, Optional

from config import TASK_TEXT_MAX_LENGTH, Category, StatusFilter, StorageKey
from errors import StorageError, ValidationError
from events import AppEvent, EventBus
from models.entities import AppState, Task
from services.analytics import AnalyticsAggregator
from storage import BlobStore

logger = logging.getLogger(__name__)


def filter_tasks(
    tasks: List[Task],
    status: StatusFilter,
    category: Optional[Category],
) -> List[Task]:
    """Ordered subsequence of tasks matching a category and status filter.

    Passing category=None skips category scoping. Never mutates the input.
    """
    scoped = [t for t in tasks if category is None or t.category == category]
    if status == StatusFilter.ACTIVE:
        return [t for t in scoped if not t.completed]
    if status == StatusFilter.COMPLETED:
        return [t for t in scoped if t.completed]
    return scoped


def count_tasks(tasks: List[Task], category: Optional[Category]) -> Dict[str, int]:
    """Total/active/completed within a category, plus efficiency over all tasks."""
    scoped = filter_tasks(tasks, StatusFilter.ALL, category)
    completed = sum(1 for t in scoped if t.completed)
    return {
        "total": len(scoped),
        "active": len(scoped) - completed,
        "completed": completed,
        "efficiency": AnalyticsAggregator.efficiency(tasks),
    }


class TaskStore:
    """Owns the task collection and the two selection filters.

    Every mutation follows the same sequence: change the in-memory list,
    persist it, then emit REFRESH_UI so the renderer schedules a redraw.
    The in-memory list is the source of truth for the session; a failed
    write is reported through PERSISTENCE_FAILED and never rolled back.
    """

    def __init__(
        self,
        state: AppState,
        storage: BlobStore,
        event_bus: EventBus,
        analytics: AnalyticsAggregator,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.state = state
        self._storage = storage
        self._event_bus = event_bus
        self._analytics = analytics
        self._clock = clock
        self._last_id = 0

    @property
    def tasks(self) -> List[Task]:
        return self.state.tasks

    # --- Persistence ---

    async def load(self) -> List[Task]:
        """Replace the collection with the stored one. Never raises.

        Missing key, malformed JSON or a non-list document all yield an
        empty collection; unreadable entries are skipped.
        """
        raw = await self._storage.get(StorageKey.TASKS, [])
        tasks: List[Task] = []
        if not isinstance(raw, list):
            logger.warning("Stored tasks document is not a list, starting empty")
            raw = []
        seen_ids = set()
        for entry in raw:
            try:
                task = Task.from_dict(entry)
            except (KeyError, ValueError, TypeError, AttributeError) as e:
                logger.warning(f"Skipping unreadable task entry: {e}")
                continue
            if task.id in seen_ids:
                logger.warning(f"Skipping duplicate task id {task.id}")
                continue
            seen_ids.add(task.id)
            tasks.append(task)
        # Update the existing list in place to preserve references
        self.state.tasks.clear()
        self.state.tasks.extend(tasks)
        self._last_id = max(seen_ids, default=0)
        logger.debug(f"Loaded {len(tasks)} tasks")
        return self.state.tasks

    async def save(self) -> bool:
        """Write the collection. Returns False (and reports) on failure."""
        try:
            await self._storage.set(StorageKey.TASKS, [t.to_dict() for t in self.state.tasks])
            return True
        except StorageError as e:
            logger.error(f"Failed to persist tasks: {e}")
            self._event_bus.emit(AppEvent.PERSISTENCE_FAILED, str(e))
            return False

    def _request_render(self) -> None:
        self._event_bus.emit(AppEvent.REFRESH_UI)

    def _next_id(self) -> int:
        """Millisecond timestamp, bumped past the last issued id when needed."""
        candidate = int(self._clock().timestamp() * 1000)
        self._last_id = max(candidate, self._last_id + 1)
        return self._last_id

    # --- Mutations ---

    @staticmethod
    def validate_text(text: str) -> str:
        """Return the trimmed text or raise ValidationError."""
        trimmed = (text or "").strip()
        if not trimmed:
            raise ValidationError("error_empty_task")
        if len(trimmed) > TASK_TEXT_MAX_LENGTH:
            raise ValidationError("error_task_too_long", {"limit": TASK_TEXT_MAX_LENGTH})
        return trimmed

    async def add(self, text: str) -> Task:
        """Prepend a new task in the current category.

        Raises:
            ValidationError: empty or over-long text. Nothing changes.
        """
        trimmed = self.validate_text(text)
        task = Task(
            id=self._next_id(),
            text=trimmed,
            created_at=self._clock(),
            category=self.state.category_filter,
        )
        self.state.tasks.insert(0, task)
        await self._analytics.record_created(task)
        await self.save()
        self._request_render()
        self._event_bus.emit(AppEvent.TASK_CREATED, task)
        return task

    async def toggle(self, task_id: int) -> Optional[Task]:
        """Flip a task's completion. Unknown ids are ignored (returns None)."""
        task = self.state.get_task_by_id(task_id)
        if task is None:
            logger.debug(f"Toggle ignored, no task {task_id}")
            return None
        task.completed = not task.completed
        task.completed_at = self._clock() if task.completed else None
        await self._analytics.record_transition(task)
        self._event_bus.emit(AppEvent.ANALYTICS_UPDATED)
        await self.save()
        self._request_render()
        self._event_bus.emit(
            AppEvent.TASK_COMPLETED if task.completed else AppEvent.TASK_UNCOMPLETED,
            task,
        )
        return task

    async def remove(self, task_id: int) -> Optional[Task]:
        """Delete a task. Unknown ids are ignored (returns None)."""
        task = self.state.get_task_by_id(task_id)
        if task is None:
            logger.debug(f"Remove ignored, no task {task_id}")
            return None
        self.state.tasks[:] = [t for t in self.state.tasks if t.id != task_id]
        await self.save()
        self._request_render()
        self._event_bus.emit(AppEvent.TASK_DELETED, task)
        return task

    def completed_tasks(self) -> List[Task]:
        return [t for t in self.state.tasks if t.completed]

    async def clear_completed(self) -> List[Task]:
        """Remove every completed task in one batch and return them.

        Raises:
            ValidationError: there is nothing to clear. Nothing changes.
        """
        removed = self.completed_tasks()
        if not removed:
            raise ValidationError("error_nothing_to_clear")
        self.state.tasks[:] = [t for t in self.state.tasks if not t.completed]
        await self.save()
        self._request_render()
        self._event_bus.emit(AppEvent.COMPLETED_CLEARED, removed)
        return removed

    # --- Filters and views ---

    def set_filter(self, status: StatusFilter) -> None:
        self.state.status_filter = status
        self._request_render()
        self._event_bus.emit(AppEvent.FILTER_CHANGED, status)

    def set_category(self, category: Category) -> None:
        self.state.category_filter = category
        self._request_render()
        self._event_bus.emit(AppEvent.CATEGORY_CHANGED, category)

    def get_filtered_view(self) -> List[Task]:
        return filter_tasks(self.state.tasks, self.state.status_filter, self.state.category_filter)

    def counters(self) -> Dict[str, int]:
        """Counts within the current category, plus overall efficiency."""
        return count_tasks(self.state.tasks, self.state.category_filter)
