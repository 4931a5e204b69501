from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional

from config import CATEGORY_ICONS, EMPTY_STATE_ICONS, Category, StatusFilter
from i18n import t
from models.entities import AppState, Task
from services.task_store import count_tasks, filter_tasks


@dataclass(frozen=True)
class TaskItemView:
    """Computed display data for one row, separating logic from presentation."""
    id: int
    text: str
    completed: bool
    category: Category
    category_icon: str
    completing: bool = False
    exiting: bool = False


@dataclass(frozen=True)
class EmptyStateView:
    icon: str
    message: str


@dataclass(frozen=True)
class CountersView:
    total: int
    active: int
    completed: int
    efficiency: int

    @property
    def summary(self) -> str:
        return t("active_count", count=self.active)


@dataclass(frozen=True)
class TaskListView:
    """Everything the task list surface needs for one redraw."""
    items: List[TaskItemView]
    counters: CountersView
    status_filter: StatusFilter
    category_filter: Category
    empty_state: Optional[EmptyStateView] = None
    has_completed: bool = False
    ids: List[int] = field(default_factory=list)


class TaskPresenter:
    """Computes display values for tasks without rendering."""

    @staticmethod
    def category_label(category: Category) -> str:
        return t(f"category_{category.value}")

    @staticmethod
    def create_item(task: Task, completing: bool = False, exiting: bool = False) -> TaskItemView:
        return TaskItemView(
            id=task.id,
            text=task.text,
            completed=task.completed,
            category=task.category,
            category_icon=CATEGORY_ICONS.get(task.category, ""),
            completing=completing,
            exiting=exiting,
        )

    @classmethod
    def empty_state(cls, status: StatusFilter, category: Category) -> EmptyStateView:
        keys = {
            StatusFilter.ALL: "empty_all",
            StatusFilter.ACTIVE: "empty_active",
            StatusFilter.COMPLETED: "empty_completed",
        }
        message = t(keys[status], category=cls.category_label(category))
        return EmptyStateView(icon=EMPTY_STATE_ICONS[status], message=message)

    @staticmethod
    def counters(state: AppState) -> CountersView:
        return CountersView(**count_tasks(state.tasks, state.category_filter))


@dataclass(frozen=True)
class Ghost:
    """A row kept on screen while its exit or completing transition plays."""
    item: TaskItemView
    index: int

    @classmethod
    def from_item(cls, item: TaskItemView, index: int, completing: bool = False) -> "Ghost":
        return cls(item=replace(item, exiting=not completing, completing=completing), index=index)


def build_task_list_view(
    state: AppState,
    ghosts: Optional[Dict[int, Ghost]] = None,
) -> TaskListView:
    """Deterministic view model for the current state.

    Ghosts describe rows in a running transition. A ghost whose task is still
    visible only flags that row (exiting or completing). A ghost whose task
    already left the filtered view is re-inserted at the position it had when
    the transition began, so the row stays until its animation ends.
    """
    ghosts = ghosts or {}
    visible = filter_tasks(state.tasks, state.status_filter, state.category_filter)
    items = []
    for task in visible:
        ghost = ghosts.get(task.id)
        items.append(TaskPresenter.create_item(
            task,
            completing=ghost is not None and ghost.item.completing,
            exiting=ghost is not None and ghost.item.exiting,
        ))

    present = {item.id for item in items}
    for ghost in sorted(ghosts.values(), key=lambda g: g.index):
        if ghost.item.id not in present:
            items.insert(min(ghost.index, len(items)), ghost.item)

    counters = TaskPresenter.counters(state)
    empty = (
        TaskPresenter.empty_state(state.status_filter, state.category_filter)
        if not items else None
    )
    return TaskListView(
        items=items,
        counters=counters,
        status_filter=state.status_filter,
        category_filter=state.category_filter,
        empty_state=empty,
        has_completed=counters.completed > 0,
        ids=[item.id for item in items],
    )
