"""View renderer - keeps the display surfaces consistent with the task store.

The renderer never mutates tasks. It rebuilds a TaskListView from the
application state whenever REFRESH_UI is emitted (debounced), and tracks
rows in a running exit or completing transition so they stay on screen until
their animation ends even though the data change has already happened.
"""
import asyncio
import logging
from typing import Any, Dict, Iterable, List, Optional

from config import (
    COMPLETE_TRANSITION_SECONDS,
    DAILY_CHART_DAYS,
    EXIT_ANIMATION_SECONDS,
    EXIT_STAGGER_SECONDS,
    MONTHLY_CHART_DAYS,
    RENDER_DEBOUNCE_SECONDS,
    WEEKLY_TREND_DAYS,
)
from events import AppEvent, EventBus, Subscription
from models.entities import AppState, Task
from services.analytics import AnalyticsAggregator
from ui.presenters.chart_presenter import ChartModel, daily_chart, monthly_chart, weekly_trend
from ui.presenters.task_presenter import Ghost, TaskListView, TaskPresenter, build_task_list_view

logger = logging.getLogger(__name__)


class DisplaySurface:
    """Receives task list view models. Implemented by the Flet task page."""

    def show_task_list(self, view: TaskListView) -> None:
        raise NotImplementedError


class ChartSlot:
    """A place on screen holding at most one chart at a time.

    bind() always discards the chart currently held before attaching the new
    one, so repeated refreshes never stack charts on the same surface.
    """

    def __init__(self) -> None:
        self.current: Optional[Any] = None
        self.bind_count = 0

    def bind(self, model: ChartModel) -> Any:
        if self.current is not None:
            self._discard(self.current)
            self.current = None
        chart = self._create(model)
        self._attach(chart)
        self.current = chart
        self.bind_count += 1
        return chart

    def _create(self, model: ChartModel) -> Any:
        return model

    def _attach(self, chart: Any) -> None:
        pass

    def _discard(self, chart: Any) -> None:
        pass


class ViewRenderer:
    """Debounced redraws plus exit/completing sequencing for the task list."""

    def __init__(
        self,
        state: AppState,
        event_bus: EventBus,
        analytics: AnalyticsAggregator,
        surface: Optional[DisplaySurface] = None,
        debounce_seconds: float = RENDER_DEBOUNCE_SECONDS,
        exit_seconds: float = EXIT_ANIMATION_SECONDS,
        stagger_seconds: float = EXIT_STAGGER_SECONDS,
        complete_seconds: float = COMPLETE_TRANSITION_SECONDS,
    ) -> None:
        self.state = state
        self._analytics = analytics
        self._surface = surface
        self._debounce_seconds = debounce_seconds
        self._exit_seconds = exit_seconds
        self._stagger_seconds = stagger_seconds
        self._complete_seconds = complete_seconds

        self._pending: Optional[asyncio.TimerHandle] = None
        self._ghosts: Dict[int, Ghost] = {}
        self._ghost_handles: Dict[int, asyncio.TimerHandle] = {}
        self._chart_slots: Dict[str, ChartSlot] = {}
        self.last_view: Optional[TaskListView] = None
        self.render_count = 0

        self._subscriptions: List[Subscription] = [
            event_bus.subscribe(AppEvent.REFRESH_UI, self._on_refresh),
            event_bus.subscribe(AppEvent.FILTER_CHANGED, self._on_scope_changed),
            event_bus.subscribe(AppEvent.CATEGORY_CHANGED, self._on_scope_changed),
        ]

    def attach_surface(self, surface: DisplaySurface) -> None:
        self._surface = surface

    def attach_chart_slots(self, daily: ChartSlot, weekly: ChartSlot, monthly: ChartSlot) -> None:
        self._chart_slots = {"daily": daily, "weekly": weekly, "monthly": monthly}

    @property
    def has_pending_render(self) -> bool:
        return self._pending is not None

    @property
    def ghost_ids(self) -> List[int]:
        return list(self._ghosts)

    # --- Rendering ---

    def _on_refresh(self, _data: Any) -> None:
        self.request_render()

    def request_render(self) -> None:
        """Coalesce render requests; only the most recent one fires.

        Without a running event loop (scripts, sync callers) the render
        happens immediately.
        """
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self.render_now()
            return
        if self._pending is not None:
            self._pending.cancel()
        self._pending = loop.call_later(self._debounce_seconds, self._fire_pending)

    def _fire_pending(self) -> None:
        self._pending = None
        self.render_now()

    def render_now(self) -> TaskListView:
        """Rebuild the view model and push it to the surface."""
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
        view = build_task_list_view(self.state, self._ghosts)
        self.last_view = view
        self.render_count += 1
        if self._surface is not None:
            try:
                self._surface.show_task_list(view)
            except Exception:
                # A broken surface must not stop later redraws
                logger.exception("Display surface failed to render task list")
        return view

    # --- Transitions ---

    def _position_in_view(self, task_id: int) -> Optional[int]:
        view = build_task_list_view(self.state, self._ghosts)
        try:
            return view.ids.index(task_id)
        except ValueError:
            return None

    def _hold(self, ghost: Ghost, delay: float) -> None:
        task_id = ghost.item.id
        handle = self._ghost_handles.pop(task_id, None)
        if handle is not None:
            handle.cancel()
        self._ghosts[task_id] = ghost
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No loop to time the animation: drop the ghost right away
            self._ghosts.pop(task_id, None)
            return
        self._ghost_handles[task_id] = loop.call_later(delay, self._release, task_id)

    def _release(self, task_id: int) -> None:
        self._ghost_handles.pop(task_id, None)
        if self._ghosts.pop(task_id, None) is not None:
            self.request_render()

    def begin_exit(self, tasks: Iterable[Task], staggered: bool = False) -> List[int]:
        """Mark rows as exiting before their data is removed.

        Call this first, then run the store mutation. The marked rows are
        drawn immediately; each row disappears when its exit delay elapses
        (progressively when staggered). Returns the ids that were on screen.
        """
        marked = []
        for task in tasks:
            index = self._position_in_view(task.id)
            if index is None:
                continue
            item = TaskPresenter.create_item(task)
            delay = self._exit_seconds + (len(marked) * self._stagger_seconds if staggered else 0)
            self._hold(Ghost.from_item(item, index), delay)
            marked.append(task.id)
        if marked:
            self.render_now()
        return marked

    def mark_completing(self, task: Task) -> bool:
        """Flag a row for the toggle transition before the toggle is applied.

        The toggle itself runs right after; the flag only keeps the row in
        place (even if the new state falls outside the filter) for the
        length of the transition.
        """
        index = self._position_in_view(task.id)
        if index is None:
            return False
        self._hold(Ghost.from_item(TaskPresenter.create_item(task), index, completing=True), self._complete_seconds)
        self.render_now()
        return True

    def cancel_transitions(self) -> None:
        for handle in self._ghost_handles.values():
            handle.cancel()
        self._ghost_handles.clear()
        self._ghosts.clear()

    def _on_scope_changed(self, _data: Any) -> None:
        # Positions recorded under the old filter mean nothing in the new one
        self.cancel_transitions()

    # --- Charts ---

    def build_chart_models(self) -> Dict[str, ChartModel]:
        return {
            "daily": daily_chart(self._analytics.stats_for_period(DAILY_CHART_DAYS)),
            "weekly": weekly_trend(self._analytics.stats_for_period(WEEKLY_TREND_DAYS)),
            "monthly": monthly_chart(self._analytics.stats_for_period(MONTHLY_CHART_DAYS)),
        }

    def refresh_charts(self) -> Dict[str, ChartModel]:
        """Rebuild all three charts; each slot replaces its previous chart."""
        models = self.build_chart_models()
        for name, slot in self._chart_slots.items():
            try:
                slot.bind(models[name])
            except Exception:
                logger.exception(f"Failed to bind {name} chart")
        return models

    def dispose(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
        self.cancel_transitions()
        for subscription in self._subscriptions:
            subscription.unsubscribe()
        self._subscriptions.clear()
