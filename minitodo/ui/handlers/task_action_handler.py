"""Task action handler - turns user intents into store calls and host feedback.

The flow for every action is:
    UI control -> TaskActionHandler -> TaskStore (mutate, persist, REFRESH_UI)
               -> HostBridge (haptic pulse, popup, notification)
"""
import logging
from typing import List, Optional

from config import Category, HapticIntensity, StatusFilter, Theme
from errors import ValidationError
from events import AppEvent, EventBus, Subscription
from i18n import t
from models.entities import Task
from services.host_bridge import HostBridge
from services.notification_service import completion_message
from services.settings_service import SettingsService
from services.task_store import TaskStore
from ui.renderer import ViewRenderer

logger = logging.getLogger(__name__)


class TaskActionHandler:
    """Handles task actions coming from the display surface.

    Owns the user-visible side of error handling: validation errors and
    persistence failures become popups, nothing is raised back into the UI.
    """

    def __init__(
        self,
        store: TaskStore,
        settings: SettingsService,
        renderer: ViewRenderer,
        host: HostBridge,
        event_bus: EventBus,
    ) -> None:
        self._store = store
        self._settings = settings
        self._renderer = renderer
        self._host = host
        self._subscriptions: List[Subscription] = [
            event_bus.subscribe(AppEvent.PERSISTENCE_FAILED, self._on_persistence_failed),
        ]

    def cleanup(self) -> None:
        """Unsubscribe from all events."""
        for subscription in self._subscriptions:
            subscription.unsubscribe()
        self._subscriptions.clear()

    def _report(self, error: ValidationError) -> None:
        logger.debug(f"Rejected action: {error.message_key}")
        self._host.show_popup(t("error"), t(error.message_key, **error.params))

    def _on_persistence_failed(self, _detail: object) -> None:
        self._host.show_popup(t("error"), t("error_save_failed"))

    # --- Task actions ---

    async def add(self, text: str) -> Optional[Task]:
        try:
            task = await self._store.add(text)
        except ValidationError as e:
            self._report(e)
            return None
        self._host.haptic_pulse(HapticIntensity.LIGHT)
        return task

    async def toggle(self, task_id: int) -> Optional[Task]:
        task = self._store.state.get_task_by_id(task_id)
        if task is None:
            return None
        self._renderer.mark_completing(task)
        task = await self._store.toggle(task_id)
        if task is None:
            return None
        self._host.haptic_pulse(HapticIntensity.LIGHT)
        if task.completed:
            user = self._host.current_user()
            if user is not None:
                await self._host.send_notification(user.id, completion_message(task))
        return task

    async def delete(self, task_id: int) -> Optional[Task]:
        task = self._store.state.get_task_by_id(task_id)
        if task is None:
            return None
        self._renderer.begin_exit([task])
        removed = await self._store.remove(task_id)
        self._host.haptic_pulse(HapticIntensity.MEDIUM)
        return removed

    async def clear_completed(self) -> List[Task]:
        completed = self._store.completed_tasks()
        if not completed:
            self._report(ValidationError("error_nothing_to_clear"))
            return []
        self._renderer.begin_exit(completed, staggered=True)
        removed = await self._store.clear_completed()
        self._host.haptic_pulse(HapticIntensity.HEAVY)
        self._host.show_popup(t("success"), t("cleared_completed", count=len(removed)))
        return removed

    async def save_all(self) -> bool:
        saved = await self._store.save()
        if saved:
            self._host.show_popup(t("success"), t("all_saved"))
        return saved

    # --- Selections ---

    def select_filter(self, status: StatusFilter) -> None:
        self._store.set_filter(status)

    def select_category(self, category: Category) -> None:
        self._store.set_category(category)

    async def select_theme(self, theme: Theme) -> None:
        await self._settings.set_theme(theme)
        self._host.haptic_pulse(HapticIntensity.SOFT)
