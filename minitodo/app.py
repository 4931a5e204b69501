import flet as ft
import logging
from typing import Any, List

logger = logging.getLogger(__name__)

from core import AppContext
from events import AppEvent, Subscription
from i18n import t
from ui.helpers import theme_mode
from ui.pages.stats_view import StatsDialog
from ui.pages.task_view import TasksView


class MinitodoApp:
    """Main application class wiring the task page and statistics dialog."""

    def __init__(self, page: ft.Page, ctx: AppContext) -> None:
        self.page = page
        self.ctx = ctx
        self._subscriptions: List[Subscription] = []

        page.title = t("app_title")
        page.theme_mode = theme_mode(ctx.state.theme)

        # Host setup happens once, before the first render
        ctx.host.expand()
        ctx.host.enable_closing_confirmation()

        self.stats_dialog = StatsDialog(page, ctx.renderer, ctx.event_bus)
        self.tasks_view = TasksView(page, ctx.state, ctx.handler, on_open_stats=self.stats_dialog.open)
        self.tasks_view.set_greeting(self._user_name())

        self._subscriptions.append(ctx.event_bus.subscribe(AppEvent.THEME_CHANGED, self._on_theme_changed))
        self.page.on_close = self._on_page_close

        ctx.renderer.attach_surface(self.tasks_view)
        self.page.add(self.tasks_view.build())
        ctx.renderer.render_now()

    def _user_name(self) -> str:
        user = self.ctx.host.current_user()
        if user is None or not user.first_name:
            return t("default_user_name")
        return user.first_name

    def _on_theme_changed(self, _data: Any) -> None:
        self.page.theme_mode = theme_mode(self.ctx.state.theme)
        self.ctx.renderer.request_render()

    def _on_page_close(self, e: ft.ControlEvent) -> None:
        """Handle page close - cleanup resources."""
        for subscription in self._subscriptions:
            subscription.unsubscribe()
        self._subscriptions.clear()
        self.stats_dialog.cleanup()

        async def cleanup_all() -> None:
            try:
                await self.ctx.close()
            except Exception as e:  # Intentionally broad: cleanup must complete on shutdown
                logger.warning(f"Error closing app context: {e}")

        self.page.run_task(cleanup_all)


def create_app(page: ft.Page, ctx: AppContext) -> MinitodoApp:
    """Factory function to create the application."""
    return MinitodoApp(page, ctx)
