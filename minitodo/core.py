"""Headless bootstrap for Minitodo.

Builds the application context without any Flet dependency, suitable for
scripts and testing. The Flet app calls the same bootstrap() and passes the
resulting context to its pages.

Usage:
    from core import bootstrap

    ctx = await bootstrap(db_path=":memory:")
    await ctx.handler.add("Buy milk")
    ctx.store.get_filtered_view()
    await ctx.close()
"""
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional, Union

import config
from events import EventBus
from i18n import set_language
from models.entities import AppState
from services.analytics import AnalyticsAggregator
from services.host_bridge import HostBridge, user_from_config
from services.notification_service import TelegramNotifier
from services.settings_service import SettingsService
from services.task_store import TaskStore
from storage import BlobStore
from ui.handlers.task_action_handler import TaskActionHandler
from ui.renderer import DisplaySurface, ViewRenderer


@dataclass
class AppContext:
    """Everything one running app owns. Created once by the entry point."""
    state: AppState
    storage: BlobStore
    event_bus: EventBus
    analytics: AnalyticsAggregator
    store: TaskStore
    settings: SettingsService
    renderer: ViewRenderer
    host: HostBridge
    handler: TaskActionHandler

    async def close(self) -> None:
        """Stop timers, drop subscriptions and close the store."""
        self.handler.cleanup()
        self.renderer.dispose()
        self.event_bus.clear()
        await self.storage.close()


def default_host() -> HostBridge:
    """Headless host wired to the configured notifier and user."""
    return HostBridge(
        notifier=TelegramNotifier(config.TELEGRAM_BOT_TOKEN),
        user=user_from_config(),
    )


async def bootstrap(
    db_path: Optional[Union[str, Path]] = None,
    host: Optional[HostBridge] = None,
    surface: Optional[DisplaySurface] = None,
    clock: Callable[[], datetime] = datetime.now,
    **renderer_options: float,
) -> AppContext:
    """Create and load the application context.

    Args:
        db_path: Blob store location. Uses config.DB_PATH if None.
        host: Host bridge. Defaults to the headless bridge.
        surface: Display surface for the task list, if already built.
        clock: Source of "now" for ids, timestamps and analytics days.
        renderer_options: Timing overrides for ViewRenderer (tests).

    Returns:
        AppContext with tasks, analytics and theme loaded from storage.
    """
    set_language(config.LANGUAGE)
    state = AppState()
    storage = BlobStore(db_path if db_path is not None else config.DB_PATH)
    event_bus = EventBus()
    host = host or default_host()

    analytics = AnalyticsAggregator(storage, clock=clock)
    store = TaskStore(state, storage, event_bus, analytics, clock=clock)
    settings = SettingsService(state, storage, event_bus)
    renderer = ViewRenderer(state, event_bus, analytics, surface=surface, **renderer_options)
    handler = TaskActionHandler(store, settings, renderer, host, event_bus)

    await store.load()
    await analytics.load()
    await settings.load_theme()

    return AppContext(
        state=state,
        storage=storage,
        event_bus=event_bus,
        analytics=analytics,
        store=store,
        settings=settings,
        renderer=renderer,
        host=host,
        handler=handler,
    )
