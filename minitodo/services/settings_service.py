import logging

from config import DEFAULT_THEME, StorageKey, Theme
from errors import StorageError
from events import AppEvent, EventBus
from models.entities import AppState
from storage import BlobStore

logger = logging.getLogger(__name__)


class SettingsService:
    """Service for the persisted theme preference.

    The theme lives under its own key, independent of the task list.
    """

    def __init__(self, state: AppState, storage: BlobStore, event_bus: EventBus) -> None:
        self.state = state
        self._storage = storage
        self._event_bus = event_bus

    async def load_theme(self) -> Theme:
        """Read the stored theme, falling back to the default on anything unexpected."""
        raw = await self._storage.get(StorageKey.THEME, DEFAULT_THEME.value)
        try:
            self.state.theme = Theme(raw)
        except ValueError:
            logger.warning(f"Unknown stored theme {raw!r}, using {DEFAULT_THEME.value}")
            self.state.theme = DEFAULT_THEME
        return self.state.theme

    async def set_theme(self, theme: Theme) -> bool:
        """Apply and persist a theme. Returns False if the write failed."""
        self.state.theme = theme
        self._event_bus.emit(AppEvent.THEME_CHANGED, theme)
        try:
            await self._storage.set(StorageKey.THEME, theme.value)
            return True
        except StorageError as e:
            logger.error(f"Failed to persist theme: {e}")
            self._event_bus.emit(AppEvent.PERSISTENCE_FAILED, str(e))
            return False
