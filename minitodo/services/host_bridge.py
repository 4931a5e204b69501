import logging
from dataclasses import dataclass
from typing import Optional

from config import HapticIntensity, TELEGRAM_CHAT_ID, USER_NAME
from services.notification_service import TelegramNotifier

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HostUser:
    """The chat-platform user the app runs for."""
    id: str
    first_name: Optional[str] = None


def user_from_config() -> Optional[HostUser]:
    """Build the user from environment settings, if any are present."""
    if not TELEGRAM_CHAT_ID and not USER_NAME:
        return None
    return HostUser(id=TELEGRAM_CHAT_ID, first_name=USER_NAME or None)


class HostBridge:
    """Platform capabilities the core calls into.

    This base implementation is headless: window and feedback calls are
    no-ops, popups are logged. Subclasses bind it to a real shell (see
    ui.flet_host.FletHostBridge). Outbound notifications go through the
    notifier and silently do nothing without credentials.
    """

    def __init__(
        self,
        notifier: Optional[TelegramNotifier] = None,
        user: Optional[HostUser] = None,
    ) -> None:
        self._notifier = notifier
        self._user = user

    def expand(self) -> None:
        pass

    def enable_closing_confirmation(self) -> None:
        pass

    def haptic_pulse(self, intensity: HapticIntensity) -> None:
        logger.debug(f"Haptic pulse: {intensity.value}")

    def show_popup(self, title: str, message: str) -> None:
        logger.info(f"{title}: {message}")

    def current_user(self) -> Optional[HostUser]:
        return self._user

    async def send_notification(self, user_id: Optional[str], message: str) -> None:
        if self._notifier is None or not user_id:
            return
        await self._notifier.send(user_id, message)
