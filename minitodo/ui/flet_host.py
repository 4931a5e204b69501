import logging
from typing import Optional

import flet as ft

from config import HapticIntensity
from i18n import t
from services.host_bridge import HostBridge, HostUser
from services.notification_service import TelegramNotifier
from ui.dialogs.base import open_dialog, show_message

logger = logging.getLogger(__name__)


class FletHostBridge(HostBridge):
    """Host bridge backed by a Flet page.

    Haptics go through a HapticFeedback control in the page overlay (a no-op
    on desktop), popups are modal AlertDialogs.
    """

    def __init__(
        self,
        page: ft.Page,
        notifier: Optional[TelegramNotifier] = None,
        user: Optional[HostUser] = None,
    ) -> None:
        super().__init__(notifier=notifier, user=user)
        self.page = page
        self._haptics = ft.HapticFeedback()
        page.overlay.append(self._haptics)

    def expand(self) -> None:
        self.page.window.maximized = True
        self.page.update()

    def enable_closing_confirmation(self) -> None:
        self.page.window.prevent_close = True
        self.page.window.on_event = self._on_window_event
        self.page.update()

    def _on_window_event(self, e: ft.WindowEvent) -> None:
        if e.data != "close":
            return

        def make_actions(close):
            def confirm(_e: ft.ControlEvent) -> None:
                close()
                self.page.window.destroy()

            return [
                ft.TextButton(t("cancel"), on_click=close),
                ft.TextButton(t("close"), on_click=confirm),
            ]

        open_dialog(self.page, t("close_app_confirm"), ft.Container(), make_actions)

    def haptic_pulse(self, intensity: HapticIntensity) -> None:
        pulses = {
            HapticIntensity.LIGHT: self._haptics.light_impact,
            HapticIntensity.MEDIUM: self._haptics.medium_impact,
            HapticIntensity.HEAVY: self._haptics.heavy_impact,
            HapticIntensity.SOFT: self._haptics.selection_click,
        }
        try:
            pulses[intensity]()
        except Exception as e:
            # Platforms without haptics report errors we can ignore
            logger.debug(f"Haptic pulse {intensity.value} unavailable: {e}")

    def show_popup(self, title: str, message: str) -> None:
        show_message(self.page, title, message)
