import flet as ft
from typing import Any, List, Optional

from config import COLORS, FONT_SIZE_MD, FONT_SIZE_SM, SPACING_LG, SPACING_MD, STATS_DIALOG_WIDTH
from events import AppEvent, EventBus, Subscription
from i18n import t
from ui.components.charts import FletChartSlot
from ui.dialogs.base import open_dialog
from ui.renderer import ViewRenderer


def _legend(label: str, color: str) -> ft.Row:
    return ft.Row(
        [
            ft.Container(width=10, height=10, bgcolor=color, border_radius=2),
            ft.Text(label, size=FONT_SIZE_SM),
        ],
        spacing=SPACING_MD,
    )


class StatsDialog:
    """Statistics dialog with the daily, weekly trend and monthly charts.

    The three slots live as long as the dialog object, so every refresh
    replaces the chart inside each slot instead of adding another one.
    """

    def __init__(self, page: ft.Page, renderer: ViewRenderer, event_bus: EventBus) -> None:
        self.page = page
        self.renderer = renderer
        self.event_bus = event_bus
        self.daily = FletChartSlot()
        self.weekly = FletChartSlot()
        self.monthly = FletChartSlot()
        self._dialog: Optional[ft.AlertDialog] = None
        self._subscriptions: List[Subscription] = []
        renderer.attach_chart_slots(self.daily, self.weekly, self.monthly)

    def _section(self, title_key: str, slot: FletChartSlot, legend: Optional[ft.Control] = None) -> ft.Column:
        controls = [ft.Text(t(title_key), size=FONT_SIZE_MD, weight=ft.FontWeight.BOLD)]
        if legend is not None:
            controls.append(legend)
        controls.append(slot.container)
        return ft.Column(controls, spacing=SPACING_MD)

    def _build_content(self) -> ft.Container:
        legend = ft.Row(
            [
                _legend(t("created_legend"), COLORS["created_bar"]),
                _legend(t("completed_legend"), COLORS["completed_bar"]),
            ],
            spacing=SPACING_LG,
        )
        return ft.Container(
            width=STATS_DIALOG_WIDTH,
            content=ft.Column(
                [
                    self._section("daily_chart", self.daily, legend),
                    self._section("weekly_trend", self.weekly),
                    self._section("monthly_chart", self.monthly),
                ],
                spacing=SPACING_LG,
                scroll=ft.ScrollMode.AUTO,
                tight=True,
            ),
        )

    def open(self) -> None:
        self.renderer.refresh_charts()
        if not self._subscriptions:
            self._subscriptions.append(
                self.event_bus.subscribe(AppEvent.ANALYTICS_UPDATED, self._on_analytics_updated)
            )

        def make_actions(close):
            def close_and_cleanup(e: Optional[ft.ControlEvent] = None) -> None:
                self.cleanup()
                close()

            return [ft.TextButton(t("close"), on_click=close_and_cleanup)]

        self._dialog, _ = open_dialog(self.page, t("statistics"), self._build_content(), make_actions)

    def _on_analytics_updated(self, _data: Any) -> None:
        self.renderer.refresh_charts()
        if self._dialog is not None and self._dialog.open:
            self.page.update()

    def cleanup(self) -> None:
        for subscription in self._subscriptions:
            subscription.unsubscribe()
        self._subscriptions.clear()
