import flet as ft
from typing import Callable, Dict, List, Optional

from config import (
    CATEGORY_ICONS,
    COLORS,
    BORDER_RADIUS,
    FONT_SIZE_LG,
    FONT_SIZE_SM,
    FONT_SIZE_XL,
    PADDING_XL,
    SPACING_MD,
    TASK_TEXT_MAX_LENGTH,
    Category,
    StatusFilter,
    Theme,
)
from i18n import t
from models.entities import AppState
from ui.components.task_tile import TaskTile
from ui.handlers.task_action_handler import TaskActionHandler
from ui.helpers import accent_btn, danger_btn, option_btn
from ui.presenters.task_presenter import TaskListView, TaskPresenter
from ui.renderer import DisplaySurface

_FILTER_LABELS = {
    StatusFilter.ALL: "filter_all",
    StatusFilter.ACTIVE: "filter_active",
    StatusFilter.COMPLETED: "filter_completed",
}

_THEME_LABELS = {
    Theme.LIGHT: "theme_light",
    Theme.DARK: "theme_dark",
}


class TasksView(DisplaySurface):
    """Task list page: input, category and filter groups, list and counters.

    It only draws what the renderer pushes; every user action is forwarded
    to the TaskActionHandler with the id of the row or option involved.
    """

    def __init__(
        self,
        page: ft.Page,
        state: AppState,
        handler: TaskActionHandler,
        on_open_stats: Optional[Callable[[], None]] = None,
    ) -> None:
        self.page = page
        self.state = state
        self.handler = handler
        self.on_open_stats = on_open_stats
        self._tiles: Dict[int, TaskTile] = {}
        self._attached = False
        self._build_controls()

    def _build_controls(self) -> None:
        self.greeting = ft.Text("", size=FONT_SIZE_XL, weight=ft.FontWeight.BOLD)
        self.theme_row = ft.Row(spacing=SPACING_MD)
        self.task_input = ft.TextField(
            hint_text=t("add_new_task"),
            expand=True,
            max_length=TASK_TEXT_MAX_LENGTH,
            border_radius=BORDER_RADIUS,
            on_submit=self._on_submit,
            prefix_icon=ft.Icons.ADD_TASK,
        )
        self.submit_btn = ft.IconButton(
            icon=ft.Icons.SEND,
            icon_color=COLORS["accent"],
            on_click=self._on_submit,
            tooltip=t("add"),
        )
        self.category_row = ft.Row(spacing=SPACING_MD, wrap=True)
        self.filter_row = ft.Row(spacing=SPACING_MD)
        self.task_list = ft.Column(spacing=SPACING_MD)
        self.empty_icon = ft.Text("", size=48)
        self.empty_text = ft.Text("", size=FONT_SIZE_LG, color=COLORS["done_text"])
        self.empty_state = ft.Container(
            content=ft.Column(
                [self.empty_icon, self.empty_text],
                horizontal_alignment=ft.CrossAxisAlignment.CENTER,
            ),
            alignment=ft.alignment.center,
            padding=PADDING_XL,
            visible=False,
        )
        self.counter_text = ft.Text("", size=FONT_SIZE_SM, color=COLORS["done_text"])
        self.efficiency_text = ft.Text("", size=FONT_SIZE_SM, color=COLORS["done_text"])
        self.clear_btn = danger_btn(t("clear_completed"), self._on_clear, icon=ft.Icons.CLEANING_SERVICES)
        self.save_btn = accent_btn(t("save_all"), self._on_save, icon=ft.Icons.SAVE)
        self.stats_btn = ft.IconButton(
            icon=ft.Icons.BAR_CHART,
            icon_color=COLORS["accent"],
            tooltip=t("statistics"),
            on_click=self._on_stats,
        )

    def set_greeting(self, name: str) -> None:
        self.greeting.value = t("greeting", name=name)

    # --- Event handlers ---

    async def _on_submit(self, e: ft.ControlEvent) -> None:
        task = await self.handler.add(self.task_input.value or "")
        if task is not None:
            self.task_input.value = ""
            self.task_input.update()

    async def _on_toggle(self, task_id: int) -> None:
        await self.handler.toggle(task_id)

    async def _on_delete(self, task_id: int) -> None:
        await self.handler.delete(task_id)

    async def _on_clear(self, e: ft.ControlEvent) -> None:
        await self.handler.clear_completed()

    async def _on_save(self, e: ft.ControlEvent) -> None:
        await self.handler.save_all()

    def _on_stats(self, e: ft.ControlEvent) -> None:
        if self.on_open_stats:
            self.on_open_stats()

    def _on_filter(self, e: ft.ControlEvent) -> None:
        self.handler.select_filter(e.control.data)

    def _on_category(self, e: ft.ControlEvent) -> None:
        self.handler.select_category(e.control.data)

    async def _on_theme(self, e: ft.ControlEvent) -> None:
        await self.handler.select_theme(e.control.data)

    # --- Drawing ---

    def _rebuild_option_rows(self, view: TaskListView) -> None:
        self.category_row.controls = [
            option_btn(
                f"{CATEGORY_ICONS[category]} {TaskPresenter.category_label(category)}",
                category == view.category_filter,
                self._on_category,
                data=category,
            )
            for category in Category
        ]
        self.filter_row.controls = [
            option_btn(t(_FILTER_LABELS[status]), status == view.status_filter, self._on_filter, data=status)
            for status in StatusFilter
        ]
        self.theme_row.controls = [
            option_btn(t(_THEME_LABELS[theme]), theme == self.state.theme, self._on_theme, data=theme)
            for theme in Theme
        ]

    def _sync_tiles(self, view: TaskListView) -> List[ft.Control]:
        controls = []
        tiles: Dict[int, TaskTile] = {}
        for item in view.items:
            tile = self._tiles.get(item.id)
            if tile is None:
                tile = TaskTile(item, self.state.theme, self._on_toggle, self._on_delete)
            else:
                tile.apply(item, self.state.theme)
            tiles[item.id] = tile
            controls.append(tile.control)
        self._tiles = tiles
        return controls

    def show_task_list(self, view: TaskListView) -> None:
        self._rebuild_option_rows(view)
        self.task_list.controls = self._sync_tiles(view)
        if view.empty_state is not None:
            self.empty_icon.value = view.empty_state.icon
            self.empty_text.value = view.empty_state.message
        self.empty_state.visible = view.empty_state is not None
        self.task_list.visible = view.empty_state is None
        self.counter_text.value = view.counters.summary
        self.efficiency_text.value = t("efficiency", percent=view.counters.efficiency)
        self.clear_btn.visible = view.has_completed
        if self._attached:
            self.page.update()

    def build(self) -> ft.Column:
        self._attached = True
        return ft.Column(
            [
                ft.Row(
                    [self.greeting, ft.Row([self.theme_row, self.stats_btn])],
                    alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
                ),
                ft.Row([self.task_input, self.submit_btn]),
                self.category_row,
                self.filter_row,
                self.empty_state,
                self.task_list,
                ft.Row(
                    [self.counter_text, self.efficiency_text],
                    alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
                ),
                ft.Row([self.clear_btn, self.save_btn], alignment=ft.MainAxisAlignment.END),
            ],
            spacing=SPACING_MD,
            scroll=ft.ScrollMode.AUTO,
            expand=True,
        )
