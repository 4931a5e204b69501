import flet as ft
from typing import Awaitable, Callable

from config import (
    BORDER_RADIUS,
    COLORS,
    EXIT_ANIMATION_SECONDS,
    FONT_SIZE_MD,
    OPACITY_DONE,
    OPACITY_EXITING,
    PADDING_LG,
    Theme,
)
from ui.helpers import card_color
from ui.presenters.task_presenter import TaskItemView


class TaskTile:
    """Single task row. Emits toggle/delete requests through callbacks by id.

    The tile keeps its control between redraws; apply() updates it in place
    so opacity changes animate instead of the row being swapped out.
    """

    def __init__(
        self,
        item: TaskItemView,
        theme: Theme,
        on_toggle: Callable[[int], Awaitable[None]],
        on_delete: Callable[[int], Awaitable[None]],
    ) -> None:
        self.item = item
        self.theme = theme
        self._on_toggle = on_toggle
        self._on_delete = on_delete
        self._checkbox = ft.Checkbox(on_change=self._handle_check)
        self._title = ft.Text(expand=True)
        self._delete_btn = ft.IconButton(
            ft.Icons.DELETE_OUTLINE,
            icon_color=COLORS["danger"],
            on_click=self._handle_delete,
        )
        self.control = ft.Container(
            padding=PADDING_LG,
            border_radius=BORDER_RADIUS,
            animate_opacity=int(EXIT_ANIMATION_SECONDS * 1000),
            key=str(item.id),
            data=item.id,
            content=ft.Row([
                self._checkbox,
                ft.Text(item.category_icon, size=FONT_SIZE_MD),
                self._title,
                self._delete_btn,
            ]),
        )
        self.apply(item, theme)

    def _opacity(self, item: TaskItemView) -> float:
        if item.exiting:
            return OPACITY_EXITING
        if item.completed or item.completing:
            return OPACITY_DONE
        return 1.0

    def apply(self, item: TaskItemView, theme: Theme) -> ft.Container:
        self.item = item
        self.theme = theme
        # Rows in an exit animation no longer accept input
        interactive = not item.exiting
        self._checkbox.value = item.completed
        self._checkbox.disabled = not interactive
        self._delete_btn.disabled = not interactive
        self._title.value = item.text
        self._title.color = COLORS["done_text"] if item.completed else None
        self._title.style = (
            ft.TextStyle(decoration=ft.TextDecoration.LINE_THROUGH)
            if item.completed else None
        )
        self.control.bgcolor = card_color(theme)
        self.control.opacity = self._opacity(item)
        return self.control

    async def _handle_check(self, e: ft.ControlEvent) -> None:
        if not self.item.exiting:
            await self._on_toggle(self.item.id)

    async def _handle_delete(self, e: ft.ControlEvent) -> None:
        if not self.item.exiting:
            await self._on_delete(self.item.id)
