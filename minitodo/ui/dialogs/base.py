"""Dialog utilities - factory functions for consistent dialog styling.

open_dialog() creates modal dialogs with standard layout (title, content, actions).
show_message() is the one-button popup used for errors and confirmations.
"""
import flet as ft
from typing import Callable, Tuple, Optional, List

from i18n import t


def open_dialog(
    page: ft.Page,
    title: str,
    content: ft.Control,
    make_actions: Callable[[Callable[[], None]], List[ft.Control]],
    modal: bool = True,
) -> Tuple[ft.AlertDialog, Callable[[], None]]:
    holder: List[Optional[ft.AlertDialog]] = [None]

    def close(e: Optional[ft.ControlEvent] = None) -> None:
        if holder[0]:
            page.close(holder[0])

    holder[0] = ft.AlertDialog(
        modal=modal,
        title=ft.Text(title),
        content=content,
        actions=make_actions(close),
        actions_alignment=ft.MainAxisAlignment.END,
    )
    page.open(holder[0])
    return holder[0], close


def show_message(page: ft.Page, title: str, message: str) -> ft.AlertDialog:
    dialog, _ = open_dialog(
        page,
        title,
        ft.Text(message),
        lambda close: [ft.TextButton(t("ok"), on_click=close)],
    )
    return dialog
