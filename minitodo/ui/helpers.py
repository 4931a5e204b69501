import flet as ft
from typing import Optional

from config import BORDER_RADIUS, COLORS, Theme


def card_color(theme: Theme) -> str:
    return COLORS["card_dark"] if theme == Theme.DARK else COLORS["card_light"]


def theme_mode(theme: Theme) -> ft.ThemeMode:
    return ft.ThemeMode.DARK if theme == Theme.DARK else ft.ThemeMode.LIGHT


def accent_btn(text: str, on_click, icon: Optional[str] = None) -> ft.ElevatedButton:
    return ft.ElevatedButton(
        text,
        on_click=on_click,
        bgcolor=COLORS["accent"],
        color=COLORS["white"],
        icon=icon,
    )


def danger_btn(text: str, on_click, icon: Optional[str] = None) -> ft.ElevatedButton:
    return ft.ElevatedButton(
        text,
        on_click=on_click,
        bgcolor=COLORS["danger"],
        color=COLORS["white"],
        icon=icon,
    )


def option_btn(text: str, selected: bool, on_click, data=None) -> ft.Container:
    """Pill button used in the filter, category and theme groups."""
    return ft.Container(
        content=ft.Text(text, color=COLORS["white"] if selected else None),
        bgcolor=COLORS["accent"] if selected else None,
        border=ft.border.all(1, COLORS["accent"]),
        border_radius=BORDER_RADIUS,
        padding=ft.padding.symmetric(horizontal=12, vertical=6),
        on_click=on_click,
        ink=True,
        data=data,
    )
