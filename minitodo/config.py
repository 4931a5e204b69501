"""Application configuration - single source of truth for all constants.

Contains enums (StatusFilter, Category, Theme, HapticIntensity), storage keys,
timing values, colors and environment-provided credentials.
Import from here instead of hardcoding values elsewhere.
"""
import os
from enum import Enum
from pathlib import Path

# Load .env if available (desktop only - not bundled in mobile builds)
try:
    from dotenv import load_dotenv
    load_dotenv(Path(__file__).parent / ".env")
except ImportError:
    pass  # dotenv not available on mobile, skip loading .env


class StatusFilter(Enum):
    """Which tasks the list shows by completion state."""
    ALL = "all"
    ACTIVE = "active"
    COMPLETED = "completed"


class Category(Enum):
    """Closed set of task categories."""
    GENERAL = "general"
    WORK = "work"
    PERSONAL = "personal"
    SHOPPING = "shopping"
    HEALTH = "health"


class Theme(Enum):
    LIGHT = "light"
    DARK = "dark"


class HapticIntensity(Enum):
    """Haptic pulse strengths understood by the host shell."""
    LIGHT = "light"
    MEDIUM = "medium"
    HEAVY = "heavy"
    SOFT = "soft"


class StorageKey:
    """Keys of the independent JSON documents in the blob store."""
    TASKS = "todos"
    ANALYTICS = "analytics"
    THEME = "theme"


DEFAULT_CATEGORY = Category.GENERAL
DEFAULT_THEME = Theme.DARK

TASK_TEXT_MAX_LENGTH = 200

RENDER_DEBOUNCE_SECONDS = 0.016
EXIT_ANIMATION_SECONDS = 0.3
EXIT_STAGGER_SECONDS = 0.05
COMPLETE_TRANSITION_SECONDS = 0.3

ANALYTICS_RETENTION_DAYS = 90
DAILY_CHART_DAYS = 7
WEEKLY_TREND_DAYS = 7
MONTHLY_CHART_DAYS = 30

DB_PATH = Path(os.getenv("MINITODO_DB_PATH", "") or "minitodo.db")
LANGUAGE = os.getenv("MINITODO_LANGUAGE", "") or "en"

# Telegram Bot API credentials for completion notifications.
# Leave empty to disable outbound notifications.
TELEGRAM_BOT_TOKEN = os.getenv("TELEGRAM_BOT_TOKEN", "")
TELEGRAM_CHAT_ID = os.getenv("TELEGRAM_CHAT_ID", "")
TELEGRAM_API_URL = "https://api.telegram.org"
NOTIFICATION_TIMEOUT_SECONDS = 10

# Display name reported by the headless host when no shell user is present
USER_NAME = os.getenv("MINITODO_USER_NAME", "")

CATEGORY_ICONS = {
    Category.GENERAL: "📋",
    Category.WORK: "💼",
    Category.PERSONAL: "🏠",
    Category.SHOPPING: "🛒",
    Category.HEALTH: "💊",
}

EMPTY_STATE_ICONS = {
    StatusFilter.ALL: "📝",
    StatusFilter.ACTIVE: "🎉",
    StatusFilter.COMPLETED: "⏳",
}

BORDER_RADIUS = 10
PADDING_SM = 4
PADDING_MD = 8
PADDING_LG = 12
PADDING_XL = 20
SPACING_SM = 4
SPACING_MD = 8
SPACING_LG = 12

FONT_SIZE_SM = 12
FONT_SIZE_MD = 14
FONT_SIZE_LG = 18
FONT_SIZE_XL = 24

CHART_HEIGHT = 160
CHART_BAR_WIDTH = 10
STATS_DIALOG_WIDTH = 360

OPACITY_DONE = 0.6
OPACITY_EXITING = 0.0

COLORS = {
    "accent": "#4a9eff",
    "danger": "#ff6b6b",
    "green": "#4caf50",
    "orange": "#ff9800",
    "done_text": "#888888",
    "card_dark": "#2d2d2d",
    "card_light": "#f2f2f2",
    "white": "white",
    "created_bar": "#ff9800",
    "completed_bar": "#4caf50",
    "trend_line": "#4a9eff",
}
