"""Internationalization module - provides t("key") for translated strings.

All user-facing text goes through t("key") to support English and Russian.
Add new translations to _TRANSLATIONS with both "en" and "ru" values.
"""
from typing import Dict

_current_language: str = "en"

LANGUAGES: Dict[str, Dict[str, str]] = {
    "en": {"name": "English", "flag": "🇺🇸", "code": "EN"},
    "ru": {"name": "Русский", "flag": "🇷🇺", "code": "RU"},
}

_TRANSLATIONS: Dict[str, Dict[str, str]] = {
    "app_title": {"en": "My tasks", "ru": "Мои задачи"},
    "greeting": {"en": "Hello, {name}!", "ru": "Привет, {name}!"},
    "default_user_name": {"en": "User", "ru": "Пользователь"},
    "add_new_task": {"en": "New task...", "ru": "Новая задача..."},
    "add": {"en": "Add", "ru": "Добавить"},
    "ok": {"en": "OK", "ru": "OK"},
    "cancel": {"en": "Cancel", "ru": "Отмена"},
    "close": {"en": "Close", "ru": "Закрыть"},

    # Filters
    "filter_all": {"en": "All", "ru": "Все"},
    "filter_active": {"en": "Active", "ru": "Активные"},
    "filter_completed": {"en": "Done", "ru": "Выполненные"},

    # Categories
    "category_general": {"en": "General", "ru": "Общее"},
    "category_work": {"en": "Work", "ru": "Работа"},
    "category_personal": {"en": "Personal", "ru": "Личное"},
    "category_shopping": {"en": "Shopping", "ru": "Покупки"},
    "category_health": {"en": "Health", "ru": "Здоровье"},

    # Counters
    "active_count": {"en": "Active: {count}", "ru": "Активных: {count}"},
    "completed_count": {"en": "Done: {count}", "ru": "Выполнено: {count}"},
    "total_count": {"en": "Total: {count}", "ru": "Всего: {count}"},
    "efficiency": {"en": "Efficiency: {percent}%", "ru": "Эффективность: {percent}%"},

    # Empty states
    "empty_all": {"en": "No tasks in {category}", "ru": "Нет задач в категории «{category}»"},
    "empty_active": {"en": "No active tasks in {category}", "ru": "Нет активных задач в категории «{category}»"},
    "empty_completed": {
        "en": "No completed tasks in {category}",
        "ru": "Нет выполненных задач в категории «{category}»",
    },

    # Actions
    "clear_completed": {"en": "Clear completed", "ru": "Очистить выполненные"},
    "save_all": {"en": "Save all", "ru": "Сохранить всё"},
    "statistics": {"en": "Statistics", "ru": "Статистика"},
    "theme_light": {"en": "Light", "ru": "Светлая"},
    "theme_dark": {"en": "Dark", "ru": "Тёмная"},
    "close_app_confirm": {"en": "Close the app?", "ru": "Закрыть приложение?"},

    # Popups
    "error": {"en": "Error", "ru": "Ошибка"},
    "success": {"en": "Success", "ru": "Успех"},
    "error_empty_task": {"en": "Task text cannot be empty", "ru": "Текст задачи не может быть пустым"},
    "error_task_too_long": {
        "en": "Task text is limited to {limit} characters",
        "ru": "Текст задачи ограничен {limit} символами",
    },
    "error_nothing_to_clear": {"en": "No completed tasks to clear", "ru": "Нет выполненных задач для очистки"},
    "error_save_failed": {
        "en": "Could not save your tasks. Changes are kept until the app closes.",
        "ru": "Не удалось сохранить задачи. Изменения сохранятся до закрытия приложения.",
    },
    "cleared_completed": {"en": "Removed {count} completed tasks", "ru": "Удалено выполненных задач: {count}"},
    "all_saved": {"en": "All tasks saved!", "ru": "Все задачи сохранены!"},
    "task_completed_notification": {"en": "✅ Task completed: {text}", "ru": "✅ Задача выполнена: {text}"},

    # Statistics dialog
    "daily_chart": {"en": "Last 7 days", "ru": "Последние 7 дней"},
    "weekly_trend": {"en": "Average completion time, min", "ru": "Среднее время выполнения, мин"},
    "monthly_chart": {"en": "Last 30 days", "ru": "Последние 30 дней"},
    "created_legend": {"en": "Created", "ru": "Создано"},
    "completed_legend": {"en": "Completed", "ru": "Выполнено"},
    "avg_minutes_legend": {"en": "Avg. minutes", "ru": "Среднее, мин"},
    "no_stats_yet": {"en": "No activity yet", "ru": "Пока нет активности"},
}


def set_language(language: str) -> None:
    """Switch the active language. Unknown codes fall back to English."""
    global _current_language
    _current_language = language if language in LANGUAGES else "en"


def get_language() -> str:
    return _current_language


def t(key: str, **kwargs: object) -> str:
    """Translate a key to the current language, formatting any kwargs into it.

    Missing keys return the key itself so gaps are visible in the UI.
    """
    entry = _TRANSLATIONS.get(key)
    if entry is None:
        return key
    text = entry.get(_current_language) or entry["en"]
    return text.format(**kwargs) if kwargs else text
