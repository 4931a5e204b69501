"""Tests for the Flet layer driven through a stand-in page."""
from types import SimpleNamespace

import flet as ft

from app import MinitodoApp
from config import Category, OPACITY_DONE, StatusFilter, Theme
from core import AppContext
from fakes import RecordingHost, settle
from ui.pages.stats_view import StatsDialog
from ui.pages.task_view import TasksView


class FakePage:
    """Just enough of ft.Page for pages and dialogs to attach to."""

    def __init__(self):
        self.title = None
        self.theme_mode = None
        self.on_close = None
        self.controls = []
        self.opened = []
        self.closed = []
        self.updates = 0
        self.tasks = []

    def add(self, *controls):
        self.controls.extend(controls)

    def update(self):
        self.updates += 1

    def open(self, dialog):
        dialog.open = True
        self.opened.append(dialog)

    def close(self, dialog):
        dialog.open = False
        self.closed.append(dialog)

    def run_task(self, handler, *args):
        self.tasks.append(handler)


def click(data):
    return SimpleNamespace(control=SimpleNamespace(data=data))


# ===========================================================================
# TasksView
# ===========================================================================

class TestTasksView:
    async def test_draws_rows_and_counters(self, ctx: AppContext):
        page = FakePage()
        view = TasksView(page, ctx.state, ctx.handler)
        ctx.renderer.attach_surface(view)
        a = await ctx.store.add("a")
        await ctx.store.add("b")
        await ctx.store.toggle(a.id)
        view.show_task_list(ctx.renderer.render_now())

        assert [tile.data for tile in view.task_list.controls] == [ctx.state.tasks[0].id, a.id]
        assert view.counter_text.value == "Active: 1"
        assert view.efficiency_text.value == "Efficiency: 50%"
        assert view.clear_btn.visible is True
        assert view.empty_state.visible is False
        # Not attached to a page yet
        assert page.updates == 0

    async def test_tiles_are_reused_between_renders(self, ctx: AppContext):
        view = TasksView(FakePage(), ctx.state, ctx.handler)
        ctx.renderer.attach_surface(view)
        task = await ctx.store.add("persistent row")
        ctx.renderer.render_now()
        control = view.task_list.controls[0]
        await ctx.store.toggle(task.id)
        ctx.renderer.render_now()
        assert view.task_list.controls[0] is control
        assert control.opacity == OPACITY_DONE

    async def test_empty_state(self, ctx: AppContext):
        view = TasksView(FakePage(), ctx.state, ctx.handler)
        view.show_task_list(ctx.renderer.render_now())
        assert view.empty_state.visible is True
        assert view.empty_text.value == "No tasks in General"
        assert view.clear_btn.visible is False

    async def test_option_rows_mark_selection(self, ctx: AppContext):
        view = TasksView(FakePage(), ctx.state, ctx.handler)
        ctx.store.set_category(Category.HEALTH)
        view.show_task_list(ctx.renderer.render_now())
        selected = [c.data for c in view.category_row.controls if c.bgcolor is not None]
        assert selected == [Category.HEALTH]
        assert [c.data for c in view.filter_row.controls] == list(StatusFilter)

    async def test_option_clicks_pass_explicit_value(self, ctx: AppContext):
        view = TasksView(FakePage(), ctx.state, ctx.handler)
        view._on_filter(click(StatusFilter.ACTIVE))
        view._on_category(click(Category.WORK))
        await view._on_theme(click(Theme.LIGHT))
        assert ctx.state.status_filter == StatusFilter.ACTIVE
        assert ctx.state.category_filter == Category.WORK
        assert ctx.state.theme == Theme.LIGHT


# ===========================================================================
# App wiring
# ===========================================================================

class TestMinitodoApp:
    async def test_host_setup_and_first_render(self, ctx: AppContext, host: RecordingHost):
        page = FakePage()
        app = MinitodoApp(page, ctx)
        assert host.expand_calls == 1
        assert host.closing_confirmation_calls == 1
        assert app.tasks_view.greeting.value == "Hello, Sam!"
        assert page.theme_mode == ft.ThemeMode.DARK
        assert len(page.controls) == 1
        assert page.updates >= 1

    async def test_theme_change_updates_page(self, ctx: AppContext):
        page = FakePage()
        MinitodoApp(page, ctx)
        await ctx.handler.select_theme(Theme.LIGHT)
        await settle()
        assert page.theme_mode == ft.ThemeMode.LIGHT

    async def test_greeting_falls_back_without_name(self, ctx: AppContext):
        ctx.host._user = None
        app = MinitodoApp(FakePage(), ctx)
        assert app.tasks_view.greeting.value == "Hello, User!"


# ===========================================================================
# Statistics dialog
# ===========================================================================

class TestStatsDialog:
    async def test_open_binds_three_charts(self, ctx: AppContext):
        task = await ctx.store.add("chart")
        await ctx.store.toggle(task.id)
        page = FakePage()
        dialog = StatsDialog(page, ctx.renderer, ctx.event_bus)
        dialog.open()
        assert len(page.opened) == 1
        for slot in (dialog.daily, dialog.weekly, dialog.monthly):
            assert slot.bind_count == 1
            assert slot.container.content is slot.current

    async def test_reopen_replaces_charts(self, ctx: AppContext):
        page = FakePage()
        dialog = StatsDialog(page, ctx.renderer, ctx.event_bus)
        dialog.open()
        first = dialog.daily.current
        dialog.open()
        assert dialog.daily.bind_count == 2
        assert dialog.daily.container.content is not first

    async def test_completion_refreshes_open_dialog(self, ctx: AppContext):
        task = await ctx.store.add("live")
        dialog = StatsDialog(FakePage(), ctx.renderer, ctx.event_bus)
        dialog.open()
        await ctx.store.toggle(task.id)
        assert dialog.daily.bind_count == 2
        dialog.cleanup()
        await ctx.store.toggle(task.id)
        assert dialog.daily.bind_count == 2

    async def test_empty_analytics_shows_placeholder(self, ctx: AppContext):
        dialog = StatsDialog(FakePage(), ctx.renderer, ctx.event_bus)
        dialog.open()
        placeholder = dialog.monthly.container.content
        assert isinstance(placeholder, ft.Text)
        assert placeholder.value == "No activity yet"
