"""Tests for TaskActionHandler: host feedback around store operations."""
from config import Category, HapticIntensity, StatusFilter, Theme
from core import AppContext, bootstrap
from errors import StorageError
from fakes import FakeClock, RecordingHost


# ===========================================================================
# Task actions
# ===========================================================================

class TestAdd:
    async def test_success_gives_light_pulse(self, ctx: AppContext, host: RecordingHost):
        task = await ctx.handler.add("Buy milk")
        assert task is not None
        assert host.pulses == [HapticIntensity.LIGHT]
        assert host.popups == []

    async def test_blank_text_shows_popup(self, ctx: AppContext, host: RecordingHost):
        assert await ctx.handler.add("   ") is None
        assert host.popups == [("Error", "Task text cannot be empty")]
        assert host.pulses == []
        assert ctx.state.tasks == []

    async def test_long_text_popup_mentions_limit(self, ctx: AppContext, host: RecordingHost):
        assert await ctx.handler.add("x" * 201) is None
        assert host.popups == [("Error", "Task text is limited to 200 characters")]


class TestToggle:
    async def test_completion_notifies_user(self, ctx: AppContext, host: RecordingHost):
        task = await ctx.handler.add("Call <bank> & co")
        await ctx.handler.toggle(task.id)
        assert host.pulses == [HapticIntensity.LIGHT, HapticIntensity.LIGHT]
        assert host.notifications == [("42", "✅ Task completed: Call &lt;bank&gt; &amp; co")]

    async def test_uncomplete_does_not_notify(self, ctx: AppContext, host: RecordingHost):
        task = await ctx.handler.add("Flip")
        await ctx.handler.toggle(task.id)
        await ctx.handler.toggle(task.id)
        assert len(host.notifications) == 1

    async def test_no_user_no_notification(self, clock: FakeClock):
        host = RecordingHost(user=None)
        ctx = await bootstrap(db_path=":memory:", host=host, clock=clock)
        try:
            task = await ctx.handler.add("Solo")
            await ctx.handler.toggle(task.id)
            assert host.notifications == []
        finally:
            await ctx.close()

    async def test_unknown_id_is_silent(self, ctx: AppContext, host: RecordingHost):
        assert await ctx.handler.toggle(404) is None
        assert host.pulses == []
        assert host.popups == []


class TestDelete:
    async def test_medium_pulse(self, ctx: AppContext, host: RecordingHost):
        task = await ctx.handler.add("Remove me")
        removed = await ctx.handler.delete(task.id)
        assert removed is task
        assert host.pulses[-1] == HapticIntensity.MEDIUM
        assert ctx.state.tasks == []

    async def test_unknown_id_is_silent(self, ctx: AppContext, host: RecordingHost):
        assert await ctx.handler.delete(404) is None
        assert host.pulses == []


class TestClearCompleted:
    async def test_nothing_to_clear_shows_error(self, ctx: AppContext, host: RecordingHost):
        await ctx.handler.add("active")
        assert await ctx.handler.clear_completed() == []
        assert host.popups == [("Error", "No completed tasks to clear")]
        assert len(ctx.state.tasks) == 1

    async def test_heavy_pulse_and_summary(self, ctx: AppContext, host: RecordingHost):
        for text in ["a", "b", "c"]:
            task = await ctx.handler.add(text)
            if text != "b":
                await ctx.handler.toggle(task.id)
        removed = await ctx.handler.clear_completed()
        assert len(removed) == 2
        assert host.pulses[-1] == HapticIntensity.HEAVY
        assert host.popups == [("Success", "Removed 2 completed tasks")]


class TestSaveAll:
    async def test_confirms_save(self, ctx: AppContext, host: RecordingHost):
        await ctx.handler.add("keep")
        assert await ctx.handler.save_all() is True
        assert host.popups == [("Success", "All tasks saved!")]

    async def test_failed_write_reports_once(self, ctx: AppContext, host: RecordingHost, monkeypatch):
        async def failing_set(key, value):
            raise StorageError("read-only")

        monkeypatch.setattr(ctx.storage, "set", failing_set)
        assert await ctx.handler.save_all() is False
        assert host.popups == [("Error", "Could not save your tasks. Changes are kept until the app closes.")]


# ===========================================================================
# Selections
# ===========================================================================

class TestSelections:
    async def test_filter_and_category_use_explicit_option(self, ctx: AppContext):
        ctx.handler.select_filter(StatusFilter.COMPLETED)
        ctx.handler.select_category(Category.PERSONAL)
        assert ctx.state.status_filter == StatusFilter.COMPLETED
        assert ctx.state.category_filter == Category.PERSONAL

    async def test_theme_gives_soft_pulse(self, ctx: AppContext, host: RecordingHost):
        await ctx.handler.select_theme(Theme.LIGHT)
        assert ctx.state.theme == Theme.LIGHT
        assert host.pulses == [HapticIntensity.SOFT]

    async def test_cleanup_stops_popups(self, ctx: AppContext, host: RecordingHost, monkeypatch):
        ctx.handler.cleanup()

        async def failing_set(key, value):
            raise StorageError("read-only")

        monkeypatch.setattr(ctx.storage, "set", failing_set)
        await ctx.store.save()
        assert host.popups == []
