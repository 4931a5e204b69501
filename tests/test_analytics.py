"""Tests for the per-day analytics aggregator."""
from datetime import date, datetime, timedelta, timezone

from config import StorageKey
from core import AppContext
from fakes import FakeClock
from models.entities import DailyRecord, Task
from services.analytics import AnalyticsAggregator, day_key


def make_tasks(completed: int, active: int) -> list[Task]:
    now = datetime(2026, 3, 2, 9, 0)
    tasks = [Task(id=i, text=f"done {i}", created_at=now, completed=True, completed_at=now) for i in range(completed)]
    tasks += [Task(id=100 + i, text=f"todo {i}", created_at=now) for i in range(active)]
    return tasks


# ===========================================================================
# Efficiency
# ===========================================================================

class TestEfficiency:
    def test_empty_is_zero(self):
        assert AnalyticsAggregator.efficiency([]) == 0

    def test_one_of_three_is_33(self):
        assert AnalyticsAggregator.efficiency(make_tasks(1, 2)) == 33

    def test_two_of_three_rounds_up(self):
        assert AnalyticsAggregator.efficiency(make_tasks(2, 1)) == 67

    def test_half_rounds_up(self):
        # 1 of 8 = 12.5%
        assert AnalyticsAggregator.efficiency(make_tasks(1, 7)) == 13

    def test_all_done(self):
        assert AnalyticsAggregator.efficiency(make_tasks(4, 0)) == 100


# ===========================================================================
# Recording
# ===========================================================================

class TestRecording:
    async def test_add_counts_creation(self, ctx: AppContext, clock: FakeClock):
        await ctx.store.add("one")
        await ctx.store.add("two")
        record = ctx.analytics.records[day_key(clock.now)]
        assert record.created == 2
        assert record.completed == 0

    async def test_completion_counts_latency(self, ctx: AppContext, clock: FakeClock):
        task = await ctx.store.add("timed")
        clock.advance(minutes=10)
        await ctx.store.toggle(task.id)
        record = ctx.analytics.records[day_key(clock.now)]
        assert record.completed == 1
        assert record.latency_seconds == 600

    async def test_uncomplete_leaves_counters(self, ctx: AppContext, clock: FakeClock):
        task = await ctx.store.add("flip")
        await ctx.store.toggle(task.id)
        await ctx.store.toggle(task.id)
        record = ctx.analytics.records[day_key(clock.now)]
        assert record.completed == 1
        assert record.created == 1

    async def test_completion_lands_on_completion_day(self, ctx: AppContext, clock: FakeClock):
        task = await ctx.store.add("overnight")
        clock.advance(days=1)
        await ctx.store.toggle(task.id)
        yesterday = ctx.analytics.records[day_key(clock.now - timedelta(days=1))]
        today = ctx.analytics.records[day_key(clock.now)]
        assert (yesterday.created, yesterday.completed) == (1, 0)
        assert (today.created, today.completed) == (0, 1)

    async def test_negative_latency_is_clamped(self, ctx: AppContext, clock: FakeClock):
        task = await ctx.store.add("clock skew")
        clock.advance(minutes=-5)
        await ctx.store.toggle(task.id)
        assert ctx.analytics.records[day_key(clock.now)].latency_seconds == 0

    async def test_mixed_timezones_still_count_completion(self, ctx: AppContext, clock: FakeClock):
        created = datetime(2026, 3, 2, 8, 0, tzinfo=timezone.utc)
        task = Task(id=1, text="foreign", created_at=created, completed=True, completed_at=clock.now)
        assert await ctx.analytics.record_transition(task) is True
        record = ctx.analytics.records[day_key(clock.now)]
        assert record.completed == 1
        assert record.latency_seconds == 0

    async def test_records_are_persisted(self, ctx: AppContext, clock: FakeClock):
        await ctx.store.add("persist me")
        stored = await ctx.storage.get(StorageKey.ANALYTICS)
        assert stored == {day_key(clock.now): {"completed": 0, "created": 1, "latencySeconds": 0.0}}


# ===========================================================================
# Periods and retention
# ===========================================================================

class TestStatsForPeriod:
    async def test_last_days_sorted_oldest_first(self, ctx: AppContext):
        for offset in (3, 1, 2, 0):
            key = (date(2026, 3, 2) - timedelta(days=offset)).isoformat()
            ctx.analytics.records[key] = DailyRecord(created=offset)
        stats = ctx.analytics.stats_for_period(2)
        assert [s.day for s in stats] == [date(2026, 3, 1), date(2026, 3, 2)]
        assert [s.created for s in stats] == [1, 0]

    async def test_average_minutes_round_half_up(self, ctx: AppContext):
        # 2 completions, 5 minutes total -> 2.5 -> 3
        ctx.analytics.records["2026-03-02"] = DailyRecord(completed=2, latency_seconds=300)
        ctx.analytics.records["2026-03-01"] = DailyRecord(created=4)
        stats = ctx.analytics.stats_for_period(7)
        assert stats[-1].avg_completion_minutes == 3
        assert stats[0].avg_completion_minutes == 0

    async def test_zero_days_is_empty(self, ctx: AppContext):
        ctx.analytics.records["2026-03-02"] = DailyRecord(created=1)
        assert ctx.analytics.stats_for_period(0) == []


class TestRetention:
    async def test_save_prunes_old_days(self, ctx: AppContext, clock: FakeClock):
        today = clock.now.date()
        ctx.analytics.records[(today - timedelta(days=120)).isoformat()] = DailyRecord(created=5)
        ctx.analytics.records[(today - timedelta(days=89)).isoformat()] = DailyRecord(created=2)
        ctx.analytics.records[(today - timedelta(days=90)).isoformat()] = DailyRecord(created=3)
        await ctx.analytics.save()
        assert sorted(ctx.analytics.records) == [(today - timedelta(days=89)).isoformat()]
        stored = await ctx.storage.get(StorageKey.ANALYTICS)
        assert list(stored) == [(today - timedelta(days=89)).isoformat()]

    async def test_load_skips_bad_keys(self, ctx: AppContext):
        await ctx.storage.set(StorageKey.ANALYTICS, {
            "2026-03-01": {"completed": 1, "created": 2, "latencySeconds": 60},
            "yesterday": {"completed": 1},
            "2026-03-02": "broken",
        })
        await ctx.analytics.load()
        assert list(ctx.analytics.records) == ["2026-03-01"]
        assert ctx.analytics.records["2026-03-01"].created == 2

    async def test_load_tolerates_non_mapping(self, ctx: AppContext):
        await ctx.storage.set(StorageKey.ANALYTICS, [1, 2, 3])
        await ctx.analytics.load()
        assert ctx.analytics.records == {}
