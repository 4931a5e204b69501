import logging
from datetime import date, datetime, timedelta
from typing import Callable, Dict, Iterable, List

from config import ANALYTICS_RETENTION_DAYS, StorageKey
from errors import StorageError
from models.entities import DailyRecord, DayStats, Task
from storage import BlobStore

logger = logging.getLogger(__name__)


def _round_half_up(value: float) -> int:
    """Round non-negative values the way the charts expect (0.5 goes up)."""
    return int(value + 0.5)


def day_key(moment: datetime) -> str:
    """Local calendar date as an ISO string; sorts chronologically."""
    return moment.date().isoformat()


class AnalyticsAggregator:
    """Per-day creation and completion counters derived from task events.

    Records are keyed by ISO date and kept for ANALYTICS_RETENTION_DAYS;
    older days are pruned every time the map is saved.
    """

    def __init__(
        self,
        storage: BlobStore,
        clock: Callable[[], datetime] = datetime.now,
        retention_days: int = ANALYTICS_RETENTION_DAYS,
    ) -> None:
        self._storage = storage
        self._clock = clock
        self._retention_days = retention_days
        self.records: Dict[str, DailyRecord] = {}

    async def load(self) -> None:
        """Load the stored map. Malformed days are skipped."""
        raw = await self._storage.get(StorageKey.ANALYTICS, {})
        self.records = {}
        if not isinstance(raw, dict):
            logger.warning("Stored analytics is not a mapping, starting fresh")
            return
        for key, value in raw.items():
            try:
                date.fromisoformat(key)
                self.records[key] = DailyRecord.from_dict(value)
            except (ValueError, TypeError, AttributeError) as e:
                logger.warning(f"Skipping analytics record {key!r}: {e}")

    async def save(self) -> None:
        """Prune and persist. Raises StorageError on write failure."""
        self.prune()
        await self._storage.set(
            StorageKey.ANALYTICS,
            {key: record.to_dict() for key, record in self.records.items()},
        )

    def prune(self) -> int:
        """Drop days older than the retention window. Returns how many were dropped."""
        if self._retention_days <= 0:
            return 0
        cutoff = (self._clock().date() - timedelta(days=self._retention_days - 1)).isoformat()
        stale = [key for key in self.records if key < cutoff]
        for key in stale:
            del self.records[key]
        return len(stale)

    def _record_for(self, moment: datetime) -> DailyRecord:
        return self.records.setdefault(day_key(moment), DailyRecord())

    async def _save_quietly(self) -> bool:
        try:
            await self.save()
            return True
        except StorageError as e:
            logger.error(f"Failed to save analytics: {e}")
            return False

    async def record_created(self, task: Task) -> bool:
        """Count a newly added task on its creation day."""
        self._record_for(task.created_at).created += 1
        return await self._save_quietly()

    async def record_transition(self, task: Task) -> bool:
        """Account for a toggle that just happened on task.

        Only a move into the completed state changes the counters; moving
        back to active leaves them untouched and never counts as a creation.
        """
        if not task.completed or task.completed_at is None or task.created_at is None:
            return True
        try:
            latency = (task.completed_at - task.created_at).total_seconds()
        except TypeError as e:
            # Mixed naive and aware timestamps: count the completion, skip the latency
            logger.warning(f"Cannot compute latency for task {task.id}: {e}")
            latency = 0.0
        record = self._record_for(task.completed_at)
        record.completed += 1
        record.latency_seconds += max(0.0, latency)
        return await self._save_quietly()

    def stats_for_period(self, days: int) -> List[DayStats]:
        """Stats for the last `days` recorded days (oldest first).

        Days without activity are not filled in, so the result may span more
        than `days` calendar days.
        """
        if days <= 0:
            return []
        result = []
        for key in sorted(self.records)[-days:]:
            record = self.records[key]
            avg_minutes = (
                _round_half_up(record.latency_seconds / record.completed / 60)
                if record.completed > 0 else 0
            )
            result.append(DayStats(
                day=date.fromisoformat(key),
                completed=record.completed,
                created=record.created,
                avg_completion_minutes=avg_minutes,
            ))
        return result

    @staticmethod
    def efficiency(tasks: Iterable[Task]) -> int:
        """Completed share of the collection as an integer percentage."""
        tasks = list(tasks)
        if not tasks:
            return 0
        completed = sum(1 for t in tasks if t.completed)
        return _round_half_up(completed * 100 / len(tasks))
