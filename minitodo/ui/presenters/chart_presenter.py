from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple

from config import COLORS
from i18n import t
from models.entities import DayStats


class ChartKind(Enum):
    BAR = "bar"
    LINE = "line"


@dataclass(frozen=True)
class ChartSeries:
    name: str
    color: str
    values: Tuple[int, ...]


@dataclass(frozen=True)
class ChartModel:
    """Chart data independent of the charting widget."""
    kind: ChartKind
    title: str
    labels: Tuple[str, ...]
    series: Tuple[ChartSeries, ...]

    @property
    def is_empty(self) -> bool:
        return not self.labels

    @property
    def max_value(self) -> int:
        return max((v for s in self.series for v in s.values), default=0)


def _labels(stats: List[DayStats], fmt: str) -> Tuple[str, ...]:
    return tuple(s.day.strftime(fmt) for s in stats)


def daily_chart(stats: List[DayStats]) -> ChartModel:
    """Created vs completed per day, two bars per day."""
    return ChartModel(
        kind=ChartKind.BAR,
        title=t("daily_chart"),
        labels=_labels(stats, "%d.%m"),
        series=(
            ChartSeries(t("created_legend"), COLORS["created_bar"], tuple(s.created for s in stats)),
            ChartSeries(t("completed_legend"), COLORS["completed_bar"], tuple(s.completed for s in stats)),
        ),
    )


def weekly_trend(stats: List[DayStats]) -> ChartModel:
    """Average completion latency in minutes, as a line."""
    return ChartModel(
        kind=ChartKind.LINE,
        title=t("weekly_trend"),
        labels=_labels(stats, "%d.%m"),
        series=(
            ChartSeries(
                t("avg_minutes_legend"),
                COLORS["trend_line"],
                tuple(s.avg_completion_minutes for s in stats),
            ),
        ),
    )


def monthly_chart(stats: List[DayStats]) -> ChartModel:
    return ChartModel(
        kind=ChartKind.BAR,
        title=t("monthly_chart"),
        labels=_labels(stats, "%d"),
        series=(
            ChartSeries(t("completed_legend"), COLORS["completed_bar"], tuple(s.completed for s in stats)),
        ),
    )
