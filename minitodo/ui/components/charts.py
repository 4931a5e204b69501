import flet as ft

from config import CHART_BAR_WIDTH, CHART_HEIGHT, COLORS, FONT_SIZE_SM
from i18n import t
from ui.presenters.chart_presenter import ChartKind, ChartModel
from ui.renderer import ChartSlot


def _bottom_axis(model: ChartModel) -> ft.ChartAxis:
    # Thin out labels on long ranges so they stay readable
    step = max(1, len(model.labels) // 7)
    return ft.ChartAxis(
        labels=[
            ft.ChartAxisLabel(value=i, label=ft.Text(label, size=FONT_SIZE_SM))
            for i, label in enumerate(model.labels)
            if i % step == 0
        ],
        labels_size=24,
    )


def build_bar_chart(model: ChartModel) -> ft.BarChart:
    width = CHART_BAR_WIDTH if len(model.series) > 1 else CHART_BAR_WIDTH // 2 + 2
    groups = []
    for i in range(len(model.labels)):
        groups.append(ft.BarChartGroup(
            x=i,
            bar_rods=[
                ft.BarChartRod(
                    from_y=0,
                    to_y=series.values[i],
                    width=width,
                    color=series.color,
                    tooltip=f"{series.name}: {series.values[i]}",
                    border_radius=2,
                )
                for series in model.series
            ],
        ))
    return ft.BarChart(
        bar_groups=groups,
        bottom_axis=_bottom_axis(model),
        left_axis=ft.ChartAxis(labels_size=32),
        max_y=max(model.max_value, 1),
        interactive=True,
        height=CHART_HEIGHT,
    )


def build_line_chart(model: ChartModel) -> ft.LineChart:
    return ft.LineChart(
        data_series=[
            ft.LineChartData(
                data_points=[ft.LineChartDataPoint(i, v) for i, v in enumerate(series.values)],
                color=series.color,
                stroke_width=3,
                curved=True,
            )
            for series in model.series
        ],
        bottom_axis=_bottom_axis(model),
        left_axis=ft.ChartAxis(labels_size=32),
        min_y=0,
        max_y=max(model.max_value, 1),
        height=CHART_HEIGHT,
    )


def build_chart(model: ChartModel) -> ft.Control:
    if model.is_empty:
        return ft.Text(t("no_stats_yet"), color=COLORS["done_text"])
    if model.kind == ChartKind.LINE:
        return build_line_chart(model)
    return build_bar_chart(model)


class FletChartSlot(ChartSlot):
    """Chart slot backed by a container on the statistics dialog."""

    def __init__(self) -> None:
        super().__init__()
        self.container = ft.Container(height=CHART_HEIGHT)

    def _create(self, model: ChartModel) -> ft.Control:
        return build_chart(model)

    def _attach(self, chart: ft.Control) -> None:
        self.container.content = chart

    def _discard(self, chart: ft.Control) -> None:
        if self.container.content is chart:
            self.container.content = None
