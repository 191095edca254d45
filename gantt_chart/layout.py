"""Map a dated schedule onto chart geometry.

Coordinates are in pixels with the origin at the top left and y growing
downwards. The vertical layout is, from the top: title band, date header
(month line and day line), one row per dated task grouped by resource, the
project milestone group, then the legend and the resource table.
"""

import logging
import warnings
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Optional

from gantt_chart.colors import RGB, resource_color
from gantt_chart.config import ChartConfig
from gantt_chart.errors import LayoutError
from gantt_chart.models import DatedTask, Resource, Schedule
from gantt_chart.scheduler import resource_statistics
from gantt_chart.workdays import is_weekend

logger = logging.getLogger(__name__)

MILESTONE_GROUP_LABEL = "Milestones"
MILESTONE_COLOR = RGB(0x44, 0x44, 0x44)
MARGIN = 16.0
LABEL_INSET = 8.0
LEGEND_ROW_HEIGHT = 20.0
LEGEND_SWATCH_SIZE = 12.0
TABLE_ROW_HEIGHT = 20.0
TABLE_COLUMNS = [
    ("Resource", 0.0),
    ("Tasks", 180.0),
    ("Days", 240.0),
    ("Done", 300.0),
    ("Start", 360.0),
    ("Finish", 460.0),
]
TABLE_WIDTH = 560.0


@dataclass(frozen=True)
class Line:
    x1: float
    y1: float
    x2: float
    y2: float


@dataclass(frozen=True)
class Box:
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class RowBox(Box):
    """Background of one chart row; alternate resource groups are tinted."""

    alternate: bool = False


@dataclass(frozen=True)
class Bar(Box):
    """A task bar. Done tasks are filled solid, pending ones outlined."""

    color: RGB = MILESTONE_COLOR
    filled: bool = False
    name: str = ""


@dataclass(frozen=True)
class Diamond:
    """A milestone marker centred on its date."""

    cx: float
    cy: float
    size: float
    color: RGB
    name: str = ""

    @property
    def points(self) -> list[tuple[float, float]]:
        half = self.size / 2
        return [
            (self.cx, self.cy - half),
            (self.cx + half, self.cy),
            (self.cx, self.cy + half),
            (self.cx - half, self.cy),
        ]


@dataclass(frozen=True)
class Label:
    x: float
    y: float
    text: str
    size: float
    anchor: str = "start"
    bold: bool = False


@dataclass(frozen=True)
class DateLine(Line):
    day: Optional[date] = None


@dataclass(frozen=True)
class LegendEntry:
    x: float
    y: float
    size: float
    color: RGB
    text: str


@dataclass(frozen=True)
class Geometry:
    """Everything the emitter needs to draw a chart."""

    width: float
    height: float
    origin: date
    range_end: date
    font_family: str
    title: Optional[Label] = None
    rows: list[RowBox] = field(default_factory=list)
    weekend_shades: list[Box] = field(default_factory=list)
    gridlines: list[Line] = field(default_factory=list)
    axes: list[Line] = field(default_factory=list)
    bars: list[Bar] = field(default_factory=list)
    milestones: list[Diamond] = field(default_factory=list)
    date_line: Optional[DateLine] = None
    header_labels: list[Label] = field(default_factory=list)
    labels: list[Label] = field(default_factory=list)
    legend: list[LegendEntry] = field(default_factory=list)
    table_labels: list[Label] = field(default_factory=list)
    table_lines: list[Line] = field(default_factory=list)


@dataclass
class _RowSlot:
    """One planned row: a dated entry, or a blank row for an empty resource."""

    resource_index: Optional[int]
    entry: Optional[DatedTask]
    group_label: Optional[str]
    group_number: int


class LayoutEngine:
    """Turn a Schedule into Geometry for a given ChartConfig."""

    def __init__(self, config: Optional[ChartConfig] = None):
        self.config = config or ChartConfig()

    def layout(
        self,
        schedule: Schedule,
        resources: list[Resource],
        start: Optional[date] = None,
        end: Optional[date] = None,
        title: str = "",
    ) -> Geometry:
        """Lay out the schedule.

        Args:
            schedule: Dated schedule from the Scheduler
            resources: Resources in the order they were scheduled
            start: Explicit first day of the date range
            end: Explicit last day of the date range
            title: Chart title

        Returns:
            Geometry

        Raises:
            LayoutError: If a dated entry falls outside the date range
        """
        cfg = self.config
        origin, range_end = self.date_window(schedule, start, end)
        columns = max(1, (range_end - origin).days)

        chart_left = cfg.label_column_width
        chart_right = chart_left + columns * cfg.day_column_width
        day_line_top = cfg.title_height + cfg.header_height / 2
        chart_top = cfg.title_height + cfg.header_height

        slots = self._plan_rows(schedule, resources)
        chart_bottom = chart_top + len(slots) * cfg.row_height

        logger.debug(
            "Layout window %s..%s (%d columns), %d row(s)",
            origin, range_end, columns, len(slots),
        )

        def x_for(day: date) -> float:
            if day < origin or day > range_end:
                raise LayoutError(
                    f"Date {day} is outside the chart range {origin} to {range_end}"
                )
            return chart_left + (day - origin).days * cfg.day_column_width

        colors = [resource_color(r, i) for i, r in enumerate(resources)]

        rows: list[RowBox] = []
        bars: list[Bar] = []
        diamonds: list[Diamond] = []
        labels: list[Label] = []
        task_label_x = LABEL_INSET + cfg.label_column_width * 0.45

        for number, slot in enumerate(slots):
            y = chart_top + number * cfg.row_height
            text_y = y + cfg.row_height / 2 + cfg.font_size / 3
            rows.append(
                RowBox(
                    x=0.0,
                    y=y,
                    width=chart_right,
                    height=cfg.row_height,
                    alternate=slot.group_number % 2 == 1,
                )
            )
            if slot.group_label is not None:
                labels.append(
                    Label(LABEL_INSET, text_y, slot.group_label, cfg.font_size, bold=True)
                )

            entry = slot.entry
            if entry is None:
                continue

            labels.append(Label(task_label_x, text_y, entry.name, cfg.font_size))
            color = MILESTONE_COLOR if slot.resource_index is None else colors[slot.resource_index]

            if entry.is_milestone:
                diamonds.append(
                    Diamond(
                        cx=x_for(entry.start),
                        cy=y + cfg.row_height / 2,
                        size=cfg.milestone_size,
                        color=color,
                        name=entry.name,
                    )
                )
            else:
                x0 = x_for(entry.start)
                x1 = x_for(entry.end)
                bars.append(
                    Bar(
                        x=x0,
                        y=y + cfg.bar_padding,
                        width=x1 - x0,
                        height=cfg.row_height - 2 * cfg.bar_padding,
                        color=color,
                        filled=entry.task.done,
                        name=entry.name,
                    )
                )

        gridlines, shades, header_labels = self._calendar(
            origin, columns, chart_left, day_line_top, chart_top, chart_bottom
        )
        axes = [
            Line(0.0, chart_top, chart_right, chart_top),
            Line(0.0, chart_bottom, chart_right, chart_bottom),
            Line(chart_left, day_line_top, chart_left, chart_bottom),
        ]

        date_line = None
        if cfg.reference_date is not None:
            if origin <= cfg.reference_date <= range_end:
                x = x_for(cfg.reference_date)
                date_line = DateLine(x, day_line_top, x, chart_bottom, day=cfg.reference_date)
            else:
                warnings.warn(
                    (
                        f"Reference date {cfg.reference_date} is outside the chart range "
                        f"{origin} to {range_end}; the date line is omitted."
                    ),
                    category=UserWarning,
                    stacklevel=2,
                )

        cursor_y = chart_bottom + MARGIN
        legend: list[LegendEntry] = []
        if cfg.show_legend:
            for index, resource in enumerate(resources):
                legend.append(
                    LegendEntry(
                        x=LABEL_INSET,
                        y=cursor_y,
                        size=LEGEND_SWATCH_SIZE,
                        color=colors[index],
                        text=resource.name,
                    )
                )
                cursor_y += LEGEND_ROW_HEIGHT
            if legend:
                cursor_y += MARGIN

        table_labels: list[Label] = []
        table_lines: list[Line] = []
        width = chart_right + MARGIN
        if cfg.show_resource_table:
            table_labels, table_lines, cursor_y = self._resource_table(
                schedule, resources, cursor_y
            )
            width = max(width, LABEL_INSET + TABLE_WIDTH + MARGIN)

        title_label = None
        if title:
            title_label = Label(
                LABEL_INSET, cfg.title_height * 0.7, title, cfg.font_size + 4, bold=True
            )

        return Geometry(
            width=width,
            height=cursor_y + MARGIN,
            origin=origin,
            range_end=range_end,
            font_family=cfg.font_family,
            title=title_label,
            rows=rows,
            weekend_shades=shades,
            gridlines=gridlines,
            axes=axes,
            bars=bars,
            milestones=diamonds,
            date_line=date_line,
            header_labels=header_labels,
            labels=labels,
            legend=legend,
            table_labels=table_labels,
            table_lines=table_lines,
        )

    @staticmethod
    def date_window(
        schedule: Schedule, start: Optional[date] = None, end: Optional[date] = None
    ) -> tuple[date, date]:
        """Decide the first and last day of the chart.

        Explicit bounds win; otherwise the earliest start and latest end of
        the dated entries are used. An empty schedule collapses to its start
        date.
        """
        origin = start or schedule.first_start() or schedule.start_date or date.today()
        range_end = end or schedule.last_end() or origin
        if range_end < origin:
            if end is not None:
                raise LayoutError(f"Chart end {end} is before its start {origin}")
            range_end = origin
        return origin, range_end

    def _plan_rows(self, schedule: Schedule, resources: list[Resource]) -> list[_RowSlot]:
        slots: list[_RowSlot] = []
        group_number = 0

        for index, resource in enumerate(resources):
            dated = schedule.tasks_for_resource(index)
            if not dated:
                if self.config.show_empty_resources:
                    slots.append(_RowSlot(index, None, resource.name, group_number))
                    group_number += 1
                continue
            for position, entry in enumerate(dated):
                label = resource.name if position == 0 else None
                slots.append(_RowSlot(index, entry, label, group_number))
            group_number += 1

        for position, entry in enumerate(schedule.milestones):
            label = MILESTONE_GROUP_LABEL if position == 0 else None
            slots.append(_RowSlot(None, entry, label, group_number))

        return slots

    def _calendar(
        self,
        origin: date,
        columns: int,
        chart_left: float,
        day_line_top: float,
        chart_top: float,
        chart_bottom: float,
    ) -> tuple[list[Line], list[Box], list[Label]]:
        """Gridlines, weekend shading and header labels for each day column."""
        cfg = self.config
        gridlines: list[Line] = []
        shades: list[Box] = []
        header: list[Label] = []
        small = cfg.font_size - 2

        for offset in range(columns):
            day = origin + timedelta(days=offset)
            x = chart_left + offset * cfg.day_column_width

            if is_weekend(day):
                if cfg.shade_weekends:
                    shades.append(
                        Box(x, day_line_top, cfg.day_column_width, chart_bottom - day_line_top)
                    )
            else:
                gridlines.append(Line(x, day_line_top, x, chart_bottom))

            if offset == 0 or day.day == 1:
                header.append(
                    Label(x + 2, day_line_top - small / 2, day.strftime("%b %Y"), small, bold=True)
                )
            header.append(
                Label(
                    x + cfg.day_column_width / 2,
                    chart_top - small / 2,
                    str(day.day),
                    small,
                    anchor="middle",
                )
            )

        return gridlines, shades, header

    def _resource_table(
        self, schedule: Schedule, resources: list[Resource], top: float
    ) -> tuple[list[Label], list[Line], float]:
        """Summary table with one row per resource."""
        size = self.config.font_size
        labels: list[Label] = []
        lines: list[Line] = []

        y = top + TABLE_ROW_HEIGHT * 0.7
        for heading, offset in TABLE_COLUMNS:
            labels.append(Label(LABEL_INSET + offset, y, heading, size, bold=True))
        rule_y = top + TABLE_ROW_HEIGHT
        lines.append(Line(LABEL_INSET, rule_y, LABEL_INSET + TABLE_WIDTH, rule_y))

        for number, stat in enumerate(resource_statistics(schedule, resources), start=1):
            y = top + number * TABLE_ROW_HEIGHT + TABLE_ROW_HEIGHT * 0.7
            values = [
                stat.name,
                str(stat.task_count),
                str(stat.working_days),
                str(stat.done_count),
                stat.first_start.isoformat() if stat.first_start else "—",
                stat.finish.isoformat() if stat.finish else "—",
            ]
            for (_heading, offset), value in zip(TABLE_COLUMNS, values):
                labels.append(Label(LABEL_INSET + offset, y, value, size))

        bottom = top + (len(resources) + 1) * TABLE_ROW_HEIGHT
        return labels, lines, bottom


def layout(
    schedule: Schedule,
    resources: list[Resource],
    config: Optional[ChartConfig] = None,
    start: Optional[date] = None,
    end: Optional[date] = None,
    title: str = "",
) -> Geometry:
    """Lay out a schedule with the given configuration."""
    return LayoutEngine(config).layout(schedule, resources, start=start, end=end, title=title)
