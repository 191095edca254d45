"""Serialize chart geometry to SVG."""

import svgwrite

from gantt_chart.layout import Geometry, Label

BACKGROUND_COLOR = "#ffffff"
ROW_COLOR = "#ffffff"
ROW_ALTERNATE_COLOR = "#f5f6f8"
WEEKEND_COLOR = "#eceff1"
GRID_COLOR = "#e0e0e0"
AXIS_COLOR = "#636e72"
TEXT_COLOR = "#2d3436"
DATE_LINE_COLOR = "#d63031"
PENDING_FILL_OPACITY = 0.25

# Group ids in the order they are drawn; later groups paint over earlier ones
DRAW_ORDER = (
    "background",
    "rows",
    "weekends",
    "gridlines",
    "bars",
    "milestones",
    "date-line",
    "header",
    "labels",
    "legend",
    "resource-table",
)


def _add_text(dwg: svgwrite.Drawing, group, label: Label) -> None:
    group.add(
        dwg.text(
            label.text,
            insert=(label.x, label.y),
            font_size=label.size,
            text_anchor=label.anchor,
            font_weight="bold" if label.bold else "normal",
        )
    )


def build_drawing(geometry: Geometry) -> svgwrite.Drawing:
    """Build the svgwrite drawing for a laid-out chart."""
    dwg = svgwrite.Drawing(size=(geometry.width, geometry.height), profile="full")
    dwg.viewbox(0, 0, geometry.width, geometry.height)
    groups = {
        name: dwg.add(dwg.g(id=name))
        for name in DRAW_ORDER
    }

    groups["background"].add(
        dwg.rect(insert=(0, 0), size=(geometry.width, geometry.height), fill=BACKGROUND_COLOR)
    )

    for row in geometry.rows:
        groups["rows"].add(
            dwg.rect(
                insert=(row.x, row.y),
                size=(row.width, row.height),
                fill=ROW_ALTERNATE_COLOR if row.alternate else ROW_COLOR,
            )
        )

    for shade in geometry.weekend_shades:
        groups["weekends"].add(
            dwg.rect(insert=(shade.x, shade.y), size=(shade.width, shade.height), fill=WEEKEND_COLOR)
        )

    gridlines = groups["gridlines"]
    gridlines.update({"stroke": GRID_COLOR, "stroke_width": 1})
    for line in geometry.gridlines:
        gridlines.add(dwg.line(start=(line.x1, line.y1), end=(line.x2, line.y2)))
    for line in geometry.axes:
        gridlines.add(
            dwg.line(start=(line.x1, line.y1), end=(line.x2, line.y2), stroke=AXIS_COLOR)
        )

    for bar in geometry.bars:
        color = bar.color.hex
        rect = dwg.rect(
            insert=(bar.x, bar.y),
            size=(bar.width, bar.height),
            rx=3,
            ry=3,
            fill=color,
            stroke=color,
            stroke_width=1.5,
        )
        if not bar.filled:
            rect["fill-opacity"] = PENDING_FILL_OPACITY
        rect.set_desc(title=bar.name)
        groups["bars"].add(rect)

    for diamond in geometry.milestones:
        marker = dwg.polygon(
            points=diamond.points,
            fill=diamond.color.hex,
            stroke=AXIS_COLOR,
            stroke_width=1,
        )
        marker.set_desc(title=diamond.name)
        groups["milestones"].add(marker)

    if geometry.date_line is not None:
        line = geometry.date_line
        groups["date-line"].add(
            dwg.line(
                start=(line.x1, line.y1),
                end=(line.x2, line.y2),
                stroke=DATE_LINE_COLOR,
                stroke_width=2,
                stroke_dasharray="4,3",
            )
        )

    text_groups = ("header", "labels", "legend", "resource-table")
    for name in text_groups:
        groups[name].update({"font_family": geometry.font_family, "fill": TEXT_COLOR})

    if geometry.title is not None:
        _add_text(dwg, groups["header"], geometry.title)
    for label in geometry.header_labels:
        _add_text(dwg, groups["header"], label)

    for label in geometry.labels:
        _add_text(dwg, groups["labels"], label)

    for entry in geometry.legend:
        groups["legend"].add(
            dwg.rect(
                insert=(entry.x, entry.y),
                size=(entry.size, entry.size),
                fill=entry.color.hex,
                stroke=AXIS_COLOR,
                stroke_width=0.5,
            )
        )
        groups["legend"].add(
            dwg.text(entry.text, insert=(entry.x + entry.size + 6, entry.y + entry.size - 1))
        )

    for label in geometry.table_labels:
        _add_text(dwg, groups["resource-table"], label)
    for line in geometry.table_lines:
        groups["resource-table"].add(
            dwg.line(start=(line.x1, line.y1), end=(line.x2, line.y2), stroke=AXIS_COLOR)
        )

    return dwg


def emit(geometry: Geometry) -> str:
    """Serialize geometry to SVG document text."""
    return build_drawing(geometry).tostring()
