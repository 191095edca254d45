"""Error types raised while building a chart."""


class GanttChartError(ValueError):
    """Base class for errors that abort a render."""


class InvalidDate(GanttChartError):
    """Calendar arithmetic left the representable date range."""


class InvalidDuration(GanttChartError):
    """A task was given a negative number of working days."""


class LayoutError(GanttChartError):
    """A dated entry fell outside the chart's date window."""
