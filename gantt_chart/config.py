"""Chart rendering configuration."""

import json
from dataclasses import asdict, dataclass, fields
from datetime import date, datetime
from pathlib import Path
from typing import Optional


@dataclass
class ChartConfig:
    """Options controlling chart geometry and which extras are drawn.

    Attributes:
        day_column_width: Width of one calendar day column in pixels
        row_height: Height of one task row in pixels
        label_column_width: Width of the resource/task label column
        header_height: Height of the two-line date header
        title_height: Height of the title band above the header
        milestone_size: Width and height of a milestone diamond
        bar_padding: Vertical gap between a bar and its row edges
        font_family: Font for all text
        font_size: Base font size in pixels
        show_resource_table: Draw the per-resource summary table
        show_legend: Draw the resource color key
        show_empty_resources: Give resources without tasks a blank row
        shade_weekends: Shade Saturday and Sunday columns
        reference_date: Date of the vertical "today" line, if any
    """

    day_column_width: float = 24.0
    row_height: float = 28.0
    label_column_width: float = 220.0
    header_height: float = 40.0
    title_height: float = 36.0
    milestone_size: float = 14.0
    bar_padding: float = 6.0
    font_family: str = "Arial, sans-serif"
    font_size: float = 12.0
    show_resource_table: bool = False
    show_legend: bool = True
    show_empty_resources: bool = True
    shade_weekends: bool = True
    reference_date: Optional[date] = None

    def __post_init__(self):
        if self.day_column_width <= 0:
            raise ValueError("day_column_width must be positive")
        if self.row_height <= 0:
            raise ValueError("row_height must be positive")
        if self.bar_padding * 2 >= self.row_height:
            raise ValueError("bar_padding leaves no room for bars")

    @classmethod
    def from_dict(cls, data: dict) -> "ChartConfig":
        """Build a config from a (possibly partial) JSON dictionary.

        Raises:
            ValueError: If a key is unknown or a date is malformed
        """
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown chart config key(s): {', '.join(sorted(unknown))}")

        values = dict(data)
        reference = values.get("reference_date")
        if isinstance(reference, str):
            values["reference_date"] = datetime.strptime(reference, "%Y-%m-%d").date()
        return cls(**values)

    def to_dict(self) -> dict:
        data = asdict(self)
        if self.reference_date is not None:
            data["reference_date"] = self.reference_date.isoformat()
        return data


DEFAULT_CHART_CONFIG = ChartConfig().to_dict()


def load_chart_config(config_path: str = "chart_config.json") -> ChartConfig:
    """Load chart configuration from a JSON file.

    If the file doesn't exist, returns the default configuration. Keys in
    the file override the defaults one by one.

    Args:
        config_path: Path to the chart configuration file

    Returns:
        ChartConfig
    """
    path = Path(config_path)
    if not path.exists():
        return ChartConfig()

    with open(path) as f:
        config = json.load(f)

    result = DEFAULT_CHART_CONFIG.copy()
    result.update(config)
    return ChartConfig.from_dict(result)


def save_default_chart_config(config_path: str = "chart_config.json") -> None:
    """Save the default chart configuration to a file."""
    with open(config_path, "w") as f:
        json.dump(DEFAULT_CHART_CONFIG, f, indent=2)
