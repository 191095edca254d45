"""Procedural resource colors."""

from typing import NamedTuple, Optional

from gantt_chart.models import Resource

# Successive multiples of the golden ratio conjugate spread hues evenly
GOLDEN_RATIO_CONJUGATE = 0.618033988749895
HUE_SEED = 0.1
SATURATION = 0.5
VALUE = 0.95


class RGB(NamedTuple):
    r: int
    g: int
    b: int

    @property
    def hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"


def _hsv_to_rgb(hue: float, saturation: float, value: float) -> RGB:
    """Convert HSV color to RGB.

    Args:
        hue: Hue as a fraction of the color wheel (0-1)
        saturation: Saturation (0-1)
        value: Value (0-1)

    Returns:
        RGB with integer channels (0-255)
    """
    h = (hue % 1.0) * 6.0
    c = value * saturation
    x = c * (1 - abs(h % 2 - 1))
    m = value - c

    if h < 1:
        r, g, b = c, x, 0
    elif h < 2:
        r, g, b = x, c, 0
    elif h < 3:
        r, g, b = 0, c, x
    elif h < 4:
        r, g, b = 0, x, c
    elif h < 5:
        r, g, b = x, 0, c
    else:
        r, g, b = c, 0, x

    return RGB(
        int(round((r + m) * 255)),
        int(round((g + m) * 255)),
        int(round((b + m) * 255)),
    )


def hue_for_index(index: int) -> float:
    """Hue (0-1) of the Nth resource."""
    return (HUE_SEED + index * GOLDEN_RATIO_CONJUGATE) % 1.0


def color_for_index(index: int) -> RGB:
    """Return a stable, well-separated color for the Nth resource."""
    return _hsv_to_rgb(hue_for_index(index), SATURATION, VALUE)


def parse_hex_color(text: str) -> RGB:
    """Parse ``#rrggbb`` or ``#rgb`` into an RGB.

    Raises:
        ValueError: If the text is not a hex color
    """
    digits = text.strip().lstrip("#")
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    if len(digits) != 6:
        raise ValueError(f"Invalid hex color: '{text}'")
    try:
        return RGB(int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))
    except ValueError:
        raise ValueError(f"Invalid hex color: '{text}'") from None


def resource_color(resource: Optional[Resource], index: int) -> RGB:
    """Use the resource's own color when it has one."""
    if resource is not None and resource.color:
        return parse_hex_color(resource.color)
    return color_for_index(index)
