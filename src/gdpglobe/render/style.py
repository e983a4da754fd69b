"""Colors and sizes of the globe rendering."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Union

# "#rrggbb" or CSS-like (r, g, b, alpha) with alpha in [0, 1]
Color = Union[str, tuple[int, int, int, float]]


@dataclass(frozen=True)
class GlobeStyle:
    background: Color = "#0f172a"

    grid_color: Color = "#1e293b"
    grid_width: float = 0.5

    no_data: Color = "#334155"
    border_color: Color = "#0f172a"
    border_width: float = 0.5

    glow_color: Color = (56, 189, 248, 0.1)
    glow_extent: float = 1.2  # outer radius of the glow, relative to the sphere

    pop_scale: float = 1.05
    highlight_fill: Color = "#38bdf8"
    highlight_border: Color = "#ffffff"
    highlight_border_width: float = 2.0
    shadow_color: Color = (0, 0, 0, 0.8)
    shadow_blur: float = 20.0

    tooltip_offset: float = 15.0
    tooltip_padding: float = 8.0
    tooltip_height: float = 24.0
    tooltip_radius: float = 4.0
    tooltip_font_family: str = "sans-serif"
    tooltip_font_px: int = 12
    tooltip_background: Color = (15, 23, 42, 0.9)
    tooltip_border: Color = (56, 189, 248, 0.5)
    tooltip_text: Color = "#ffffff"


DEFAULT_STYLE = GlobeStyle()
