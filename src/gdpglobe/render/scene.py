"""
Globe Scene
===========
Turns a RenderState snapshot into the complete, ordered list of draw operations for
one frame. This module never touches Qt: the same state always yields an equal frame,
and a backend (see qt_painter.py) executes the operations.

Z-order, later items occlude earlier ones:
    1. sphere background
    2. graticule
    3. countries (except the selected one), colored by GDP
    4. atmosphere glow
    5. selected country, lifted and shadowed
    6. tooltip
"""
from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Optional, Sequence, TYPE_CHECKING

import numpy as np

from gdpglobe.geo.projection import GRATICULE_10, OrthographicProjection, project_rings
from gdpglobe.model.records import BoundaryFeature, CountryRecord
from gdpglobe.render.color_scale import SequentialColorScale
from gdpglobe.render.style import DEFAULT_STYLE, Color, GlobeStyle

if TYPE_CHECKING:
    import numpy.typing as npt


# -------------------------------------------------------------------------------
# Frame input
# -------------------------------------------------------------------------------

@dataclass(frozen=True)
class RenderState:
    """Everything a frame depends on."""
    rotation: tuple[float, float, float]
    width: float
    height: float
    records: tuple[CountryRecord, ...] = ()
    features: Optional[tuple[BoundaryFeature, ...]] = None  # None until loaded
    selected: Optional[CountryRecord] = None
    hovering: bool = False
    dragging: bool = False
    pointer: tuple[float, float] = (0.0, 0.0)


# -------------------------------------------------------------------------------
# Draw operations
# -------------------------------------------------------------------------------

def _values_equal(a: Any, b: Any) -> bool:
    if isinstance(a, np.ndarray) or isinstance(b, np.ndarray):
        return np.array_equal(a, b)
    if isinstance(a, (tuple, list)) and isinstance(b, (tuple, list)):
        return len(a) == len(b) and all(_values_equal(x, y) for x, y in zip(a, b))
    return a == b


class DrawOp:
    """Base class of the draw operations. Compares array fields by value."""
    __hash__ = None

    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return all(_values_equal(getattr(self, f.name), getattr(other, f.name)) for f in fields(self))


@dataclass(frozen=True, eq=False)
class SphereOp(DrawOp):
    center: tuple[float, float]
    radius: float
    fill: Color


@dataclass(frozen=True, eq=False)
class GraticuleOp(DrawOp):
    lines: tuple[npt.NDArray[np.float64], ...]
    color: Color
    width: float


@dataclass(frozen=True)
class Shadow:
    color: Color
    blur: float


@dataclass(frozen=True, eq=False)
class FeatureOp(DrawOp):
    code: str
    rings: tuple[npt.NDArray[np.float64], ...]
    fill: Color
    edge: Color
    edge_width: float
    shadow: Optional[Shadow] = None


@dataclass(frozen=True, eq=False)
class GlowOp(DrawOp):
    center: tuple[float, float]
    inner_radius: float
    outer_radius: float
    color: Color
    width: float
    height: float


@dataclass(frozen=True, eq=False)
class TooltipOp(DrawOp):
    """Text box; its width is the measured text width plus 2 x padding."""
    position: tuple[float, float]
    text: str
    padding: float
    height: float
    radius: float
    font_family: str
    font_px: int
    background: Color
    border: Color
    text_color: Color


# -------------------------------------------------------------------------------
# Frame builder
# -------------------------------------------------------------------------------

def build_frame(state: RenderState, style: GlobeStyle = DEFAULT_STYLE) -> list[DrawOp]:
    """Build the draw operations of one frame from the given state."""
    frame: list[DrawOp] = []
    if state.width <= 0 or state.height <= 0:
        return frame

    projection = OrthographicProjection.for_viewport(state.rotation, state.width, state.height)
    radius = projection.scale
    center = projection.center

    # 1. sphere
    frame.append(SphereOp(center=center, radius=radius, fill=style.background))

    # 2. graticule
    lines = tuple(run for line in GRATICULE_10 for run in projection.project_line(line))
    frame.append(GraticuleOp(lines=lines, color=style.grid_color, width=style.grid_width))

    # 3. base layer of countries
    features: Sequence[BoundaryFeature] = state.features or ()
    selected_code = state.selected.iso_code if state.selected is not None else None
    color_scale = SequentialColorScale.from_records(state.records)
    by_code = {record.iso_code: record for record in state.records}

    for feature in features:
        if feature.code == selected_code:
            continue
        rings = project_rings(projection, feature.rings)
        if not rings:
            continue
        record = by_code.get(feature.code)
        fill = color_scale(record.gdp_trillions) if record is not None else style.no_data
        frame.append(FeatureOp(
            code=feature.code,
            rings=rings,
            fill=fill,
            edge=style.border_color,
            edge_width=style.border_width,
        ))

    # 4. atmosphere
    frame.append(GlowOp(
        center=center,
        inner_radius=radius,
        outer_radius=radius * style.glow_extent,
        color=style.glow_color,
        width=state.width,
        height=state.height,
    ))

    # 5. floating selected country
    if selected_code is not None:
        feature = next((f for f in features if f.code == selected_code), None)
        if feature is not None:
            pop = OrthographicProjection.for_viewport(
                state.rotation, state.width, state.height, scale_factor=style.pop_scale
            )
            rings = project_rings(pop, feature.rings)
            if rings:
                frame.append(FeatureOp(
                    code=feature.code,
                    rings=rings,
                    fill=style.highlight_fill,
                    edge=style.highlight_border,
                    edge_width=style.highlight_border_width,
                    shadow=Shadow(color=style.shadow_color, blur=style.shadow_blur),
                ))

    # 6. tooltip
    if state.hovering and not state.dragging and state.selected is not None:
        mx, my = state.pointer
        frame.append(TooltipOp(
            position=(mx + style.tooltip_offset, my + style.tooltip_offset),
            text=state.selected.country_name,
            padding=style.tooltip_padding,
            height=style.tooltip_height,
            radius=style.tooltip_radius,
            font_family=style.tooltip_font_family,
            font_px=style.tooltip_font_px,
            background=style.tooltip_background,
            border=style.tooltip_border,
            text_color=style.tooltip_text,
        ))

    return frame
