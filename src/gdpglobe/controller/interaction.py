"""
Pointer Interaction
===================
Translates pointer events on the globe into rotation and selection changes.

Drag rotates the globe; moving without a drag hovers, inverts the pointer through the
current projection and selects the country under it. Hovering over the ocean keeps
the current selection.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from gdpglobe.config import DRAG_SENSITIVITY
from gdpglobe.geo.projection import OrthographicProjection, RotationState

if TYPE_CHECKING:
    from gdpglobe.app.state import Store

logger = logging.getLogger(__name__)


@dataclass
class PointerState:
    """Transient pointer flags, never shared outside the globe."""
    dragging: bool = False
    hovering: bool = False
    last_drag: tuple[float, float] = (0.0, 0.0)
    position: tuple[float, float] = (0.0, 0.0)

    @property
    def idle(self) -> bool:
        return not (self.dragging or self.hovering)


class InteractionController:
    def __init__(
        self,
        store: Store,
        rotation: RotationState,
        pointer: PointerState,
        sensitivity: float = DRAG_SENSITIVITY,
    ) -> None:
        self.store = store
        self.rotation = rotation
        self.pointer = pointer
        self.sensitivity = sensitivity

    def press(self, x: float, y: float) -> None:
        """Begin a drag gesture. The globe does not move until the pointer does."""
        self.pointer.dragging = True
        self.pointer.last_drag = (x, y)

    def move(self, x: float, y: float, width: float, height: float) -> bool:
        """
        Handle a pointer move.

        Returns:
            True when the globe needs a redraw.
        """
        self.pointer.position = (x, y)

        if self.pointer.dragging:
            lx, ly = self.pointer.last_drag
            self.rotation.rotate_by(
                d_spin=(x - lx) * self.sensitivity,
                d_tilt=-(y - ly) * self.sensitivity,
            )
            self.pointer.last_drag = (x, y)
            return True

        self.pointer.hovering = True
        # the tooltip follows the pointer whenever something is selected
        needs_redraw = self.store.selected is not None

        projection = OrthographicProjection.for_viewport(self.rotation.as_tuple(), width, height)
        lonlat = projection.invert(x, y)
        if lonlat is None or self.store.hit_tester is None:
            return needs_redraw

        feature = self.store.hit_tester.locate(*lonlat)
        if feature is None:
            return needs_redraw

        record = self.store.record_for_code(feature.code)
        if record is not None and record != self.store.selected:
            logger.debug(f"Hover selected {record.iso_code}.")
            self.store.set_selected(record)
            return True
        return needs_redraw

    def release(self) -> None:
        self.pointer.dragging = False

    def enter(self) -> None:
        self.pointer.hovering = True

    def leave(self) -> None:
        """Pointer left the globe: stop dragging and hovering so auto-rotation resumes."""
        self.pointer.dragging = False
        self.pointer.hovering = False
