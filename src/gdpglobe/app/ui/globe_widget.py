from __future__ import annotations

import logging

from PySide6.QtCore import Qt
from PySide6.QtGui import QColor, QPainter, QPalette
from PySide6.QtWidgets import QWidget

from gdpglobe.app.state import Store
from gdpglobe.controller.animation import AnimationScheduler
from gdpglobe.controller.interaction import InteractionController, PointerState
from gdpglobe.geo.projection import RotationState
from gdpglobe.render.qt_painter import QtFramePainter
from gdpglobe.render.scene import DrawOp, RenderState, build_frame

logger = logging.getLogger(__name__)

CANVAS_COLOR = "#020617"


class GlobeWidget(QWidget):
    """
    Interactive globe canvas.

    Owns the rotation and pointer state, feeds pointer events to the
    InteractionController and redraws the whole frame on every relevant change.
    """
    def __init__(self, store: Store, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.store = store

        self.rotation = RotationState()
        self.pointer = PointerState()
        self.controller = InteractionController(store, self.rotation, self.pointer)
        self.scheduler = AnimationScheduler(self.rotation, self.pointer, parent=self)
        self._frame_painter = QtFramePainter()

        self.setMouseTracking(True)
        self.setMinimumSize(320, 320)
        self.setCursor(Qt.CursorShape.OpenHandCursor)

        palette = self.palette()
        palette.setColor(QPalette.ColorRole.Window, QColor(CANVAS_COLOR))
        self.setPalette(palette)
        self.setAutoFillBackground(True)

        # redraw on any state change
        self.scheduler.frame_requested.connect(self.update)
        self.store.records_changed.connect(lambda *_: self.update())
        self.store.boundaries_changed.connect(lambda *_: self.update())
        self.store.selection_changed.connect(lambda *_: self.update())

    # ---- lifecycle ----

    def start(self) -> None:
        self.scheduler.start()

    def shutdown(self) -> None:
        """Stop the animation loop; called when the window closes."""
        self.scheduler.stop()
        logger.debug("Globe animation stopped.")

    # ---- rendering ----

    def render_state(self) -> RenderState:
        return RenderState(
            rotation=self.rotation.as_tuple(),
            width=float(self.width()),
            height=float(self.height()),
            records=self.store.records,
            features=self.store.features,
            selected=self.store.selected,
            hovering=self.pointer.hovering,
            dragging=self.pointer.dragging,
            pointer=self.pointer.position,
        )

    def current_frame(self) -> list[DrawOp]:
        return build_frame(self.render_state())

    def paintEvent(self, event) -> None:
        painter = QPainter(self)
        try:
            self._frame_painter.paint(painter, self.current_frame())
        finally:
            painter.end()

    # ---- pointer events ----

    def mousePressEvent(self, event) -> None:
        if event.button() == Qt.MouseButton.LeftButton:
            pos = event.position()
            self.controller.press(pos.x(), pos.y())
            self.setCursor(Qt.CursorShape.ClosedHandCursor)
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event) -> None:
        pos = event.position()
        if self.controller.move(pos.x(), pos.y(), self.width(), self.height()):
            self.update()
        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event) -> None:
        self.controller.release()
        self.setCursor(Qt.CursorShape.OpenHandCursor)
        super().mouseReleaseEvent(event)

    def enterEvent(self, event) -> None:
        self.controller.enter()
        super().enterEvent(event)

    def leaveEvent(self, event) -> None:
        self.controller.leave()
        self.setCursor(Qt.CursorShape.OpenHandCursor)
        self.update()
        super().leaveEvent(event)
