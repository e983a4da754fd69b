"""
QPainter backend for the globe scene.
"""
from __future__ import annotations

from typing import Sequence, TYPE_CHECKING

import pyqtgraph as pg
from PySide6.QtCore import QPointF, QRectF, Qt
from PySide6.QtGui import QBrush, QColor, QFont, QFontMetricsF, QPainter, QPainterPath, QPen, QRadialGradient

from gdpglobe.render.scene import DrawOp, FeatureOp, GlowOp, GraticuleOp, Shadow, SphereOp, TooltipOp
from gdpglobe.render.style import Color

if TYPE_CHECKING:
    import numpy as np
    import numpy.typing as npt

SHADOW_STEPS = 6


def to_qcolor(color: Color) -> QColor:
    """Convert "#rrggbb" or (r, g, b, alpha) into a QColor."""
    if isinstance(color, str):
        return QColor(color)
    r, g, b, a = color
    c = QColor(int(r), int(g), int(b))
    c.setAlphaF(float(a))
    return c


def polylines_to_path(polylines: Sequence[npt.NDArray[np.float64]], closed: bool = False) -> QPainterPath:
    """Join (N, 2) pixel arrays into one path, one subpath each."""
    path = QPainterPath()
    path.setFillRule(Qt.FillRule.OddEvenFill)
    for pts in polylines:
        sub = pg.arrayToQPath(pts[:, 0], pts[:, 1], connect="all")
        if closed:
            sub.closeSubpath()
        path.addPath(sub)
    return path


class QtFramePainter:
    """Executes a frame built by `build_frame` on a QPainter."""

    def paint(self, painter: QPainter, frame: Sequence[DrawOp]) -> None:
        painter.setRenderHint(QPainter.RenderHint.Antialiasing, True)
        for op in frame:
            painter.save()
            try:
                match op:
                    case SphereOp():
                        self._paint_sphere(painter, op)
                    case GraticuleOp():
                        self._paint_graticule(painter, op)
                    case FeatureOp():
                        self._paint_feature(painter, op)
                    case GlowOp():
                        self._paint_glow(painter, op)
                    case TooltipOp():
                        self._paint_tooltip(painter, op)
                    case _:
                        raise TypeError(f"Unknown draw operation: {type(op).__name__}")
            finally:
                painter.restore()

    # ---- operations ----

    @staticmethod
    def _paint_sphere(painter: QPainter, op: SphereOp) -> None:
        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(QBrush(to_qcolor(op.fill)))
        painter.drawEllipse(QPointF(*op.center), op.radius, op.radius)

    @staticmethod
    def _paint_graticule(painter: QPainter, op: GraticuleOp) -> None:
        if not op.lines:
            return
        painter.setBrush(Qt.BrushStyle.NoBrush)
        painter.setPen(QPen(to_qcolor(op.color), op.width))
        painter.drawPath(polylines_to_path(op.lines))

    def _paint_feature(self, painter: QPainter, op: FeatureOp) -> None:
        path = polylines_to_path(op.rings, closed=True)
        if op.shadow is not None:
            self._paint_shadow(painter, path, op.shadow)
        painter.setBrush(QBrush(to_qcolor(op.fill)))
        painter.setPen(QPen(to_qcolor(op.edge), op.edge_width))
        painter.drawPath(path)

    @staticmethod
    def _paint_shadow(painter: QPainter, path: QPainterPath, shadow: Shadow) -> None:
        """Approximate a blurred drop shadow with widening translucent strokes."""
        base = to_qcolor(shadow.color)
        painter.setBrush(Qt.BrushStyle.NoBrush)
        for i in range(SHADOW_STEPS, 0, -1):
            color = QColor(base)
            color.setAlphaF(base.alphaF() / SHADOW_STEPS)
            pen = QPen(color, shadow.blur * i / SHADOW_STEPS)
            pen.setJoinStyle(Qt.PenJoinStyle.RoundJoin)
            painter.setPen(pen)
            painter.drawPath(path)

    @staticmethod
    def _paint_glow(painter: QPainter, op: GlowOp) -> None:
        if op.outer_radius <= 0:
            return
        gradient = QRadialGradient(QPointF(*op.center), op.outer_radius)
        gradient.setColorAt(op.inner_radius / op.outer_radius, to_qcolor(op.color))
        gradient.setColorAt(1.0, QColor(0, 0, 0, 0))
        painter.fillRect(QRectF(0.0, 0.0, op.width, op.height), QBrush(gradient))

    @staticmethod
    def _paint_tooltip(painter: QPainter, op: TooltipOp) -> None:
        font = QFont(op.font_family)
        font.setPixelSize(op.font_px)
        metrics = QFontMetricsF(font)
        text_width = metrics.horizontalAdvance(op.text)

        x, y = op.position
        box = QRectF(x, y, text_width + op.padding * 2, op.height)
        painter.setFont(font)
        painter.setBrush(QBrush(to_qcolor(op.background)))
        painter.setPen(QPen(to_qcolor(op.border), 1.0))
        painter.drawRoundedRect(box, op.radius, op.radius)

        baseline = y + (op.height + metrics.ascent() - metrics.descent()) / 2.0
        painter.setPen(QPen(to_qcolor(op.text_color)))
        painter.drawText(QPointF(x + op.padding, baseline), op.text)
