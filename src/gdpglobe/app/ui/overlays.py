"""Decorations drawn over the globe: title, GDP legend, usage hint and the error toast."""
from __future__ import annotations

from PySide6.QtCore import QPointF, QRectF, Qt, QTimer
from PySide6.QtGui import QColor, QLinearGradient, QPainter
from PySide6.QtWidgets import QHBoxLayout, QLabel, QVBoxLayout, QWidget

from gdpglobe.render.color_scale import SequentialColorScale

TOAST_TIMEOUT_MS = 8000


class TitleOverlay(QWidget):
    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        title = QLabel('GLOBAL <span style="color:#3b82f6">GDP</span> 2024', self)
        title.setTextFormat(Qt.TextFormat.RichText)
        title.setStyleSheet("font-size: 34px; font-weight: 900; color: white;")
        subtitle = QLabel(self.tr("Interactive visualization of estimated nominal GDP data powered by Gemini."), self)
        subtitle.setWordWrap(True)
        subtitle.setMaximumWidth(320)
        subtitle.setStyleSheet("color: #94a3b8;")

        layout.addWidget(title)
        layout.addWidget(subtitle)


class GradientBar(QWidget):
    """Horizontal bar painted with the stops of the globe's color scale."""
    def __init__(self, stops: list[tuple[float, str]], parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.stops = stops
        self.setFixedSize(128, 8)

    def paintEvent(self, event) -> None:
        painter = QPainter(self)
        try:
            painter.setRenderHint(QPainter.RenderHint.Antialiasing, True)
            rect = QRectF(self.rect())
            gradient = QLinearGradient(QPointF(rect.left(), 0.0), QPointF(rect.right(), 0.0))
            for pos, color in self.stops:
                gradient.setColorAt(pos, QColor(color))
            painter.setPen(Qt.PenStyle.NoPen)
            painter.setBrush(gradient)
            painter.drawRoundedRect(rect, 4.0, 4.0)
        finally:
            painter.end()


class LegendOverlay(QWidget):
    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents)
        self.setAttribute(Qt.WidgetAttribute.WA_StyledBackground)
        self.setObjectName("legend")
        self.setStyleSheet(
            "#legend { background: rgba(15,23,42,0.8); border: 1px solid #334155; border-radius: 8px; }"
            "QLabel { font-size: 11px; }"
        )

        layout = QVBoxLayout(self)
        header = QLabel(self.tr("GDP Scale"), self)
        header.setStyleSheet("color: #cbd5e1; font-weight: 600;")
        layout.addWidget(header)

        row = QHBoxLayout()
        low = QLabel(self.tr("Low"), self)
        low.setStyleSheet("color: #64748b;")
        high = QLabel(self.tr("High"), self)
        high.setStyleSheet("color: #64748b;")
        self.gradient = GradientBar(SequentialColorScale(1.0).gradient_stops(9), self)
        row.addWidget(low)
        row.addWidget(self.gradient)
        row.addWidget(high)
        layout.addLayout(row)


class HintOverlay(QLabel):
    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setText(self.tr("Hover to view details • Drag to rotate"))
        self.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents)
        self.setStyleSheet(
            "color: #64748b; font-size: 11px; background: rgba(15,23,42,0.5);"
            "border: 1px solid rgba(51,65,85,0.5); border-radius: 4px; padding: 4px 8px;"
        )


class Toast(QLabel):
    """Auto-hiding error notice."""
    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setStyleSheet(
            "background: rgba(239,68,68,0.9); color: white; border-radius: 8px; padding: 8px 16px;"
        )
        self._hide_timer = QTimer(self)
        self._hide_timer.setSingleShot(True)
        self._hide_timer.timeout.connect(self.hide)
        self.hide()

    def show_message(self, text: str, timeout_ms: int = TOAST_TIMEOUT_MS) -> None:
        self.setText(text)
        self.adjustSize()
        self.show()
        self.raise_()
        self._hide_timer.start(timeout_ms)
