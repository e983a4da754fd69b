from __future__ import annotations

from PySide6.QtCore import QObject, QTimer, Signal

from gdpglobe.config import FRAME_INTERVAL_MS, ROTATION_SPEED_DEG
from gdpglobe.controller.interaction import PointerState
from gdpglobe.geo.projection import RotationState


class AnimationScheduler(QObject):
    """
    Auto-rotation driven by a repeating QTimer.

    Each tick spins the globe by a fixed increment while the pointer is idle. During a
    drag or hover the timer keeps running, so rotation resumes on the next tick after
    release.
    """
    frame_requested = Signal()

    def __init__(
        self,
        rotation: RotationState,
        pointer: PointerState,
        speed: float = ROTATION_SPEED_DEG,
        interval_ms: int = FRAME_INTERVAL_MS,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self.rotation = rotation
        self.pointer = pointer
        self.speed = speed

        self._timer = QTimer(self)
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(self.tick)

    def tick(self) -> bool:
        """Advance one frame. Returns True if the globe rotated."""
        if not self.pointer.idle:
            return False
        self.rotation.rotate_by(d_spin=self.speed)
        self.frame_requested.emit()
        return True

    def start(self) -> None:
        if not self._timer.isActive():
            self._timer.start()

    def stop(self) -> None:
        """Cancel the pending tick; no callback fires after this returns."""
        self._timer.stop()

    def is_running(self) -> bool:
        return self._timer.isActive()
