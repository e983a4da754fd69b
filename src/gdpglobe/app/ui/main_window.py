"""
Main Application Window
=======================
Globe on the left, ranked GDP panel on the right.

Why is this file needed?
------------------------
1. Layout: It organizes the globe, its overlays and the side panel.
2. Routing: It starts the two background loads and hands their results to the Store.
3. Teardown: It stops the animation loop and waits for pending workers on close.
"""
from __future__ import annotations

import logging

from PySide6.QtCore import Qt, Slot
from PySide6.QtWidgets import QMainWindow, QSplitter, QWidget

from gdpglobe.app.application import VISIBLE_APP_NAME
from gdpglobe.app.state import Store
from gdpglobe.app.ui.globe_widget import GlobeWidget
from gdpglobe.app.ui.overlays import HintOverlay, LegendOverlay, TitleOverlay, Toast
from gdpglobe.app.ui.panels.info_panel import InfoPanel
from gdpglobe.config import Settings
from gdpglobe.controller.workers import BoundaryLoaderWorker, GdpFetchWorker
from gdpglobe.services.gemini import GdpFetchResult

logger = logging.getLogger(__name__)

PANEL_WIDTH = 450
OVERLAY_MARGIN = 24
WORKER_WAIT_MS = 2000


class GlobeArea(QWidget):
    """The globe canvas with its floating overlays."""
    def __init__(self, store: Store, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.globe = GlobeWidget(store, self)
        self.title = TitleOverlay(self)
        self.legend = LegendOverlay(self)
        self.hint = HintOverlay(self)
        self.toast = Toast(self)

    def resizeEvent(self, event) -> None:
        super().resizeEvent(event)
        w, h = self.width(), self.height()
        self.globe.setGeometry(0, 0, w, h)

        self.title.adjustSize()
        self.title.move(OVERLAY_MARGIN, OVERLAY_MARGIN)

        self.legend.adjustSize()
        self.legend.move(w - self.legend.width() - OVERLAY_MARGIN - 8, h - self.legend.height() - OVERLAY_MARGIN - 8)

        self.hint.adjustSize()
        self.hint.move(16, h - self.hint.height() - 16)

        self.toast.move(w - self.toast.width() - 16, 16)

    def show_toast(self, text: str) -> None:
        self.toast.show_message(text)
        self.toast.move(self.width() - self.toast.width() - 16, 16)


class MainWindow(QMainWindow):
    def __init__(self, settings: Settings) -> None:
        super().__init__()
        self.settings = settings
        self.setWindowTitle(VISIBLE_APP_NAME)
        self.resize(1400, 900)
        self.setStyleSheet("QMainWindow { background: #020617; } QWidget { color: #e2e8f0; }")

        # Global store
        self.store = Store()

        splitter = QSplitter(Qt.Orientation.Horizontal, self)
        splitter.setChildrenCollapsible(False)

        self.globe_area = GlobeArea(self.store, splitter)
        self.info_panel = InfoPanel(self.store, splitter)
        self.info_panel.setFixedWidth(PANEL_WIDTH)
        self.info_panel.setStyleSheet("background: #0f172a;")

        splitter.addWidget(self.globe_area)
        splitter.addWidget(self.info_panel)
        splitter.setStretchFactor(0, 1)
        splitter.setStretchFactor(1, 0)
        self.setCentralWidget(splitter)

        self._boundary_worker: BoundaryLoaderWorker | None = None
        self._gdp_worker: GdpFetchWorker | None = None

        self.globe_area.globe.start()

    @property
    def globe(self) -> GlobeWidget:
        return self.globe_area.globe

    # ---- background loads ----

    def start_loading(self) -> None:
        """Kick off the boundary download and the GDP request, independently."""
        self._boundary_worker = BoundaryLoaderWorker(
            self.settings.boundaries_source, self.settings.boundaries_timeout
        )
        self._boundary_worker.loaded.connect(self.store.set_boundaries)
        self._boundary_worker.failed.connect(self.on_boundaries_failed)
        self._boundary_worker.start()

        self._gdp_worker = GdpFetchWorker(self.settings.api_key, self.settings.model)
        self._gdp_worker.finished_with.connect(self.on_gdp_loaded)
        self._gdp_worker.start()

    @Slot(str)
    def on_boundaries_failed(self, message: str) -> None:
        # The globe keeps rendering without country shapes.
        logger.warning(f"Continuing without boundary data: {message}")

    @Slot(object)
    def on_gdp_loaded(self, result: GdpFetchResult) -> None:
        self.store.set_records(result.records)
        if result.used_fallback:
            self.globe_area.show_toast(self.tr("Failed to load GDP data. Showing fallback estimates."))

    # ---- teardown ----

    def closeEvent(self, event, /) -> None:
        self.globe.shutdown()
        for worker in (self._boundary_worker, self._gdp_worker):
            if worker is None or not worker.isRunning():
                continue
            if not worker.wait(WORKER_WAIT_MS):
                logger.warning(f"{type(worker).__name__} still running at exit; terminating.")
                worker.terminate()
                worker.wait()
        super().closeEvent(event)
