"""
Background Workers (Threading)
==============================
This module contains QThread subclasses for the two one-shot network requests.

Why is this file needed?
------------------------
1. Responsiveness: Downloading the boundary dataset or waiting for the model on the
   main thread would freeze the globe animation.
2. Signals: Results are handed back to the GUI thread through Qt Signals; the workers
   never touch the Store directly.

Classes:
    BoundaryLoaderWorker: Fetches and parses the world boundary dataset.
    GdpFetchWorker: Requests the GDP dataset (with fallback).
"""
import logging

from PySide6.QtCore import QThread, Signal

from gdpglobe.errors import BoundaryLoadError
from gdpglobe.geo.loader import load_boundaries
from gdpglobe.services.gemini import fetch_gdp_data

logger = logging.getLogger(__name__)


class BoundaryLoaderWorker(QThread):
    loaded = Signal(object)  # list[BoundaryFeature]
    failed = Signal(str)

    def __init__(self, source: str, timeout: float) -> None:
        super().__init__()
        self.source = source
        self.timeout = timeout

    def run(self) -> None:
        try:
            features = load_boundaries(self.source, timeout=self.timeout)
        except BoundaryLoadError as e:
            logger.error(f"Failed to load map data: {e}")
            self.failed.emit(str(e))
            return
        self.loaded.emit(features)


class GdpFetchWorker(QThread):
    finished_with = Signal(object)  # GdpFetchResult

    def __init__(self, api_key: str | None, model: str) -> None:
        super().__init__()
        self.api_key = api_key
        self.model = model

    def run(self) -> None:
        # fetch_gdp_data never raises, it falls back to the static dataset
        self.finished_with.emit(fetch_gdp_data(self.api_key, model=self.model))
