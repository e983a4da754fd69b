"""
Application Initialization
==========================
This module wires the Store, the main window and the background loads together and
starts the Qt Event Loop.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Resolves runtime settings from the environment.
2. Sets up logging.
3. Creates the Qt Application and the Main Window.
4. Starts the boundary and GDP loads once the window is visible.
"""
import logging

import pyqtgraph as pg

from gdpglobe.app.application import create_app
from gdpglobe.app.ui.main_window import MainWindow
from gdpglobe.config import load_settings
from gdpglobe.logging_config import setup_logging

logger = logging.getLogger(__name__)


def main() -> int:
    settings = load_settings()
    setup_logging(level=settings.log_level, log_file=settings.log_file)

    pg.setConfigOptions(antialias=True, background="#0f172a", foreground="#94a3b8")

    logger.debug(f"Model: {settings.model}, boundaries: {settings.boundaries_source}")
    app = create_app()

    window = MainWindow(settings)
    window.show()
    window.start_loading()

    return app.exec()
