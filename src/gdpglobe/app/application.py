from PySide6.QtWidgets import QApplication
from PySide6.QtCore import QCoreApplication, QSettings
from PySide6.QtGui import QColor, QPalette

import sys
import os

ORG_ID = "gdpglobe"
APP_ID = "gdp-globe"
ORG_DOMAIN = "gdpglobe.local"

VISIBLE_APP_NAME = "Global GDP 2024"

# slate palette shared by the widgets' stylesheets
PALETTE_COLORS: dict[QPalette.ColorRole, str] = {
    QPalette.ColorRole.Window: "#020617",
    QPalette.ColorRole.WindowText: "#e2e8f0",
    QPalette.ColorRole.Base: "#0f172a",
    QPalette.ColorRole.AlternateBase: "#1e293b",
    QPalette.ColorRole.Text: "#e2e8f0",
    QPalette.ColorRole.Button: "#1e293b",
    QPalette.ColorRole.ButtonText: "#e2e8f0",
    QPalette.ColorRole.Highlight: "#2563eb",
    QPalette.ColorRole.HighlightedText: "#ffffff",
    QPalette.ColorRole.ToolTipBase: "#0f172a",
    QPalette.ColorRole.ToolTipText: "#ffffff",
}


def dark_palette() -> QPalette:
    palette = QPalette()
    for role, color in PALETTE_COLORS.items():
        palette.setColor(role, QColor(color))
    return palette


def create_app() -> QApplication:
    """Create and configure the QApplication instance (or return the running one)."""
    os.environ.setdefault("QT_ENABLE_HIGHDPI_SCALING", "1")

    QCoreApplication.setOrganizationName(ORG_ID)
    QCoreApplication.setOrganizationDomain(ORG_DOMAIN)
    QCoreApplication.setApplicationName(APP_ID)
    QSettings.setDefaultFormat(QSettings.Format.IniFormat)

    app = QApplication.instance() or QApplication(sys.argv)

    # Fusion honours the palette on every platform
    app.setStyle("Fusion")
    app.setPalette(dark_palette())

    # Set the visible, translatable display name
    visible_name = QCoreApplication.translate("App", VISIBLE_APP_NAME)
    app.setApplicationDisplayName(visible_name)

    return app
