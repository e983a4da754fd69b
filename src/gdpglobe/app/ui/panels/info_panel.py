"""Side panel: GDP ranking chart, selected-country details and the full list."""
from __future__ import annotations

import logging
from typing import Optional, Sequence

import numpy as np
import pyqtgraph as pg
from PySide6.QtCore import Qt, Slot
from PySide6.QtWidgets import (
    QFrame, QGridLayout, QLabel, QListWidget, QListWidgetItem, QStackedWidget, QVBoxLayout, QWidget,
)

from gdpglobe.app.state import Store
from gdpglobe.config import CHART_TOP_N
from gdpglobe.model.records import CountryRecord

logger = logging.getLogger(__name__)

BAR_SELECTED = "#38bdf8"
BAR_DEFAULT = "#64748b"
GROWTH_POSITIVE = "#4ade80"
GROWTH_NEGATIVE = "#f87171"


def format_gdp(value: float) -> str:
    return f"${value:g}T"


def format_growth(value: float) -> str:
    sign = "+" if value > 0 else ""
    return f"{sign}{value:g}%"


def bar_colors(records: Sequence[CountryRecord], selected: Optional[CountryRecord]) -> list[str]:
    code = selected.iso_code if selected is not None else None
    return [BAR_SELECTED if r.iso_code == code else BAR_DEFAULT for r in records]


class CountryDetails(QFrame):
    """Card with the selected country's figures."""
    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setObjectName("countryDetails")
        self.setStyleSheet(
            "#countryDetails { background: #1e293b; border: 1px solid rgba(59,130,246,0.3); border-radius: 12px; }"
        )

        grid = QGridLayout(self)
        self.name_label = QLabel(self)
        self.name_label.setStyleSheet("font-size: 22px; font-weight: bold; color: white;")
        self.code_label = QLabel(self)
        self.code_label.setStyleSheet("font-family: monospace; color: #60a5fa;")
        self.gdp_label = QLabel(self)
        self.gdp_label.setStyleSheet("font-size: 22px; font-weight: bold; color: #60a5fa;")
        self.gdp_label.setAlignment(Qt.AlignmentFlag.AlignRight)
        gdp_caption = QLabel(self.tr("2024 EST. GDP"), self)
        gdp_caption.setStyleSheet("font-size: 10px; color: #94a3b8;")
        gdp_caption.setAlignment(Qt.AlignmentFlag.AlignRight)

        rank_caption = QLabel(self.tr("Global Rank"), self)
        rank_caption.setStyleSheet("font-size: 11px; color: #64748b;")
        self.rank_label = QLabel(self)
        self.rank_label.setStyleSheet("font-size: 16px; font-weight: 600; color: white;")
        growth_caption = QLabel(self.tr("Growth Rate"), self)
        growth_caption.setStyleSheet("font-size: 11px; color: #64748b;")
        self.growth_label = QLabel(self)

        self.description_label = QLabel(self)
        self.description_label.setWordWrap(True)
        self.description_label.setStyleSheet("color: #cbd5e1; padding-top: 8px;")

        grid.addWidget(self.name_label, 0, 0)
        grid.addWidget(self.gdp_label, 0, 1)
        grid.addWidget(self.code_label, 1, 0)
        grid.addWidget(gdp_caption, 1, 1)
        grid.addWidget(rank_caption, 2, 0)
        grid.addWidget(growth_caption, 2, 1)
        grid.addWidget(self.rank_label, 3, 0)
        grid.addWidget(self.growth_label, 3, 1)
        grid.addWidget(self.description_label, 4, 0, 1, 2)

    def set_record(self, record: CountryRecord) -> None:
        self.name_label.setText(record.country_name)
        self.code_label.setText(record.iso_code)
        self.gdp_label.setText(format_gdp(record.gdp_trillions))
        self.rank_label.setText(f"#{record.rank}")
        color = GROWTH_POSITIVE if record.growth_rate >= 0 else GROWTH_NEGATIVE
        self.growth_label.setStyleSheet(f"font-size: 16px; font-weight: 600; color: {color};")
        self.growth_label.setText(format_growth(record.growth_rate))
        self.description_label.setText(record.description)


class InfoPanel(QWidget):
    """
    Ranked GDP view bound to the Store.

    Top: horizontal bar chart of the leading economies. Middle: details of the selected
    country. Bottom: the full list. Clicking a bar or a list row selects the country.
    """
    def __init__(self, store: Store, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.store = store
        self._chart_records: list[CountryRecord] = []
        self._bars: Optional[pg.BarGraphItem] = None

        root = QVBoxLayout(self)
        self.pages = QStackedWidget(self)
        root.addWidget(self.pages)

        # page 0: loading
        self.loading_label = QLabel(self.tr("Analyzing Global Economy..."), self)
        self.loading_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.loading_label.setStyleSheet("color: #94a3b8;")
        self.pages.addWidget(self.loading_label)

        # page 1: content
        content = QWidget(self)
        layout = QVBoxLayout(content)
        layout.setSpacing(12)

        title = QLabel(self.tr("2024 GDP Rankings"), content)
        title.setStyleSheet("font-size: 20px; font-weight: bold; color: white;")
        subtitle = QLabel(self.tr("Nominal GDP estimates (Trillions USD)"), content)
        subtitle.setStyleSheet("color: #94a3b8;")
        layout.addWidget(title)
        layout.addWidget(subtitle)

        self.chart = pg.PlotWidget(content)
        self.chart.setMinimumHeight(280)
        self.chart.setMenuEnabled(False)
        self.chart.setMouseEnabled(x=False, y=False)
        self.chart.hideButtons()
        self.chart.hideAxis("bottom")
        self.chart.getAxis("left").setTextPen("#94a3b8")
        self.chart.getAxis("left").setPen("#334155")
        self.chart.invertY(True)
        self.chart.scene().sigMouseClicked.connect(self._on_chart_clicked)
        layout.addWidget(self.chart)

        self.details_stack = QStackedWidget(content)
        self.placeholder = QLabel(self.tr("Select a country from the list\nor map to view details"), content)
        self.placeholder.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.placeholder.setStyleSheet("color: #64748b; border: 2px dashed #1e293b; border-radius: 12px;")
        self.placeholder.setMinimumHeight(160)
        self.details = CountryDetails(content)
        self.details_stack.addWidget(self.placeholder)
        self.details_stack.addWidget(self.details)
        layout.addWidget(self.details_stack)

        self.list_header = QLabel(content)
        self.list_header.setStyleSheet("font-size: 11px; font-weight: bold; color: #94a3b8;")
        layout.addWidget(self.list_header)

        self.country_list = QListWidget(content)
        self.country_list.itemClicked.connect(self._on_item_clicked)
        layout.addWidget(self.country_list, 1)

        self.pages.addWidget(content)

        # wiring
        self.store.records_changed.connect(self._on_records_changed)
        self.store.selection_changed.connect(self._on_selection_changed)

        self.set_loading(True)

    def set_loading(self, loading: bool) -> None:
        self.pages.setCurrentIndex(0 if loading else 1)

    def is_loading(self) -> bool:
        return self.pages.currentIndex() == 0

    # ---- store -> view ----

    @Slot(object)
    def _on_records_changed(self, records: Sequence[CountryRecord]) -> None:
        self._rebuild_chart(records)
        self._rebuild_list(records)
        self._on_selection_changed(self.store.selected)
        self.set_loading(False)

    @Slot(object)
    def _on_selection_changed(self, record: Optional[CountryRecord]) -> None:
        if self._bars is not None:
            self._bars.setOpts(brushes=bar_colors(self._chart_records, record))

        self.country_list.blockSignals(True)
        try:
            row = self.store.records.index(record) if record in self.store.records else -1
            self.country_list.setCurrentRow(row)
        finally:
            self.country_list.blockSignals(False)

        if record is None:
            self.details_stack.setCurrentWidget(self.placeholder)
        else:
            self.details.set_record(record)
            self.details_stack.setCurrentWidget(self.details)

    def _rebuild_chart(self, records: Sequence[CountryRecord]) -> None:
        self.chart.clear()
        self._bars = None
        self._chart_records = list(records[:CHART_TOP_N])
        if not self._chart_records:
            return

        ys = np.arange(len(self._chart_records), dtype=float)
        widths = np.array([r.gdp_trillions for r in self._chart_records], dtype=float)
        self._bars = pg.BarGraphItem(
            x0=0.0, y=ys, width=widths, height=0.6,
            brushes=bar_colors(self._chart_records, self.store.selected),
            pen=pg.mkPen(None),
        )
        self.chart.addItem(self._bars)
        self.chart.getAxis("left").setTicks([[(float(i), r.iso_code) for i, r in enumerate(self._chart_records)]])
        self.chart.setYRange(-0.5, len(self._chart_records) - 0.5, padding=0)
        self.chart.setXRange(0.0, max(float(widths.max()), 1e-9), padding=0.02)

    def _rebuild_list(self, records: Sequence[CountryRecord]) -> None:
        self.list_header.setText(self.tr("FULL LIST ({n})").format(n=len(records)))
        self.country_list.clear()
        for record in records:
            item = QListWidgetItem(f"{record.rank:>3}   {record.country_name}   {format_gdp(record.gdp_trillions)}")
            item.setData(Qt.ItemDataRole.UserRole, record)
            self.country_list.addItem(item)

    # ---- view -> store ----

    def record_at_chart_row(self, y: float) -> Optional[CountryRecord]:
        """Record whose bar spans the chart's data-space y coordinate."""
        row = int(round(y))
        if 0 <= row < len(self._chart_records) and abs(y - row) <= 0.5:
            return self._chart_records[row]
        return None

    def _on_chart_clicked(self, event) -> None:
        view_box = self.chart.getPlotItem().getViewBox()
        if not view_box.sceneBoundingRect().contains(event.scenePos()):
            return
        point = view_box.mapSceneToView(event.scenePos())
        record = self.record_at_chart_row(point.y())
        if record is not None and point.x() >= 0.0:
            logger.debug(f"Chart selected {record.iso_code}.")
            self.store.set_selected(record)

    @Slot(QListWidgetItem)
    def _on_item_clicked(self, item: QListWidgetItem) -> None:
        record = item.data(Qt.ItemDataRole.UserRole)
        if record is not None:
            self.store.set_selected(record)
