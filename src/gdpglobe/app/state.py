from __future__ import annotations

import logging
from typing import Iterable, Optional

from PySide6.QtCore import QObject, Signal

from gdpglobe.geo.hit_testing import HitTester
from gdpglobe.model.records import BoundaryFeature, CountryRecord

logger = logging.getLogger(__name__)


class Store(QObject):
    """
    Central state store shared by the globe and the side panel.

    Holds the GDP records, the boundary features and the single selected record.
    Either view may change the selection; both re-render from `selection_changed`.
    """
    records_changed = Signal(object)
    boundaries_changed = Signal(object)
    selection_changed = Signal(object)

    def __init__(self) -> None:
        super().__init__()
        self.records: tuple[CountryRecord, ...] = ()
        self.features: Optional[tuple[BoundaryFeature, ...]] = None
        self.hit_tester: Optional[HitTester] = None
        self.selected: Optional[CountryRecord] = None
        self._by_code: dict[str, CountryRecord] = {}

    def set_records(self, records: Iterable[CountryRecord]) -> None:
        """Replace the whole record set and select the top-ranked record."""
        self.records = tuple(sorted(records, key=lambda r: r.rank))
        self._by_code = {r.iso_code: r for r in self.records}
        logger.info(f"Loaded {len(self.records)} GDP records.")
        self.records_changed.emit(self.records)
        self.set_selected(self.records[0] if self.records else None)

    def set_boundaries(self, features: Iterable[BoundaryFeature]) -> None:
        self.features = tuple(features)
        self.hit_tester = HitTester(self.features)
        logger.info(f"Boundary data ready: {len(self.hit_tester)} hit-testable features.")
        self.boundaries_changed.emit(self.features)

    def set_selected(self, record: Optional[CountryRecord]) -> None:
        """Select a record (or clear with None). Emits only when the selection changes."""
        if record == self.selected:
            return
        self.selected = record
        self.selection_changed.emit(record)

    def record_for_code(self, code: str) -> Optional[CountryRecord]:
        return self._by_code.get(code)
