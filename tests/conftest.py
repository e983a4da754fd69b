import os

# Must be set before anything imports Qt
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PySide6.QtWidgets import QApplication

from gdpglobe.app.state import Store
from gdpglobe.model.records import CountryRecord

from helpers import square_feature


@pytest.fixture(scope="session")
def qapp():
    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture()
def records():
    return [
        CountryRecord(1, "United States", "USA", 28.78, 2.7, "Largest economy."),
        CountryRecord(2, "China", "CHN", 18.53, 4.6, "Manufacturing hub."),
        CountryRecord(3, "Canada", "CAN", 2.24, 1.3, "Resource exporter."),
    ]


@pytest.fixture()
def features():
    # CHN has a record but no outline, ATA has an outline but no record
    return [
        square_feature("USA", "United States of America", -100.0, -80.0, 30.0, 45.0),
        square_feature("CAN", "Canada", -100.0, -80.0, 50.0, 65.0),
        square_feature("ATA", "Antarctica", -60.0, -40.0, -30.0, -15.0),
    ]


@pytest.fixture()
def store(qapp, records, features):
    s = Store()
    s.set_records(records)
    s.set_boundaries(features)
    return s
