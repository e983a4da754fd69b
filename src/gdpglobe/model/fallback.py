"""Static GDP dataset used whenever the generative data source fails."""
from __future__ import annotations

from gdpglobe.model.records import CountryRecord

FALLBACK_RECORDS: tuple[CountryRecord, ...] = (
    CountryRecord(1, "United States", "USA", 28.78, 2.7,
                  "The world's largest economy driven by services and technology."),
    CountryRecord(2, "China", "CHN", 18.53, 4.6,
                  "Manufacturing powerhouse transitioning to high-tech industries."),
    CountryRecord(3, "Germany", "DEU", 4.59, 0.2,
                  "Europe's largest economy, known for automotive and engineering."),
    CountryRecord(4, "Japan", "JPN", 4.11, 0.9,
                  "Advanced technological economy with a strong export sector."),
    CountryRecord(5, "India", "IND", 3.94, 6.8,
                  "Fastest growing major economy driven by domestic consumption."),
)
