"""
Data Model
==========
Immutable records shared by the globe, the side panel and the data services.

Classes:
    CountryRecord: One country's GDP entry, keyed by ISO-3166 alpha-3 code.
    BoundaryFeature: One country's polygon geometry from the boundary dataset.
"""
from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, TYPE_CHECKING

import numpy as np

from gdpglobe.errors import RecordValidationError

if TYPE_CHECKING:
    import numpy.typing as npt

ISO_ALPHA3 = re.compile(r"^[A-Z]{3}$")

# Wire names used by the GDP data source
WIRE_FIELDS: dict[str, str] = {
    "rank": "rank",
    "country_name": "countryName",
    "iso_code": "isoCode",
    "gdp_trillions": "gdpTrillions",
    "growth_rate": "growthRate",
    "description": "description",
}


@dataclass(frozen=True)
class CountryRecord:
    rank: int
    country_name: str
    iso_code: str
    gdp_trillions: float
    growth_rate: float
    description: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CountryRecord:
        """
        Build a record from the data source's camelCase mapping.

        Raises:
            RecordValidationError: If a field is missing or has an invalid value.
        """
        if not isinstance(data, Mapping):
            raise RecordValidationError(f"Expected an object, got {type(data).__name__}.")

        missing = [wire for wire in WIRE_FIELDS.values() if wire not in data]
        if missing:
            raise RecordValidationError(f"Record is missing fields: {', '.join(missing)}.")

        rank = data["rank"]
        if isinstance(rank, bool) or not isinstance(rank, (int, float)) or rank != int(rank) or rank < 1:
            raise RecordValidationError(f"Invalid rank: {rank!r}.")

        name = _as_str(data["countryName"], "countryName").strip()
        if not name:
            raise RecordValidationError("Country name must not be empty.")

        code = _as_str(data["isoCode"], "isoCode").strip().upper()
        if not ISO_ALPHA3.match(code):
            raise RecordValidationError(f"Invalid ISO alpha-3 code: {data['isoCode']!r}.")

        gdp = _as_finite_float(data["gdpTrillions"], "gdpTrillions")
        if gdp < 0:
            raise RecordValidationError(f"GDP must be non-negative, got {gdp}.")

        return cls(
            rank=int(rank),
            country_name=name,
            iso_code=code,
            gdp_trillions=gdp,
            growth_rate=_as_finite_float(data["growthRate"], "growthRate"),
            description=_as_str(data["description"], "description").strip(),
        )

    def to_dict(self) -> dict[str, Any]:
        return {wire: getattr(self, attr) for attr, wire in WIRE_FIELDS.items()}


def _as_str(value: Any, name: str) -> str:
    if not isinstance(value, str):
        raise RecordValidationError(f"Invalid {name}: expected a string, got {value!r}.")
    return value


def _as_finite_float(value: Any, name: str) -> float:
    if isinstance(value, bool):
        raise RecordValidationError(f"Invalid {name}: {value!r}.")
    try:
        result = float(value)
    except (TypeError, ValueError) as e:
        raise RecordValidationError(f"Invalid {name}: {value!r}.") from e
    if not math.isfinite(result):
        raise RecordValidationError(f"Invalid {name}: {value!r}.")
    return result


def validate_records(records: Iterable[CountryRecord]) -> list[CountryRecord]:
    """
    Check that ranks and ISO codes are unique and return the records sorted by rank.

    Raises:
        RecordValidationError: On a duplicate rank or code.
    """
    result = sorted(records, key=lambda r: r.rank)
    seen_codes: set[str] = set()
    seen_ranks: set[int] = set()
    for record in result:
        if record.iso_code in seen_codes:
            raise RecordValidationError(f"Duplicate ISO code: {record.iso_code}.")
        if record.rank in seen_ranks:
            raise RecordValidationError(f"Duplicate rank: {record.rank}.")
        seen_codes.add(record.iso_code)
        seen_ranks.add(record.rank)
    return result


@dataclass(frozen=True)
class BoundaryFeature:
    """
    A country outline from the boundary dataset.

    `polygons` holds closed (N, 2) rings of (lon, lat) degrees, outer ring first and
    holes after. Equality uses the code and display name only.
    """
    code: str
    name: str
    polygons: tuple[tuple[npt.NDArray[np.float64], ...], ...] = field(default=(), compare=False, repr=False)

    @property
    def rings(self) -> list[npt.NDArray[np.float64]]:
        """All rings of all polygons, flattened."""
        return [ring for polygon in self.polygons for ring in polygon]

    @classmethod
    def from_geojson(cls, feature: Mapping[str, Any]) -> BoundaryFeature:
        """
        Build a feature from a GeoJSON Feature with a Polygon or MultiPolygon geometry.

        Raises:
            ValueError: If the feature has no id or an unsupported geometry.
        """
        code = feature.get("id")
        if code is None or str(code).strip() == "":
            raise ValueError("Feature has no id.")

        properties = feature.get("properties") or {}
        name = str(properties.get("name") or code)

        geometry = feature.get("geometry") or {}
        geom_type = geometry.get("type")
        coordinates = geometry.get("coordinates")
        if geom_type == "Polygon":
            raw_polygons = [coordinates]
        elif geom_type == "MultiPolygon":
            raw_polygons = list(coordinates)
        else:
            raise ValueError(f"Unsupported geometry type {geom_type!r} for feature {code!r}.")

        polygons = tuple(
            tuple(_as_closed_ring(ring) for ring in polygon if len(ring) >= 3)
            for polygon in raw_polygons
            if polygon
        )
        return cls(code=str(code), name=name, polygons=polygons)


def _as_closed_ring(a: Any) -> npt.NDArray[np.float64]:
    """
    Ensure the ring is closed by repeating the first point at the end if necessary.

    Raises:
        ValueError: If the input cannot be read as (N, 2) coordinates.
    """
    arr = np.asarray(a, dtype=np.float64)
    if arr.ndim != 2 or arr.shape[1] < 2:
        raise ValueError(f"Expected shape (N, 2), got {arr.shape}.")
    arr = arr[:, :2]

    if not np.allclose(arr[0], arr[-1]):
        arr = np.vstack([arr, arr[0]])

    return arr
