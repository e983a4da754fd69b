"""
Hit Testing
===========
Finds which boundary feature, if any, contains a (longitude, latitude) point.

This is a pure function of the point and the feature set: no rendering, no pointer
events. Features are tested in load order and the first containing feature wins.
"""
from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

import shapely
from shapely.geometry import MultiPolygon, Polygon
from shapely.geometry.base import BaseGeometry

from gdpglobe.model.records import BoundaryFeature

logger = logging.getLogger(__name__)


def feature_geometry(feature: BoundaryFeature) -> Optional[BaseGeometry]:
    """Build a (valid) shapely geometry from a feature's rings, or None if it has none."""
    parts = [Polygon(polygon[0], polygon[1:]) for polygon in feature.polygons if polygon]
    if not parts:
        return None

    geom: BaseGeometry = MultiPolygon(parts) if len(parts) > 1 else parts[0]
    if not geom.is_valid:
        logger.debug(f"Repairing invalid geometry for feature '{feature.code}'.")
        geom = shapely.make_valid(geom)
    return geom


class HitTester:
    """
    Point-in-polygon lookup over a fixed feature set.

    Geometries are built and prepared once; `locate` is then cheap enough to run on
    every pointer move at world-map scale.
    """
    def __init__(self, features: Iterable[BoundaryFeature]) -> None:
        self._entries: list[tuple[BoundaryFeature, BaseGeometry]] = []
        for feature in features:
            geom = feature_geometry(feature)
            if geom is None:
                logger.warning(f"Feature '{feature.code}' has no polygons and cannot be hit.")
                continue
            shapely.prepare(geom)
            self._entries.append((feature, geom))

    def __len__(self) -> int:
        return len(self._entries)

    def locate(self, lon: float, lat: float) -> Optional[BoundaryFeature]:
        """Return the first feature (in load order) containing the point, or None."""
        for feature, geom in self._entries:
            if shapely.contains_xy(geom, lon, lat):
                return feature
        return None


def find_containing_feature(
    features: Sequence[BoundaryFeature],
    lon: float,
    lat: float,
) -> Optional[BoundaryFeature]:
    """One-off lookup without keeping a HitTester around."""
    return HitTester(features).locate(lon, lat)
