"""
Boundary Data Loader
====================
Reads the world boundary FeatureCollection once, from an HTTP URL or a local file,
and turns it into BoundaryFeature objects.

Functions:
    parse_feature_collection: GeoJSON mapping -> list of features.
    load_boundaries: Fetch/read + parse, raising BoundaryLoadError on any failure.
"""
from __future__ import annotations

import json
import logging
import os
from typing import Any, Mapping

import requests

from gdpglobe.config import BOUNDARIES_TIMEOUT_S
from gdpglobe.errors import BoundaryLoadError
from gdpglobe.model.records import BoundaryFeature

logger = logging.getLogger(__name__)


def parse_feature_collection(payload: Mapping[str, Any]) -> list[BoundaryFeature]:
    """
    Convert a GeoJSON FeatureCollection into boundary features, keeping load order.

    Features without an id or with a non-polygonal geometry are skipped.

    Raises:
        BoundaryLoadError: If the payload is not a FeatureCollection.
    """
    if not isinstance(payload, Mapping) or payload.get("type") != "FeatureCollection":
        raise BoundaryLoadError("Boundary data is not a GeoJSON FeatureCollection.")

    features: list[BoundaryFeature] = []
    skipped = 0
    for raw in payload.get("features") or []:
        try:
            features.append(BoundaryFeature.from_geojson(raw))
        except (ValueError, TypeError, AttributeError) as e:
            skipped += 1
            logger.warning(f"Skipping boundary feature: {e}")

    logger.info(f"Parsed {len(features)} boundary features ({skipped} skipped).")
    return features


def _is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def load_boundaries(source: str, timeout: float = BOUNDARIES_TIMEOUT_S) -> list[BoundaryFeature]:
    """
    Load boundary features from a URL or a local GeoJSON file.

    Raises:
        BoundaryLoadError: On network, file, JSON or format errors.
    """
    logger.info(f"Loading boundary data from: {source}")
    try:
        if _is_url(source):
            response = requests.get(source, timeout=timeout)
            response.raise_for_status()
            payload = response.json()
        else:
            if not os.path.exists(source):
                raise BoundaryLoadError(f"Boundary file not found: {source}")
            with open(source, encoding="utf-8") as f:
                payload = json.load(f)
    except requests.RequestException as e:
        raise BoundaryLoadError(f"Failed to download boundary data: {e}") from e
    except (OSError, ValueError) as e:
        raise BoundaryLoadError(f"Failed to read boundary data: {e}") from e

    return parse_feature_collection(payload)
