"""
Orthographic Projection
=======================
Maps (longitude, latitude) degrees onto the visible hemisphere of a globe drawn on a
canvas, and back.

The rotation triple follows the d3-geo convention: the first angle is added to the
longitude, the second tilts the globe towards the viewer, the third rolls it about the
view axis. Everything is vectorized with numpy so a whole ring is projected at once.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Optional

import numpy as np

from gdpglobe.config import INITIAL_ROTATION

if TYPE_CHECKING:
    import numpy.typing as npt

# sphere radius = min(width, height) / SPHERE_DIVISOR
SPHERE_DIVISOR: float = 2.5


def wrap_longitude(degrees: float) -> float:
    """Wrap an angle into [-180, 180)."""
    return ((degrees + 180.0) % 360.0) - 180.0


def sphere_radius(width: float, height: float) -> float:
    return min(width, height) / SPHERE_DIVISOR


@dataclass
class RotationState:
    """Globe orientation in degrees, mutated by dragging and by the animation tick."""
    spin: float = INITIAL_ROTATION[0]
    tilt: float = INITIAL_ROTATION[1]
    roll: float = INITIAL_ROTATION[2]

    def as_tuple(self) -> tuple[float, float, float]:
        return self.spin, self.tilt, self.roll

    def rotate_by(self, d_spin: float = 0.0, d_tilt: float = 0.0) -> None:
        """Apply a spin/tilt increment. Roll is never changed by interaction."""
        self.spin = wrap_longitude(self.spin + d_spin)
        self.tilt += d_tilt


class OrthographicProjection:
    """
    Orthographic projection of the unit sphere onto the screen.

    Screen coordinates have y pointing down, as on a Qt widget.
    """
    def __init__(
        self,
        rotation: tuple[float, float, float],
        scale: float,
        center: tuple[float, float],
    ) -> None:
        self.rotation = tuple(float(a) for a in rotation)
        self.scale = float(scale)
        self.center = (float(center[0]), float(center[1]))

        d_lambda, d_phi, d_gamma = np.radians(self.rotation)
        self._d_lambda = d_lambda
        self._cos_phi, self._sin_phi = np.cos(d_phi), np.sin(d_phi)
        self._cos_gamma, self._sin_gamma = np.cos(d_gamma), np.sin(d_gamma)

    @classmethod
    def for_viewport(
        cls,
        rotation: tuple[float, float, float],
        width: float,
        height: float,
        scale_factor: float = 1.0,
    ) -> OrthographicProjection:
        """Projection centred on a width x height canvas with the standard globe radius."""
        return cls(rotation, sphere_radius(width, height) * scale_factor, (width / 2.0, height / 2.0))

    # ---- core math ----

    def _rotate(self, lonlat: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
        """
        Rotate (N, 2) lon/lat degrees into view space.

        Returns:
            (N, 3) array of (depth, x, y) on the unit sphere; depth > 0 faces the viewer.
        """
        lam = np.radians(lonlat[:, 0]) + self._d_lambda
        phi = np.radians(lonlat[:, 1])
        cos_phi = np.cos(phi)
        x = np.cos(lam) * cos_phi
        y = np.sin(lam) * cos_phi
        z = np.sin(phi)

        k = z * self._cos_phi + x * self._sin_phi
        depth = x * self._cos_phi - z * self._sin_phi
        sx = y * self._cos_gamma - k * self._sin_gamma
        sy = k * self._cos_gamma + y * self._sin_gamma
        return np.column_stack((depth, sx, sy))

    def _to_screen(self, unit_xy: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
        cx, cy = self.center
        return np.column_stack((cx + self.scale * unit_xy[:, 0], cy - self.scale * unit_xy[:, 1]))

    # ---- public API ----

    def project(self, lonlat: npt.ArrayLike) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.bool_]]:
        """
        Project lon/lat points to screen pixels.

        Returns:
            ((N, 2) pixel coordinates, (N,) mask of points on the visible hemisphere)
        """
        pts = np.asarray(lonlat, dtype=np.float64).reshape(-1, 2)
        view = self._rotate(pts)
        return self._to_screen(view[:, 1:]), view[:, 0] > 0.0

    def invert(self, x: float, y: float) -> Optional[tuple[float, float]]:
        """
        Invert a pixel position to (lon, lat) degrees.

        Returns:
            None when the pixel lies outside the sphere disc.
        """
        cx, cy = self.center
        if self.scale <= 0:
            return None
        sx = (x - cx) / self.scale
        sy = (cy - y) / self.scale
        r2 = sx * sx + sy * sy
        if r2 > 1.0:
            return None
        depth = np.sqrt(1.0 - r2)

        k = sy * self._cos_gamma - sx * self._sin_gamma
        lam = np.arctan2(sx * self._cos_gamma + sy * self._sin_gamma, depth * self._cos_phi + k * self._sin_phi)
        phi = np.arcsin(np.clip(k * self._cos_phi - depth * self._sin_phi, -1.0, 1.0))

        lon = wrap_longitude(float(np.degrees(lam - self._d_lambda)))
        return lon, float(np.degrees(phi))

    def project_ring(self, ring: npt.ArrayLike) -> Optional[npt.NDArray[np.float64]]:
        """
        Project a closed lon/lat ring, clipping it at the horizon.

        Vertices behind the globe are pulled onto the limb and the exact horizon
        crossings are inserted, so the fill follows the sphere's outline.

        Returns:
            (M, 2) pixel ring, or None if the ring is entirely on the far side.
        """
        pts = np.asarray(ring, dtype=np.float64).reshape(-1, 2)
        if pts.shape[0] < 3:
            return None

        view = self._rotate(pts)
        front = view[:, 0] > 0.0
        if not front.any():
            return None
        if front.all():
            return self._to_screen(view[:, 1:])

        unit = view[:, 1:].copy()
        unit[~front] = _to_limb(unit[~front])

        # horizon crossings between consecutive vertices
        edges = np.nonzero(front[:-1] != front[1:])[0]
        if edges.size:
            d0, d1 = view[edges, 0], view[edges + 1, 0]
            t = (d0 / (d0 - d1))[:, None]
            crossing = view[edges, 1:] + t * (view[edges + 1, 1:] - view[edges, 1:])
            unit = np.insert(unit, edges + 1, _to_limb(crossing), axis=0)

        return self._to_screen(unit)

    def project_line(self, line: npt.ArrayLike) -> list[npt.NDArray[np.float64]]:
        """Project an open lon/lat polyline, keeping only its visible runs."""
        pts = np.asarray(line, dtype=np.float64).reshape(-1, 2)
        if pts.shape[0] < 2:
            return []
        screen, front = self.project(pts)

        runs: list[npt.NDArray[np.float64]] = []
        breaks = np.nonzero(np.diff(front.astype(np.int8)))[0] + 1
        start = 0
        for stop in [*breaks.tolist(), len(front)]:
            if front[start] and stop - start >= 2:
                runs.append(screen[start:stop])
            start = stop
        return runs


def _to_limb(unit_xy: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
    """Push view-space points radially onto the unit circle."""
    norm = np.hypot(unit_xy[:, 0], unit_xy[:, 1])
    safe = np.where(norm > 0.0, norm, 1.0)
    out = unit_xy / safe[:, None]
    out[norm == 0.0] = (1.0, 0.0)
    return out


def graticule_lines(step: float = 10.0, sample: float = 2.5) -> list[npt.NDArray[np.float64]]:
    """
    Meridians and parallels every `step` degrees as lon/lat polylines.

    Minor meridians stop at +-80 degrees latitude, those on multiples of 90 degrees reach
    the poles. Parallels run between +-80 degrees.
    """
    lines: list[npt.NDArray[np.float64]] = []
    for lon in np.arange(-180.0, 180.0, step):
        extent = 90.0 if lon % 90.0 == 0.0 else 80.0
        lats = np.arange(-extent, extent + sample / 2, sample)
        lines.append(np.column_stack((np.full_like(lats, lon), lats)))
    for lat in np.arange(-80.0, 80.0 + step / 2, step):
        lons = np.arange(-180.0, 180.0 + sample / 2, sample)
        lines.append(np.column_stack((lons, np.full_like(lons, lat))))
    return lines


GRATICULE_10: tuple[npt.NDArray[np.float64], ...] = tuple(graticule_lines(10.0))


def project_rings(
    projection: OrthographicProjection,
    rings: Iterable[npt.ArrayLike],
) -> tuple[npt.NDArray[np.float64], ...]:
    """Project and clip several rings, dropping the ones on the far side."""
    projected = (projection.project_ring(ring) for ring in rings)
    return tuple(p for p in projected if p is not None)
