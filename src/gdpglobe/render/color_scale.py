from __future__ import annotations

from typing import Iterable

from matplotlib import colormaps
from matplotlib.colors import to_hex

from gdpglobe.model.records import CountryRecord

DEFAULT_CMAP = "inferno"
# The top country saturates at 80% of the maximum so mid-tier countries stay distinguishable.
CEILING_RATIO = 0.8
# Lower bound on the maximum before the ratio is applied; keeps the domain non-zero.
MIN_CEILING = 10.0


class SequentialColorScale:
    """
    Maps a GDP value in [0, domain_max] to a colormap color, clamping outside values.
    """
    def __init__(self, domain_max: float, cmap_name: str = DEFAULT_CMAP) -> None:
        if domain_max <= 0:
            raise ValueError(f"domain_max must be positive, got {domain_max}.")
        self.domain_max = float(domain_max)
        self.cmap_name = cmap_name
        self._cmap = colormaps[cmap_name]

    @classmethod
    def from_records(
        cls,
        records: Iterable[CountryRecord],
        cmap_name: str = DEFAULT_CMAP,
        ceiling_ratio: float = CEILING_RATIO,
        min_ceiling: float = MIN_CEILING,
    ) -> SequentialColorScale:
        """Scale over [0, max(max GDP, min_ceiling) * ceiling_ratio]."""
        max_gdp = max((r.gdp_trillions for r in records), default=0.0)
        return cls(max(max_gdp, min_ceiling) * ceiling_ratio, cmap_name)

    def normalize(self, value: float) -> float:
        return min(max(value / self.domain_max, 0.0), 1.0)

    def __call__(self, value: float) -> str:
        """Hex color for a GDP value."""
        return to_hex(self._cmap(self.normalize(value)))

    def gradient_stops(self, n: int = 5) -> list[tuple[float, str]]:
        """Evenly spaced (position, hex color) stops of the full colormap, for legends."""
        n = max(n, 2)
        return [(i / (n - 1), to_hex(self._cmap(i / (n - 1)))) for i in range(n)]
