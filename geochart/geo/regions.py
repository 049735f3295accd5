"""GeoJSON-backed region source."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple

import numpy as np

CONFIG_DIR = Path(__file__).resolve().parent.parent / "config"

logger = logging.getLogger(__name__)


def load_geojson(path: Path | str | None = None) -> Dict:
    geo_path = Path(path) if path else (CONFIG_DIR / "regions_demo.geojson")
    with geo_path.open("r", encoding="utf-8") as f:
        return json.load(f)


def _flatten_coordinates(coordinates: Any) -> Iterator[Tuple[float, float]]:
    if coordinates and isinstance(coordinates[0], (int, float)):
        yield float(coordinates[0]), float(coordinates[1])
        return
    for part in coordinates:
        yield from _flatten_coordinates(part)


class GeoJsonRegionSource:
    """Regions of a GeoJSON ``FeatureCollection``, keyed by feature id.

    Ids come from the feature ``id`` member, or from ``id_property_name`` in
    the feature properties when given. A repeated id keeps the last feature.
    """

    def __init__(self, geojson: Dict, id_property_name: Optional[str] = None):
        self.geojson = geojson
        self.id_property_name = id_property_name
        self._features: Dict[Any, Dict] = {}
        for feature in geojson.get("features", []):
            region_id = self._feature_id(feature)
            if region_id is None:
                logger.warning("Skipping feature without an id")
                continue
            self._features[region_id] = feature

    @classmethod
    def from_file(cls, path: Path | str | None = None, id_property_name: Optional[str] = None) -> "GeoJsonRegionSource":
        return cls(load_geojson(path), id_property_name=id_property_name)

    def _feature_id(self, feature: Dict) -> Any:
        if self.id_property_name:
            return feature.get("properties", {}).get(self.id_property_name)
        return feature.get("id")

    def region_ids(self) -> List[Any]:
        return list(self._features)

    def feature(self, region: Any) -> Dict:
        return self._features[region]

    def find_region(self, region_id: Any) -> Optional[Any]:
        if region_id in self._features:
            return region_id
        # GeoJSON ids are often numbers while tabular ids arrive as strings, or the reverse.
        alternate = str(region_id)
        for key in self._features:
            if str(key) == alternate:
                return key
        return None

    def get_property(self, region: Any, name: str) -> Any:
        return self._features[region].setdefault("properties", {}).get(name)

    def set_property(self, region: Any, name: str, value: Any) -> None:
        self._features[region].setdefault("properties", {})[name] = value

    def bounds(self, region: Any | None = None) -> Tuple[float, float, float, float]:
        """``(min_lon, min_lat, max_lon, max_lat)`` of one region or of all of them."""
        features = [self._features[region]] if region is not None else list(self._features.values())
        points = np.array(
            [pt for feature in features for pt in _flatten_coordinates(feature["geometry"]["coordinates"])]
        )
        if points.size == 0:
            raise ValueError("No coordinates to bound")
        lon_min, lat_min = points.min(axis=0)
        lon_max, lat_max = points.max(axis=0)
        return float(lon_min), float(lat_min), float(lon_max), float(lat_max)

    def center(self, region: Any | None = None) -> Tuple[float, float]:
        lon_min, lat_min, lon_max, lat_max = self.bounds(region)
        return (lon_min + lon_max) / 2.0, (lat_min + lat_max) / 2.0


__all__ = ["load_geojson", "GeoJsonRegionSource"]
