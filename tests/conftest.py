from __future__ import annotations

import pandas as pd
import pytest

from geochart.engine.chart import GeoChart
from geochart.geo.regions import GeoJsonRegionSource


def _square(region_id, x0: float) -> dict:
    ring = [[x0, 0.0], [x0 + 1, 0.0], [x0 + 1, 1.0], [x0, 1.0], [x0, 0.0]]
    return {
        "type": "Feature",
        "id": region_id,
        "properties": {"name": f"Region {region_id}"},
        "geometry": {"type": "Polygon", "coordinates": [ring]},
    }


@pytest.fixture
def geojson() -> dict:
    return {
        "type": "FeatureCollection",
        "features": [_square(rid, float(i)) for i, rid in enumerate(["A", "B", "C", "D"])],
    }


@pytest.fixture
def source(geojson) -> GeoJsonRegionSource:
    return GeoJsonRegionSource(geojson)


@pytest.fixture
def dataset() -> pd.DataFrame:
    return pd.DataFrame({"region": ["A", "B", "C"], "Population": [10.0, 30.0, 20.0]})


@pytest.fixture
def chart(source, dataset) -> GeoChart:
    chart = GeoChart(source)
    chart.bind(dataset)
    return chart
