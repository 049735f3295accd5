"""pydeck rendering of a bound GeoChart."""
from __future__ import annotations

import copy
from typing import Dict, List, Optional

import pydeck as pdk

from geochart.engine.chart import GeoChart
from geochart.engine.colors import round_half_away, to_rgba_list
from geochart.engine.states import Color, RegionProperties, RegionStyle, TooltipTrigger
from geochart.engine.styles import resolve_style
from geochart.geo.regions import GeoJsonRegionSource
from geochart.viz.overlays import TooltipOverlay

HOVER_TOOLTIP = {"html": "<b>{region_id}</b>{detail}"}


def _with_opacity(color: Color, opacity: float) -> List[int]:
    rgba = to_rgba_list(color)
    rgba[3] = round_half_away(rgba[3] * opacity)
    return rgba


def _detail(props: Optional[RegionProperties]) -> str:
    if props is None or props.value is None:
        return ""
    if props.label:
        return f"<br/>{props.label}: {props.value:g}"
    return f"<br/>{props.value:g}"


def style_properties(style: RegionStyle) -> Dict:
    return {
        "fill_color": _with_opacity(style.fill_color, style.fill_opacity),
        "line_color": _with_opacity(style.stroke_color, style.stroke_opacity),
        "line_width": style.stroke_weight,
        "z_index": style.z_index,
    }


def annotate_features(chart: GeoChart, source: GeoJsonRegionSource) -> Dict:
    """Return a copy of the source collection with resolved styles per feature.

    Features are ordered by z-index since the layer draws them in array order.
    """
    snapshot = chart.snapshot()
    styled = []
    for region in source.region_ids():
        props = snapshot.properties.get(region)
        style = resolve_style(region, snapshot)
        feature = copy.deepcopy(source.feature(region))
        properties = feature.setdefault("properties", {})
        properties.update(style_properties(style))
        properties.update(
            {
                "region_id": str(region),
                "label": props.label if props is not None and props.label else "",
                "value": props.value if props is not None and props.value is not None else "",
                "detail": _detail(props),
            }
        )
        styled.append(feature)
    styled.sort(key=lambda f: f["properties"]["z_index"])
    return {"type": "FeatureCollection", "features": styled}


def choropleth(
    chart: GeoChart,
    source: GeoJsonRegionSource,
    tooltip: Optional[TooltipOverlay] = None,
) -> pdk.Deck:
    options = chart.options
    layers = [
        pdk.Layer(
            "GeoJsonLayer",
            annotate_features(chart, source),
            stroked=True,
            filled=True,
            get_fill_color="properties.fill_color",
            get_line_color="properties.line_color",
            get_line_width="properties.line_width",
            line_width_units="pixels",
            pickable=True,
        )
    ]
    if tooltip is not None and tooltip.visible and tooltip.anchor is not None and tooltip.content is not None:
        lon, lat = tooltip.anchor
        layers.append(
            pdk.Layer(
                "TextLayer",
                [{"position": [lon, lat], "text": tooltip.content.html().replace("<br/>", "\n")}],
                get_position="position",
                get_text="text",
                get_size=14,
                get_color=[33, 33, 33, 255],
                background=True,
            )
        )

    longitude, latitude = source.center()
    deck = pdk.Deck(
        layers=layers,
        # The only supported background is "none": no base map tiles.
        map_provider=None,
        map_style=None,
        views=[pdk.View(type="MapView", controller=options.maps_control)],
        initial_view_state=pdk.ViewState(latitude=latitude, longitude=longitude, zoom=options.initial_zoom),
        tooltip=HOVER_TOOLTIP if options.tooltip.trigger is TooltipTrigger.HOVER else False,
    )
    return deck


__all__ = ["style_properties", "annotate_features", "choropleth"]
