from __future__ import annotations

import pydeck as pdk

from geochart.engine.chart import GeoChart
from geochart.viz.charts import legend_bar
from geochart.viz.maps import annotate_features, choropleth
from geochart.viz.overlays import LegendOverlay, TooltipOverlay


def test_annotate_features_orders_by_z_index(chart, source):
    chart.click("A")
    chart.pointer_enter("B")
    collection = annotate_features(chart, source)
    order = [feature["properties"]["region_id"] for feature in collection["features"]]
    assert order[-2:] == ["A", "B"]
    by_id = {feature["properties"]["region_id"]: feature["properties"] for feature in collection["features"]}
    assert by_id["A"]["z_index"] == 999
    assert by_id["A"]["line_width"] == 3
    assert by_id["B"]["fill_color"] == [16, 150, 24, 255]
    assert by_id["D"]["value"] == ""
    assert by_id["C"]["label"] == "Population"
    assert source.get_property("C", "data-row") == 2


def test_choropleth_builds_deck(chart, source):
    deck = choropleth(chart, source)
    assert isinstance(deck, pdk.Deck)
    assert len(deck.layers) == 1


def test_choropleth_adds_selection_tooltip_layer(source, dataset):
    tooltip = TooltipOverlay("selection")
    chart = GeoChart(source, observers=[tooltip])
    chart.bind(dataset, {"tooltip": {"trigger": "selection"}})
    chart.click("C")
    deck = choropleth(chart, source, tooltip=tooltip)
    assert len(deck.layers) == 2


def test_legend_bar_traces(source, dataset):
    legend = LegendOverlay()
    chart = GeoChart(source, observers=[legend])
    chart.bind(dataset)
    assert len(legend_bar(legend).data) == 1
    chart.pointer_enter("A")
    fig = legend_bar(legend)
    assert len(fig.data) == 2
    assert list(fig.data[1].x) == [0.0]


def test_legend_bar_empty_when_disabled():
    assert len(legend_bar(LegendOverlay(enabled=False)).data) == 0


def test_hover_detail_omitted_without_value(chart, source):
    collection = annotate_features(chart, source)
    by_id = {feature["properties"]["region_id"]: feature["properties"] for feature in collection["features"]}
    assert by_id["B"]["detail"] == "<br/>Population: 30"
    assert by_id["D"]["detail"] == ""
