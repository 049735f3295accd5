from __future__ import annotations

from dataclasses import replace

import pandas as pd

from geochart.engine.chart import GeoChart
from geochart.engine.colors import build_axis
from geochart.engine.states import (
    HIGHLIGHTED_Z_INDEX,
    SELECTED_Z_INDEX,
    Color,
    DatasetMode,
    RegionProperties,
    ValueDomain,
)
from geochart.engine.styles import StyleSnapshot, build_palette, resolve_style
from geochart.engine.utils import merge_options

LOW_FILL = Color(239, 230, 220)
HIGH_FILL = Color(16, 150, 24)
HIGH_STROKE = Color(14, 135, 22)


def _snapshot(properties, mode=DatasetMode.VALUED, domain=ValueDomain(10.0, 30.0), **kwargs) -> StyleSnapshot:
    options = merge_options()
    axis = build_axis(options.features_gradient_colors, options.features_gradient_stroke_colors, domain)
    return StyleSnapshot(
        properties=properties,
        mode=mode,
        domain=domain,
        axis=axis,
        palette=build_palette(options),
        **kwargs,
    )


def test_gradient_styles_follow_values(chart):
    assert chart.style("A").fill_color == LOW_FILL
    assert chart.style("B").fill_color == HIGH_FILL
    assert chart.style("B").stroke_color == HIGH_STROKE
    middle = chart.style("C")
    assert middle.fill_color == Color(128, 190, 122)
    assert middle.stroke_color == Color(115, 171, 110)
    assert middle.z_index == 0
    assert middle.stroke_weight == 1


def test_region_without_data_gets_dataless_style(chart):
    style = chart.style("D")
    assert style.fill_color == Color(245, 245, 245)
    assert style.stroke_color == Color(221, 221, 221)
    assert chart.style("not-a-region") == style


def test_dataless_mode_region_gets_no_value_style(source):
    chart = GeoChart(source)
    chart.bind(pd.DataFrame({"id": ["A"]}))
    assert chart.style("A").fill_color == HIGH_FILL
    assert chart.style("A").stroke_color == HIGH_STROKE
    assert chart.style("B").fill_color == Color(245, 245, 245)


def test_single_value_domain_uses_high_color(source):
    chart = GeoChart(source)
    chart.bind([("A", 7.0)], label="Only")
    assert chart.axis.degenerate
    assert chart.style("A").fill_color == HIGH_FILL


def test_selected_style_changes_weight_not_hue():
    props = {"A": RegionProperties("A", has_data=True, row_index=0, value=10.0, selected=True)}
    plain = resolve_style("A", _snapshot({"A": replace(props["A"], selected=False)}))
    selected = resolve_style("A", _snapshot(props, selected="A"))
    assert selected.fill_color == plain.fill_color
    assert selected.stroke_color == plain.stroke_color
    assert selected.stroke_weight == 3
    assert selected.z_index == SELECTED_Z_INDEX


def test_highlight_is_presentational_only():
    props = {"A": RegionProperties("A", has_data=True, row_index=0, value=30.0)}
    style = resolve_style("A", _snapshot(props, highlighted="A"))
    assert style.z_index == HIGHLIGHTED_Z_INDEX
    assert style.stroke_weight == 3
    assert style.fill_color == HIGH_FILL
    assert props["A"].selected is False


def test_custom_options_are_applied(source, dataset):
    chart = GeoChart(source)
    chart.bind(
        dataset,
        {
            "featuresGradientColors": ["black", "white"],
            "featuresHighlightedStyle": {"strokeWeight": 5},
            "featuresStyle": {"fillColor": "#123"},
        },
    )
    assert chart.style("A").fill_color == Color(0, 0, 0)
    assert chart.style("B").fill_color == Color(255, 255, 255)
    assert chart.style("D").fill_color == Color(0x11, 0x22, 0x33)
    chart.click("A")
    assert chart.style("A").stroke_weight == 5
