"""GeoChart demo: choropleth of the bundled regions and dataset."""
from __future__ import annotations

import logging

import pandas as pd
import streamlit as st

from geochart.engine.chart import GeoChart
from geochart.engine.utils import CONFIG_DIR, merge_options
from geochart.geo.regions import GeoJsonRegionSource
from geochart.viz.charts import legend_bar
from geochart.viz.maps import choropleth
from geochart.viz.overlays import build_overlays

logging.basicConfig(level=logging.INFO)

st.set_page_config(page_title="GeoChart", layout="wide")
st.title("🗺️ GeoChart")

dataset = pd.read_csv(CONFIG_DIR / "demo_dataset.csv")

with st.sidebar:
    st.header("Options")
    trigger = st.radio("Tooltip trigger", ["hover", "selection", "none"])
    low = st.color_picker("Gradient low", "#efe6dc")
    high = st.color_picker("Gradient high", "#109618")
    legend_enabled = st.checkbox("Show legend", value=True)

options = merge_options(
    {
        "featuresGradientColors": [low, high],
        "tooltip": {"trigger": trigger},
        "legend": {"enabled": legend_enabled},
    }
)
source = GeoJsonRegionSource.from_file(CONFIG_DIR / "regions_demo.geojson")
tooltip, legend = build_overlays(options)
chart = GeoChart(source, observers=[tooltip, legend])
binding = chart.bind(dataset, options)

for skipped in binding.missing:
    st.warning(str(skipped))

row_labels = {"(none)": None}
row_labels.update({f"{dataset.iloc[row, 0]} (row {row})": row for row in binding.rows})
choice = st.selectbox("Selected region", list(row_labels))
if row_labels[choice] is not None:
    chart.set_selection([{"row": row_labels[choice]}])

highlight = st.selectbox("Highlighted region", ["(none)"] + [str(r) for r in source.region_ids()])
if highlight != "(none)":
    chart.pointer_enter(source.find_region(highlight), position=source.center(source.find_region(highlight)))

col1, col2 = st.columns([3, 1])
with col1:
    st.pydeck_chart(choropleth(chart, source, tooltip=tooltip))
with col2:
    st.subheader("Selection")
    st.json(chart.get_selection())
    st.caption(f"State: {chart.state.value}")
    if legend.visible:
        st.plotly_chart(legend_bar(legend), use_container_width=True)
