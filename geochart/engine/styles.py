"""Per-region style resolution as a pure function of bound state."""
from __future__ import annotations

from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Dict, Mapping, Optional

from .binding import is_degenerate, relative_value
from .colors import ColorAxis, parse_color, relative_colors
from .states import (
    HIGHLIGHTED_Z_INDEX,
    SELECTED_Z_INDEX,
    DatasetMode,
    RegionId,
    RegionProperties,
    RegionStyle,
    ValueDomain,
)
from .utils import ChartOptions, FeaturesStyle, HighlightedStyle


@dataclass(frozen=True)
class StylePalette:
    """Fixed styles parsed once per bind."""

    dataless: RegionStyle
    no_value: RegionStyle
    highlighted: HighlightedStyle


@dataclass(frozen=True)
class StyleSnapshot:
    properties: Mapping[RegionId, RegionProperties]
    mode: DatasetMode
    domain: ValueDomain
    axis: ColorAxis
    palette: StylePalette
    selected: Optional[RegionId] = None
    highlighted: Optional[RegionId] = None


def _style_from_options(style: FeaturesStyle) -> RegionStyle:
    return RegionStyle(
        fill_color=parse_color(style.fill_color),
        stroke_color=parse_color(style.stroke_color),
        fill_opacity=style.fill_opacity,
        stroke_weight=style.stroke_weight,
        stroke_opacity=style.stroke_opacity,
        cursor=style.cursor,
    )


def build_palette(options: ChartOptions) -> StylePalette:
    return StylePalette(
        dataless=_style_from_options(options.features_style),
        no_value=_style_from_options(options.features_no_value_style),
        highlighted=options.features_highlighted_style,
    )


def freeze_properties(properties: Dict[RegionId, RegionProperties]) -> Mapping[RegionId, RegionProperties]:
    return MappingProxyType(properties)


def value_position(domain: ValueDomain, value: float) -> float:
    if is_degenerate(domain):
        return 1.0
    return relative_value(domain, value)


def resolve_style(region_id: RegionId, snapshot: StyleSnapshot) -> RegionStyle:
    props = snapshot.properties.get(region_id)
    palette = snapshot.palette
    if props is None or not props.has_data:
        style = palette.dataless
    elif snapshot.mode is DatasetMode.VALUED and props.value is not None:
        colors = relative_colors(snapshot.axis, value_position(snapshot.domain, props.value))
        style = replace(palette.dataless, fill_color=colors.fill, stroke_color=colors.stroke)
    else:
        style = palette.no_value

    # Selection and highlight change weight, opacity and stacking, never the hue.
    if region_id == snapshot.highlighted:
        z_index = HIGHLIGHTED_Z_INDEX
    elif props is not None and props.selected:
        z_index = SELECTED_Z_INDEX
    else:
        return style
    return replace(
        style,
        stroke_weight=palette.highlighted.stroke_weight,
        stroke_opacity=palette.highlighted.stroke_opacity,
        z_index=z_index,
    )


__all__ = [
    "StylePalette",
    "StyleSnapshot",
    "build_palette",
    "freeze_properties",
    "value_position",
    "resolve_style",
]
