"""Utility helpers for option loading and merging."""
from __future__ import annotations

import copy
import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .states import TooltipTrigger

CONFIG_DIR = Path(__file__).resolve().parent.parent / "config"
DEFAULT_OPTIONS_FILE = "default_options.json"


class OptionsModel(BaseModel):
    # Accepts the camelCase keys of the Google Charts style options as well.
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")


class FeaturesStyle(OptionsModel):
    fill_color: str
    stroke_color: str
    fill_opacity: float = Field(1.0, ge=0.0, le=1.0)
    stroke_weight: float = Field(1.0, ge=0.0)
    stroke_opacity: float = Field(1.0, ge=0.0, le=1.0)
    cursor: str = "default"


class HighlightedStyle(OptionsModel):
    stroke_weight: float = Field(3.0, ge=0.0)
    stroke_opacity: float = Field(1.0, ge=0.0, le=1.0)


class TooltipOptions(OptionsModel):
    trigger: TooltipTrigger = TooltipTrigger.HOVER


class LegendOptions(OptionsModel):
    enabled: bool = True
    position: Literal["top_left", "top_right", "bottom_left", "bottom_right"] = "bottom_left"


class GeoJsonOptions(OptionsModel):
    id_property_name: Optional[str] = None


class ChartOptions(OptionsModel):
    maps_background: Literal["none"] = "none"
    maps_control: Literal[False] = False
    features_style: FeaturesStyle
    features_no_value_style: FeaturesStyle
    features_highlighted_style: HighlightedStyle = Field(default_factory=HighlightedStyle)
    features_gradient_colors: List[Any] = Field(..., min_length=2, max_length=2)
    features_gradient_stroke_colors: List[Any] = Field(..., min_length=2, max_length=2)
    tooltip: TooltipOptions = Field(default_factory=TooltipOptions)
    legend: LegendOptions = Field(default_factory=LegendOptions)
    geo_json: Optional[str] = None
    geo_json_options: GeoJsonOptions = Field(default_factory=GeoJsonOptions)
    initial_zoom: float = 4.5


def _load_json(path: Path) -> Dict:
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


@lru_cache(maxsize=4)
def load_default_options(config_dir: Optional[Path] = None) -> ChartOptions:
    directory = config_dir or CONFIG_DIR
    return ChartOptions.model_validate(_load_json(directory / DEFAULT_OPTIONS_FILE))


def _deep_merge(base: Dict[str, Any], overrides: Mapping[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in overrides.items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def _to_snake_keys(overrides: Mapping[str, Any], model: type[BaseModel]) -> Dict[str, Any]:
    by_alias = {f.alias or name: name for name, f in model.model_fields.items()}
    out: Dict[str, Any] = {}
    for key, value in overrides.items():
        name = by_alias.get(key, key)
        field_info = model.model_fields.get(name)
        nested = field_info.annotation if field_info is not None else None
        if isinstance(value, Mapping) and isinstance(nested, type) and issubclass(nested, BaseModel):
            value = _to_snake_keys(value, nested)
        out[name] = value
    return out


def merge_options(
    overrides: Mapping[str, Any] | ChartOptions | None = None,
    defaults: ChartOptions | None = None,
) -> ChartOptions:
    """Deep-merge ``overrides`` into the default options and validate the result.

    Nested sections such as ``features_style`` are merged key by key, so an
    override of a single attribute keeps the remaining defaults.
    """
    if isinstance(overrides, ChartOptions):
        return overrides
    base = (defaults or load_default_options()).model_dump()
    if not overrides:
        return ChartOptions.model_validate(base)
    merged = _deep_merge(base, _to_snake_keys(overrides, ChartOptions))
    return ChartOptions.model_validate(merged)


__all__ = [
    "FeaturesStyle",
    "HighlightedStyle",
    "TooltipOptions",
    "LegendOptions",
    "GeoJsonOptions",
    "ChartOptions",
    "load_default_options",
    "merge_options",
]
