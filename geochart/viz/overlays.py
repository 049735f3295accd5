"""Tooltip and legend overlays kept in sync with the selection controller."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from geochart.engine.colors import ColorAxis, gradient_stops, relative_colors, to_hex
from geochart.engine.states import (
    Anchor,
    DatasetMode,
    OverlayContext,
    RegionProperties,
    TooltipTrigger,
)
from geochart.engine.styles import value_position
from geochart.engine.utils import ChartOptions


@dataclass
class TooltipContent:
    region_id: object
    label: Optional[str]
    value: Optional[float]
    fill_color: Optional[str]

    def html(self) -> str:
        parts = [f"<b>{self.region_id}</b>"]
        if self.value is not None:
            parts.append(f"{self.label or 'Value'}: {self.value:g}")
        return "<br/>".join(parts)


def _fill_for(region: RegionProperties, context: OverlayContext) -> Optional[str]:
    if context.mode is not DatasetMode.VALUED or region.value is None:
        return None
    colors = relative_colors(context.axis, value_position(context.domain, region.value))
    return to_hex(colors.fill)


class TooltipOverlay:
    """Tooltip visibility and content.

    ``hover`` shows the tooltip at the pointer while a region is highlighted;
    ``selection`` shows it at the center of the selected region; ``none``
    never shows it.
    """

    def __init__(self, trigger: TooltipTrigger | str = TooltipTrigger.HOVER):
        self.trigger = TooltipTrigger(trigger)
        self.visible = False
        self.anchor: Optional[Anchor] = None
        self.content: Optional[TooltipContent] = None

    def _show(self, region: RegionProperties, context: OverlayContext) -> None:
        self.visible = True
        self.anchor = context.anchor
        self.content = TooltipContent(
            region_id=region.region_id,
            label=region.label,
            value=region.value,
            fill_color=_fill_for(region, context),
        )

    def hide(self) -> None:
        self.visible = False
        self.anchor = None
        self.content = None

    def on_highlight_changed(self, region: Optional[RegionProperties], context: OverlayContext) -> None:
        if self.trigger is not TooltipTrigger.HOVER:
            return
        if region is None or not region.has_data:
            self.hide()
        else:
            self._show(region, context)

    def on_selection_changed(self, region: Optional[RegionProperties], context: OverlayContext) -> None:
        if self.trigger is not TooltipTrigger.SELECTION:
            return
        if region is None:
            self.hide()
        else:
            self._show(region, context)


class LegendOverlay:
    """Gradient legend with an indicator for the highlighted region's value."""

    def __init__(self, enabled: bool = True, position: str = "bottom_left", stops: int = 5):
        self.enabled = enabled
        self.position = position
        self.stops = stops
        self.axis: Optional[ColorAxis] = None
        self.mode: Optional[DatasetMode] = None
        self.label: Optional[str] = None
        self.indicator: Optional[float] = None

    @property
    def visible(self) -> bool:
        return self.enabled and self.mode is DatasetMode.VALUED and self.axis is not None

    @property
    def min_value(self) -> Optional[float]:
        return self.axis.domain.min if self.axis is not None else None

    @property
    def max_value(self) -> Optional[float]:
        return self.axis.domain.max if self.axis is not None else None

    def colors(self) -> List[str]:
        if self.axis is None:
            return []
        return [to_hex(color) for color in gradient_stops(self.axis, self.stops)]

    def _sync(self, context: OverlayContext) -> None:
        self.axis = context.axis
        self.mode = context.mode
        self.label = context.label

    def on_highlight_changed(self, region: Optional[RegionProperties], context: OverlayContext) -> None:
        self._sync(context)
        if region is None or region.value is None or context.mode is not DatasetMode.VALUED:
            self.indicator = None
            return
        self.indicator = value_position(context.domain, region.value)

    def on_selection_changed(self, region: Optional[RegionProperties], context: OverlayContext) -> None:
        self._sync(context)


def build_overlays(options: ChartOptions) -> Tuple[TooltipOverlay, LegendOverlay]:
    tooltip = TooltipOverlay(options.tooltip.trigger)
    legend = LegendOverlay(enabled=options.legend.enabled, position=options.legend.position)
    return tooltip, legend


__all__ = ["TooltipContent", "TooltipOverlay", "LegendOverlay", "build_overlays"]
