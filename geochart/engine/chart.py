"""Public GeoChart facade: binding, style queries, pointer events and selection."""
from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

from .binding import Dataset, bind_dataset
from .colors import ColorAxis, build_axis
from .selection import SelectionController
from .states import (
    Anchor,
    BindResult,
    OverlayContext,
    OverlayObserver,
    RegionId,
    RegionSource,
    RegionStyle,
    SelectionState,
)
from .styles import StylePalette, StyleSnapshot, build_palette, freeze_properties, resolve_style
from .utils import ChartOptions, merge_options

logger = logging.getLogger(__name__)

EVENTS = ("ready", "select", "invalidate")


@dataclass
class _Bound:
    options: ChartOptions
    binding: BindResult
    axis: ColorAxis
    palette: StylePalette
    controller: SelectionController


class GeoChart:
    """Choropleth chart over regions supplied by a :class:`RegionSource`.

    ``bind`` (re)initialises all state; the rendering surface queries
    :meth:`style` per region and forwards pointer events to
    :meth:`pointer_enter`, :meth:`pointer_leave`, :meth:`click` and
    :meth:`click_outside`.
    """

    def __init__(self, region_source: RegionSource, observers: Iterable[OverlayObserver] = ()):
        self.region_source = region_source
        self._observers = list(observers)
        self._listeners: Dict[str, List[Callable[..., None]]] = defaultdict(list)
        self._bound: Optional[_Bound] = None

    # -- events ----------------------------------------------------------

    def add_listener(self, event: str, callback: Callable[..., None]) -> None:
        if event not in EVENTS:
            raise ValueError(f"Unknown event {event!r}; expected one of {EVENTS}")
        self._listeners[event].append(callback)

    def remove_listener(self, event: str, callback: Callable[..., None]) -> None:
        if callback in self._listeners.get(event, []):
            self._listeners[event].remove(callback)

    def _emit(self, event: str, *args: Any) -> None:
        for callback in list(self._listeners.get(event, [])):
            callback(*args)

    # -- binding ---------------------------------------------------------

    def bind(
        self,
        dataset: Dataset,
        options: Mapping[str, Any] | ChartOptions | None = None,
        label: Optional[str] = None,
    ) -> BindResult:
        """Bind ``dataset`` and replace any previous state.

        Nothing is committed until every step succeeded, so a failing call
        leaves the previously bound state in place.
        """
        merged = merge_options(options)
        palette = build_palette(merged)
        binding = bind_dataset(dataset, self.region_source.find_region, label=label)
        axis = build_axis(
            merged.features_gradient_colors,
            merged.features_gradient_stroke_colors,
            binding.domain,
        )
        controller = SelectionController(
            binding,
            self.region_source,
            axis,
            observers=self._observers,
            invalidate=lambda regions: self._emit("invalidate", regions),
        )

        previous = self._bound
        self._bound = _Bound(merged, binding, axis, palette, controller)
        stale = list(previous.binding.properties) if previous is not None else []
        for region in stale:
            self.region_source.set_property(region, "data-row", None)
            self.region_source.set_property(region, "data-value", None)
        for region, props in binding.properties.items():
            self.region_source.set_property(region, "data-row", props.row_index)
            self.region_source.set_property(region, "data-value", props.value)
        affected = stale + [region for region in binding.properties if region not in stale]
        if affected:
            self._emit("invalidate", affected)
        context = OverlayContext(mode=binding.mode, domain=binding.domain, axis=axis, label=binding.label)
        for observer in self._observers:
            observer.on_highlight_changed(None, context)
            observer.on_selection_changed(None, context)

        logger.info("Chart bound: %d regions with data, %d rows skipped", len(binding.properties), len(binding.missing))
        self._emit("ready")
        return binding

    def _require_bound(self) -> _Bound:
        if self._bound is None:
            raise RuntimeError("GeoChart has no bound dataset; call bind() first")
        return self._bound

    @property
    def is_bound(self) -> bool:
        return self._bound is not None

    @property
    def options(self) -> ChartOptions:
        return self._require_bound().options

    @property
    def binding(self) -> BindResult:
        return self._require_bound().binding

    @property
    def axis(self) -> ColorAxis:
        return self._require_bound().axis

    @property
    def state(self) -> SelectionState:
        if self._bound is None:
            return SelectionState.IDLE
        return self._bound.controller.state

    # -- styles ----------------------------------------------------------

    def snapshot(self) -> StyleSnapshot:
        bound = self._require_bound()
        return StyleSnapshot(
            properties=freeze_properties(bound.binding.properties),
            mode=bound.binding.mode,
            domain=bound.binding.domain,
            axis=bound.axis,
            palette=bound.palette,
            selected=bound.controller.selected,
            highlighted=bound.controller.highlighted,
        )

    def style(self, region_id: RegionId) -> RegionStyle:
        return resolve_style(region_id, self.snapshot())

    # -- pointer events --------------------------------------------------

    def pointer_enter(self, region_id: RegionId, position: Optional[Anchor] = None) -> None:
        self._require_bound().controller.pointer_enter(region_id, position)

    def pointer_leave(self, region_id: RegionId) -> None:
        self._require_bound().controller.pointer_leave(region_id)

    def click(self, region_id: RegionId) -> None:
        if self._require_bound().controller.click(region_id):
            self._emit("select")

    def click_outside(self) -> None:
        if self._require_bound().controller.click_outside():
            self._emit("select")

    # -- selection -------------------------------------------------------

    def get_selection(self) -> List[Dict[str, Any]]:
        if self._bound is None:
            return []
        return self._bound.controller.get_selection()

    def set_selection(self, selection: List[Mapping[str, Any]]) -> None:
        """Select the region bound to ``selection[0]["row"]``, or clear on ``[]``."""
        if not selection:
            if self._bound is not None:
                self._bound.controller.clear_selection()
            return
        controller = self._require_bound().controller
        if len(selection) > 1:
            raise ValueError("Only a single row can be selected")
        controller.select_row(int(selection[0]["row"]))


__all__ = ["GeoChart", "EVENTS"]
