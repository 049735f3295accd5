"""Selection and highlight state machine driven by pointer events."""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterable, List, Optional

from .colors import ColorAxis
from .errors import RegionNotFound
from .states import (
    Anchor,
    BindResult,
    OverlayContext,
    OverlayObserver,
    RegionId,
    RegionProperties,
    RegionSource,
    SelectionState,
)

logger = logging.getLogger(__name__)

Invalidator = Callable[[List[RegionId]], None]


class SelectionController:
    """Owns the selected and highlighted regions of one bound chart.

    Selection is persistent and click-driven; highlight is transient and
    hover-driven. The two are tracked separately so a selected region can stay
    selected while the pointer highlights another one. Only this controller
    writes the ``selected`` flag of the bound region properties.
    """

    def __init__(
        self,
        binding: BindResult,
        region_source: RegionSource,
        axis: ColorAxis,
        observers: Iterable[OverlayObserver] = (),
        invalidate: Optional[Invalidator] = None,
    ):
        self._binding = binding
        self._source = region_source
        self._axis = axis
        self._observers = list(observers)
        self._invalidate = invalidate
        self.selected: Optional[RegionId] = None
        self.highlighted: Optional[RegionId] = None

    @property
    def state(self) -> SelectionState:
        if self.selected is None:
            return SelectionState.IDLE if self.highlighted is None else SelectionState.HIGHLIGHTED
        if self.highlighted is None:
            return SelectionState.SELECTED
        return SelectionState.SELECTED_AND_HIGHLIGHTED_ELSEWHERE

    # -- helpers ---------------------------------------------------------

    def _props(self, region: RegionId) -> RegionProperties:
        return self._binding.properties.get(region) or RegionProperties(region_id=region)

    def _context(self, anchor: Optional[Anchor] = None) -> OverlayContext:
        return OverlayContext(
            mode=self._binding.mode,
            domain=self._binding.domain,
            axis=self._axis,
            label=self._binding.label,
            anchor=anchor,
        )

    def _notify_highlight(self, anchor: Optional[Anchor] = None) -> None:
        region = self._props(self.highlighted) if self.highlighted is not None else None
        context = self._context(anchor)
        for observer in self._observers:
            observer.on_highlight_changed(region, context)

    def _notify_selection(self, anchor: Optional[Anchor] = None) -> None:
        region = self._props(self.selected) if self.selected is not None else None
        context = self._context(anchor)
        for observer in self._observers:
            observer.on_selection_changed(region, context)

    def _refresh(self, regions: Iterable[Optional[RegionId]]) -> None:
        affected: List[RegionId] = []
        for region in regions:
            if region is not None and region not in affected:
                affected.append(region)
        if affected and self._invalidate is not None:
            self._invalidate(affected)

    def _unselect(self) -> Optional[RegionId]:
        previous = self.selected
        if previous is None:
            return None
        props = self._binding.properties.get(previous)
        if props is not None:
            props.selected = False
        self.selected = None
        return previous

    def _select(self, region: RegionId) -> List[Optional[RegionId]]:
        affected = [self._unselect()]
        if self.highlighted == region:
            affected.append(self.highlighted)
            self.highlighted = None
            self._notify_highlight()
        self._binding.properties[region].selected = True
        self.selected = region
        affected.append(region)
        self._notify_selection(anchor=self._source.center(region))
        return affected

    # -- transitions -----------------------------------------------------

    def pointer_enter(self, region: RegionId, position: Optional[Anchor] = None) -> bool:
        if region == self.selected or region == self.highlighted:
            return False
        previous = self.highlighted
        self.highlighted = region
        logger.debug("Highlight %r -> %r", previous, region)
        self._notify_highlight(anchor=position)
        self._refresh([previous, region])
        return True

    def pointer_leave(self, region: RegionId) -> bool:
        if region != self.highlighted:
            return False
        self.highlighted = None
        logger.debug("Highlight %r cleared", region)
        self._notify_highlight()
        self._refresh([region])
        return True

    def click(self, region: RegionId) -> bool:
        """Apply a click on ``region``; return whether the selection changed."""
        props = self._binding.properties.get(region)
        if props is None or not props.has_data:
            return self.clear_selection()

        if region == self.selected:
            self._unselect()
            self._notify_selection()
            # The clicked region is still under the pointer.
            previous = self.highlighted
            self.highlighted = region
            self._notify_highlight()
            logger.debug("Selection %r toggled off", region)
            self._refresh([previous, region])
            return True

        affected = self._select(region)
        logger.debug("Selection -> %r", region)
        self._refresh(affected)
        return True

    def click_outside(self) -> bool:
        changed = self.clear_selection()
        previous = self.highlighted
        if previous is not None:
            self.highlighted = None
            self._notify_highlight()
            self._refresh([previous])
        return changed

    def clear_selection(self) -> bool:
        previous = self._unselect()
        if previous is None:
            return False
        logger.debug("Selection %r cleared", previous)
        self._notify_selection()
        self._refresh([previous])
        return True

    def select_row(self, row: int) -> bool:
        region = self._binding.rows.get(row)
        if region is None:
            skipped = next((m for m in self._binding.missing if m.row == row), None)
            raise RegionNotFound(skipped.region_id if skipped else None, row)
        if region == self.selected:
            return False
        self._refresh(self._select(region))
        return True

    def get_selection(self) -> List[Dict[str, Any]]:
        if self.selected is None:
            return []
        return [{"row": self._binding.properties[self.selected].row_index, "column": None}]


__all__ = ["SelectionController"]
