"""Core state enumerations, dataclasses and collaborator protocols for GeoChart."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Hashable, List, Optional, Protocol, Tuple

# The selected (click) and highlighted (hover) regions are stacked above the rest.
BASE_Z_INDEX = 0
SELECTED_Z_INDEX = 999
HIGHLIGHTED_Z_INDEX = 1000

RegionId = Hashable
Anchor = Tuple[float, float]


class DatasetMode(str, Enum):
    """Shape of the bound dataset."""

    VALUED = "valued"  # id + numeric value
    DATALESS = "dataless"  # id only


class TooltipTrigger(str, Enum):
    HOVER = "hover"
    SELECTION = "selection"
    NONE = "none"


class SelectionState(str, Enum):
    IDLE = "idle"
    HIGHLIGHTED = "highlighted"
    SELECTED = "selected"
    SELECTED_AND_HIGHLIGHTED_ELSEWHERE = "selected_and_highlighted_elsewhere"


@dataclass(frozen=True)
class Color:
    """Canonical 8-bit RGBA color."""

    red: int
    green: int
    blue: int
    alpha: int = 255

    def as_tuple(self) -> Tuple[int, int, int, int]:
        return (self.red, self.green, self.blue, self.alpha)


@dataclass(frozen=True)
class ValueDomain:
    min: float = 0.0
    max: float = 0.0

    @property
    def is_degenerate(self) -> bool:
        return self.min == self.max


@dataclass
class RegionProperties:
    """Derived properties of one region after binding."""

    region_id: RegionId
    has_data: bool = False
    row_index: Optional[int] = None
    value: Optional[float] = None
    label: Optional[str] = None
    selected: bool = False


@dataclass
class BindResult:
    """Outcome of joining a dataset to a region source."""

    mode: DatasetMode
    domain: ValueDomain
    label: Optional[str] = None
    properties: Dict[RegionId, RegionProperties] = field(default_factory=dict)
    rows: Dict[int, RegionId] = field(default_factory=dict)
    missing: List[Any] = field(default_factory=list)

    @classmethod
    def empty(cls) -> "BindResult":
        return cls(mode=DatasetMode.DATALESS, domain=ValueDomain())


@dataclass(frozen=True)
class RegionStyle:
    """Visual style handed to the rendering surface for one region."""

    fill_color: Color
    stroke_color: Color
    fill_opacity: float = 1.0
    stroke_weight: float = 1.0
    stroke_opacity: float = 1.0
    z_index: int = BASE_Z_INDEX
    cursor: str = "default"


@dataclass(frozen=True)
class OverlayContext:
    """What an overlay observer needs to render itself after a transition."""

    mode: DatasetMode
    domain: ValueDomain
    axis: Any
    label: Optional[str] = None
    anchor: Optional[Anchor] = None


class RegionSource(Protocol):
    def find_region(self, region_id: Any) -> Optional[RegionId]:
        ...

    def get_property(self, region: RegionId, name: str) -> Any:
        ...

    def set_property(self, region: RegionId, name: str, value: Any) -> None:
        ...

    def center(self, region: RegionId) -> Anchor:
        ...


class OverlayObserver(Protocol):
    def on_highlight_changed(
        self, region: Optional[RegionProperties], context: OverlayContext
    ) -> None:
        ...

    def on_selection_changed(
        self, region: Optional[RegionProperties], context: OverlayContext
    ) -> None:
        ...


__all__ = [
    "BASE_Z_INDEX",
    "SELECTED_Z_INDEX",
    "HIGHLIGHTED_Z_INDEX",
    "RegionId",
    "Anchor",
    "DatasetMode",
    "TooltipTrigger",
    "SelectionState",
    "Color",
    "ValueDomain",
    "RegionProperties",
    "BindResult",
    "RegionStyle",
    "OverlayContext",
    "RegionSource",
    "OverlayObserver",
]
