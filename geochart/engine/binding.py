"""Join a one- or two-column dataset to the regions of a region source."""
from __future__ import annotations

import logging
from typing import Any, Callable, Optional, Sequence, Union

import numpy as np
import pandas as pd

from .errors import IncompatibleDataset, RegionNotFound
from .states import BindResult, DatasetMode, RegionId, RegionProperties, ValueDomain

logger = logging.getLogger(__name__)

ID_COLUMN = "id"
VALUE_COLUMN = "value"

Dataset = Union[pd.DataFrame, Sequence[Sequence[Any]]]
RegionResolver = Callable[[Any], Optional[RegionId]]


def _mode_for_width(width: int) -> DatasetMode:
    if width == 1:
        return DatasetMode.DATALESS
    if width == 2:
        return DatasetMode.VALUED
    raise IncompatibleDataset(f"Expected 1 or 2 columns, got {width}")


def dataset_mode(dataset: Dataset) -> DatasetMode:
    if isinstance(dataset, pd.DataFrame):
        return _mode_for_width(dataset.shape[1])
    rows = list(dataset)
    if any(isinstance(row, (str, bytes)) for row in rows):
        raise IncompatibleDataset("Rows must be sequences of cells, not strings")
    widths = {len(row) for row in rows}
    if len(widths) > 1:
        raise IncompatibleDataset(f"Rows have mixed widths: {sorted(widths)}")
    # An empty row sequence carries no values at all.
    return _mode_for_width(widths.pop() if widths else 1)


def normalise_dataset(dataset: Dataset, label: Optional[str] = None) -> tuple[pd.DataFrame, Optional[str]]:
    """Return ``(frame, label)`` with canonical ``id``/``value`` columns."""
    mode = dataset_mode(dataset)
    columns = [ID_COLUMN] if mode is DatasetMode.DATALESS else [ID_COLUMN, VALUE_COLUMN]
    if isinstance(dataset, pd.DataFrame):
        frame = dataset.copy()
        if mode is DatasetMode.VALUED and label is None:
            label = str(frame.columns[1])
        frame.columns = columns
    else:
        frame = pd.DataFrame(list(dataset), columns=columns)
    if mode is DatasetMode.DATALESS:
        return frame.reset_index(drop=True), None
    try:
        frame[VALUE_COLUMN] = pd.to_numeric(frame[VALUE_COLUMN], errors="raise").astype(float)
    except (TypeError, ValueError) as exc:
        raise IncompatibleDataset(f"Value column is not numeric: {exc}") from exc
    return frame.reset_index(drop=True), label


def _plain(value: Any) -> Any:
    if isinstance(value, np.generic):
        return value.item()
    return value


def bind_dataset(
    dataset: Dataset,
    resolver: RegionResolver,
    label: Optional[str] = None,
) -> BindResult:
    frame, label = normalise_dataset(dataset, label)
    mode = DatasetMode.VALUED if VALUE_COLUMN in frame else DatasetMode.DATALESS
    result = BindResult(mode=mode, domain=ValueDomain(), label=label)

    low = np.inf
    high = -np.inf
    for row in frame.itertuples(index=True):
        row_index = int(row.Index)
        region_id = _plain(getattr(row, ID_COLUMN))
        region = resolver(region_id)
        if region is None:
            logger.warning("Region %r referenced by row %d not found; row skipped", region_id, row_index)
            result.missing.append(RegionNotFound(region_id, row_index))
            continue

        previous = result.properties.get(region)
        if previous is not None:
            result.rows.pop(previous.row_index, None)
        props = RegionProperties(region_id=region, has_data=True, row_index=row_index)
        if mode is DatasetMode.VALUED:
            props.label = label
            value = float(getattr(row, VALUE_COLUMN))
            if not np.isnan(value):
                props.value = value
                low = min(low, value)
                high = max(high, value)
        result.properties[region] = props
        result.rows[row_index] = region

    if mode is DatasetMode.VALUED and np.isfinite(low):
        result.domain = ValueDomain(min=float(low), max=float(high))
    logger.info(
        "Bound %d of %d rows (%s mode, domain %s..%s)",
        len(result.rows),
        len(frame),
        mode.value,
        result.domain.min,
        result.domain.max,
    )
    return result


def is_degenerate(domain: ValueDomain) -> bool:
    return domain.is_degenerate


def relative_value(domain: ValueDomain, value: float) -> float:
    """Position of ``value`` in ``domain``; guard with :func:`is_degenerate` first."""
    return (value - domain.min) / (domain.max - domain.min)


__all__ = [
    "ID_COLUMN",
    "VALUE_COLUMN",
    "dataset_mode",
    "normalise_dataset",
    "bind_dataset",
    "is_degenerate",
    "relative_value",
]
