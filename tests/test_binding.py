from __future__ import annotations

import logging

import numpy as np
import pandas as pd
import pytest

from geochart.engine.binding import (
    bind_dataset,
    dataset_mode,
    is_degenerate,
    normalise_dataset,
    relative_value,
)
from geochart.engine.errors import IncompatibleDataset, RegionNotFound
from geochart.engine.states import DatasetMode, ValueDomain

KNOWN = {"A": "A", "B": "B", "C": "C"}


def test_dataset_mode_by_column_count():
    assert dataset_mode(pd.DataFrame({"id": ["A"]})) is DatasetMode.DATALESS
    assert dataset_mode(pd.DataFrame({"id": ["A"], "v": [1.0]})) is DatasetMode.VALUED
    assert dataset_mode([("A",), ("B",)]) is DatasetMode.DATALESS
    assert dataset_mode([("A", 1), ("B", 2)]) is DatasetMode.VALUED
    with pytest.raises(IncompatibleDataset):
        dataset_mode(pd.DataFrame({"id": ["A"], "v": [1], "w": [2]}))
    with pytest.raises(IncompatibleDataset):
        dataset_mode([("A", 1), ("B",)])


def test_bind_valued_dataset_computes_domain_and_label():
    frame = pd.DataFrame({"region": ["A", "B", "C"], "Population": [10.0, 30.0, 20.0]})
    result = bind_dataset(frame, KNOWN.get)
    assert result.mode is DatasetMode.VALUED
    assert result.label == "Population"
    assert result.domain == ValueDomain(10.0, 30.0)
    assert result.rows == {0: "A", 1: "B", 2: "C"}
    props = result.properties["B"]
    assert props.has_data and props.row_index == 1 and props.value == 30.0
    assert props.label == "Population"
    assert not props.selected


def test_bind_skips_missing_region_with_warning(caplog):
    frame = pd.DataFrame({"region": ["A", "X999", "B"], "v": [1.0, 500.0, 3.0]})
    with caplog.at_level(logging.WARNING, logger="geochart.engine.binding"):
        result = bind_dataset(frame, KNOWN.get)
    assert "X999" in caplog.text
    assert len(result.missing) == 1
    assert isinstance(result.missing[0], RegionNotFound)
    assert result.missing[0].row == 1
    assert set(result.properties) == {"A", "B"}
    assert result.domain == ValueDomain(1.0, 3.0)


def test_bind_dataless_rows():
    result = bind_dataset([("A",), ("C",)], KNOWN.get)
    assert result.mode is DatasetMode.DATALESS
    assert result.label is None
    assert result.properties["C"].has_data
    assert result.properties["C"].value is None
    assert result.domain.is_degenerate


def test_missing_values_keep_data_flag():
    result = bind_dataset([("A", 4.0), ("B", None), ("C", np.nan)], KNOWN.get, label="Score")
    assert result.label == "Score"
    assert result.properties["B"].has_data
    assert result.properties["B"].value is None
    assert result.properties["C"].value is None
    assert result.domain == ValueDomain(4.0, 4.0)


def test_non_numeric_values_are_incompatible():
    with pytest.raises(IncompatibleDataset):
        normalise_dataset([("A", "lots"), ("B", 2)])


def test_numeric_region_ids_are_plain_python():
    frame = pd.DataFrame({"id": np.array([1, 2], dtype=np.int64), "v": [5.0, 6.0]})
    seen = []

    def resolver(region_id):
        seen.append(region_id)
        return region_id

    bind_dataset(frame, resolver)
    assert all(type(value) is int for value in seen)


def test_repeated_region_last_row_wins():
    result = bind_dataset([("A", 1.0), ("A", 2.0)], KNOWN.get)
    assert result.properties["A"].row_index == 1
    assert result.properties["A"].value == 2.0
    assert result.rows == {1: "A"}


def test_empty_dataset_has_degenerate_domain():
    result = bind_dataset(pd.DataFrame({"id": [], "v": []}), KNOWN.get)
    assert result.properties == {}
    assert is_degenerate(result.domain)


def test_relative_value():
    domain = ValueDomain(10.0, 30.0)
    assert not is_degenerate(domain)
    assert relative_value(domain, 20.0) == 0.5
    assert relative_value(domain, 10.0) == 0.0
    with pytest.raises(ZeroDivisionError):
        relative_value(ValueDomain(3.0, 3.0), 3.0)


def test_string_rows_are_rejected():
    with pytest.raises(IncompatibleDataset):
        dataset_mode(["A1", "B2"])
    with pytest.raises(IncompatibleDataset):
        bind_dataset(["A1", "B2"], KNOWN.get)
