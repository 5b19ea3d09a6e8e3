# -*- coding: utf-8 -*-
"""
id3py.dataset
=============

Column-oriented categorical table used to grow ID3 trees, plus the loader for
comma separated record files such as the UCI car evaluation data.

A :class:`Dataset` maps attribute names to row-aligned sequences of
categories and designates one column as the class label.  It is immutable:
:meth:`Dataset.partition` returns a new table and never touches the rows of
the parent.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Hashable, Mapping, Sequence

import numpy as np
import pandas as pd

from .exceptions import InputUnavailableError, SchemaViolationError

logger = logging.getLogger(__name__)

# Field order of the car evaluation records; the label is the last field.
CAR_ATTRIBUTES = ("price", "maint", "doors", "persons", "lug_boot", "safety")
LABEL = "label"


# -----------------------------------------------------------------------------
# Dataset
# -----------------------------------------------------------------------------
class Dataset:
    """Immutable, row-aligned table of categorical columns.

    Parameters
    ----------
    columns : mapping of str to sequence
        Attribute name to the ordered values of that attribute, one per
        record.  The iteration order of the mapping is the canonical
        attribute order used to break information gain ties.
    label : str, default="label"
        Name of the column holding the class labels.

    Raises
    ------
    SchemaViolationError
        If the columns differ in length or the label column is absent.
    """

    def __init__(self, columns: Mapping[str, Sequence[Hashable]], label: str = LABEL):
        lengths = {name: len(values) for name, values in columns.items()}
        if label not in lengths:
            raise SchemaViolationError(f"label column {label!r} is missing")
        if len(set(lengths.values())) > 1:
            raise SchemaViolationError(f"columns have unequal lengths: {lengths}")
        frame = pd.DataFrame({name: list(values) for name, values in columns.items()},
                             dtype=object)
        self._frame = frame
        self._label = label

    @classmethod
    def from_frame(cls, frame: pd.DataFrame, label: str = LABEL) -> "Dataset":
        """Build a dataset from a DataFrame, keeping its column order."""
        if label not in frame.columns:
            raise SchemaViolationError(f"label column {label!r} is missing")
        return cls._wrap(frame.astype(object).reset_index(drop=True), label)

    @classmethod
    def _wrap(cls, frame: pd.DataFrame, label: str) -> "Dataset":
        ds = cls.__new__(cls)
        ds._frame = frame
        ds._label = label
        return ds

    # ------------------------------------------------------------------
    # Schema
    # ------------------------------------------------------------------
    @property
    def label(self) -> str:
        return self._label

    @property
    def attributes(self) -> tuple[str, ...]:
        """Non-label attribute names in canonical order."""
        return tuple(c for c in self._frame.columns if c != self._label)

    @property
    def n_rows(self) -> int:
        return len(self._frame)

    def __len__(self) -> int:
        return self.n_rows

    @property
    def is_empty(self) -> bool:
        return self.n_rows == 0

    def __repr__(self) -> str:
        return (f"Dataset(n_rows={self.n_rows}, attributes={list(self.attributes)}, "
                f"label={self._label!r})")

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------
    def column(self, name: str) -> np.ndarray:
        """Return a copy of the values of column ``name``."""
        if name not in self._frame.columns:
            raise KeyError(name)
        return self._frame[name].to_numpy(dtype=object, copy=True)

    @property
    def labels(self) -> np.ndarray:
        return self.column(self._label)

    def distinct(self, attribute: str) -> list:
        """Distinct values of ``attribute`` in order of first appearance."""
        if attribute not in self._frame.columns:
            raise KeyError(attribute)
        return list(pd.unique(self._frame[attribute]))

    def label_counts(self, attribute: str | None = None, value=None) -> Counter:
        """Count labels, optionally over the rows where ``attribute == value``.

        The returned :class:`collections.Counter` keeps labels in the order
        they are first met while scanning the rows, which makes majority ties
        reproducible.
        """
        labels = self._frame[self._label]
        if attribute is not None:
            labels = labels[self._frame[attribute] == value]
        return Counter(labels)

    # ------------------------------------------------------------------
    # Partitioning
    # ------------------------------------------------------------------
    def partition(self, attribute: str, value) -> "Dataset":
        """Rows where ``attribute == value`` with ``attribute`` dropped."""
        if attribute == self._label:
            raise ValueError("cannot partition on the label column")
        if attribute not in self._frame.columns:
            raise KeyError(attribute)
        mask = self._frame[attribute] == value
        sub = self._frame.loc[mask].drop(columns=[attribute]).reset_index(drop=True)
        return Dataset._wrap(sub, self._label)


# -----------------------------------------------------------------------------
# Loader
# -----------------------------------------------------------------------------
def load_dataset(path, attributes: Sequence[str] = CAR_ATTRIBUTES,
                 label: str = LABEL) -> Dataset:
    """
    Read a headerless comma separated file into a :class:`Dataset`.

    Each line holds one record with the fields in the order of
    ``attributes`` followed by the label.  Values are read as strings with
    surrounding whitespace removed; blank lines are skipped.  Quoting and
    escaping are not interpreted.

    Parameters
    ----------
    path : str or path-like
        Location of the data file.
    attributes : sequence of str, default=CAR_ATTRIBUTES
        Names of the attribute fields, in file order.
    label : str, default="label"
        Name given to the final (label) field.

    Returns
    -------
    Dataset
        The loaded table, columns in file order.

    Raises
    ------
    InputUnavailableError
        If the file cannot be opened or read.
    SchemaViolationError
        If the file holds no records or any record has the wrong number of
        fields.
    """
    names = list(attributes) + [label]
    if len(set(names)) != len(names):
        raise SchemaViolationError(f"duplicate column names: {names}")
    try:
        frame = pd.read_csv(path, header=None, dtype=str, keep_default_na=False,
                            skip_blank_lines=True)
    except OSError as exc:
        raise InputUnavailableError(f"cannot read {path}: {exc}") from exc
    except pd.errors.EmptyDataError as exc:
        raise SchemaViolationError(f"{path} contains no records") from exc
    except pd.errors.ParserError as exc:
        raise SchemaViolationError(f"malformed record in {path}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise SchemaViolationError(f"{path} is not valid UTF-8 text: {exc}") from exc

    if frame.shape[1] != len(names):
        raise SchemaViolationError(
            f"expected {len(names)} fields per record, found {frame.shape[1]}")
    if frame.empty:
        raise SchemaViolationError(f"{path} contains no records")

    frame.columns = names
    frame = frame.fillna("").apply(lambda col: col.str.strip())
    incomplete = (frame == "").any(axis=1)
    if incomplete.any():
        first = int(np.flatnonzero(incomplete.to_numpy())[0])
        raise SchemaViolationError(
            f"record {first + 1} of {path} has missing fields")

    logger.info("Loaded %d records with attributes %s from %s",
                len(frame), list(attributes), path)
    return Dataset.from_frame(frame, label=label)
