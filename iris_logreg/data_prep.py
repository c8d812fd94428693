from __future__ import annotations

"""
Data preparation for the Iris run: CSV text -> numeric matrices, label
decoding, and the random train/test split.
"""

import csv
import io
import math
from dataclasses import dataclass
from typing import Iterable, Mapping, NamedTuple, Sequence

import numpy as np
import pandas as pd

from .constants import FEATURE_COLUMNS, IRIS_LABELS, LABEL_COLUMN, MIN_FIELDS
from .errors import (
    EmptyDatasetError,
    InvalidNumberError,
    MalformedRowError,
    MissingLabelError,
    UnknownLabelError,
)


@dataclass(frozen=True)
class Dataset:
    """
    Feature matrix plus parallel label vector (class indices stored as floats).
    """

    features: np.ndarray
    labels: np.ndarray
    class_names: tuple[str, ...]
    feature_names: tuple[str, ...] = ()

    def __post_init__(self):
        if self.features.ndim != 2:
            raise ValueError(f"features must be 2-D, got shape {self.features.shape}")
        if len(self.features) != len(self.labels):
            raise ValueError(
                f"{len(self.features)} feature rows but {len(self.labels)} labels"
            )

    @property
    def n_samples(self) -> int:
        return self.features.shape[0]

    @property
    def n_features(self) -> int:
        return self.features.shape[1]

    @property
    def n_classes(self) -> int:
        return len(self.class_names)

    def subset(self, indices: Sequence[int] | np.ndarray) -> "Dataset":
        idx = np.asarray(indices, dtype=int)
        return Dataset(
            features=self.features[idx],
            labels=self.labels[idx],
            class_names=self.class_names,
            feature_names=self.feature_names,
        )

    def to_frame(self) -> pd.DataFrame:
        """Tabular view with the decoded label in a `label` column."""
        columns = list(self.feature_names) or [
            f"f{j}" for j in range(self.n_features)
        ]
        frame = pd.DataFrame(self.features, columns=columns)
        frame["label"] = decode_labels(self.labels, self.class_names)
        return frame


class TrainTestSplit(NamedTuple):
    train: Dataset
    test: Dataset
    train_indices: np.ndarray
    test_indices: np.ndarray


def _class_names(label_map: Mapping[str, int]) -> tuple[str, ...]:
    """Order label strings by class index; indices must be exactly 0..k-1."""
    by_index = sorted(label_map.items(), key=lambda item: item[1])
    if [idx for _, idx in by_index] != list(range(len(by_index))):
        raise ValueError(f"label map indices must be 0..{len(by_index) - 1}")
    return tuple(name for name, _ in by_index)


def _parse_feature(field: str, line: int, column: int) -> float:
    try:
        value = float(field.strip())
    except ValueError:
        raise InvalidNumberError(line, column, field) from None
    if not math.isfinite(value):
        raise InvalidNumberError(line, column, field)
    return value


def _parse_label(
    field: str, line: int, label_map: Mapping[str, int]
) -> int:
    name = field.strip()
    if not name:
        raise MissingLabelError(line, LABEL_COLUMN)
    try:
        return label_map[name]
    except KeyError:
        raise UnknownLabelError(line, name, list(label_map)) from None


def load_dataset(
    text: str, label_map: Mapping[str, int] = IRIS_LABELS
) -> Dataset:
    """
    Parse comma-delimited text (header row first) into a Dataset.

    Column 0 is an identifier and is skipped, columns 1-4 are the features and
    column 5 is the label. The first bad row aborts the whole load.
    """
    class_names = _class_names(label_map)
    reader = csv.reader(io.StringIO(text))

    header = next(reader, None)
    feature_names: tuple[str, ...] = ()
    if header is not None and len(header) >= MIN_FIELDS:
        feature_names = tuple(header[c].strip() for c in FEATURE_COLUMNS)

    features: list[list[float]] = []
    labels: list[int] = []
    for record in reader:
        line = reader.line_num
        # blank line; a row of empty fields still goes through the checks below
        if not record or (len(record) == 1 and not record[0].strip()):
            continue
        if len(record) < MIN_FIELDS:
            raise MalformedRowError(line, len(record), MIN_FIELDS)

        features.append([_parse_feature(record[c], line, c) for c in FEATURE_COLUMNS])
        labels.append(_parse_label(record[LABEL_COLUMN], line, label_map))

    return Dataset(
        features=np.asarray(features, dtype=float).reshape(-1, len(FEATURE_COLUMNS)),
        labels=np.asarray(labels, dtype=float),
        class_names=class_names,
        feature_names=feature_names,
    )


def load_arrays(
    text: str, label_map: Mapping[str, int] = IRIS_LABELS
) -> tuple[np.ndarray, np.ndarray]:
    dataset = load_dataset(text, label_map)
    return dataset.features, dataset.labels


def decode_labels(labels: Iterable[float], class_names: Sequence[str]) -> list[str]:
    """Map class indices back to their label strings."""
    return [class_names[int(label)] for label in labels]


def permutation_indices(
    n: int, random_state: int | np.random.Generator | None = None
) -> np.ndarray:
    """Uniform random permutation of range(n); seedable for reproducible runs."""
    rng = np.random.default_rng(random_state)
    return rng.permutation(n)


def split_dataset(
    dataset: Dataset,
    train_ratio: float = 0.8,
    random_state: int | np.random.Generator | None = None,
) -> TrainTestSplit:
    """
    Random (non-stratified) split: the first floor(n * ratio) permuted rows
    train, the rest test. Either side may come back empty for tiny n.
    """
    if not 0.0 < train_ratio < 1.0:
        raise ValueError(f"train_ratio must be in (0, 1), got {train_ratio}")
    if dataset.n_samples == 0:
        raise EmptyDatasetError("cannot split a dataset with no rows")

    order = permutation_indices(dataset.n_samples, random_state)
    train_size = int(math.floor(dataset.n_samples * train_ratio))
    train_idx, test_idx = order[:train_size], order[train_size:]

    return TrainTestSplit(
        train=dataset.subset(train_idx),
        test=dataset.subset(test_idx),
        train_indices=train_idx,
        test_indices=test_idx,
    )


def summarize_dataset(dataset: Dataset) -> dict:
    """Row/feature counts and per-class balance, for display by hosts."""
    frame = dataset.to_frame()
    class_counts = (
        frame["label"].value_counts().reindex(dataset.class_names, fill_value=0)
    )
    return {
        "num_rows": dataset.n_samples,
        "feature_count": dataset.n_features,
        "feature_names": list(dataset.feature_names),
        "class_counts": {name: int(count) for name, count in class_counts.items()},
    }
