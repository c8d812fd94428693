from __future__ import annotations

"""
End-to-end run: CSV text -> load -> split -> train -> predict -> score -> report.
"""

from dataclasses import dataclass
from typing import Mapping

import numpy as np

from .constants import (
    DEFAULT_EPOCHS,
    DEFAULT_LEARNING_RATE,
    DEFAULT_TRAIN_RATIO,
    IRIS_LABELS,
)
from .data_prep import Dataset, TrainTestSplit, load_dataset, split_dataset
from .errors import EmptyDatasetError
from .logreg import SoftmaxModel, predict, train_softmax_regression
from .metrics import accuracy


@dataclass(frozen=True)
class EvaluationResult:
    split: TrainTestSplit
    model: SoftmaxModel
    predictions: np.ndarray
    accuracy: float

    @property
    def report(self) -> str:
        return format_accuracy(self.accuracy)


def format_accuracy(acc: float) -> str:
    """Render accuracy as a percentage with two decimals."""
    return f"Test Accuracy: {acc * 100:.2f}%"


def evaluate_dataset(
    dataset: Dataset,
    *,
    learning_rate: float = DEFAULT_LEARNING_RATE,
    epochs: int = DEFAULT_EPOCHS,
    train_ratio: float = DEFAULT_TRAIN_RATIO,
    random_state: int | np.random.Generator | None = None,
    verbose: bool = False,
    log_every: int = 10_000,
) -> EvaluationResult:
    """Split, train, predict and score an already-loaded dataset."""
    if dataset.n_samples == 0:
        raise EmptyDatasetError("dataset has no data rows")

    split = split_dataset(dataset, train_ratio=train_ratio, random_state=random_state)
    if split.train.n_samples == 0:
        raise EmptyDatasetError(
            f"training split is empty ({dataset.n_samples} rows, ratio {train_ratio})"
        )

    model = train_softmax_regression(
        split.train.features,
        split.train.labels,
        n_classes=dataset.n_classes,
        learning_rate=learning_rate,
        epochs=epochs,
        verbose=verbose,
        log_every=log_every,
    )
    predictions = predict(split.test.features, model)
    return EvaluationResult(
        split=split,
        model=model,
        predictions=predictions,
        accuracy=accuracy(predictions, split.test.labels),
    )


def evaluate(
    csv_text: str,
    *,
    learning_rate: float = DEFAULT_LEARNING_RATE,
    epochs: int = DEFAULT_EPOCHS,
    train_ratio: float = DEFAULT_TRAIN_RATIO,
    random_state: int | np.random.Generator | None = None,
    label_map: Mapping[str, int] = IRIS_LABELS,
) -> EvaluationResult:
    """Run the full pipeline and keep the intermediate artifacts."""
    return evaluate_dataset(
        load_dataset(csv_text, label_map),
        learning_rate=learning_rate,
        epochs=epochs,
        train_ratio=train_ratio,
        random_state=random_state,
    )


def run(
    csv_text: str,
    *,
    learning_rate: float = DEFAULT_LEARNING_RATE,
    epochs: int = DEFAULT_EPOCHS,
    train_ratio: float = DEFAULT_TRAIN_RATIO,
    random_state: int | np.random.Generator | None = None,
) -> str:
    """Train on a random split of `csv_text` and return the accuracy report."""
    result = evaluate(
        csv_text,
        learning_rate=learning_rate,
        epochs=epochs,
        train_ratio=train_ratio,
        random_state=random_state,
    )
    return result.report
