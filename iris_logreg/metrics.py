from __future__ import annotations

"""
Scoring helpers: plain accuracy for the report plus a fuller multiclass summary.
"""

import numpy as np
import pandas as pd
from sklearn import metrics

from .errors import EmptyDatasetError


def accuracy(predictions, labels) -> float:
    """
    Fraction of exact matches between predicted and true class indices.
    Raises EmptyDatasetError for empty input instead of returning NaN.
    """
    preds = np.asarray(predictions, dtype=float)
    truth = np.asarray(labels, dtype=float)
    if preds.shape != truth.shape:
        raise ValueError(f"{preds.size} predictions but {truth.size} labels")
    if truth.size == 0:
        raise EmptyDatasetError("accuracy is undefined for an empty test set")
    return int(np.sum(preds == truth)) / truth.size


def compute_classification_metrics(
    y_true: np.ndarray | pd.Series, y_pred: np.ndarray, n_classes: int
):
    """Accuracy, macro precision/recall/F1 and the confusion matrix."""
    labels = list(range(n_classes))
    y_true_idx = np.asarray(y_true, dtype=float).astype(int)
    y_pred_idx = np.asarray(y_pred, dtype=float).astype(int)
    precision, recall, f1, _ = metrics.precision_recall_fscore_support(
        y_true_idx, y_pred_idx, labels=labels, average="macro", zero_division=0
    )

    return {
        "accuracy": accuracy(y_pred, y_true),
        "precision": precision,
        "recall": recall,
        "f1": f1,
        "confusion_matrix": metrics.confusion_matrix(
            y_true_idx, y_pred_idx, labels=labels
        ),
    }


def majority_baseline(y_train: np.ndarray | pd.Series, y_test: np.ndarray | pd.Series):
    """
    Accuracy of always predicting the most frequent training class.
    """
    counts = pd.Series(np.asarray(y_train, dtype=float)).value_counts()
    majority = counts.index[0] if len(counts) else 0.0
    preds = np.full(len(y_test), majority, dtype=float)
    return accuracy(preds, y_test)


def summarize_coefficients(
    coef: np.ndarray, feature_names: list[str], class_names: list[str]
) -> pd.DataFrame:
    return pd.DataFrame(coef, index=class_names, columns=feature_names)
