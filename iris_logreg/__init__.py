"""
Multinomial logistic regression on the Iris dataset, trained with batch
gradient descent and scored on a random hold-out split.

This package contains CSV loading and splitting helpers, the softmax
regression implementation, scoring utilities, and the `run` entry point used
by main.py.
"""

from .constants import (
    DEFAULT_EPOCHS,
    DEFAULT_LEARNING_RATE,
    DEFAULT_TRAIN_RATIO,
    IRIS_LABELS,
)
from .data_prep import (
    Dataset,
    TrainTestSplit,
    decode_labels,
    load_arrays,
    load_dataset,
    split_dataset,
)
from .errors import (
    DatasetError,
    EmptyDatasetError,
    InvalidNumberError,
    MalformedRowError,
    MissingLabelError,
    UnknownLabelError,
)
from .logreg import (
    SoftmaxModel,
    SoftmaxRegressionGD,
    dot_product,
    predict,
    softmax,
    train_softmax_regression,
)
from .metrics import accuracy, compute_classification_metrics
from .pipeline import (
    EvaluationResult,
    evaluate,
    evaluate_dataset,
    format_accuracy,
    run,
)

__all__ = [
    "DEFAULT_EPOCHS",
    "DEFAULT_LEARNING_RATE",
    "DEFAULT_TRAIN_RATIO",
    "IRIS_LABELS",
    "Dataset",
    "TrainTestSplit",
    "decode_labels",
    "load_arrays",
    "load_dataset",
    "split_dataset",
    "DatasetError",
    "EmptyDatasetError",
    "InvalidNumberError",
    "MalformedRowError",
    "MissingLabelError",
    "UnknownLabelError",
    "SoftmaxModel",
    "SoftmaxRegressionGD",
    "dot_product",
    "predict",
    "softmax",
    "train_softmax_regression",
    "accuracy",
    "compute_classification_metrics",
    "EvaluationResult",
    "evaluate",
    "evaluate_dataset",
    "format_accuracy",
    "run",
]
