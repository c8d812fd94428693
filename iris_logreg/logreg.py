from __future__ import annotations

"""
Multinomial logistic regression (softmax regression) trained with full-batch
gradient descent. No scaling, no regularization, no early stopping: the loop
runs for exactly `epochs` updates.
"""

from typing import NamedTuple

import numpy as np

from .errors import EmptyDatasetError
from .metrics import accuracy


class SoftmaxModel(NamedTuple):
    """Weights of shape (n_classes, n_features) and biases of shape (n_classes,)."""

    weights: np.ndarray
    biases: np.ndarray

    @property
    def n_classes(self) -> int:
        return self.weights.shape[0]

    @property
    def n_features(self) -> int:
        return self.weights.shape[1]


def dot_product(a, b):
    """
    Dot product over the last axis of `a` and the first axis of `b`. Two vectors
    give a float; a row matrix and a (n_features, n_classes) matrix give scores.
    """
    a_arr = np.asarray(a, dtype=float)
    b_arr = np.asarray(b, dtype=float)
    if a_arr.shape[-1:] != b_arr.shape[:1]:
        raise ValueError(f"length mismatch: {a_arr.shape} vs {b_arr.shape}")
    result = np.dot(a_arr, b_arr)
    return float(result) if result.ndim == 0 else result


def softmax(scores) -> np.ndarray:
    """
    Probability distribution over the last axis. The max is subtracted first,
    which leaves the result unchanged but keeps exp() from overflowing.
    """
    z = np.asarray(scores, dtype=float)
    shifted = z - np.max(z, axis=-1, keepdims=True)
    exp_z = np.exp(shifted)
    return exp_z / np.sum(exp_z, axis=-1, keepdims=True)


def _scores(X, weights: np.ndarray, biases: np.ndarray) -> np.ndarray:
    return dot_product(X, weights.T) + biases


def class_scores(X, model: SoftmaxModel) -> np.ndarray:
    """Linear score per (row, class): dot(x, w_k) + b_k."""
    return _scores(X, model.weights, model.biases)


def predict_proba(X, model: SoftmaxModel) -> np.ndarray:
    return softmax(class_scores(X, model))


def predict(X, model: SoftmaxModel) -> np.ndarray:
    """
    Arg-max class per row, returned as floats to match the label encoding.
    np.argmax picks the first maximum, so ties go to the lowest class index.
    """
    X_arr = np.asarray(X, dtype=float)
    if X_arr.shape[0] == 0:
        return np.zeros(0, dtype=float)
    return np.argmax(predict_proba(X_arr, model), axis=1).astype(float)


def cross_entropy(probs: np.ndarray, y_idx: np.ndarray) -> float:
    picked = probs[np.arange(len(y_idx)), y_idx]
    return float(-np.mean(np.log(picked + 1e-12)))


def train_softmax_regression(
    X,
    y,
    n_classes: int,
    learning_rate: float = 0.1,
    epochs: int = 100_000,
    verbose: bool = False,
    log_every: int = 10_000,
) -> SoftmaxModel:
    """Functional wrapper around SoftmaxRegressionGD; returns the fitted model."""
    clf = SoftmaxRegressionGD(
        lr=learning_rate,
        epochs=epochs,
        n_classes=n_classes,
        verbose=verbose,
        log_every=log_every,
    )
    return clf.fit(X, y).model_


class SoftmaxRegressionGD:
    """
    Softmax regression trained with batch gradient descent from zero weights.

    Each epoch computes the averaged cross-entropy gradient over the whole
    training set, then updates weights and biases once.
    """

    def __init__(
        self,
        lr: float = 0.1,
        epochs: int = 100_000,
        n_classes: int | None = None,
        verbose: bool = False,
        log_every: int = 10_000,
    ):
        self.lr = lr
        self.epochs = epochs
        self.n_classes = n_classes
        self.verbose = verbose
        self.log_every = log_every
        self.coef_: np.ndarray | None = None
        self.intercept_: np.ndarray | None = None
        self.n_iter_: int = 0
        self.loss_history_: list[tuple[int, float]] = []

    def _check_inputs(self, X_arr: np.ndarray, y_arr: np.ndarray) -> np.ndarray:
        if self.lr <= 0:
            raise ValueError(f"learning rate must be positive, got {self.lr}")
        if self.epochs < 0:
            raise ValueError(f"epochs must be non-negative, got {self.epochs}")
        if X_arr.ndim != 2:
            raise ValueError(f"X must be 2-D, got shape {X_arr.shape}")
        if X_arr.shape[0] == 0:
            raise EmptyDatasetError("cannot train on an empty training set")
        if X_arr.shape[0] != y_arr.shape[0]:
            raise ValueError(f"{X_arr.shape[0]} rows but {y_arr.shape[0]} labels")

        y_idx = y_arr.astype(int)
        if np.any(y_idx != y_arr) or y_idx.min() < 0 or y_idx.max() >= self.n_classes:
            raise ValueError(f"labels must be class indices in [0, {self.n_classes})")
        return y_idx

    def fit(self, X, y):
        """Run exactly `epochs` full-batch gradient descent updates."""
        X_arr = np.asarray(X, dtype=float)
        y_arr = np.asarray(y, dtype=float)
        if self.n_classes is None:
            self.n_classes = int(y_arr.max()) + 1 if y_arr.size else 0
        y_idx = self._check_inputs(X_arr, y_arr)

        n_samples, n_features = X_arr.shape
        one_hot = np.eye(self.n_classes)[y_idx]
        weights = np.zeros((self.n_classes, n_features))
        biases = np.zeros(self.n_classes)
        self.loss_history_ = []

        for epoch in range(1, self.epochs + 1):
            probs = softmax(_scores(X_arr, weights, biases))
            # d(cross-entropy)/d(score) = p_k - 1 for the true class, p_k otherwise
            error = probs - one_hot
            dw = error.T @ X_arr
            db = error.sum(axis=0)

            weights -= self.lr * dw / n_samples
            biases -= self.lr * db / n_samples

            if self.verbose and epoch % self.log_every == 0:
                loss = cross_entropy(probs, y_idx)
                self.loss_history_.append((epoch, loss))
                print(f"[GD] epoch={epoch}, loss={loss:.4f}")

        self.n_iter_ = self.epochs
        weights.setflags(write=False)
        biases.setflags(write=False)
        self.coef_ = weights
        self.intercept_ = biases
        return self

    @property
    def model_(self) -> SoftmaxModel:
        if self.coef_ is None or self.intercept_ is None:
            raise RuntimeError("Model is not fitted.")
        return SoftmaxModel(weights=self.coef_, biases=self.intercept_)

    def predict_proba(self, X) -> np.ndarray:
        """Class probabilities, one row per sample."""
        return predict_proba(X, self.model_)

    def predict(self, X) -> np.ndarray:
        return predict(X, self.model_)

    def score(self, X, y) -> float:
        return accuracy(self.predict(X), y)
