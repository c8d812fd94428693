from __future__ import annotations

"""
CLI host for the Iris softmax regression run: loads the CSV, previews it,
trains on a random split and prints the test accuracy and execution time.
"""

import argparse
import sys
import time
from pathlib import Path

from sklearn.linear_model import LogisticRegression
from sklearn.pipeline import make_pipeline
from sklearn.preprocessing import StandardScaler

from iris_logreg import (
    DEFAULT_EPOCHS,
    DEFAULT_LEARNING_RATE,
    DEFAULT_TRAIN_RATIO,
    DatasetError,
    compute_classification_metrics,
    evaluate_dataset,
    load_dataset,
)
from iris_logreg.data_prep import summarize_dataset
from iris_logreg.metrics import majority_baseline, summarize_coefficients


def describe_dataset(meta: dict):
    """Print a short summary of dataset size and class balance."""
    print(f"Rows: {meta['num_rows']}, features: {meta['feature_count']}")
    if meta["feature_names"]:
        print(f"Feature columns: {', '.join(meta['feature_names'])}")
    print("Rows per class:")
    for name, count in meta["class_counts"].items():
        print(f"  {name}: {count}")


def print_metrics(label: str, metrics: dict):
    """Nicely format the metric dict produced by compute_classification_metrics."""
    print(
        f"[{label}] Acc {metrics['accuracy']:.3f} | "
        f"Prec {metrics['precision']:.3f} | Rec {metrics['recall']:.3f} | "
        f"F1 {metrics['f1']:.3f}"
    )
    print(f"    Confusion matrix (rows = true class): {metrics['confusion_matrix'].tolist()}")


def build_arg_parser():
    """CLI parser with knobs for the split and gradient descent."""
    parser = argparse.ArgumentParser(
        description="Train multinomial logistic regression on Iris and report test accuracy."
    )
    parser.add_argument("--csv-path", type=Path, default=Path("data/Iris.csv"))
    parser.add_argument(
        "--lr", type=float, default=DEFAULT_LEARNING_RATE, help="Learning rate for GD."
    )
    parser.add_argument(
        "--epochs", type=int, default=DEFAULT_EPOCHS, help="Number of full-batch GD steps."
    )
    parser.add_argument(
        "--train-ratio",
        type=float,
        default=DEFAULT_TRAIN_RATIO,
        help="Fraction of rows used for training; the rest is the test set.",
    )
    parser.add_argument(
        "--random-state",
        type=int,
        default=None,
        help="Seed for the train/test permutation (random when omitted).",
    )
    parser.add_argument(
        "--preview-rows", type=int, default=5, help="Rows of the dataset to print first."
    )
    parser.add_argument(
        "--compare-sklearn",
        action="store_true",
        help="Also fit sklearn LogisticRegression on the same split and print details.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Print the GD loss ten times over the course of training.",
    )
    return parser


def run_reference(result, n_classes: int, class_names, feature_names):
    """Detailed metrics for the custom model next to an sklearn reference fit."""
    split = result.split
    print(f"Train size: {split.train.n_samples}, Test size: {split.test.n_samples}")
    print(
        f"Majority baseline accuracy: "
        f"{majority_baseline(split.train.labels, split.test.labels):.3f}"
    )

    gd_metrics = compute_classification_metrics(
        split.test.labels, result.predictions, n_classes
    )
    print_metrics("Custom GD softmax", gd_metrics)

    sk_model = make_pipeline(StandardScaler(), LogisticRegression(max_iter=5000))
    sk_model.fit(split.train.features, split.train.labels.astype(int))
    sk_preds = sk_model.predict(split.test.features)
    sk_metrics = compute_classification_metrics(split.test.labels, sk_preds, n_classes)
    print_metrics("sklearn LogisticRegression", sk_metrics)

    columns = list(feature_names) or [f"f{j}" for j in range(result.model.n_features)]
    print("\nCustom GD weights (rows = class):")
    print(summarize_coefficients(result.model.weights, columns, list(class_names)))


def main(args: argparse.Namespace | None = None):
    """Load the CSV, run the pipeline and print the report."""
    args = args or build_arg_parser().parse_args()

    csv_text = args.csv_path.read_text(encoding="utf-8")
    try:
        dataset = load_dataset(csv_text)
        if args.preview_rows > 0:
            print(dataset.to_frame().head(args.preview_rows).to_string())
            print()
        describe_dataset(summarize_dataset(dataset))

        start = time.perf_counter()
        result = evaluate_dataset(
            dataset,
            learning_rate=args.lr,
            epochs=args.epochs,
            train_ratio=args.train_ratio,
            random_state=args.random_state,
            verbose=args.verbose,
            log_every=max(args.epochs // 10, 1),
        )
        elapsed_ms = (time.perf_counter() - start) * 1000.0
    except DatasetError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    print(result.report)
    print(f"Execution time: {elapsed_ms:.1f} ms")

    if args.compare_sklearn:
        print()
        run_reference(
            result, dataset.n_classes, dataset.class_names, dataset.feature_names
        )
    return 0


if __name__ == "__main__":
    sys.exit(main())
