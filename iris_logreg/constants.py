"""
Column layout, recognized labels and default hyperparameters for the Iris run.
"""

ID_COLUMN = 0
FEATURE_COLUMNS = (1, 2, 3, 4)
LABEL_COLUMN = 5
MIN_FIELDS = LABEL_COLUMN + 1

IRIS_LABELS = {
    "Iris-setosa": 0,
    "Iris-versicolor": 1,
    "Iris-virginica": 2,
}

DEFAULT_LEARNING_RATE = 0.1
DEFAULT_EPOCHS = 100_000
DEFAULT_TRAIN_RATIO = 0.8
