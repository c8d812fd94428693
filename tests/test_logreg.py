import numpy as np
import pytest

from iris_logreg.errors import EmptyDatasetError
from iris_logreg.logreg import (
    SoftmaxModel,
    SoftmaxRegressionGD,
    class_scores,
    dot_product,
    predict,
    predict_proba,
    softmax,
    train_softmax_regression,
)


def _separable_two_class():
    grid = np.array([(a, b) for a in (1.0, 2.0, 3.0) for b in (1.0, 2.0, 3.0)])
    X = np.vstack([-grid, grid])
    y = np.array([0] * len(grid) + [1] * len(grid), dtype=float)
    return X, y


@pytest.mark.parametrize(
    "scores",
    [
        [0.0, 0.0, 0.0],
        [1.0, 2.0, 3.0],
        [-50.0, 0.5, 12.0, 3.3],
        [1000.0, 1001.0, 999.0],
        [-1e4, 1e4],
    ],
)
def test_softmax_is_a_distribution(scores):
    probs = softmax(scores)
    assert np.all(np.isfinite(probs))
    assert np.all((probs >= 0.0) & (probs <= 1.0))
    assert abs(probs.sum() - 1.0) < 1e-9


def test_softmax_uniform_for_equal_scores():
    np.testing.assert_allclose(softmax([4.2, 4.2, 4.2, 4.2]), [0.25] * 4)


def test_softmax_shift_invariant_and_row_wise():
    rows = np.array([[1.0, 2.0, 3.0], [101.0, 102.0, 103.0]])
    probs = softmax(rows)
    np.testing.assert_allclose(probs[0], probs[1])
    np.testing.assert_allclose(probs.sum(axis=1), 1.0)


def test_dot_product():
    assert dot_product([1.0, 2.0, 3.0], [4.0, 5.0, 6.0]) == 32.0
    with pytest.raises(ValueError):
        dot_product([1.0, 2.0], [1.0])


def test_dot_product_of_rows_and_weight_columns():
    X = np.array([[1.0, 2.0], [3.0, 4.0], [0.0, -1.0]])
    W = np.array([[1.0, 0.0], [0.5, 2.0], [-1.0, 1.0]])
    np.testing.assert_allclose(dot_product(X, W.T), X @ W.T)
    with pytest.raises(ValueError):
        dot_product(X, np.ones((3, 3)))


def test_class_scores_are_row_class_dot_products():
    X = np.array([[5.1, 3.5, 1.4, 0.2], [6.3, 3.3, 6.0, 2.5]])
    model = SoftmaxModel(
        weights=np.arange(12, dtype=float).reshape(3, 4) / 10,
        biases=np.array([0.1, -0.2, 0.3]),
    )
    expected = [
        [dot_product(x, w) + b for w, b in zip(model.weights, model.biases)] for x in X
    ]
    np.testing.assert_allclose(class_scores(X, model), expected)


def test_argmax_tie_goes_to_lowest_class():
    # identity weights turn each row straight into its class scores
    model = SoftmaxModel(weights=np.eye(3), biases=np.zeros(3))
    preds = predict(np.array([[0.5, 0.5, 0.1], [0.1, 0.7, 0.7], [0.2, 0.2, 0.2]]), model)
    assert preds.tolist() == [0.0, 1.0, 0.0]


def test_predict_empty_rows():
    model = SoftmaxModel(weights=np.zeros((3, 4)), biases=np.zeros(3))
    assert predict(np.zeros((0, 4)), model).shape == (0,)


def test_predict_proba_uses_biases():
    model = SoftmaxModel(weights=np.zeros((2, 1)), biases=np.array([0.0, np.log(3.0)]))
    np.testing.assert_allclose(predict_proba([[5.0]], model), [[0.25, 0.75]])


def test_converges_on_separable_data():
    X, y = _separable_two_class()
    clf = SoftmaxRegressionGD(lr=0.1, epochs=5000, n_classes=2).fit(X, y)
    assert clf.score(X, y) == 1.0
    assert clf.n_iter_ == 5000


def test_single_step_matches_per_sample_gradient():
    X = np.array([[1.0, 2.0], [0.5, -1.0], [-2.0, 0.0]])
    y = np.array([0.0, 2.0, 1.0])
    model = train_softmax_regression(X, y, n_classes=3, learning_rate=0.5, epochs=1)

    # from zero weights every class has probability 1/3
    dw = np.zeros((3, 2))
    db = np.zeros(3)
    for xi, yi in zip(X, y):
        for k in range(3):
            error = 1 / 3 - 1 if int(yi) == k else 1 / 3
            dw[k] += error * xi
            db[k] += error
    np.testing.assert_allclose(model.weights, -0.5 * dw / 3)
    np.testing.assert_allclose(model.biases, -0.5 * db / 3)


def test_zero_epochs_leaves_zero_model():
    X, y = _separable_two_class()
    model = train_softmax_regression(X, y, n_classes=2, epochs=0)
    assert not model.weights.any()
    assert not model.biases.any()
    # all-zero scores tie, so every row goes to class 0
    assert set(predict(X, model).tolist()) == {0.0}


def test_fitted_model_is_read_only():
    X, y = _separable_two_class()
    model = train_softmax_regression(X, y, n_classes=2, epochs=10)
    with pytest.raises(ValueError):
        model.weights[0, 0] = 1.0


def test_n_classes_inferred_from_labels():
    X, y = _separable_two_class()
    clf = SoftmaxRegressionGD(epochs=5).fit(X, y)
    assert clf.coef_.shape == (2, 2)
    assert clf.intercept_.shape == (2,)


def test_verbose_prints_loss(capsys):
    X, y = _separable_two_class()
    clf = SoftmaxRegressionGD(lr=0.1, epochs=300, verbose=True, log_every=100).fit(X, y)
    out = capsys.readouterr().out
    assert out.count("[GD] epoch=") == 3
    epochs = [epoch for epoch, _ in clf.loss_history_]
    losses = [loss for _, loss in clf.loss_history_]
    assert epochs == [100, 200, 300]
    assert losses == sorted(losses, reverse=True)


def test_verbose_does_not_change_fit():
    X, y = _separable_two_class()
    quiet = SoftmaxRegressionGD(epochs=200).fit(X, y)
    loud = SoftmaxRegressionGD(epochs=200, verbose=True, log_every=50).fit(X, y)
    np.testing.assert_array_equal(quiet.coef_, loud.coef_)
    np.testing.assert_array_equal(quiet.intercept_, loud.intercept_)


def test_empty_training_set():
    with pytest.raises(EmptyDatasetError):
        train_softmax_regression(np.zeros((0, 4)), np.zeros(0), n_classes=3)


@pytest.mark.parametrize("kwargs", [{"lr": 0.0}, {"lr": -1.0}, {"epochs": -1}])
def test_bad_hyperparameters(kwargs):
    X, y = _separable_two_class()
    with pytest.raises(ValueError):
        SoftmaxRegressionGD(n_classes=2, **kwargs).fit(X, y)


def test_label_out_of_range():
    X, y = _separable_two_class()
    with pytest.raises(ValueError):
        SoftmaxRegressionGD(n_classes=1, epochs=1).fit(X, y)


def test_unfitted_model_raises():
    with pytest.raises(RuntimeError):
        SoftmaxRegressionGD().predict(np.zeros((1, 2)))
