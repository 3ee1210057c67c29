import math

import numpy as np
import pytest

from classic_ml.logreg import LogisticRegressionGD
from classic_ml.metrics import (
    accuracy_score_from_model,
    compute_classification_metrics,
    mean_absolute_error,
    summarize_cross_validation,
)


def test_accuracy_from_model():
    model = LogisticRegressionGD.from_coefficients(13.65, -4.89)
    X = [[0.0], [0.5], [0.9]]
    assert accuracy_score_from_model(model, X, [0.0, 1.0, 0.0]) == pytest.approx(2 / 3)


def test_accuracy_from_model_empty_is_nan():
    model = LogisticRegressionGD.from_coefficients(1.0, 0.0)
    assert math.isnan(accuracy_score_from_model(model, np.empty((0, 1)), []))


def test_classification_metrics():
    result = compute_classification_metrics([0, 1, 1, 0], np.array([0.1, 0.8, 0.4, 0.6]))
    assert result["accuracy"] == 0.5
    assert result["confusion_matrix"].tolist() == [[1, 1], [1, 1]]
    assert result["evaluated"] == 4


def test_classification_metrics_single_class_has_nan_auc():
    result = compute_classification_metrics([1.0, 1.0], np.array([0.9, 0.2]))
    assert result["accuracy"] == 0.5
    assert math.isnan(result["roc_auc"])


def test_classification_metrics_empty():
    result = compute_classification_metrics([], np.array([]))
    assert result["evaluated"] == 0
    assert math.isnan(result["accuracy"])


def test_mean_absolute_error():
    assert mean_absolute_error([1.0, 2.0], [2.0, 4.0]) == 1.5


def test_summarize_cross_validation():
    summary = summarize_cross_validation([0.9, 1.0])
    assert summary["mean"] == pytest.approx(0.95)
    assert summary["spread"] == pytest.approx(0.1)
    assert summary["folds"] == 2
