from __future__ import annotations

"""
Logistic regression fitted with per-row (online) gradient descent on the
squared prediction error. Small enough to read in one sitting.
"""

import logging

import numpy as np

from .constants import LEARNING_RATE, MAX_ITER, THRESHOLD

log = logging.getLogger(__name__)


def logistic(x):
    """The logistic function 1 / (1 + e^-x); works on scalars and arrays."""
    z = np.clip(x, -500, 500)
    return 1.0 / (1.0 + np.exp(-z))


class LogisticRegressionGD:
    """
    Logistic regression trained with per-row gradient descent.

    An intercept column of 1.0 is appended after the features, so the weight
    vector reads (slope..., intercept). Weights start uniform in [0, 1); pass
    random_state for a reproducible run.

    legacy_product=True feeds the logistic function the product of the
    feature*weight terms instead of their sum. This only reproduces the
    behaviour of older runs and is not a sound model.
    """

    def __init__(
        self,
        lr: float = LEARNING_RATE,
        max_iter: int = MAX_ITER,
        random_state: int | None = None,
        legacy_product: bool = False,
        verbose: bool = False,
    ):
        self.lr = lr
        self.max_iter = max_iter
        self.random_state = random_state
        self.legacy_product = legacy_product
        self.verbose = verbose
        self.weights_: np.ndarray | None = None
        self.errors_: list[float] = []
        self.n_iter_: int = 0

    @classmethod
    def from_coefficients(cls, slope, intercept: float) -> "LogisticRegressionGD":
        """Build a ready-to-predict model from fixed weights."""
        model = cls()
        model._set_weights(np.append(np.atleast_1d(np.asarray(slope, dtype=float)), intercept))
        return model

    @staticmethod
    def _add_bias(X: np.ndarray) -> np.ndarray:
        return np.hstack([X, np.ones((X.shape[0], 1))])

    def _set_weights(self, weights: np.ndarray):
        self.weights_ = weights
        self.coef_ = weights[:-1]
        self.intercept_ = float(weights[-1])

    def _activation(self, X_bias: np.ndarray, weights: np.ndarray):
        if self.legacy_product:
            return np.prod(X_bias * weights, axis=-1)
        return X_bias @ weights

    def fit(self, X, y):
        """Run max_iter passes over the rows; no early stopping."""
        X_arr = np.asarray(X, dtype=float)
        if X_arr.ndim == 1:
            X_arr = X_arr.reshape(-1, 1)
        y_arr = np.asarray(y, dtype=float)
        if len(X_arr) != len(y_arr):
            raise ValueError(f"{len(X_arr)} feature rows but {len(y_arr)} labels")

        X_bias = self._add_bias(X_arr)
        rng = np.random.default_rng(self.random_state)
        weights = rng.random(X_bias.shape[1])
        self.errors_ = []

        for step in range(1, self.max_iter + 1):
            sum_error = 0.0
            for row, label in zip(X_bias, y_arr):
                pred = logistic(self._activation(row, weights))
                pred_error = label - pred
                sum_error += pred_error**2
                weights += self.lr * pred_error * pred * (1 - pred) * row
            self.errors_.append(float(sum_error))
            self.n_iter_ = step

            if self.verbose:
                log.debug("[GD] step=%d, sse=%.4f", step, sum_error)

        self._set_weights(weights)
        return self

    def predict_proba(self, X) -> np.ndarray:
        """Return P(y=1) for each row in X."""
        if self.weights_ is None:
            raise RuntimeError("Model is not fitted.")
        X_arr = np.asarray(X, dtype=float)
        if X_arr.ndim == 1:
            X_arr = X_arr.reshape(-1, 1)
        return logistic(self._activation(self._add_bias(X_arr), self.weights_))

    def predict(self, X, threshold: float = THRESHOLD) -> np.ndarray:
        """Binary predictions using the provided threshold."""
        return (self.predict_proba(X) >= threshold).astype(float)

    def formula(self) -> str:
        """Human-readable form of the fitted model (single feature)."""
        if self.weights_ is None:
            raise RuntimeError("Model is not fitted.")
        slope = float(self.coef_[0])
        return (
            "p = 1 / ( 1 + exp(- m1 * FICO.score - m2) )\n\n"
            f"m1 = {slope:0.2f}\nm2 = {self.intercept_:0.2f}"
        )
