from __future__ import annotations

"""
Metric helpers used across experiments (classification summaries, regression
error and cross-validation accuracy).
"""

import numpy as np
import pandas as pd
from sklearn import metrics

from .constants import THRESHOLD


def compute_classification_metrics(
    y_true: np.ndarray | pd.Series, probs: np.ndarray, threshold: float = THRESHOLD
):
    """Compute standard binary metrics given probabilities and a threshold."""
    y_true = np.asarray(y_true).astype(int)
    preds = (np.asarray(probs) >= threshold).astype(int)
    if len(y_true) == 0:
        return {
            "accuracy": float("nan"),
            "precision": float("nan"),
            "recall": float("nan"),
            "f1": float("nan"),
            "roc_auc": float("nan"),
            "confusion_matrix": np.zeros((2, 2), dtype=int),
            "evaluated": 0,
        }

    precision, recall, f1, _ = metrics.precision_recall_fscore_support(
        y_true, preds, average="binary", zero_division=0
    )
    try:
        roc_auc = metrics.roc_auc_score(y_true, probs)
    except ValueError:
        roc_auc = float("nan")

    return {
        "accuracy": metrics.accuracy_score(y_true, preds),
        "precision": precision,
        "recall": recall,
        "f1": f1,
        "roc_auc": roc_auc,
        "confusion_matrix": metrics.confusion_matrix(y_true, preds, labels=[0, 1]),
        "evaluated": len(y_true),
    }


def accuracy_score_from_model(model, X, y_true, threshold: float = THRESHOLD) -> float:
    """correct / total for a fitted model exposing predict_proba; NaN when empty."""
    y_true = np.asarray(y_true, dtype=float)
    if len(y_true) == 0:
        return float("nan")
    preds = (model.predict_proba(X) >= threshold).astype(float)
    return float(np.mean(preds == y_true))


def mean_absolute_error(y_true, y_pred) -> float:
    return float(metrics.mean_absolute_error(y_true, y_pred))


def summarize_cross_validation(scores) -> dict[str, float]:
    """Mean accuracy and a two-standard-deviation band over the folds."""
    scores = np.asarray(scores, dtype=float)
    return {
        "mean": float(scores.mean()),
        "variance": float(scores.var()),
        "spread": float(2 * scores.std()),
        "folds": len(scores),
    }
