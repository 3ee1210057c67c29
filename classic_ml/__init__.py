"""
Classical machine-learning walkthroughs on small tabular datasets.

This package contains data preparation helpers, a lightweight logistic regression
trainer, scikit-learn model wrappers, chart rendering and evaluation utilities
used by main.py.
"""

from .constants import BASELINE_WEIGHTS, RATE_THRESHOLD, SCORE_MAX, SCORE_MIN
from .data_prep import (
    clean_loan_data,
    label_interest_rate,
    load_numeric_csv,
    load_test_rows,
    load_training_data,
    normalize_score,
    split_dataset,
    split_frame,
)
from .logreg import LogisticRegressionGD, logistic
from .metrics import accuracy_score_from_model, compute_classification_metrics
from .plots import render_chart, summarize

__all__ = [
    "BASELINE_WEIGHTS",
    "RATE_THRESHOLD",
    "SCORE_MAX",
    "SCORE_MIN",
    "clean_loan_data",
    "label_interest_rate",
    "load_numeric_csv",
    "load_test_rows",
    "load_training_data",
    "normalize_score",
    "split_dataset",
    "split_frame",
    "LogisticRegressionGD",
    "logistic",
    "accuracy_score_from_model",
    "compute_classification_metrics",
    "render_chart",
    "summarize",
]
