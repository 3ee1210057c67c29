from __future__ import annotations

"""
scikit-learn backed models: simple linear regression, decision tree and
random forest cross-validation, and Bernoulli naive Bayes.
"""

import numpy as np
import pandas as pd
from sklearn.ensemble import RandomForestClassifier
from sklearn.linear_model import LinearRegression
from sklearn.model_selection import KFold, cross_val_score
from sklearn.naive_bayes import BernoulliNB
from sklearn.tree import DecisionTreeClassifier

from .constants import CV_FOLDS, FOREST_FEATURES, FOREST_TREES, RANDOM_STATE


def fit_linear_regression(x: pd.Series, y: pd.Series) -> LinearRegression:
    """Ordinary least squares of y on a single feature plus an intercept."""
    model = LinearRegression()
    model.fit(x.to_frame(), y)
    return model


def regression_formula(model: LinearRegression, feature: str) -> str:
    return f"Predicted = {model.intercept_:.4f} + {feature}*{model.coef_[0]:.4f}"


def make_decision_tree(random_state: int | None = RANDOM_STATE) -> DecisionTreeClassifier:
    """Entropy (information gain) splits, as in ID3."""
    return DecisionTreeClassifier(criterion="entropy", random_state=random_state)


def make_random_forest(
    n_estimators: int = FOREST_TREES,
    max_features: int = FOREST_FEATURES,
    random_state: int | None = RANDOM_STATE,
) -> RandomForestClassifier:
    return RandomForestClassifier(
        n_estimators=n_estimators, max_features=max_features, random_state=random_state
    )


def cross_validate_accuracy(
    model,
    X: pd.DataFrame,
    y: pd.Series,
    folds: int = CV_FOLDS,
    random_state: int | None = RANDOM_STATE,
) -> np.ndarray:
    """Per-fold accuracy from shuffled, seeded k-fold cross-validation."""
    cv = KFold(n_splits=folds, shuffle=True, random_state=random_state)
    return cross_val_score(model, X, y, cv=cv, scoring="accuracy")


def fit_naive_bayes(X_train, y_train) -> BernoulliNB:
    """Bernoulli naive Bayes; features count as present when > 0."""
    model = BernoulliNB(binarize=0.0)
    model.fit(X_train, np.asarray(y_train).astype(int))
    return model
