import os

os.environ.setdefault("MPLBACKEND", "Agg")

import pandas as pd
import pytest


@pytest.fixture
def raw_loan_csv(tmp_path):
    rows = [
        ("735-739", "8.90%"),
        ("715-719", "12.12%"),
        ("690-694", "21.98%"),
        ("695-699", "9.99%"),
        ("695-699", "11.71%"),
        ("670-674", "15.31%"),
        ("720-724", "7.90%"),
        ("705-709", "17.14%"),
        ("685-689", "14.33%"),
        ("715-719", "6.91%"),
    ]
    path = tmp_path / "loan_data.csv"
    pd.DataFrame(rows, columns=["FICO.Range", "Interest.Rate"]).to_csv(path, index=False)
    return path


@pytest.fixture
def separable_loan_rows():
    """Low scores labelled 0.0, high scores labelled 1.0."""
    scores = [0.05, 0.1, 0.15, 0.2, 0.25, 0.75, 0.8, 0.85, 0.9, 0.95]
    labels = [0.0] * 5 + [1.0] * 5
    return scores, labels


@pytest.fixture
def advertising_csv(tmp_path):
    tv = [float(v) for v in range(10, 210, 10)]
    frame = pd.DataFrame(
        {
            "TV": tv,
            "Radio": [float(v % 7) for v in range(20)],
            "Newspaper": [float(v % 5) for v in range(20)],
            "Sales": [7.0 + 0.05 * v for v in tv],
        }
    )
    path = tmp_path / "Advertising.csv"
    frame.to_csv(path, index=False)
    return path
