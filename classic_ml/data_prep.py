from __future__ import annotations

"""
Data preparation for the experiments: loan cleaning, the deterministic
train/test split and CSV loaders with strict or tolerant parsing.
"""

import logging
import math
from pathlib import Path

import numpy as np
import pandas as pd

from .constants import RATE_THRESHOLD, SCORE_MAX, SCORE_MIN, TEST_SIZE

log = logging.getLogger(__name__)


def normalize_score(
    score_range: str, score_min: float = SCORE_MIN, score_max: float = SCORE_MAX
) -> float:
    """
    Map a FICO range such as "675-679" onto [0, 1] using its lower bound.
    """
    if score_max <= score_min:
        raise ValueError(f"score_max ({score_max}) must exceed score_min ({score_min})")
    if not isinstance(score_range, str):
        raise ValueError(f"missing FICO score: {score_range!r}")
    lower = float(score_range.split("-")[0])
    return (lower - score_min) / (score_max - score_min)


def label_interest_rate(rate: str, threshold: float = RATE_THRESHOLD) -> float:
    """1.0 when the rate (e.g. "11.5%") is at or below threshold, else 0.0."""
    if not isinstance(rate, str):
        raise ValueError(f"missing interest rate: {rate!r}")
    value = float(rate.strip().removesuffix("%"))
    return 1.0 if value <= threshold else 0.0


def _read_text_csv(path: Path, **kwargs) -> pd.DataFrame:
    """
    Read every field as text, taking the column count from the header line.

    The header is read as an ordinary row so pandas never turns the first
    field of a wide row into an index; a data row with extra fields raises.
    """
    rows = pd.read_csv(path, header=None, dtype=str, keep_default_na=False, **kwargs)
    frame = rows.iloc[1:].reset_index(drop=True)
    frame.columns = list(rows.iloc[0])
    return frame


def _blank_to_nan(frame: pd.DataFrame) -> pd.DataFrame:
    return frame.mask(frame.eq(""))


def _numeric_or_raise(frame: pd.DataFrame, path: Path) -> pd.DataFrame:
    try:
        numeric = frame.apply(pd.to_numeric)
    except ValueError as exc:
        raise ValueError(f"{path}: {exc}") from exc
    missing = numeric.isna().any(axis=1).to_numpy()
    if missing.any():
        line = int(np.flatnonzero(missing)[0]) + 2
        raise ValueError(f"{path}: line {line}: missing value")
    return numeric.astype(float)


def clean_loan_data(
    raw_path: Path,
    out_path: Path,
    score_min: float = SCORE_MIN,
    score_max: float = SCORE_MAX,
    rate_threshold: float = RATE_THRESHOLD,
) -> pd.DataFrame:
    """
    Turn the raw (FICO range, interest rate) file into (normalized score, label).

    The header is kept as is. Scores are written with four decimals and labels
    as "1.0"/"0.0". Any malformed field aborts the whole run.
    """
    if score_max <= score_min:
        raise ValueError(f"score_max ({score_max}) must exceed score_min ({score_min})")

    raw = _read_text_csv(raw_path)
    if raw.shape[1] != 2:
        raise ValueError(
            f"{raw_path}: expected 2 columns (FICO range, interest rate), got {raw.shape[1]}"
        )

    scores, labels = [], []
    for line, (score_field, rate_field) in enumerate(
        raw.itertuples(index=False, name=None), start=2
    ):
        try:
            scores.append(normalize_score(score_field, score_min, score_max))
            labels.append(label_interest_rate(rate_field, rate_threshold))
        except ValueError as exc:
            raise ValueError(f"{raw_path}: line {line}: {exc}") from exc

    score_col, label_col = raw.columns
    cleaned = pd.DataFrame({score_col: scores, label_col: labels})
    pd.DataFrame(
        {
            score_col: [f"{s:.4f}" for s in scores],
            label_col: [f"{label:.1f}" for label in labels],
        }
    ).to_csv(out_path, index=False)

    log.info(
        "Cleaned %d loan rows -> %s (%.1f%% labelled 1.0)",
        len(cleaned),
        out_path,
        100 * cleaned[label_col].mean() if len(cleaned) else 0.0,
    )
    return cleaned


def split_counts(n_rows: int, test_size: float = TEST_SIZE) -> tuple[int, int]:
    """Training/test sizes; any rounding remainder goes to training."""
    if not 0.0 <= test_size < 1.0:
        raise ValueError(f"test_size must be in [0, 1), got {test_size}")
    test_count = math.floor(round(n_rows * test_size, 9))
    return n_rows - test_count, test_count


def split_frame(
    df: pd.DataFrame, test_size: float = TEST_SIZE
) -> tuple[pd.DataFrame, pd.DataFrame]:
    """Contiguous split in row order: leading rows train, trailing rows test."""
    train_count, _ = split_counts(len(df), test_size)
    return df.iloc[:train_count], df.iloc[train_count:]


def split_dataset(
    path: Path,
    train_path: Path,
    test_path: Path,
    test_size: float = TEST_SIZE,
) -> tuple[int, int]:
    """
    Split a CSV file into training and test files without shuffling.

    Values are copied as text, so repeated runs produce identical files.
    """
    df = _read_text_csv(path)
    train_df, test_df = split_frame(df, test_size)
    train_df.to_csv(train_path, index=False)
    test_df.to_csv(test_path, index=False)
    log.info(
        "Split %s: %d training rows -> %s, %d test rows -> %s",
        path,
        len(train_df),
        train_path,
        len(test_df),
        test_path,
    )
    return len(train_df), len(test_df)


def load_numeric_csv(path: Path) -> pd.DataFrame:
    """Read a CSV whose columns are all numeric; a bad value is fatal."""
    return _numeric_or_raise(_blank_to_nan(_read_text_csv(path)), path)


def load_training_data(path: Path) -> tuple[np.ndarray, np.ndarray]:
    """
    Load features (all but the last column) and labels (last column).
    """
    numeric = load_numeric_csv(path)
    X = numeric.iloc[:, :-1].to_numpy(dtype=float)
    y = numeric.iloc[:, -1].to_numpy(dtype=float)
    return X, y


def load_labeled_csv(path: Path) -> tuple[pd.DataFrame, pd.Series]:
    """Numeric feature columns followed by a class column of any type."""
    df = _blank_to_nan(_read_text_csv(path))
    if df.shape[1] < 2:
        raise ValueError(f"{path}: need at least one feature and a class column")
    X = _numeric_or_raise(df.iloc[:, :-1], path)
    y = df.iloc[:, -1]
    if y.isna().any():
        line = int(np.flatnonzero(y.isna().to_numpy())[0]) + 2
        raise ValueError(f"{path}: line {line}: missing class label")
    return X, y


def load_test_rows(path: Path) -> tuple[np.ndarray, np.ndarray, list[int]]:
    """
    Load test features and labels, skipping rows that fail to parse.

    Rows with too many fields or a non-numeric value are skipped alike.
    Returns (X, y, skipped_lines). Line numbers count the header as line 1.
    """
    width = len(pd.read_csv(path, header=None, nrows=1, dtype=str, engine="python").columns)

    def _blank_wide_row(fields: list[str]) -> list[str]:
        # Blank fields keep the row in place; they fail numeric parsing below.
        log.debug("Row with %d fields, expected %d: %s", len(fields), width, ",".join(fields))
        return [""] * width

    frame = _read_text_csv(
        path, engine="python", on_bad_lines=_blank_wide_row, skip_blank_lines=False
    )
    numeric = frame.apply(pd.to_numeric, errors="coerce")
    bad = numeric.isna().any(axis=1).to_numpy()
    skipped = [int(pos) + 2 for pos in np.flatnonzero(bad)]
    for line in skipped:
        log.warning("Parsing line %d failed, unexpected type", line)

    kept = numeric.loc[~bad]
    X = kept.iloc[:, :-1].to_numpy(dtype=float)
    y = kept.iloc[:, -1].to_numpy(dtype=float)
    return X, y, skipped
