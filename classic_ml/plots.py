from __future__ import annotations

"""
Summary statistics and chart rendering. Every chart is written to a PNG file
and the figure is closed straight away.
"""

import logging
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
from sklearn.metrics import ConfusionMatrixDisplay, auc, confusion_matrix, roc_curve

from .constants import HIST_BINS

log = logging.getLogger(__name__)

CHART_KINDS = ("hist", "scatter", "line", "scatter_line")
FIGSIZE = (4, 4)


def summarize(frame: pd.DataFrame) -> pd.DataFrame:
    """Count, mean, std, min, quartiles and max for every column."""
    return frame.describe()


def render_chart(
    points,
    kind: str,
    path: Path,
    title: str | None = None,
    xlabel: str | None = None,
    ylabel: str | None = None,
    line_points=None,
    bins: int = HIST_BINS,
) -> Path:
    """
    Draw one chart and save it to path.

    hist takes a 1-D sequence of values; scatter and line take (x, y) pairs.
    scatter_line draws points as a scatter and line_points as a dashed line.
    """
    if kind not in CHART_KINDS:
        raise ValueError(f"Unknown chart kind: {kind}")

    fig, ax = plt.subplots(figsize=FIGSIZE)
    try:
        if kind == "hist":
            ax.hist(np.asarray(points, dtype=float), bins=bins, density=True)
        else:
            xy = np.asarray(points, dtype=float).reshape(-1, 2)
            if kind == "line":
                ax.plot(xy[:, 0], xy[:, 1], lw=1)
            else:
                ax.grid(True)
                ax.scatter(xy[:, 0], xy[:, 1], s=9)
            if kind == "scatter_line":
                if line_points is None:
                    raise ValueError("scatter_line needs line_points")
                line_xy = np.asarray(line_points, dtype=float).reshape(-1, 2)
                order = np.argsort(line_xy[:, 0])
                ax.plot(line_xy[order, 0], line_xy[order, 1], lw=1, linestyle=(0, (5, 5)))
        if title:
            ax.set_title(title)
        if xlabel:
            ax.set_xlabel(xlabel)
        if ylabel:
            ax.set_ylabel(ylabel)
        fig.tight_layout()
        fig.savefig(path)
    finally:
        plt.close(fig)

    log.debug("Saved %s chart -> %s", kind, path)
    return Path(path)


def save_histograms(frame: pd.DataFrame, out_dir: Path) -> list[Path]:
    """One normalised histogram per column, named <column>_hist.png."""
    return [
        render_chart(
            frame[col].to_numpy(),
            "hist",
            Path(out_dir) / f"{col}_hist.png",
            title=f"Histogram of a {col}",
        )
        for col in frame.columns
    ]


def save_scatter_plots(frame: pd.DataFrame, target: str, out_dir: Path) -> list[Path]:
    """Each column against the target, named <column>_scatter.png."""
    y = frame[target].to_numpy()
    return [
        render_chart(
            np.column_stack([frame[col].to_numpy(), y]),
            "scatter",
            Path(out_dir) / f"{col}_scatter.png",
            xlabel=col,
            ylabel="y",
        )
        for col in frame.columns
    ]


def save_regression_line(x, y, y_pred, path: Path, xlabel: str, ylabel: str) -> Path:
    return render_chart(
        np.column_stack([x, y]),
        "scatter_line",
        path,
        xlabel=xlabel,
        ylabel=ylabel,
        line_points=np.column_stack([x, y_pred]),
    )


def save_confusion_matrix(y_true, y_pred, path: Path, title: str) -> Path:
    cm = confusion_matrix(np.asarray(y_true).astype(int), np.asarray(y_pred).astype(int), labels=[0, 1])
    fig, ax = plt.subplots(figsize=(6, 5))
    try:
        ConfusionMatrixDisplay(confusion_matrix=cm).plot(ax=ax, cmap="Blues", values_format="d")
        ax.set_title(title)
        fig.tight_layout()
        fig.savefig(path)
    finally:
        plt.close(fig)
    return Path(path)


def save_roc_curve(y_true, y_probs, path: Path, title: str) -> Path | None:
    """ROC curve with its AUC; skipped (None) when only one class is present."""
    y_true = np.asarray(y_true).astype(int)
    if len(np.unique(y_true)) < 2:
        log.warning("Skipping ROC curve %s: test labels contain a single class", path)
        return None

    fpr, tpr, _ = roc_curve(y_true, y_probs)
    roc_auc = auc(fpr, tpr)

    fig, ax = plt.subplots(figsize=(8, 6))
    try:
        ax.plot(fpr, tpr, color="darkorange", lw=2, label=f"ROC curve (area = {roc_auc:.3f})")
        ax.plot([0, 1], [0, 1], color="navy", lw=2, linestyle="--")
        ax.set_xlim([0.0, 1.0])
        ax.set_ylim([0.0, 1.05])
        ax.set_xlabel("False Positive Rate")
        ax.set_ylabel("True Positive Rate")
        ax.set_title(title)
        ax.legend(loc="lower right")
        ax.grid(True)
        fig.tight_layout()
        fig.savefig(path)
    finally:
        plt.close(fig)
    return Path(path)
