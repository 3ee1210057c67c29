from __future__ import annotations

"""
CLI entrypoint for the classical ML walkthroughs. Pick experiment via
--experiment: logistic_regression and naive_bayes (loan approval),
linear_regression (advertising), decision_tree and random_forest (iris).
"""

import argparse
import logging
from pathlib import Path

import numpy as np

from classic_ml import constants
from classic_ml import (
    BASELINE_WEIGHTS,
    LogisticRegressionGD,
    clean_loan_data,
    compute_classification_metrics,
    load_numeric_csv,
    load_test_rows,
    load_training_data,
    split_dataset,
    summarize,
)
from classic_ml.data_prep import load_labeled_csv
from classic_ml.metrics import (
    accuracy_score_from_model,
    mean_absolute_error,
    summarize_cross_validation,
)
from classic_ml.models import (
    cross_validate_accuracy,
    fit_linear_regression,
    fit_naive_bayes,
    make_decision_tree,
    make_random_forest,
    regression_formula,
)
from classic_ml.plots import (
    save_confusion_matrix,
    save_histograms,
    save_regression_line,
    save_roc_curve,
    save_scatter_plots,
)

log = logging.getLogger("classic_ml")


def configure_logging(verbose: bool = False):
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s | %(levelname)-8s | %(message)s",
        datefmt="%H:%M:%S",
    )
    logging.getLogger().setLevel(logging.DEBUG if verbose else logging.INFO)


def print_metrics(label: str, metrics: dict):
    """Nicely format the metric dict produced by compute_classification_metrics."""
    cm = metrics["confusion_matrix"]
    print(
        f"[{label}] Acc {metrics['accuracy']:.3f} | "
        f"Prec {metrics['precision']:.3f} | Rec {metrics['recall']:.3f} | "
        f"F1 {metrics['f1']:.3f} | ROC-AUC {metrics['roc_auc']:.3f}"
    )
    print(f"    Confusion matrix [[TN, FP], [FN, TP]]: {cm.tolist()}")


def print_cross_validation(scores):
    cv = summarize_cross_validation(scores)
    print(f"\nAccuracy\n{cv['mean']:.2f} (+/- {cv['spread']:.2f})\n")


def build_arg_parser():
    """CLI parser with knobs for dataset paths, splits and model params."""
    parser = argparse.ArgumentParser(
        description="Classical ML walkthroughs: regression and classification on small CSVs."
    )
    parser.add_argument(
        "--experiment",
        choices=sorted(EXPERIMENTS),
        default="logistic_regression",
    )
    parser.add_argument("--loan-raw", type=Path, default=constants.LOAN_RAW_CSV)
    parser.add_argument("--loan-clean", type=Path, default=constants.LOAN_CLEAN_CSV)
    parser.add_argument("--train-csv", type=Path, default=constants.TRAINING_CSV)
    parser.add_argument("--test-csv", type=Path, default=constants.TEST_CSV)
    parser.add_argument("--advertising-csv", type=Path, default=constants.ADVERTISING_CSV)
    parser.add_argument("--iris-csv", type=Path, default=constants.IRIS_CSV)
    parser.add_argument("--plot-dir", type=Path, default=Path("."), help="Where PNG charts go.")
    parser.add_argument("--no-plots", action="store_true", help="Skip writing charts.")
    parser.add_argument("--test-size", type=float, default=constants.TEST_SIZE)
    parser.add_argument("--score-min", type=float, default=constants.SCORE_MIN)
    parser.add_argument("--score-max", type=float, default=constants.SCORE_MAX)
    parser.add_argument(
        "--rate-threshold",
        type=float,
        default=constants.RATE_THRESHOLD,
        help="Interest rate (percent) at or below which a loan is labelled 1.0.",
    )
    parser.add_argument("--lr", type=float, default=constants.LEARNING_RATE, help="Learning rate for GD.")
    parser.add_argument("--max-iter", type=int, default=constants.MAX_ITER, help="Passes over the training rows.")
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the initial GD weights (unseeded by default).",
    )
    parser.add_argument(
        "--legacy-product",
        action="store_true",
        help="Multiply feature*weight terms inside the sigmoid, as older runs did.",
    )
    parser.add_argument(
        "--eval-weights",
        choices=["trained", "baseline"],
        default="trained",
        help="Score the test split with the trained weights or the fixed baseline ones.",
    )
    parser.add_argument("--folds", type=int, default=constants.CV_FOLDS)
    parser.add_argument(
        "--random-state",
        type=int,
        default=constants.RANDOM_STATE,
        help="Random seed for tree/forest cross-validation.",
    )
    parser.add_argument("--verbose", action="store_true", help="Debug logging, per-step GD error.")
    return parser


def _plot_dir(args: argparse.Namespace) -> Path | None:
    if args.no_plots:
        return None
    args.plot_dir.mkdir(parents=True, exist_ok=True)
    return args.plot_dir


def run_logistic_regression(args: argparse.Namespace):
    """Loan approval: clean, profile, split, fit with GD, evaluate on the test split."""
    plot_dir = _plot_dir(args)

    clean_loan_data(
        args.loan_raw,
        args.loan_clean,
        score_min=args.score_min,
        score_max=args.score_max,
        rate_threshold=args.rate_threshold,
    )
    clean_df = load_numeric_csv(args.loan_clean)
    print(summarize(clean_df))
    if plot_dir is not None:
        save_histograms(clean_df, plot_dir)

    train_n, test_n = split_dataset(
        args.loan_clean, args.train_csv, args.test_csv, test_size=args.test_size
    )
    print(f"Train size: {train_n}, Test size: {test_n}")

    X_train, y_train = load_training_data(args.train_csv)
    model = LogisticRegressionGD(
        lr=args.lr,
        max_iter=args.max_iter,
        random_state=args.seed,
        legacy_product=args.legacy_product,
        verbose=args.verbose,
    )
    model.fit(X_train, y_train)
    print(f"\n{model.formula()}\n")
    if model.errors_:
        print(f"    GD sum squared error: {model.errors_[0]:.4f} -> {model.errors_[-1]:.4f}")

    baseline = LogisticRegressionGD.from_coefficients(*BASELINE_WEIGHTS)
    X_test, y_test, skipped = load_test_rows(args.test_csv)
    if skipped:
        log.warning("Skipped %d unparsable test rows", len(skipped))
    print(f"Evaluated {len(y_test)} test rows ({len(skipped)} skipped)")

    scorer = model if args.eval_weights == "trained" else baseline
    probs = scorer.predict_proba(X_test)
    print_metrics(f"Logistic GD ({args.eval_weights} weights)", compute_classification_metrics(y_test, probs))
    print(f"\nAccuracy = {accuracy_score_from_model(scorer, X_test, y_test):0.2f}\n")

    if args.eval_weights == "trained":
        baseline_acc = accuracy_score_from_model(baseline, X_test, y_test)
        print(f"Baseline weights {BASELINE_WEIGHTS} accuracy = {baseline_acc:0.2f}")

    if plot_dir is not None and len(y_test):
        preds = (probs >= constants.THRESHOLD).astype(int)
        save_confusion_matrix(y_test, preds, plot_dir / "confusion_matrix_loan.png", "Confusion Matrix: loan approval")
        save_roc_curve(y_test, probs, plot_dir / "roc_curve_loan.png", "ROC Curve: loan approval")


def run_linear_regression(args: argparse.Namespace):
    """Advertising: profile, pick TV as the feature, split, fit OLS, report MAE."""
    plot_dir = _plot_dir(args)
    target, feature = constants.ADVERTISING_TARGET, constants.ADVERTISING_FEATURE

    advert_df = load_numeric_csv(args.advertising_csv)
    print(summarize(advert_df))
    if plot_dir is not None:
        save_histograms(advert_df, plot_dir)
        save_scatter_plots(advert_df, target, plot_dir)

    train_n, test_n = split_dataset(
        args.advertising_csv, args.train_csv, args.test_csv, test_size=args.test_size
    )
    print(f"Train size: {train_n}, Test size: {test_n}")

    train_df = load_numeric_csv(args.train_csv)
    model = fit_linear_regression(train_df[feature], train_df[target])
    print(f"\nRegression Formula:\n{regression_formula(model, feature)}\n")

    test_df = load_numeric_csv(args.test_csv)
    y_pred = model.predict(test_df[[feature]])
    print(f"MAE = {mean_absolute_error(test_df[target], y_pred):0.2f}\n")

    if plot_dir is not None:
        save_regression_line(
            advert_df[feature].to_numpy(),
            advert_df[target].to_numpy(),
            model.predict(advert_df[[feature]]),
            plot_dir / "regression_line.png",
            xlabel=feature,
            ylabel=target,
        )


def run_decision_tree(args: argparse.Namespace):
    """Iris: k-fold cross-validated accuracy of an entropy decision tree."""
    X, y = load_labeled_csv(args.iris_csv)
    scores = cross_validate_accuracy(
        make_decision_tree(args.random_state), X, y, folds=args.folds, random_state=args.random_state
    )
    print_cross_validation(scores)


def run_random_forest(args: argparse.Namespace):
    """Iris: k-fold cross-validated accuracy of a 10-tree random forest."""
    X, y = load_labeled_csv(args.iris_csv)
    scores = cross_validate_accuracy(
        make_random_forest(random_state=args.random_state),
        X,
        y,
        folds=args.folds,
        random_state=args.random_state,
    )
    print_cross_validation(scores)


def run_naive_bayes(args: argparse.Namespace):
    """Loan approval: Bernoulli naive Bayes on the existing training/test split."""
    X_train, y_train = load_training_data(args.train_csv)
    X_test, y_test = load_training_data(args.test_csv)

    nb_model = fit_naive_bayes(X_train, y_train)
    classes = list(nb_model.classes_)
    probs = (
        nb_model.predict_proba(X_test)[:, classes.index(1)]
        if 1 in classes
        else np.zeros(len(X_test))
    )
    metrics = compute_classification_metrics(y_test, probs)
    print_metrics("Bernoulli naive Bayes", metrics)
    print(f"\nAccuracy: {metrics['accuracy']:0.2f}\n")


EXPERIMENTS = {
    "logistic_regression": run_logistic_regression,
    "linear_regression": run_linear_regression,
    "decision_tree": run_decision_tree,
    "random_forest": run_random_forest,
    "naive_bayes": run_naive_bayes,
}


def main(args: argparse.Namespace | None = None):
    """Dispatch to the selected experiment; any I/O or parse error exits with 1."""
    args = args or build_arg_parser().parse_args()
    configure_logging(args.verbose)

    try:
        EXPERIMENTS[args.experiment](args)
    except (OSError, ValueError, KeyError) as exc:
        log.error("%s failed: %s", args.experiment, exc)
        raise SystemExit(1) from exc


if __name__ == "__main__":
    main()
