import logging

import pandas as pd
import pytest
from sklearn.datasets import load_iris

import main


def _args(tmp_path, *extra):
    return main.build_arg_parser().parse_args(
        [
            "--loan-clean",
            str(tmp_path / "clean_loan_data.csv"),
            "--train-csv",
            str(tmp_path / "training.csv"),
            "--test-csv",
            str(tmp_path / "test.csv"),
            "--plot-dir",
            str(tmp_path / "plots"),
            *extra,
        ]
    )


def test_logistic_regression_end_to_end(raw_loan_csv, tmp_path, capsys):
    args = _args(
        tmp_path,
        "--experiment", "logistic_regression",
        "--loan-raw", str(raw_loan_csv),
        "--seed", "0",
    )
    main.main(args)

    out = capsys.readouterr().out
    assert "Train size: 8, Test size: 2" in out
    assert "m1 = " in out
    assert "Accuracy = " in out
    assert "Baseline weights" in out

    plots = tmp_path / "plots"
    assert (plots / "FICO.Range_hist.png").exists()
    assert (plots / "Interest.Rate_hist.png").exists()
    assert (plots / "confusion_matrix_loan.png").exists()
    assert (plots / "roc_curve_loan.png").exists()


def test_logistic_regression_with_baseline_weights(raw_loan_csv, tmp_path, capsys):
    args = _args(
        tmp_path,
        "--experiment", "logistic_regression",
        "--loan-raw", str(raw_loan_csv),
        "--eval-weights", "baseline",
        "--no-plots",
    )
    main.main(args)

    out = capsys.readouterr().out
    # test rows: 0.2368 -> label 0.0, 0.3947 -> label 1.0; the baseline gets both right
    assert "Accuracy = 1.00" in out
    assert not (tmp_path / "plots").exists()


def test_naive_bayes_uses_existing_split(raw_loan_csv, tmp_path, capsys):
    main.main(
        _args(tmp_path, "--experiment", "logistic_regression", "--loan-raw", str(raw_loan_csv), "--no-plots")
    )
    capsys.readouterr()

    main.main(_args(tmp_path, "--experiment", "naive_bayes"))
    assert "Accuracy: " in capsys.readouterr().out


def test_linear_regression_end_to_end(advertising_csv, tmp_path, capsys):
    main.main(_args(tmp_path, "--experiment", "linear_regression", "--advertising-csv", str(advertising_csv)))

    out = capsys.readouterr().out
    assert "Train size: 16, Test size: 4" in out
    assert "Predicted = 7.0000 + TV*0.0500" in out
    assert "MAE = 0.00" in out

    plots = tmp_path / "plots"
    for name in ("TV_hist.png", "Sales_hist.png", "TV_scatter.png", "regression_line.png"):
        assert (plots / name).exists()


@pytest.mark.parametrize("experiment", ["decision_tree", "random_forest"])
def test_iris_experiments(tmp_path, capsys, experiment):
    iris = load_iris(as_frame=True)
    frame = iris.data.copy()
    frame["species"] = iris.target_names[iris.target.to_numpy()]
    iris_path = tmp_path / "iris.csv"
    frame.to_csv(iris_path, index=False)

    main.main(_args(tmp_path, "--experiment", experiment, "--iris-csv", str(iris_path)))
    out = capsys.readouterr().out
    assert "Accuracy" in out
    assert "(+/- " in out


def test_missing_input_exits_with_error(tmp_path, caplog):
    args = _args(tmp_path, "--experiment", "logistic_regression", "--loan-raw", str(tmp_path / "nope.csv"))
    with caplog.at_level(logging.ERROR):
        with pytest.raises(SystemExit) as excinfo:
            main.main(args)
    assert excinfo.value.code == 1
    assert "logistic_regression failed" in caplog.text


def test_malformed_raw_row_exits_with_error(tmp_path, caplog):
    raw = tmp_path / "raw.csv"
    pd.DataFrame({"FICO.Range": ["735-739", "x-y"], "Interest.Rate": ["8%", "9%"]}).to_csv(raw, index=False)
    with pytest.raises(SystemExit) as excinfo:
        main.main(_args(tmp_path, "--loan-raw", str(raw), "--no-plots"))
    assert excinfo.value.code == 1
    assert not (tmp_path / "training.csv").exists()


def test_evaluation_skips_malformed_test_row(raw_loan_csv, tmp_path, capsys, caplog, monkeypatch):
    real_split = main.split_dataset

    def split_then_corrupt(path, train_path, test_path, test_size):
        counts = real_split(path, train_path, test_path, test_size=test_size)
        with open(test_path, "a") as fh:
            fh.write("bad,1.0\n")
        return counts

    monkeypatch.setattr(main, "split_dataset", split_then_corrupt)
    args = _args(
        tmp_path,
        "--experiment", "logistic_regression",
        "--loan-raw", str(raw_loan_csv),
        "--eval-weights", "baseline",
        "--no-plots",
    )
    with caplog.at_level(logging.WARNING):
        main.main(args)

    out = capsys.readouterr().out
    # both well-formed test rows are classified correctly; the bad one is not counted
    assert "Evaluated 2 test rows (1 skipped)" in out
    assert "Accuracy = 1.00" in out
    assert "Parsing line 4 failed, unexpected type" in caplog.text


def test_equal_score_bounds_exit_with_error(raw_loan_csv, tmp_path, caplog):
    args = _args(
        tmp_path,
        "--loan-raw", str(raw_loan_csv),
        "--score-min", "700",
        "--score-max", "700",
        "--no-plots",
    )
    with caplog.at_level(logging.ERROR):
        with pytest.raises(SystemExit) as excinfo:
            main.main(args)
    assert excinfo.value.code == 1
    assert "logistic_regression failed" in caplog.text
